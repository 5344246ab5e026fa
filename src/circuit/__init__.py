"""Circuit value type and wire-level utilities."""
from circuit.circuit import Circuit
