"""Reversible gate model: X, CX, CCX and ECA57 gates."""
from gates.gate import Gate, GateKind, all_eca57_gates
