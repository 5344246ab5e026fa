"""Random ECA57 circuit generators."""
from __future__ import annotations

import random
from typing import Optional

from circuit.circuit import Circuit
from gates.gate import all_eca57_gates


def random_eca57_circuit(width: int, gate_count: int, rng: Optional[random.Random] = None) -> Circuit:
    """
    Generate a random ECA57 circuit.

    Args:
        width: Number of wires (must be >= 3)
        gate_count: Number of gates
        rng: Random source, for reproducible circuits

    Returns:
        Random Circuit
    """
    assert width >= 3, "ECA57 requires at least 3 wires"
    rng = rng or random.Random()

    all_gates = all_eca57_gates(width)
    circuit = Circuit(width)
    for _ in range(gate_count):
        circuit.append(rng.choice(all_gates))
    return circuit


def random_eca57_identity(width: int, gate_count: int, rng: Optional[random.Random] = None) -> Circuit:
    """
    Generate a random identity circuit as a palindrome G1 ... Gk Gk ... G1.

    ECA57 gates are self-inverse, so the second half undoes the first.
    """
    assert gate_count % 2 == 0, "gate_count must be even for identity"
    half = random_eca57_circuit(width, gate_count // 2, rng)
    return half + half.reverse()
