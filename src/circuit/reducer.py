"""Wire reduction and canonical hashing.

reduce_wires() shrinks a gate list onto the smallest contiguous wire range:
the distinct wires it touches, in ascending order, become 0..k-1. It is used
to give a fragment cut out of a larger circuit its own namespace before it is
serialized on its own.

canonicalize() relabels wires in first-occurrence order instead, so that
circuits differing only by a wire relabeling hash identically.
"""
from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

import blake3

from circuit.circuit import Circuit
from codec.gate_string import serialize_gates
from gates.gate import Gate, GateKind

_KIND_CODES = {
    GateKind.X: 0,
    GateKind.CX: 1,
    GateKind.CCX: 2,
    GateKind.ECA57: 3,
}


class ReducedGates(NamedTuple):
    gates: List[Gate]
    width: int
    wire_map: Dict[int, int]


def used_wires(gates: Sequence[Gate]) -> List[int]:
    """Sorted distinct wires touched by the gates (targets and controls)."""
    return sorted({w for gate in gates for w in gate.wires()})


def reduce_wires(gates: Sequence[Gate]) -> ReducedGates:
    """Remap gates onto a dense wire range.

    Args:
        gates: Gates in circuit order.

    Returns:
        ReducedGates where wire_map[old] = new, width = number of distinct
        wires. Empty input gives no gates, width 0 and an empty map.
    """
    wire_map = {wire: idx for idx, wire in enumerate(used_wires(gates))}
    reduced = [gate.remap(wire_map) for gate in gates]
    return ReducedGates(reduced, len(wire_map), wire_map)


def reduce_circuit(circuit: Circuit) -> Tuple[Optional[Circuit], Dict[int, int]]:
    """Reduce a circuit's wires. A circuit without gates reduces to None."""
    reduced = reduce_wires(circuit.gates())
    if reduced.width == 0:
        return None, reduced.wire_map
    return Circuit(reduced.width, reduced.gates), reduced.wire_map


def serialize_gate(gate: Gate) -> bytes:
    """Serialize a gate to bytes (kind code, target, controls)."""
    # Pack as single bytes (supports up to 256 wires)
    return bytes([_KIND_CODES[gate.kind], *gate.wires()])


def canonicalize(gates: Sequence[Gate], width: int) -> Tuple[List[Gate], bytes]:
    """Canonicalize a gate list.

    Wire relabeling: first-occurrence order.
    1. Scan gates left-to-right, target before controls
    2. Map first new wire seen to 0, next to 1, etc.
    3. Rewrite all gates under this mapping
    4. Hash with BLAKE3

    Returns:
        Tuple of (canonical gate list, 32-byte BLAKE3 hash)
    """
    wire_map: Dict[int, int] = {}
    for gate in gates:
        for wire in gate.wires():
            if wire not in wire_map:
                wire_map[wire] = len(wire_map)

    canonical_gates = [gate.remap(wire_map) for gate in gates]

    hasher = blake3.blake3()
    hasher.update(f"revcirc:{width}:{len(canonical_gates)}:".encode())
    for gate in canonical_gates:
        hasher.update(serialize_gate(gate))

    return canonical_gates, hasher.digest()


def canonical_hash(gates: Sequence[Gate], width: int) -> bytes:
    """32-byte hash invariant under wire relabeling."""
    _, digest = canonicalize(gates, width)
    return digest


def circuit_hash(gates: Sequence[Gate]) -> str:
    """BLAKE3 hex digest of the gate string."""
    return blake3.blake3(serialize_gates(gates).encode()).hexdigest()
