"""Reversible Circuit Representation.

This module provides the Circuit class: a fixed number of wires (width) and an
ordered sequence of gates. Gates execute left to right and that sequence is
the ground truth of circuit behavior; collision graphs, canonical orders and
permutations are all derived from it on demand.

Supported gates: X, CX, CCX and ECA57 (see gates.gate).

Example:
    >>> circ = Circuit(3)
    >>> circ.eca57(2, 0, 1).cx(0, 1)
    >>> print(circ)  # ASCII circuit diagram
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

from gates.gate import Gate


class Circuit:
    """A reversible circuit.

    Every wire referenced by a gate must satisfy 0 <= wire < width.
    Each stored gate carries step == its position in the sequence.

    Attributes:
        _width: Number of wires in the circuit.
        _gates: Gates in execution order.
    """
    def __init__(self, width: int, gates: Iterable[Gate] = ()):
        assert width > 0, f"Circuit width must be positive, got {width}"
        self._width = width
        self._gates: List[Gate] = []
        for gate in gates:
            self.append(gate)

    def __copy__(self) -> "Circuit":
        return Circuit(self._width, self._gates)

    def __str__(self) -> str:
        from circuit.drawing import draw_circuit

        return draw_circuit(self)

    def __repr__(self) -> str:
        return f"Circuit(width={self._width}, gates={len(self)})"

    def __len__(self) -> int:
        return len(self._gates)

    def __iter__(self) -> Iterator[Gate]:
        return iter(self._gates)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Circuit):
            return NotImplemented
        return (self._width, self._gates) == (other._width, other._gates)

    def __add__(self, other: "Circuit") -> "Circuit":
        assert self._width == other._width
        return Circuit(self._width, self._gates + other._gates)

    def __getitem__(self, key: int) -> Gate:
        return self._gates[key]

    def width(self) -> int:
        return self._width

    def gates(self) -> List[Gate]:
        """Return a copy of the gate list."""
        return self._gates.copy()

    def append(self, gate: Gate) -> "Circuit":
        """Append a gate, checking that its wires fit the circuit.

        Returns:
            Self for chaining.
        """
        assert all(0 <= w < self._width for w in gate.wires()), (
            f"{gate} uses a wire outside [0, {self._width})"
        )
        self._gates.append(gate.with_step(len(self._gates)))
        return self

    def x(self, target: int) -> "Circuit":
        return self.append(Gate.x(target))

    def cx(self, control: int, target: int) -> "Circuit":
        return self.append(Gate.cx(control, target))

    def ccx(self, ctrl1: int, ctrl2: int, target: int) -> "Circuit":
        return self.append(Gate.ccx(ctrl1, ctrl2, target))

    def eca57(self, target: int, ctrl1: int, ctrl2: int) -> "Circuit":
        """Append target ^= (ctrl1 OR NOT ctrl2)."""
        return self.append(Gate.eca57(target, ctrl1, ctrl2))

    def pop(self) -> "Circuit":
        self._gates.pop()
        return self

    def used_wires(self) -> List[int]:
        """Sorted list of wires touched by at least one gate."""
        return sorted({w for gate in self._gates for w in gate.wires()})

    def reverse(self) -> "Circuit":
        return Circuit(self._width, reversed(self._gates))

    def swap(self, index: int) -> "Circuit":
        """Return a copy with gates index and index + 1 exchanged."""
        assert 0 <= index < len(self) - 1
        gates = self.gates()
        gates[index], gates[index + 1] = gates[index + 1], gates[index]
        return Circuit(self._width, gates)

    def reorder(self, order: Sequence[int]) -> "Circuit":
        """Return a copy whose k-th gate is self[order[k]]."""
        assert sorted(order) == list(range(len(self))), "order must be a permutation of gate indices"
        return Circuit(self._width, [self._gates[i] for i in order])

    def slice(self, start: int, end: int) -> "Circuit":
        """Extract gates[start:end] as a fragment on the same wires."""
        return Circuit(self._width, self._gates[start:end])

    def to_tuples(self) -> List[Tuple[int, ...]]:
        return [g.to_tuple() for g in self._gates]

    @classmethod
    def from_tuples(cls, width: int, tuples: Iterable[Sequence[int]]) -> "Circuit":
        """Build an ECA57 circuit from (target, ctrl1, ctrl2) triples."""
        return cls(width, [Gate.eca57(t[0], t[1], t[2]) for t in tuples])
