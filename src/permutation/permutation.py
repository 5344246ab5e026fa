from __future__ import annotations

from typing import Iterable, List

from gates.gate import Gate


class Permutation:
    """Bijection on the 2^bits_num register states.

    values()[s] is the state that input state s is mapped to, bit k = wire k.
    Instances are never mutated; gate application returns a new permutation.
    """
    def __init__(self, bits_num: int, values: Iterable[int] | None = None):
        assert bits_num >= 0
        rows_num = 2**bits_num
        values = list(range(rows_num)) if values is None else list(values)
        assert len(values) == rows_num, f"Expected {rows_num} values, got {len(values)}"

        self._values = values
        self._bits_num = bits_num

    def values(self) -> List[int]:
        return self._values.copy()

    def bits_num(self) -> int:
        return self._bits_num

    def bits(self) -> List[List[int]]:
        return [self.value_to_row(v, self._bits_num) for v in self._values]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return (self._bits_num, self._values) == (other._bits_num, other._values)

    def __len__(self) -> int:
        return len(self._values)

    def __add__(self, other: "Permutation") -> "Permutation":
        """Compose: apply self first, then other."""
        assert len(self) == len(other)
        return Permutation(self._bits_num, [other._values[v] for v in self._values])

    def __str__(self) -> str:
        return self.cycle_notation()

    def __repr__(self) -> str:
        return f"Permutation({self._bits_num}, {self.cycle_notation()})"

    def __getitem__(self, key: int) -> int:
        return self._values[key]

    @staticmethod
    def row_to_value(row: List[int]) -> int:
        value = 0
        for i, b in enumerate(row):
            value += 2**i * b
        return value

    @staticmethod
    def value_to_row(value: int, bits_num: int) -> List[int]:
        return [(value >> s) & 1 for s in range(bits_num)]

    def apply_gate(self, gate: Gate) -> "Permutation":
        """Follow this permutation with one gate.

        The gate rule is evaluated on the evolving state values()[s], not on s.
        """
        return Permutation(self._bits_num, [gate.apply(v) for v in self._values])

    def is_identity(self) -> bool:
        return all(v == s for s, v in enumerate(self._values))

    def moved_count(self) -> int:
        """Number of states not mapped to themselves."""
        return sum(1 for s, v in enumerate(self._values) if v != s)

    def inverse(self) -> "Permutation":
        inverse_values = [-1] * len(self._values)
        for i, p in enumerate(self._values):
            inverse_values[p] = i
        return Permutation(self._bits_num, inverse_values)

    def cycles(self) -> List[List[int]]:
        """Disjoint cycles of length >= 2.

        Cycles are discovered by scanning start states in ascending order, so
        each cycle starts at its smallest state and the list is sorted by it.
        """
        visited = [False] * len(self._values)
        cycles = []
        for start in range(len(self._values)):
            if visited[start]:
                continue
            cycle = []
            curr = start
            while not visited[curr]:
                visited[curr] = True
                cycle.append(curr)
                curr = self._values[curr]
            if len(cycle) > 1:
                cycles.append(cycle)
        return cycles

    def cycle_notation(self) -> str:
        """'()' for the identity, otherwise '(s0 s1 ...)' per cycle."""
        return format_cycles(self.cycles())


def format_cycles(cycles: List[List[int]]) -> str:
    """Render cycles as '(0 4)(1 5)'; no cycles renders as '()'."""
    if not cycles:
        return "()"
    return "".join("(" + " ".join(str(s) for s in cycle) + ")" for cycle in cycles)
