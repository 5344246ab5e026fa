"""Reversible gate model.

A gate conditionally flips one target wire depending on its control wires.
Four gate kinds are supported:

    X      target ^= 1
    CX     target ^= c0
    CCX    target ^= (c0 AND c1)
    ECA57  target ^= (ctrl1 OR NOT ctrl2)

ECA Rule 57 is the primitive of the circuit databases. Its two controls are
asymmetric:
    - ctrl1 (c1): active-high control, contributes to the OR condition
    - ctrl2 (c2): active-low control (inverted), contributes as NOT to the OR

Truth table for the ECA57 control condition:
    c1  c2  | c1 OR NOT c2
    0   0   |  1  (NOT c2 = 1)
    0   1   |  0
    1   0   |  1
    1   1   |  1

States are integers where bit k holds wire k.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Tuple


class GateKind(Enum):
    """Closed set of supported gate kinds."""
    X = "X"
    CX = "CX"
    CCX = "CCX"
    ECA57 = "ECA57"

    @property
    def arity(self) -> int:
        """Number of control wires a gate of this kind takes."""
        return _ARITY[self]

    @classmethod
    def from_name(cls, name: str) -> "GateKind":
        """Look up a kind by its name, case-insensitively."""
        try:
            return cls(name.upper())
        except ValueError:
            raise ValueError(f"Unknown gate kind: {name}") from None


_ARITY = {
    GateKind.X: 0,
    GateKind.CX: 1,
    GateKind.CCX: 2,
    GateKind.ECA57: 2,
}


@dataclass(frozen=True)
class Gate:
    """A single reversible gate.

    Attributes:
        kind: Gate kind, decides the flip rule.
        target: Wire index that gets conditionally flipped.
        controls: Ordered control wires. For ECA57 this is (ctrl1, ctrl2).
        step: Column position used for display and serialization order.
            It is not part of gate identity and does not take part in equality.

    A target listed among its own controls is allowed and is simulated
    literally, as are repeated control wires.
    """
    kind: GateKind
    target: int
    controls: Tuple[int, ...] = ()
    step: int = field(default=0, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "controls", tuple(self.controls))
        assert self.target >= 0, f"Negative target wire: {self.target}"
        assert all(c >= 0 for c in self.controls), f"Negative control wire: {self.controls}"
        assert len(self.controls) == self.kind.arity, (
            f"{self.kind.value} takes {self.kind.arity} controls, got {len(self.controls)}"
        )

    @classmethod
    def x(cls, target: int, step: int = 0) -> "Gate":
        return cls(GateKind.X, target, (), step)

    @classmethod
    def cx(cls, control: int, target: int, step: int = 0) -> "Gate":
        return cls(GateKind.CX, target, (control,), step)

    @classmethod
    def ccx(cls, ctrl1: int, ctrl2: int, target: int, step: int = 0) -> "Gate":
        return cls(GateKind.CCX, target, (ctrl1, ctrl2), step)

    @classmethod
    def eca57(cls, target: int, ctrl1: int, ctrl2: int, step: int = 0) -> "Gate":
        return cls(GateKind.ECA57, target, (ctrl1, ctrl2), step)

    @property
    def ctrl1(self) -> int:
        """Active-high control of a two-control gate."""
        assert len(self.controls) == 2, f"{self.kind.value} has no ctrl1"
        return self.controls[0]

    @property
    def ctrl2(self) -> int:
        """Second control (active-low for ECA57)."""
        assert len(self.controls) == 2, f"{self.kind.value} has no ctrl2"
        return self.controls[1]

    def wires(self) -> Tuple[int, ...]:
        """Return (target, *controls)."""
        return (self.target,) + self.controls

    def max_wire(self) -> int:
        return max(self.wires())

    def apply(self, state: int) -> int:
        """Apply the gate to a register state.

        Args:
            state: Register bit pattern, bit k = wire k.

        Returns:
            New state after gate application.
        """
        flip = 1 << self.target
        if self.kind is GateKind.X:
            return state ^ flip
        elif self.kind is GateKind.CX:
            if (state >> self.controls[0]) & 1:
                return state ^ flip
            return state
        elif self.kind is GateKind.CCX:
            if all((state >> c) & 1 for c in self.controls):
                return state ^ flip
            return state
        elif self.kind is GateKind.ECA57:
            c1 = (state >> self.controls[0]) & 1
            c2 = (state >> self.controls[1]) & 1
            # target ^= (c1 OR NOT c2)
            if c1 | (1 - c2):
                return state ^ flip
            return state
        raise ValueError(f"Unknown gate kind: {self.kind}")

    def with_step(self, step: int) -> "Gate":
        """Return a copy placed at another column."""
        return replace(self, step=step)

    def remap(self, wire_map: Dict[int, int]) -> "Gate":
        """Return a copy with every wire relabeled through wire_map."""
        return replace(
            self,
            target=wire_map[self.target],
            controls=tuple(wire_map[c] for c in self.controls),
        )

    def to_tuple(self) -> Tuple[int, ...]:
        """Convert to (target, *controls); (target, ctrl1, ctrl2) for ECA57."""
        return self.wires()

    @classmethod
    def from_tuple(cls, t: Tuple[int, int, int], step: int = 0) -> "Gate":
        """Create an ECA57 gate from a (target, ctrl1, ctrl2) tuple."""
        return cls.eca57(t[0], t[1], t[2], step)

    def __str__(self) -> str:
        if not self.controls:
            return f"{self.kind.value}({self.target})"
        controls = ",".join(str(c) for c in self.controls)
        return f"{self.kind.value}({self.target}; {controls})"


def all_eca57_gates(width: int) -> List[Gate]:
    """Generate all ECA57 gates with three distinct wires for a given width.

    Args:
        width: Number of wires.

    Returns:
        List of width * (width-1) * (width-2) gates.
    """
    gates = []
    for target in range(width):
        for ctrl1 in range(width):
            if ctrl1 == target:
                continue
            for ctrl2 in range(width):
                if ctrl2 == target or ctrl2 == ctrl1:
                    continue
                gates.append(Gate.eca57(target, ctrl1, ctrl2))
    return gates
