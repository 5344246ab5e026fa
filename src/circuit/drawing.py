"""ASCII circuit drawer.

Gate representation:
- Target: ⊕ (XOR)
- Active-high control: ● (filled dot)
- ECA57 ctrl2 (active-low/inverted): ○ (empty dot)
- Vertical connections: │

Example for ECA57 gate (target=1, ctrl1=0, ctrl2=2):

   0 ─●─
   1 ─⊕─
   2 ─○─
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from gates.gate import Gate, GateKind

if TYPE_CHECKING:
    from circuit.circuit import Circuit


def _symbol(gate: Gate, wire: int) -> str:
    if wire == gate.target:
        return "⊕"
    if wire in gate.controls:
        if gate.kind is GateKind.ECA57 and wire == gate.ctrl2 and wire != gate.ctrl1:
            return "○"
        return "●"
    wires = gate.wires()
    if min(wires) < wire < max(wires):
        return "│"
    return "─"


def draw_circuit(circuit: "Circuit", show_indices: bool = True) -> str:
    """Draw a circuit as one text line per wire."""
    gates = circuit.gates()
    if not gates:
        return "Empty circuit"

    lines = []
    for wire in range(circuit.width()):
        line = f"{wire:2d} ─"
        for gate in gates:
            line += _symbol(gate, wire) + "─"
        lines.append(line)

    if show_indices:
        # Indices past 9 would shift columns; label modulo 10.
        lines.append("    " + "".join(f"{i % 10} " for i in range(len(gates))))

    return "\n".join(lines)
