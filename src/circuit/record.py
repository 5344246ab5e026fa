"""Circuit records as served by the database backend.

A record carries the raw circuit (width and [target, ctrl1, ctrl2] triples)
and optionally fields the backend precomputed. Any absent field can be
derived locally, and everything is rederived after a user edit.

Dictionary form:
    {
        "width": 4,
        "gate_count": 2,
        "gates": [[0, 1, 2], [0, 1, 2]],
        "skeleton_edges": [[0, 1]],
        "complexity_walk": [4, 0],
        "permutation": [0, 1, ...],
        "cycle_notation": "()"
    }
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional

from circuit.circuit import Circuit
from permutation.simulator import SimulationConfig, complexity_walk, simulate
from skeleton.collision import skeleton_edges


@dataclass
class CircuitRecord:
    """Backend circuit record.

    Attributes:
        width: Number of wires.
        gates: ECA57 gates as [target, ctrl1, ctrl2] lists.
        gate_count: Number of gates.
        skeleton_edges: [[i, j], ...] skeleton collision edges.
        complexity_walk: States moved by each gate prefix.
        permutation: Full permutation of the 2^width states.
        cycle_notation: Cycle decomposition of the permutation.
    """
    width: int
    gates: List[List[int]]
    gate_count: Optional[int] = None
    skeleton_edges: Optional[List[List[int]]] = None
    complexity_walk: Optional[List[int]] = None
    permutation: Optional[List[int]] = None
    cycle_notation: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CircuitRecord":
        """Deserialize from a backend dictionary; unknown keys are ignored."""
        return cls(
            width=data["width"],
            gates=[list(g) for g in data["gates"]],
            gate_count=data.get("gate_count"),
            skeleton_edges=data.get("skeleton_edges"),
            complexity_walk=data.get("complexity_walk"),
            permutation=data.get("permutation"),
            cycle_notation=data.get("cycle_notation"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a dictionary, leaving out absent fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    @classmethod
    def from_circuit(cls, circuit: Circuit) -> "CircuitRecord":
        return cls(width=circuit.width(), gates=[list(t) for t in circuit.to_tuples()])

    def to_circuit(self) -> Circuit:
        return Circuit.from_tuples(self.width, self.gates)

    def with_derived(self, config: Optional[SimulationConfig] = None) -> "CircuitRecord":
        """Return a copy with every absent field computed locally.

        Permutation-based fields are only computed when the width is within
        config.max_width; otherwise they stay absent.
        """
        config = config or SimulationConfig()
        circuit = self.to_circuit()
        updates: Dict[str, Any] = {}

        if self.gate_count is None:
            updates["gate_count"] = len(circuit)
        if self.skeleton_edges is None:
            updates["skeleton_edges"] = [list(e) for e in skeleton_edges(circuit.gates())]

        if self.width <= config.max_width:
            if self.permutation is None or self.cycle_notation is None:
                result = simulate(circuit, config)
                if self.permutation is None:
                    updates["permutation"] = result.values()
                if self.cycle_notation is None:
                    updates["cycle_notation"] = result.cycle_notation
            if self.complexity_walk is None:
                updates["complexity_walk"] = complexity_walk(circuit, config)

        return replace(self, **updates)

    def recompute(self, config: Optional[SimulationConfig] = None) -> "CircuitRecord":
        """Drop every derived field and compute it again from the gates."""
        bare = CircuitRecord(width=self.width, gates=[list(g) for g in self.gates])
        return bare.with_derived(config)
