"""Permutation simulator.

Runs a circuit over the full state space: starting from the identity on
2^width states, each gate maps every current value through its bit rule and
produces a fresh array. The result is the permutation the circuit computes,
together with its identity flag and cycle decomposition.

Memory and time are O(2^width) per gate, so widths above
SimulationConfig.max_width are rejected before anything is allocated.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from circuit.circuit import Circuit
from permutation.permutation import Permutation, format_cycles

DEFAULT_MAX_WIDTH = 24


class SimulationWidthError(ValueError):
    """Raised when a circuit is too wide to materialize its state space."""


@dataclass
class SimulationConfig:
    """Configuration for exhaustive simulation."""
    max_width: int = DEFAULT_MAX_WIDTH


@dataclass(frozen=True)
class SimulationResult:
    permutation: Permutation
    is_identity: bool
    cycle_notation: str
    cycles: List[List[int]]

    def values(self) -> List[int]:
        return self.permutation.values()


def check_width(width: int, config: Optional[SimulationConfig] = None) -> None:
    """Fail fast if 2^width states would exceed the configured limit."""
    config = config or SimulationConfig()
    if width > config.max_width:
        raise SimulationWidthError(
            f"Width {width} exceeds the simulation limit of {config.max_width} wires "
            f"(2^{width} states)"
        )


def circuit_permutation(circuit: Circuit, config: Optional[SimulationConfig] = None) -> Permutation:
    """Permutation computed by running the circuit's gates left to right."""
    check_width(circuit.width(), config)
    perm = Permutation(circuit.width())
    for gate in circuit:
        perm = perm.apply_gate(gate)
    return perm


def simulate(circuit: Circuit, config: Optional[SimulationConfig] = None) -> SimulationResult:
    """Simulate a circuit over its whole state space.

    Args:
        circuit: Circuit to run.
        config: Optional limits; defaults to SimulationConfig().

    Returns:
        SimulationResult with the permutation, identity flag and cycles.

    Raises:
        SimulationWidthError: If the circuit is wider than config.max_width.
    """
    perm = circuit_permutation(circuit, config)
    cycles = perm.cycles()
    return SimulationResult(
        permutation=perm,
        is_identity=perm.is_identity(),
        cycle_notation=format_cycles(cycles),
        cycles=cycles,
    )


def complexity_walk(circuit: Circuit, config: Optional[SimulationConfig] = None) -> List[int]:
    """Number of states moved by the circuit prefix after each gate."""
    check_width(circuit.width(), config)
    perm = Permutation(circuit.width())
    walk = []
    for gate in circuit:
        perm = perm.apply_gate(gate)
        walk.append(perm.moved_count())
    return walk


def equivalent(lhs: Circuit, rhs: Circuit, config: Optional[SimulationConfig] = None) -> bool:
    """True iff both circuits compute the same permutation."""
    if lhs.width() != rhs.width():
        return False
    return circuit_permutation(lhs, config) == circuit_permutation(rhs, config)
