"""Run independent simulations in a worker process pool.

Simulation is CPU bound and shares no state between calls, so a batch of
circuits can be spread over processes; results come back in input order.
"""
from __future__ import annotations

import multiprocessing
from typing import List, Optional, Sequence

from circuit.circuit import Circuit
from permutation.simulator import SimulationConfig, SimulationResult, check_width, simulate


def simulate_worker(circuit: Circuit, config: SimulationConfig) -> SimulationResult:
    """Worker process entry point for a single circuit."""
    return simulate(circuit, config)


def simulate_many(
    circuits: Sequence[Circuit],
    processes: Optional[int] = None,
    config: Optional[SimulationConfig] = None,
) -> List[SimulationResult]:
    """Simulate circuits, in a process pool when there is more than one.

    Widths are checked up front so an oversized circuit fails before any
    worker starts.

    Args:
        circuits: Circuits to simulate.
        processes: Pool size (default: cpu count). 1 runs inline.
        config: Simulation limits shared by all circuits.
    """
    config = config or SimulationConfig()
    for circuit in circuits:
        check_width(circuit.width(), config)

    # Avoid pool overhead when there is nothing to parallelize
    if len(circuits) <= 1 or processes == 1:
        return [simulate(circuit, config) for circuit in circuits]

    with multiprocessing.Pool(processes=processes) as pool:
        return pool.starmap(simulate_worker, [(circuit, config) for circuit in circuits])
