"""Topological reordering of a gate sequence.

Two projections of the same collision graph:

- push-left order: Kahn's algorithm emitting one gate at a time. Among the
  gates whose predecessors are all placed, the one with the highest target
  wire goes first (lowest original index on ties). Only commuting gates
  change relative order, so the circuit's permutation is unchanged.
- topological levels: each pass takes every ready gate at once (ascending
  index), giving the layering used by the graph views.

Collision graphs only have edges from lower to higher index and are acyclic.
Both functions still accept arbitrary graphs: when nodes remain but none is
ready, the remaining nodes are flushed in index order and the walk stops.
"""
from __future__ import annotations

from typing import Dict, List, Sequence

import networkx as nx

from circuit.circuit import Circuit
from gates.gate import Gate
from skeleton.collision import build_collision_graph


def push_left_order(G: nx.DiGraph) -> List[int]:
    """
    Order graph nodes by pushing gates left until they collide.

    Nodes are expected to carry a `target` attribute (missing counts as 0).

    Returns:
        Node indices in emission order.
    """
    in_degree = dict(G.in_degree())
    remaining = set(G.nodes)
    ready = [node for node in G.nodes if in_degree[node] == 0]
    order: List[int] = []

    while remaining:
        if not ready:
            # Cycle: flush everything left in index order.
            order.extend(sorted(remaining))
            break

        node = min(ready, key=lambda n: (-G.nodes[n].get("target", 0), n))
        ready.remove(node)
        remaining.discard(node)
        order.append(node)

        for succ in G.successors(node):
            if succ not in remaining:
                continue
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                ready.append(succ)

    return order


def topological_levels(G: nx.DiGraph) -> List[List[int]]:
    """
    Get topological levels (generations) of a collision graph.

    Returns list of lists; each inner list holds, in ascending order, the gate
    indices that became ready in the same pass. If a pass finds no ready node
    while nodes remain, those nodes form one final level.
    """
    in_degree = dict(G.in_degree())
    remaining = set(G.nodes)
    levels: List[List[int]] = []

    while remaining:
        level = sorted(node for node in remaining if in_degree[node] == 0)
        if not level:
            levels.append(sorted(remaining))
            break

        remaining.difference_update(level)
        for node in level:
            for succ in G.successors(node):
                in_degree[succ] -= 1
        levels.append(level)

    return levels


def level_of(levels: List[List[int]]) -> Dict[int, int]:
    """Map each node to the index of its level."""
    return {node: idx for idx, level in enumerate(levels) for node in level}


def canonical_order(gates: Sequence[Gate]) -> List[Gate]:
    """Return gates in push-left order with steps renumbered 0..n-1."""
    order = push_left_order(build_collision_graph(gates))
    return [gates[old].with_step(new) for new, old in enumerate(order)]


def canonical_circuit(circuit: Circuit) -> Circuit:
    """Circuit with the same width and gates in push-left order."""
    return Circuit(circuit.width(), canonical_order(circuit.gates()))


def gate_levels(gates: Sequence[Gate]) -> List[List[int]]:
    """Topological levels of a gate sequence's collision graph."""
    return topological_levels(build_collision_graph(gates))


def depth(gates: Sequence[Gate]) -> int:
    """Number of topological levels (parallel depth) of a gate sequence."""
    return len(gate_levels(gates))
