"""Gate collision analysis.

Two gates collide (do NOT commute) iff one's target is among the other's
controls:

    g1.target in g2.controls  OR  g2.target in g1.controls

Gates sharing a target but not touching each other's controls commute: both
XOR onto the same wire, and XOR is order independent.

The collision graph has one node per gate position and a directed edge i -> j
for every colliding pair with i < j. Building it tests every pair, so it is
O(n^2) in the gate count; no transitive closure is computed. The skeleton
graph drops edges implied by an intermediate gate.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import networkx as nx

from gates.gate import Gate

Edge = Tuple[int, int]


def gates_collide(g1: Gate, g2: Gate) -> bool:
    """Check if two gates collide (do NOT commute)."""
    return g1.target in g2.controls or g2.target in g1.controls


def gates_commute(g1: Gate, g2: Gate) -> bool:
    """Check if two gates commute (can be swapped without changing the circuit)."""
    return not gates_collide(g1, g2)


def collision_edges(gates: Sequence[Gate]) -> List[Edge]:
    """All (i, j) with i < j whose gates collide, in lexicographic order."""
    n = len(gates)
    return [
        (i, j)
        for i in range(n)
        for j in range(i + 1, n)
        if gates_collide(gates[i], gates[j])
    ]


def skeleton_edges(gates: Sequence[Gate]) -> List[Edge]:
    """Collision edges minus those implied by an intermediate gate.

    Edge i -> j is kept iff i and j collide AND no k with i < k < j collides
    with both. Reachability matches the full collision graph.
    """
    n = len(gates)
    coll = [[False] * n for _ in range(n)]
    for i, j in collision_edges(gates):
        coll[i][j] = coll[j][i] = True

    edges = []
    for i in range(n):
        for j in range(i + 1, n):
            if not coll[i][j]:
                continue
            if any(coll[i][k] and coll[k][j] for k in range(i + 1, j)):
                continue
            edges.append((i, j))
    return edges


def _graph(gates: Sequence[Gate], edges: List[Edge]) -> nx.DiGraph:
    G = nx.DiGraph()
    for i, g in enumerate(gates):
        G.add_node(i, gate=g, target=g.target)
    G.add_edges_from(edges)
    return G


def build_collision_graph(gates: Sequence[Gate]) -> nx.DiGraph:
    """
    Build the collision (precedence) graph of a gate sequence.

    Nodes: gate indices, with `gate` and `target` attributes.
    Edges: i -> j for every colliding pair with i < j ("must come before").
    """
    return _graph(gates, collision_edges(gates))


def build_skeleton_graph(gates: Sequence[Gate]) -> nx.DiGraph:
    """Like build_collision_graph, keeping only skeleton edges."""
    return _graph(gates, skeleton_edges(gates))


def swappable_positions(gates: Sequence[Gate]) -> List[int]:
    """Indices i where gates[i] and gates[i + 1] commute."""
    return [i for i in range(len(gates) - 1) if gates_commute(gates[i], gates[i + 1])]


@dataclass(frozen=True)
class CollisionMetrics:
    """Summary of how tightly a gate sequence is constrained.

    Attributes:
        wires_used: Wires touched by at least one gate.
        wire_coverage: wires_used / width.
        max_wire_degree: Most gate slots (target or control) on a single wire.
        avg_wire_degree: Gate slots per wire, averaged over the width.
        adjacent_collisions: Neighbouring gate pairs that collide.
        adjacent_commutes: Neighbouring gate pairs that commute.
        total_collisions: Number of collision edges.
        collision_density: total_collisions over all n*(n-1)/2 pairs.
    """
    wires_used: int = 0
    wire_coverage: float = 0.0
    max_wire_degree: int = 0
    avg_wire_degree: float = 0.0
    adjacent_collisions: int = 0
    adjacent_commutes: int = 0
    total_collisions: int = 0
    collision_density: float = 0.0


def wire_degrees(gates: Sequence[Gate], width: int) -> List[int]:
    """Per-wire count of gate slots; a wire repeated in one gate counts twice."""
    degrees = [0] * width
    for gate in gates:
        for wire in gate.wires():
            degrees[wire] += 1
    return degrees


def collision_metrics(gates: Sequence[Gate], width: int) -> CollisionMetrics:
    """Wire usage and collision counts of a gate sequence on `width` wires."""
    if not gates:
        return CollisionMetrics()

    degrees = wire_degrees(gates, width)
    wires_used = sum(1 for d in degrees if d > 0)
    adjacent = len(gates) - 1
    adjacent_commutes = len(swappable_positions(gates))
    total = len(collision_edges(gates))
    pairs = len(gates) * (len(gates) - 1) // 2

    return CollisionMetrics(
        wires_used=wires_used,
        wire_coverage=wires_used / width if width > 0 else 0.0,
        max_wire_degree=max(degrees, default=0),
        avg_wire_degree=sum(degrees) / width if width > 0 else 0.0,
        adjacent_collisions=adjacent - adjacent_commutes,
        adjacent_commutes=adjacent_commutes,
        total_collisions=total,
        collision_density=total / pairs if pairs else 0.0,
    )
