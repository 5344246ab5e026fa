"""Collision graphs and topological reordering of gate sequences."""
from skeleton.collision import (
    gates_collide,
    gates_commute,
    collision_edges,
    skeleton_edges,
    build_collision_graph,
    build_skeleton_graph,
    swappable_positions,
    CollisionMetrics,
    collision_metrics,
)
from skeleton.topology import (
    push_left_order,
    topological_levels,
    canonical_order,
    canonical_circuit,
    depth,
)
