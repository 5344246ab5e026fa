#!/usr/bin/env python3
"""CLI for exploring reversible circuits.

A circuit is given either as a gate string or as a path to a .gate/.eca57 file.

Usage:
    python circuit_cli.py parse "201;012;"          # Decode a gate string
    python circuit_cli.py simulate "201;" -w 3 -p   # Permutation and cycles
    python circuit_cli.py order circuit.gate        # Canonical push-left order
    python circuit_cli.py levels "201;012;"         # Topological levels
    python circuit_cli.py skeleton "201;012;"       # Collision/skeleton edges
    python circuit_cli.py reduce "5a0;"             # Shrink onto minimal wires
    python circuit_cli.py draw "201;012;"           # ASCII diagram
    python circuit_cli.py random 5 8 --identity     # Random circuit
    python circuit_cli.py hash "201;012;"           # Content and canonical hashes
"""
from __future__ import annotations

import argparse
import random
import time
from pathlib import Path

from circuit.circuit import Circuit
from codec.gate_file import read_gate_file
from codec.gate_string import GateStringError, parse_gate_string, serialize_gates
from permutation.simulator import DEFAULT_MAX_WIDTH, SimulationConfig

GATE_FILE_SUFFIXES = (".gate", ".eca57")


def load_circuit(args) -> Circuit:
    """Build the circuit named by args.circuit, honouring --width and --strict."""
    source = args.circuit
    if source.endswith(GATE_FILE_SUFFIXES) and Path(source).is_file():
        return read_gate_file(source, strict=args.strict, width=args.width)

    parsed = parse_gate_string(source, strict=args.strict)
    if not parsed.gates and args.width is None:
        raise GateStringError("Empty circuit: pass --width to set the number of wires")
    return Circuit(parsed.resolve_width(args.width), parsed.gates)


def cmd_parse(args):
    """Decode a circuit and print its gates."""
    circuit = load_circuit(args)
    print(f"Width: {circuit.width()}, gates: {len(circuit)}")
    for gate in circuit:
        print(f"  [{gate.step}] {gate}")
    print(f"Serialized: {serialize_gates(circuit.gates())}")


def cmd_simulate(args):
    """Simulate a circuit over its full state space."""
    from permutation.simulator import complexity_walk, simulate

    circuit = load_circuit(args)
    config = SimulationConfig(max_width=args.max_width)

    start = time.time()
    result = simulate(circuit, config)
    elapsed = time.time() - start

    print(f"Simulated width={circuit.width()}, gates={len(circuit)} in {elapsed:.3f}s")
    print(f"Identity: {'✓' if result.is_identity else '✗'}")
    print(f"Cycles: {result.cycle_notation}")
    print(f"Moved states: {result.permutation.moved_count()}")
    if args.permutation:
        print(f"Permutation: {result.values()}")
    if args.walk:
        print(f"Complexity walk: {' → '.join(str(v) for v in complexity_walk(circuit, config))}")


def cmd_order(args):
    """Print the canonical (push-left) gate order."""
    from skeleton.collision import build_collision_graph
    from skeleton.topology import push_left_order

    circuit = load_circuit(args)
    order = push_left_order(build_collision_graph(circuit.gates()))
    reordered = circuit.reorder(order)

    print(f"New order: {order}")
    print(f"Canonical: {serialize_gates(reordered.gates())}")
    if args.verbose:
        print(reordered)


def cmd_levels(args):
    """Print the topological levels of the collision graph."""
    from skeleton.topology import gate_levels

    circuit = load_circuit(args)
    levels = gate_levels(circuit.gates())
    print(f"Depth: {len(levels)}")
    for i, level in enumerate(levels):
        gates = ", ".join(str(circuit[j]) for j in level)
        print(f"  Level {i}: {level} -> {gates}")


def cmd_skeleton(args):
    """Print collision and skeleton edges."""
    from skeleton.collision import collision_edges, collision_metrics, skeleton_edges, swappable_positions

    circuit = load_circuit(args)
    gates = circuit.gates()
    print(f"Collision edges: {collision_edges(gates)}")
    print(f"Skeleton edges: {skeleton_edges(gates)}")
    print(f"Swappable positions: {swappable_positions(gates)}")

    metrics = collision_metrics(gates, circuit.width())
    print(f"Wires used: {metrics.wires_used}/{circuit.width()} ({metrics.wire_coverage:.0%})")
    print(f"Wire degree: max {metrics.max_wire_degree}, avg {metrics.avg_wire_degree:.2f}")
    print(f"Adjacent: {metrics.adjacent_collisions} collide, {metrics.adjacent_commutes} commute")
    print(f"Collisions: {metrics.total_collisions} (density {metrics.collision_density:.2f})")


def cmd_reduce(args):
    """Shrink a circuit (or a slice of it) onto its minimal wire range."""
    from circuit.reducer import reduce_wires

    circuit = load_circuit(args)
    end = args.end if args.end is not None else len(circuit)
    fragment = circuit.slice(args.start, end)
    reduced = reduce_wires(fragment.gates())

    print(f"Gates {args.start}..{end}: width {circuit.width()} -> {reduced.width}")
    print(f"Wire map: {reduced.wire_map}")
    print(f"Reduced: {serialize_gates(reduced.gates)}")


def cmd_draw(args):
    """Draw a circuit as ASCII art."""
    circuit = load_circuit(args)
    print(circuit)


def cmd_random(args):
    """Generate a random ECA57 circuit."""
    from circuit.generate import random_eca57_circuit, random_eca57_identity

    rng = random.Random(args.seed)
    if args.identity:
        circuit = random_eca57_identity(args.width, args.gc, rng)
    else:
        circuit = random_eca57_circuit(args.width, args.gc, rng)

    print(serialize_gates(circuit.gates()))
    if args.verbose:
        print(circuit)


def cmd_hash(args):
    """Print the content hash and the relabeling-invariant canonical hash."""
    from circuit.reducer import canonical_hash, circuit_hash

    circuit = load_circuit(args)
    print(f"Content hash: {circuit_hash(circuit.gates())}")
    print(f"Canonical hash: {canonical_hash(circuit.gates(), circuit.width()).hex()}")


def add_circuit_arguments(sub: argparse.ArgumentParser):
    sub.add_argument("circuit", help="Gate string or path to a .gate/.eca57 file")
    sub.add_argument("-w", "--width", type=int, default=None, help="Number of wires (default: detected)")
    sub.add_argument("--strict", action="store_true", help="Reject malformed tokens and characters")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reversible Circuit Explorer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse = subparsers.add_parser("parse", help="Decode a circuit")
    add_circuit_arguments(parse)

    sim = subparsers.add_parser("simulate", help="Simulate over the full state space")
    add_circuit_arguments(sim)
    sim.add_argument("--max-width", type=int, default=DEFAULT_MAX_WIDTH,
                     help=f"Largest width to simulate (default: {DEFAULT_MAX_WIDTH})")
    sim.add_argument("-p", "--permutation", action="store_true", help="Print the full permutation")
    sim.add_argument("--walk", action="store_true", help="Print moved states after each gate")

    order = subparsers.add_parser("order", help="Canonical push-left order")
    add_circuit_arguments(order)
    order.add_argument("-v", "--verbose", action="store_true", help="Draw the reordered circuit")

    levels = subparsers.add_parser("levels", help="Topological levels")
    add_circuit_arguments(levels)

    skel = subparsers.add_parser("skeleton", help="Collision and skeleton edges")
    add_circuit_arguments(skel)

    reduce = subparsers.add_parser("reduce", help="Shrink onto the minimal wire range")
    add_circuit_arguments(reduce)
    reduce.add_argument("--start", type=int, default=0, help="First gate of the fragment")
    reduce.add_argument("--end", type=int, default=None, help="End (exclusive) of the fragment")

    draw = subparsers.add_parser("draw", help="ASCII diagram")
    add_circuit_arguments(draw)

    rand = subparsers.add_parser("random", help="Random ECA57 circuit")
    rand.add_argument("width", type=int, help="Number of wires")
    rand.add_argument("gc", type=int, help="Number of gates")
    rand.add_argument("--identity", action="store_true", help="Generate an identity circuit")
    rand.add_argument("--seed", type=int, default=None, help="Random seed")
    rand.add_argument("-v", "--verbose", action="store_true", help="Draw the circuit")

    hsh = subparsers.add_parser("hash", help="Content and canonical hashes")
    add_circuit_arguments(hsh)

    return parser


COMMANDS = {
    "parse": cmd_parse,
    "simulate": cmd_simulate,
    "order": cmd_order,
    "levels": cmd_levels,
    "skeleton": cmd_skeleton,
    "reduce": cmd_reduce,
    "draw": cmd_draw,
    "random": cmd_random,
    "hash": cmd_hash,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        COMMANDS[args.command](args)
    except ValueError as e:
        parser.exit(2, f"error: {e}\n")


if __name__ == "__main__":
    main()
