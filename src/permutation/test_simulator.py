"""Tests for permutations and the state-space simulator."""
from __future__ import annotations

import random

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from circuit.circuit import Circuit
from circuit.generate import random_eca57_circuit
from gates.gate import Gate
from permutation.batch import simulate_many
from permutation.permutation import Permutation, format_cycles
from permutation.simulator import (
    SimulationConfig,
    SimulationWidthError,
    circuit_permutation,
    complexity_walk,
    equivalent,
    simulate,
)


class TestPermutation:
    """Tests for the Permutation value type."""

    def test_default_is_identity(self):
        perm = Permutation(3)
        assert perm.values() == list(range(8))
        assert perm.is_identity()
        assert perm.cycle_notation() == "()"

    def test_wrong_length(self):
        with pytest.raises(AssertionError):
            Permutation(2, [0, 1, 2])

    def test_bits(self):
        """Test rows hold bit k of each value at position k."""
        perm = Permutation(2, [1, 2, 3, 0])
        assert perm.bits() == [[1, 0], [0, 1], [1, 1], [0, 0]]
        assert Permutation.row_to_value([1, 1]) == 3
        assert Permutation.value_to_row(2, 3) == [0, 1, 0]

    def test_cycles(self):
        """Test cycles start at their smallest state, fixed points excluded."""
        perm = Permutation(3, [4, 5, 2, 7, 0, 1, 6, 3])
        assert perm.cycles() == [[0, 4], [1, 5], [3, 7]]
        assert perm.cycle_notation() == "(0 4)(1 5)(3 7)"
        assert str(perm) == "(0 4)(1 5)(3 7)"

    def test_long_cycle(self):
        perm = Permutation(2, [1, 2, 3, 0])
        assert perm.cycles() == [[0, 1, 2, 3]]
        assert perm.cycle_notation() == "(0 1 2 3)"

    def test_format_cycles(self):
        assert format_cycles([]) == "()"
        assert format_cycles([[0, 1], [2, 3, 5]]) == "(0 1)(2 3 5)"

    def test_compose_and_inverse(self):
        """Test self + inverse is the identity."""
        perm = Permutation(2, [1, 2, 3, 0])
        assert (perm + perm.inverse()).is_identity()
        assert (perm + perm).values() == [2, 3, 0, 1]

    def test_moved_count(self):
        assert Permutation(3, [4, 5, 2, 7, 0, 1, 6, 3]).moved_count() == 6
        assert Permutation(2).moved_count() == 0

    def test_apply_gate_is_not_in_place(self):
        """Test gate application returns a new permutation."""
        perm = Permutation(2)
        after = perm.apply_gate(Gate.x(0))
        assert perm.is_identity()
        assert after.values() == [1, 0, 3, 2]

    def test_apply_gate_uses_evolving_state(self):
        """Test a gate acts on values()[s], not on s."""
        perm = Permutation(2).apply_gate(Gate.x(0)).apply_gate(Gate.cx(0, 1))
        # s=0 -> 1 -> 3, s=1 -> 0 -> 0, s=2 -> 3 -> 1, s=3 -> 2 -> 2
        assert perm.values() == [3, 0, 1, 2]


class TestSimulate:
    """Tests for simulate()."""

    def test_empty_circuit_is_identity(self):
        """Test empty circuits are the identity at any width."""
        for width in range(1, 6):
            result = simulate(Circuit(width))
            assert result.values() == list(range(2**width))
            assert result.is_identity
            assert result.cycle_notation == "()"
            assert result.cycles == []

    def test_eca57_scenario(self):
        """Test width 3, target=2, ctrl1=0, ctrl2=1."""
        result = simulate(Circuit(3).eca57(2, 0, 1))
        assert result.values() == [4, 5, 2, 7, 0, 1, 6, 3]
        assert result.cycle_notation == "(0 4)(1 5)(3 7)"
        assert not result.is_identity

    def test_double_gate_is_identity(self):
        result = simulate(Circuit(3).eca57(0, 1, 2).eca57(0, 1, 2))
        assert result.is_identity

    def test_gate_kinds(self):
        """Test X, CX and CCX over the full state space."""
        assert simulate(Circuit(2).x(1)).values() == [2, 3, 0, 1]
        assert simulate(Circuit(2).cx(0, 1)).values() == [0, 3, 2, 1]
        assert simulate(Circuit(3).ccx(0, 1, 2)).values() == [0, 1, 2, 7, 4, 5, 6, 3]

    def test_toffoli_is_not_eca57(self):
        """Test the asymmetric ECA57 rule differs from a Toffoli."""
        assert simulate(Circuit(3).eca57(2, 0, 1)).permutation != simulate(Circuit(3).ccx(0, 1, 2)).permutation

    def test_order_matters(self):
        """Test gates compose left to right."""
        lhs = simulate(Circuit(2).x(0).cx(0, 1))
        rhs = simulate(Circuit(2).cx(0, 1).x(0))
        assert lhs.values() == [3, 0, 1, 2]
        assert rhs.values() == [1, 2, 3, 0]

    def test_self_referential_gate(self):
        """Test a target in its own controls is simulated literally."""
        result = simulate(Circuit(2).eca57(0, 0, 1))
        assert result.values() == [1, 0, 2, 2]
        assert result.cycle_notation == "(0 1)"
        assert not result.is_identity

    def test_non_bijective_gate_is_not_identity(self):
        """Test a state merged into another is not reported as identity."""
        result = simulate(Circuit(1).cx(0, 0))
        assert result.values() == [0, 0]
        # 1 -> 0 is a tail into a fixed point, not a cycle
        assert result.cycles == []
        assert result.cycle_notation == "()"
        assert not result.is_identity
        assert result.is_identity == all(v == s for s, v in enumerate(result.values()))

    def test_repeated_controls(self):
        """Test ECA57 with ctrl1 == ctrl2 acts as X."""
        assert simulate(Circuit(3).eca57(2, 0, 0)).permutation == simulate(Circuit(3).x(2)).permutation

    def test_matches_sequential_apply(self):
        """Test the whole-array pass agrees with applying gates per state."""
        rng = random.Random(5)
        for _ in range(10):
            circ = random_eca57_circuit(5, 8, rng)
            expected = []
            for state in range(2**5):
                for gate in circ:
                    state = gate.apply(state)
                expected.append(state)
            assert simulate(circ).values() == expected


class TestWidthLimit:
    """Tests for fail-fast width checks."""

    def test_too_wide(self):
        """Test wide circuits are rejected before allocating states."""
        with pytest.raises(SimulationWidthError):
            simulate(Circuit(64).eca57(63, 0, 1))

    def test_config_limit(self):
        config = SimulationConfig(max_width=2)
        with pytest.raises(SimulationWidthError):
            simulate(Circuit(3), config)
        assert simulate(Circuit(2), config).is_identity

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            complexity_walk(Circuit(40))


class TestDerived:
    """Tests for complexity walks and equivalence."""

    def test_complexity_walk(self):
        circ = Circuit(3).eca57(2, 0, 1).eca57(2, 0, 1)
        assert complexity_walk(circ) == [6, 0]
        assert complexity_walk(Circuit(3)) == []

    def test_circuit_permutation(self):
        assert circuit_permutation(Circuit(2).x(0)) == Permutation(2, [1, 0, 3, 2])

    def test_equivalent(self):
        lhs = Circuit(5).eca57(0, 1, 2).eca57(3, 1, 2)
        assert equivalent(lhs, lhs.swap(0))
        assert not equivalent(lhs, Circuit(5).eca57(0, 1, 2))
        assert not equivalent(Circuit(3), Circuit(4))


class TestBatch:
    """Tests for batch simulation."""

    def test_inline(self):
        circuits = [Circuit(3).eca57(2, 0, 1), Circuit(2).x(0)]
        results = simulate_many(circuits, processes=1)
        assert [r.cycle_notation for r in results] == ["(0 4)(1 5)(3 7)", "(0 1)(2 3)"]

    def test_pool_keeps_order(self):
        """Test pooled results come back in input order."""
        rng = random.Random(11)
        circuits = [random_eca57_circuit(4, 6, rng) for _ in range(4)]
        results = simulate_many(circuits, processes=2)
        assert [r.permutation for r in results] == [simulate(c).permutation for c in circuits]

    def test_width_checked_first(self):
        with pytest.raises(SimulationWidthError):
            simulate_many([Circuit(3), Circuit(30)], processes=2)

    def test_empty(self):
        assert simulate_many([]) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
