"""Tests for the circuit CLI."""
from __future__ import annotations

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from circuit.circuit import Circuit
from circuit_cli import main
from codec.gate_file import write_gate_file


class TestCli:
    """End-to-end runs of each subcommand."""

    def test_parse(self, capsys):
        main(["parse", "201;012;"])
        out = capsys.readouterr().out
        assert "Width: 3, gates: 2" in out
        assert "[0] ECA57(2; 0,1)" in out
        assert "Serialized: 201;012;" in out

    def test_simulate(self, capsys):
        main(["simulate", "201;", "-w", "3", "-p", "--walk"])
        out = capsys.readouterr().out
        assert "Cycles: (0 4)(1 5)(3 7)" in out
        assert "Moved states: 6" in out
        assert "Permutation: [4, 5, 2, 7, 0, 1, 6, 3]" in out
        assert "Complexity walk: 6" in out

    def test_simulate_too_wide(self, capsys):
        """Test the width limit exits with an error instead of allocating."""
        with pytest.raises(SystemExit) as exc:
            main(["simulate", "201;", "--max-width", "2"])
        assert exc.value.code == 2
        assert "exceeds the simulation limit" in capsys.readouterr().err

    def test_empty_circuit_needs_width(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["parse", ""])
        assert exc.value.code == 2

        main(["simulate", "", "-w", "2"])
        assert "Cycles: ()" in capsys.readouterr().out

    def test_width_too_small(self, capsys):
        """Test a width narrower than the gates exits with an error."""
        with pytest.raises(SystemExit) as exc:
            main(["simulate", "012;", "-w", "2"])
        assert exc.value.code == 2
        assert "too small" in capsys.readouterr().err

    def test_gate_file_width_too_small(self, tmp_path, capsys):
        path = tmp_path / "circuit.eca57"
        write_gate_file(path, Circuit(5).eca57(4, 0, 1))
        with pytest.raises(SystemExit) as exc:
            main(["parse", str(path), "-w", "3"])
        assert exc.value.code == 2

        main(["parse", str(path), "-w", "8"])
        assert "Width: 8, gates: 1" in capsys.readouterr().out

    def test_strict(self):
        with pytest.raises(SystemExit):
            main(["parse", "01;201;", "--strict"])

    def test_order(self, capsys):
        main(["order", "012;103;234;056;"])
        out = capsys.readouterr().out
        assert "New order: [0, 2, 1, 3]" in out
        assert "Canonical: 012;234;103;056;" in out

    def test_levels(self, capsys):
        main(["levels", "012;103;234;056;"])
        out = capsys.readouterr().out
        assert "Depth: 3" in out
        assert "Level 1: [1, 2]" in out

    def test_skeleton(self, capsys):
        main(["skeleton", "034;104;201;"])
        out = capsys.readouterr().out
        assert "Collision edges: [(0, 1), (0, 2), (1, 2)]" in out
        assert "Skeleton edges: [(0, 1), (1, 2)]" in out
        assert "Adjacent: 2 collide, 0 commute" in out
        assert "Collisions: 3 (density 1.00)" in out

    def test_reduce(self, capsys):
        main(["reduce", "5a0;"])
        out = capsys.readouterr().out
        assert "width 11 -> 3" in out
        assert "Reduced: 120;" in out

    def test_reduce_fragment(self, capsys):
        main(["reduce", "012;b48;8b4;", "--start", "1"])
        assert "Reduced: 201;120;" in capsys.readouterr().out

    def test_draw(self, capsys):
        main(["draw", "201;"])
        out = capsys.readouterr().out
        assert "⊕" in out
        assert "●" in out

    def test_random_seeded(self, capsys):
        """Test a seed makes the generated circuit reproducible."""
        main(["random", "5", "6", "--seed", "3"])
        first = capsys.readouterr().out
        main(["random", "5", "6", "--seed", "3"])
        assert capsys.readouterr().out == first
        assert first.strip().count(";") == 6

    def test_random_identity(self, capsys):
        main(["random", "4", "6", "--identity", "--seed", "1"])
        gates = capsys.readouterr().out.strip()
        main(["simulate", gates, "-w", "4"])
        assert "Identity: ✓" in capsys.readouterr().out

    def test_hash(self, capsys):
        main(["hash", "201;"])
        out = capsys.readouterr().out
        assert "Content hash: " in out
        assert "Canonical hash: " in out

    def test_gate_file(self, tmp_path, capsys):
        """Test a .eca57 file is read with its declared width."""
        path = tmp_path / "circuit.eca57"
        write_gate_file(path, Circuit(5).eca57(2, 0, 1))
        main(["parse", str(path)])
        assert "Width: 5, gates: 1" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
