"""Gate file I/O.

Two file formats:

.gate   a bare gate string, e.g. "012;47d;c74;"

.eca57  the gate string preceded by a header:
        # ECA57 Circuit
        # width: 32
        # gates: 150
        # hash: a1b2c3d4...
        # source: local_mixing/experiments/...
        012;47d;c74;...

Readers auto-detect the format from a leading '#'. Without a width header the
width is the detected width of the gate string.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from circuit.circuit import Circuit
from circuit.reducer import circuit_hash
from codec.gate_string import GateStringError, parse_gate_string, serialize_gates


def write_gate_file(path: str | Path, circuit: Circuit, source: Optional[str] = None) -> None:
    """Write a circuit as an .eca57 file with header."""
    gates = circuit.gates()
    lines = [
        "# ECA57 Circuit",
        f"# width: {circuit.width()}",
        f"# gates: {len(gates)}",
        f"# hash: {circuit_hash(gates)}",
    ]
    if source:
        lines.append(f"# source: {source}")
    lines.append(serialize_gates(gates))

    Path(path).write_text("\n".join(lines) + "\n")


def read_header(path: str | Path) -> Dict[str, str]:
    """Return the '# key: value' header lines of a gate file, keys lowercased."""
    metadata = {}
    for line in Path(path).read_text().splitlines():
        line = line.strip()
        if line.startswith("# ") and ":" in line:
            key, value = line[2:].split(":", 1)
            metadata[key.strip().lower()] = value.strip()
    return metadata


def read_gate_file(path: str | Path, strict: bool = False, width: Optional[int] = None) -> Circuit:
    """Read a .gate or .eca57 file into a circuit.

    Args:
        path: File to read.
        strict: Reject malformed gate strings.
        width: Overrides the header width when given.

    Raises:
        GateStringError: If no width can be determined (no header and no gates),
            the width is too small for the gates or, in strict mode, if the
            gate string is malformed.
    """
    gate_lines = []
    for line in Path(path).read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            gate_lines.append(line)

    parsed = parse_gate_string("".join(gate_lines), strict=strict)
    if width is None:
        header_width = read_header(path).get("width")
        width = int(header_width) if header_width else None
    try:
        width = parsed.resolve_width(width)
    except GateStringError as e:
        raise GateStringError(f"{path}: {e}") from e
    return Circuit(width, parsed.gates)
