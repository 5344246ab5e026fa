"""Compact gate string format.

A circuit is written as 3-character gate tokens, each terminated by ';':

    "012;47d;c74;"  ->  ECA57(0; 1,2), ECA57(4; 7,13), ECA57(12; 7,4)

Each token is target, ctrl1, ctrl2 encoded with the wire codec. This is the
exchange format with the external synthesis/obfuscation engine.

Parsing is lenient by default: empty tokens are dropped, tokens shorter than
three characters are skipped (and not counted when numbering steps), extra
characters after the third are ignored and unknown characters decode to
wire 0. Pass strict=True to raise GateStringError instead.
"""
from __future__ import annotations

from typing import Iterable, List, NamedTuple, Optional

from codec.wire_codec import WireCodecError, char_to_wire, wire_to_char
from gates.gate import Gate, GateKind

TOKEN_LENGTH = 3
TERMINATOR = ";"


class GateStringError(ValueError):
    """Raised in strict mode for malformed gate strings."""


class ParsedGates(NamedTuple):
    gates: List[Gate]
    detected_width: int

    def resolve_width(self, width: Optional[int] = None) -> int:
        """Width for a circuit over these gates.

        Args:
            width: Requested width; None takes the detected width.

        Raises:
            GateStringError: If no width is known or the requested one is
                narrower than the wires the gates use.
        """
        if width is None:
            width = self.detected_width
        if width <= 0:
            raise GateStringError("Empty circuit: a width must be given")
        if width < self.detected_width:
            raise GateStringError(
                f"Width {width} is too small, gates use wires up to {self.detected_width - 1}"
            )
        return width


def parse_gate_string(text: str, strict: bool = False) -> ParsedGates:
    """Parse a gate string into ECA57 gates.

    Args:
        text: Semicolon-delimited gate tokens.
        strict: Reject malformed tokens and unknown characters.

    Returns:
        ParsedGates with gates numbered 0..n-1 by step and
        detected_width = 1 + highest wire used (0 when there are no gates).
    """
    gates: List[Gate] = []
    for token in text.split(TERMINATOR):
        if not token.strip():
            continue
        if strict and len(token) != TOKEN_LENGTH:
            raise GateStringError(f"Invalid gate token: {token!r}")
        if len(token) < TOKEN_LENGTH:
            continue
        try:
            target, ctrl1, ctrl2 = (char_to_wire(c, strict) for c in token[:TOKEN_LENGTH])
        except WireCodecError as e:
            raise GateStringError(f"Invalid gate token {token!r}: {e}") from e
        gates.append(Gate.eca57(target, ctrl1, ctrl2, step=len(gates)))

    detected_width = max((g.max_wire() for g in gates), default=-1) + 1
    return ParsedGates(gates, detected_width)


def serialize_gates(gates: Iterable[Gate], strict: bool = False) -> str:
    """Serialize gates (ordered by step) to a gate string.

    Every gate, including the last, is followed by ';'. Gates with fewer than
    two controls are written with wire 0 in the missing control slots unless
    strict is set, in which case only ECA57 gates on wires below 83 are
    accepted.
    """
    tokens = []
    for gate in sorted(gates, key=lambda g: g.step):
        if strict and gate.kind is not GateKind.ECA57:
            raise GateStringError(f"Only ECA57 gates can be serialized, got {gate}")
        controls = list(gate.controls) + [0] * (2 - len(gate.controls))
        try:
            token = "".join(wire_to_char(w, strict) for w in (gate.target, controls[0], controls[1]))
        except WireCodecError as e:
            raise GateStringError(f"Cannot serialize {gate}: {e}") from e
        tokens.append(token + TERMINATOR)
    return "".join(tokens)
