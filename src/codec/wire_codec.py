"""Wire index <-> display character mapping.

Wires are written as single characters from a fixed 83-symbol alphabet:

    0-9   -> wires 0-9
    a-z   -> wires 10-35
    A-Z   -> wires 36-61
    !@#$%^&*()-_=+[]{}<>?  -> wires 62-82

Both directions are derived from WIRE_ALPHABET so they cannot drift apart.

Two modes:
    lenient (default): unknown characters decode to wire 0 and unencodable
        wires encode as '0'. Partially typed input never raises.
    strict: both cases raise WireCodecError.
"""
from __future__ import annotations

import string

WIRE_ALPHABET = (
    string.digits + string.ascii_lowercase + string.ascii_uppercase + "!@#$%^&*()-_=+[]{}<>?"
)
MAX_WIRES = len(WIRE_ALPHABET)

_CHAR_TO_WIRE = {c: wire for wire, c in enumerate(WIRE_ALPHABET)}

assert MAX_WIRES == 83
assert len(_CHAR_TO_WIRE) == MAX_WIRES


class WireCodecError(ValueError):
    """Raised in strict mode for characters or wires outside the alphabet."""


def char_to_wire(c: str, strict: bool = False) -> int:
    """Decode a display character to its wire index.

    Args:
        c: Single character.
        strict: Raise on unknown characters instead of returning 0.

    Returns:
        Wire index in [0, 83).
    """
    wire = _CHAR_TO_WIRE.get(c)
    if wire is None:
        if strict:
            raise WireCodecError(f"Invalid wire character: {c!r}")
        return 0
    return wire


def wire_to_char(wire: int, strict: bool = False) -> str:
    """Encode a wire index as its display character.

    Args:
        wire: Wire index.
        strict: Raise on wires outside [0, 83) instead of returning '0'.
    """
    if 0 <= wire < MAX_WIRES:
        return WIRE_ALPHABET[wire]
    if strict:
        raise WireCodecError(f"Wire {wire} is outside the {MAX_WIRES}-symbol alphabet")
    return WIRE_ALPHABET[0]


def is_encodable(wire: int) -> bool:
    return 0 <= wire < MAX_WIRES


def round_trips(c: str) -> bool:
    """True iff c survives decode then encode unchanged."""
    return wire_to_char(char_to_wire(c)) == c
