"""Wire codec and compact gate string format."""
from codec.wire_codec import WIRE_ALPHABET, MAX_WIRES, WireCodecError, char_to_wire, wire_to_char
from codec.gate_string import GateStringError, ParsedGates, parse_gate_string, serialize_gates
