import struct

from tcpdemo.core.ports.stream import ByteSink, ByteSource

# "!" = network order (big-endian) for every multi-byte integer on the wire.
_U8 = struct.Struct("!B")
_U16 = struct.Struct("!H")

U8_MAX = 0xFF
U16_MAX = 0xFFFF


def _check_range(value: int, limit: int, kind: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind} value must be an int, got {type(value).__name__}")
    if not 0 <= value <= limit:
        raise ValueError(f"{kind} value out of range 0..{limit}: {value}")


def write_u8(sink: ByteSink, value: int) -> int:
    _check_range(value, U8_MAX, "u8")
    return sink.write(_U8.pack(value))


def write_u16(sink: ByteSink, value: int) -> int:
    _check_range(value, U16_MAX, "u16")
    return sink.write(_U16.pack(value))


def read_u8(source: ByteSource) -> int:
    return _U8.unpack(source.read_exact(_U8.size))[0]


def read_u16(source: ByteSource) -> int:
    return _U16.unpack(source.read_exact(_U16.size))[0]
