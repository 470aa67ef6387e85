"""
Length-prefixed field codec shared by every message type.

Each field is written as a u16 byte length followed by exactly that many
bytes. Strings are UTF-8; the fixed-width u16 field keeps the same prefix
(always 2) so that every field on the wire has the same shape.
"""
from tcpdemo.core.codec.scalar import U16_MAX, read_u16, write_u16
from tcpdemo.core.models.errors import FieldTooLarge, InvalidEncoding, InvalidFieldLength
from tcpdemo.core.ports.stream import ByteSink, ByteSource

MAX_FIELD_SIZE = U16_MAX
U16_FIELD_SIZE = 2


def encode_text(value: str) -> bytes:
    """
    Return the UTF-8 bytes of `value`, raising FieldTooLarge when they do
    not fit in a length prefix. Nothing is written anywhere.
    """
    if not isinstance(value, str):
        raise TypeError(f"String field must be a str, got {type(value).__name__}")

    try:
        data = value.encode("utf-8")
    except UnicodeEncodeError as ex:
        # lone surrogates cannot be represented on the wire
        raise InvalidEncoding(f"String field is not encodable as UTF-8: {ex}") from ex

    if len(data) > MAX_FIELD_SIZE:
        raise FieldTooLarge(size=len(data), limit=MAX_FIELD_SIZE)
    return data


def write_string(sink: ByteSink, value: str) -> int:
    data = encode_text(value)
    written = write_u16(sink, len(data))
    written += sink.write(data)
    return written


def read_string(source: ByteSource) -> str:
    length = read_u16(source)
    data = source.read_exact(length)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as ex:
        raise InvalidEncoding(f"String field is not valid UTF-8: {ex}") from ex


def write_u16_field(sink: ByteSink, value: int) -> int:
    written = write_u16(sink, U16_FIELD_SIZE)
    written += write_u16(sink, value)
    return written


def read_u16_field(source: ByteSource) -> int:
    length = read_u16(source)
    if length != U16_FIELD_SIZE:
        raise InvalidFieldLength(expected=U16_FIELD_SIZE, declared=length)
    return read_u16(source)
