import pytest

from tcpdemo.core.codec.buffer import BufferReader, BufferWriter
from tcpdemo.core.codec.scalar import read_u16, read_u8, write_u16, write_u8
from tcpdemo.core.models.errors import TruncatedInput


@pytest.mark.ut
def test_u16_is_big_endian():
    sink = BufferWriter()
    assert write_u16(sink, 0x1234) == 2
    assert sink.getvalue() == b"\x12\x34"


@pytest.mark.ut
@pytest.mark.parametrize("value", [0, 1, 0x7F, 0xFF])
def test_u8_roundtrip(value):
    sink = BufferWriter()
    write_u8(sink, value)
    assert read_u8(BufferReader(sink.getvalue())) == value


@pytest.mark.ut
def test_read_u16_consumes_exactly_two_bytes():
    reader = BufferReader(b"\x00\x05\xff")
    assert read_u16(reader) == 5
    assert reader.remaining == 1


@pytest.mark.ut
@pytest.mark.parametrize("data", [b"", b"\x01"])
def test_read_u16_truncated(data):
    reader = BufferReader(data)
    with pytest.raises(TruncatedInput) as exc_info:
        read_u16(reader)
    assert exc_info.value.expected == 2
    assert exc_info.value.received == len(data)
    # a failed read leaves the position where it was
    assert reader.position == 0


@pytest.mark.ut
def test_read_u8_on_empty_source():
    with pytest.raises(TruncatedInput):
        read_u8(BufferReader(b""))


@pytest.mark.ut
@pytest.mark.parametrize("writer, value", [
    (write_u8, 256),
    (write_u8, -1),
    (write_u16, 65536),
    (write_u16, -1),
])
def test_write_out_of_range(writer, value):
    sink = BufferWriter()
    with pytest.raises(ValueError):
        writer(sink, value)
    assert len(sink) == 0


@pytest.mark.ut
def test_write_rejects_non_int():
    with pytest.raises(TypeError):
        write_u16(BufferWriter(), "1")
