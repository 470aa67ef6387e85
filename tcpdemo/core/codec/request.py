import logging

from tcpdemo.core.codec.buffer import BufferReader, BufferWriter
from tcpdemo.core.codec.fields import read_string, read_u16_field, write_string, write_u16_field
from tcpdemo.core.codec.scalar import read_u8, write_u8
from tcpdemo.core.models.errors import TrailingBytes, UnknownRequestType
from tcpdemo.core.models.message import (
    REQUEST_TAGS,
    REQUEST_VARIANTS,
    Echo,
    Jumble,
    Request,
    RequestType,
)
from tcpdemo.core.ports.codec import MessageCodec
from tcpdemo.core.ports.stream import ByteSink, ByteSource


class RequestCodec(MessageCodec[Request]):
    """
    Encodes and decodes client-to-server messages.

    Wire layout:

        [type: u8][field: u16 length + value]...

    - Echo   (1): message string
    - Jumble (2): message string, then amount as a u16 field whose length
      prefix is always 2

    The tag is looked up from the variant's class, and the variant from the
    tag; a tag with no entry is rejected with UnknownRequestType rather
    than mapped to a default. Field errors (TruncatedInput,
    InvalidEncoding) propagate unchanged.

    `serialize` encodes the whole message in memory first, so a field that
    is too large fails before the sink is touched, and the sink receives
    the message in a single write.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger("core.codec.request")

    def serialize(self, message: Request, sink: ByteSink) -> int:
        return sink.write(self.encode(message))

    def deserialize(self, source: ByteSource) -> Request:
        tag = read_u8(source)
        variant = REQUEST_VARIANTS.get(tag)
        if variant is None:
            self._logger.debug(f"Rejecting request with tag {tag}")
            raise UnknownRequestType(tag)

        if variant is Echo:
            return Echo(message=read_string(source))

        message = read_string(source)
        amount = read_u16_field(source)
        return Jumble(message=message, amount=amount)

    def encode(self, message: Request) -> bytes:
        try:
            tag = REQUEST_TAGS[type(message)]
        except KeyError:
            raise TypeError(f"Not a request: {message!r}") from None

        buffer = BufferWriter()
        write_u8(buffer, tag)
        write_string(buffer, message.message)
        if tag == RequestType.JUMBLE:
            write_u16_field(buffer, message.amount)

        return buffer.getvalue()

    def decode(self, data: bytes) -> Request:
        reader = BufferReader(data)
        message = self.deserialize(reader)
        if reader.remaining:
            raise TrailingBytes(reader.remaining)
        return message
