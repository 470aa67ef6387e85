from tcpdemo.core.codec.buffer import BufferReader, BufferWriter
from tcpdemo.core.codec.fields import read_string, write_string
from tcpdemo.core.codec.scalar import read_u8, write_u8
from tcpdemo.core.models.errors import TrailingBytes, UnknownResponseType
from tcpdemo.core.models.message import RESPONSE_TAGS, RESPONSE_VARIANTS, Response
from tcpdemo.core.ports.codec import MessageCodec
from tcpdemo.core.ports.stream import ByteSink, ByteSource


class ResponseCodec(MessageCodec[Response]):
    """
    Encodes and decodes server-to-client messages.

    Wire layout:

        [type: u8][text: u16 length + value]

    where type is 1 for Success (text is the result) and 0 for Failure
    (text is the reason).
    """

    def serialize(self, message: Response, sink: ByteSink) -> int:
        return sink.write(self.encode(message))

    def deserialize(self, source: ByteSource) -> Response:
        tag = read_u8(source)
        variant = RESPONSE_VARIANTS.get(tag)
        if variant is None:
            raise UnknownResponseType(tag)
        return variant(read_string(source))

    def encode(self, message: Response) -> bytes:
        try:
            tag = RESPONSE_TAGS[type(message)]
        except KeyError:
            raise TypeError(f"Not a response: {message!r}") from None

        buffer = BufferWriter()
        write_u8(buffer, tag)
        write_string(buffer, message.text)
        return buffer.getvalue()

    def decode(self, data: bytes) -> Response:
        reader = BufferReader(data)
        message = self.deserialize(reader)
        if reader.remaining:
            raise TrailingBytes(reader.remaining)
        return message
