from typing import Generic, TypeVar

from tcpdemo.core.codec.buffer import BufferReader
from tcpdemo.core.models.errors import BufferOverflow, TruncatedInput
from tcpdemo.core.ports.codec import MessageCodec

T = TypeVar("T")


class StreamDecoder(Generic[T]):
    """
    Reassembles messages from a stream that delivers bytes in arbitrary
    chunks, as an asyncio transport does.

    Bytes are accumulated with `feed()`. `next()` attempts to decode one
    message from the start of the buffer: if the buffer holds a complete
    message it is consumed and returned; if the message is still
    incomplete (the codec ran out of bytes) nothing is consumed and None is
    returned so the caller can wait for more data. Any other ProtocolError
    raised by the codec is fatal and propagates unchanged.

    The codec itself stays unaware of partial reads: it always sees a
    source that either has the bytes or raises TruncatedInput.
    """

    def __init__(self, codec: MessageCodec[T], max_buffer_size: int) -> None:
        self._codec = codec
        self._max_buffer_size = max_buffer_size
        self._buffer = bytearray()

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet consumed by a decoded message."""
        return len(self._buffer)

    def feed(self, data: bytes) -> None:
        self._buffer.extend(data)
        if len(self._buffer) > self._max_buffer_size:
            size = len(self._buffer)
            self._buffer.clear()
            raise BufferOverflow(size=size, limit=self._max_buffer_size)

    def next(self) -> T | None:
        if not self._buffer:
            return None

        reader = BufferReader(bytes(self._buffer))
        try:
            message = self._codec.deserialize(reader)
        except TruncatedInput:
            return None

        del self._buffer[:reader.position]
        return message

    def __iter__(self):
        while (message := self.next()) is not None:
            yield message

    def close(self) -> None:
        """
        Signal end of stream. Raises TruncatedInput if part of a message is
        still buffered.
        """
        reader = BufferReader(bytes(self._buffer))
        self._buffer.clear()

        # complete messages left unread are dropped, a partial tail raises
        while reader.remaining:
            self._codec.deserialize(reader)
