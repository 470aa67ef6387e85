from typing import Protocol, TypeVar

from tcpdemo.core.ports.stream import ByteSink, ByteSource

T = TypeVar("T")


class MessageCodec(Protocol[T]):
    """
    Defines the interface for turning one kind of message into bytes and
    back.

    Implementations must be:
    - deterministic
    - stateless (a codec never keeps a reference to a message)
    - safe against malformed input (errors are ProtocolError subclasses)
    """

    def serialize(self, message: T, sink: ByteSink) -> int:
        """Write `message` to `sink` and return the number of bytes written."""

    def deserialize(self, source: ByteSource) -> T:
        """Read exactly one message from `source`."""

    def encode(self, message: T) -> bytes:
        """Return the complete wire form of `message`."""

    def decode(self, data: bytes) -> T:
        """Decode exactly one message occupying all of `data`."""
