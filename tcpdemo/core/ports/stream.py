from typing import Protocol


class ByteSink(Protocol):
    """
    Anything bytes can be written to in order.

    `write` returns the number of bytes accepted. A sink that accepts
    fewer bytes than given is reported as a ShortWrite by the session,
    never treated as success.
    """

    def write(self, data: bytes) -> int:
        """Write `data` and return how many bytes were accepted."""


class ByteSource(Protocol):
    """
    Anything bytes can be read from in order.

    Implementations must block until `n` bytes are available and raise
    TruncatedInput (with the number of bytes actually received) if the
    stream ends first. They must never return fewer than `n` bytes.
    """

    def read_exact(self, n: int) -> bytes:
        """Return exactly `n` bytes from the stream."""


class ByteStream(ByteSink, ByteSource, Protocol):
    """A bidirectional stream such as a TCP connection."""
