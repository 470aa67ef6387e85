import logging
from typing import Generic, TypeVar

from tcpdemo.core.codec.request import RequestCodec
from tcpdemo.core.codec.response import ResponseCodec
from tcpdemo.core.models.errors import ConnectionClosed, ShortWrite, TruncatedInput
from tcpdemo.core.models.message import Request, Response
from tcpdemo.core.ports.codec import MessageCodec
from tcpdemo.core.ports.stream import ByteSink, ByteSource, ByteStream

S = TypeVar("S")
R = TypeVar("R")


class _CountingSource:
    """Wraps a ByteSource and counts the bytes handed out since `reset()`."""

    def __init__(self, source: ByteSource) -> None:
        self._source = source
        self.consumed = 0

    def reset(self) -> None:
        self.consumed = 0

    def read_exact(self, n: int) -> bytes:
        try:
            data = self._source.read_exact(n)
        except TruncatedInput as ex:
            self.consumed += ex.received
            raise
        self.consumed += len(data)
        return data


class MessageSession(Generic[S, R]):
    """
    Pairs a byte sink/source with one codec per direction and exposes a
    "send one message / receive one message" contract.

    `send()` encodes the message completely, then writes it to the sink in
    a single call. If the sink accepts fewer bytes than it was given the
    session raises ShortWrite: the peer now holds part of a message and the
    stream can no longer be trusted.

    `receive()` blocks until a full message has been read. If the source
    ends before the first byte of a message, the peer closed cleanly and
    ConnectionClosed is raised; if it ends after at least one byte,
    TruncatedInput is raised.

    A session is half-duplex and belongs to a single caller. It does not
    retry, reorder, or time out: all of that belongs to the caller or to
    the byte stream underneath.
    """

    def __init__(
        self,
        sink: ByteSink,
        source: ByteSource,
        outgoing: MessageCodec[S],
        incoming: MessageCodec[R],
    ) -> None:
        self._sink = sink
        self._source = _CountingSource(source)
        self._outgoing = outgoing
        self._incoming = incoming
        self._logger = logging.getLogger("core.transport.session")

    def send(self, message: S) -> int:
        frame = self._outgoing.encode(message)
        accepted = self._sink.write(frame)
        if accepted is None or accepted < len(frame):
            raise ShortWrite(expected=len(frame), accepted=accepted or 0)

        self._logger.debug(f"Sent {message!r} ({len(frame)} bytes)")
        return accepted

    def receive(self) -> R:
        self._source.reset()
        try:
            message = self._incoming.deserialize(self._source)
        except TruncatedInput:
            if self._source.consumed == 0:
                raise ConnectionClosed() from None
            raise

        self._logger.debug(f"Received {message!r} ({self._source.consumed} bytes)")
        return message


def client_session(stream: ByteStream) -> MessageSession[Request, Response]:
    """Session that sends requests and receives responses."""
    return MessageSession(stream, stream, RequestCodec(), ResponseCodec())


def server_session(stream: ByteStream) -> MessageSession[Response, Request]:
    """Session that receives requests and sends responses."""
    return MessageSession(stream, stream, ResponseCodec(), RequestCodec())
