import logging

from tcpdemo.core.models.message import Request, Response
from tcpdemo.core.transport.session import MessageSession, client_session
from tcpdemo.infra.socket_stream import SocketStream

DEFAULT_SERVER_ADDR = "127.0.0.1:4000"


def parse_addr(addr: str) -> tuple[str, int]:
    """Split a 'host:port' string; raises ValueError when malformed."""
    host, sep, port = addr.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"Invalid address '{addr}', expected host:port")

    value = int(port)
    if not 0 < value <= 65535:
        raise ValueError(f"Invalid port in '{addr}'")
    return host.strip("[]"), value


class TcpDemoClient:
    """
    Synchronous TCP client for a tcpdemo server.

    Each call to `request()` is one half-duplex turn: the request is sent,
    then the call blocks until the matching response has been read. The
    client is not thread safe; share it only behind a lock.

    Errors from the session (ConnectionClosed, TruncatedInput, ...) are
    raised to the caller unchanged. Nothing is retried: resending after a
    partial exchange could desynchronize the stream.
    """
    def __init__(self, host: str, port: int, timeout: float | None = None) -> None:
        self._host = host
        self._port = port
        self._timeout = timeout
        self._stream: SocketStream | None = None
        self._session: MessageSession[Request, Response] | None = None
        self._logger = logging.getLogger("tcpdemoctl.client")

    @classmethod
    def from_addr(cls, addr: str, timeout: float | None = None) -> "TcpDemoClient":
        host, port = parse_addr(addr)
        return cls(host, port, timeout=timeout)

    def connect(self) -> None:
        if self._stream is not None:
            return

        self._stream = SocketStream.connect(self._host, self._port, timeout=self._timeout)
        self._session = client_session(self._stream)
        self._logger.debug(f"Connected to {self._host}:{self._port}")

    def close(self) -> None:
        if self._stream:
            try:
                self._stream.close()
            finally:
                self._stream = None
                self._session = None

    def send(self, request: Request) -> None:
        if self._session is None:
            self.connect()
        self._session.send(request)

    def recv(self) -> Response:
        if self._session is None:
            self.connect()
        return self._session.receive()

    def request(self, request: Request) -> Response:
        self.send(request)
        return self.recv()

    def __enter__(self) -> "TcpDemoClient":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
