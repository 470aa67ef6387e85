import socket

from tcpdemo.core.models.errors import TruncatedInput


class SocketStream:
    """
    ByteStream over a connected, blocking TCP socket.

    `write` uses sendall, so it either hands every byte to the kernel or
    raises OSError. `read_exact` loops on recv until the requested count is
    reached and raises TruncatedInput if the peer closes first.
    """

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock

    @classmethod
    def connect(cls, host: str, port: int, timeout: float | None = None) -> "SocketStream":
        return cls(socket.create_connection((host, port), timeout=timeout))

    def write(self, data: bytes) -> int:
        self._sock.sendall(data)
        return len(data)

    def read_exact(self, n: int) -> bytes:
        buf = bytearray()
        while len(buf) < n:
            chunk = self._sock.recv(n - len(buf))
            if not chunk:
                raise TruncatedInput(expected=n, received=len(buf))
            buf.extend(chunk)
        return bytes(buf)

    def close(self) -> None:
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # already disconnected
            pass
        finally:
            self._sock.close()
