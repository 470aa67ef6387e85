from dataclasses import dataclass

from tcpdemo.core.transport.application import Application


@dataclass
class ServerConfig:
    """
    Static configuration for a tcpdemo MessageServer.

    This structure defines all parameters required to start a server:
    networking, resource limits, and graceful shutdown behavior.
    """
    app: Application
    """
    The request handling coroutine with the signature:
        async def app(receive, send)
    It receives decoded requests and sends responses.
    """

    host: str
    """
    IP address or hostname on which the server listens.
    """

    port: int
    """
    TCP port to bind. If set to 0, the OS selects an available port.
    """

    backlog: int = 128
    """
    Maximum number of pending TCP connections waiting for accept().
    """

    max_buffer_size: int = 1024 * 1024  # 1MB
    """
    Maximum number of undecoded bytes buffered per connection.
    The largest valid request is 65542 bytes, so anything beyond this
    limit is a misbehaving peer.
    """

    timeout_graceful_shutdown: float = 5.0
    """
    Maximum time (in seconds) allowed for graceful shutdown:
    - active connections must close
    - per-connection tasks registered in ServerState.tasks must complete
    After this timeout, remaining tasks are cancelled.
    """
