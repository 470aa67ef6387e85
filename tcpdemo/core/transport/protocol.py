import asyncio
import logging

from tcpdemo.core.codec.request import RequestCodec
from tcpdemo.core.codec.response import ResponseCodec
from tcpdemo.core.codec.stream import StreamDecoder
from tcpdemo.core.models.config import ServerConfig
from tcpdemo.core.models.errors import BufferOverflow, ProtocolError
from tcpdemo.core.models.message import Request
from tcpdemo.core.models.state import ServerState
from tcpdemo.core.transport.addr import get_remote_addr
from tcpdemo.core.transport.flow import FlowControl
from tcpdemo.core.transport.stream import Streamer


class Protocol(asyncio.Protocol):
    """
    Implements request reassembly and the connection lifecycle for a
    single TCP client. It receives raw bytes from the transport, feeds them
    to a StreamDecoder, and forwards every complete Request to the Streamer
    associated with the connection.

    When a connection is established, Protocol creates a FlowControl
    instance, registers itself in the server's connection set, and starts
    the Streamer task responsible for running the application logic.

    Bytes may arrive in any chunking: a request split across several
    `data_received` calls is only forwarded once its last byte is in. A
    fatal decode error (unknown tag, invalid UTF-8, bad field length) is
    forwarded to the Streamer so the application can answer with a
    Failure, and reading stops: nothing after a malformed request can be
    framed reliably. If the buffer grows beyond the configured maximum
    size, the connection is closed immediately.

    When the connection is lost, Protocol removes itself from the server
    state, reports a request cut short by the disconnect as TruncatedInput,
    and signals termination to the Streamer by pushing None into its queue.
    """
    def __init__(
        self,
        config: ServerConfig,
        server_state: ServerState,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._transport: asyncio.Transport = None   # type: ignore[assignment]
        self._flow: FlowControl = None  # type: ignore[assignment]
        self._streamer: Streamer = None   # type: ignore[assignment]

        self._config = config
        self._app = config.app
        self._loop = loop or asyncio.get_event_loop()
        self._connections = server_state.connections
        self._tasks = server_state.tasks
        self._decoder: StreamDecoder[Request] = StreamDecoder(
            RequestCodec(), max_buffer_size=config.max_buffer_size
        )
        self._failed = False
        self._client: tuple[str, int] | None = None
        self._logger = logging.getLogger("core.transport.protocol")

    def connection_made(self, transport: asyncio.Transport) -> None:  # type: ignore[override]
        self._transport = transport
        self._flow = FlowControl()
        self._connections.add(self)
        self._streamer = Streamer(
            transport=self._transport,
            flow=self._flow,
            codec=ResponseCodec(),
            queue=asyncio.Queue(),
        )
        task = self._loop.create_task(self._streamer.run_app(self._app))
        task.add_done_callback(self._tasks.discard)
        self._tasks.add(task)

        self._client = get_remote_addr(transport)
        self._logger.debug(f"{self._who} - Connection made")

    def connection_lost(self, exc: Exception | None) -> None:
        self._connections.discard(self)
        self._logger.debug(f"{self._who} - Connection lost.")

        if self._flow is not None:
            self._flow.close()
        if exc is None:
            self._transport.close()

        if not self._failed:
            try:
                self._decoder.close()
            except ProtocolError as ex:
                self._logger.warning(f"{self._who} - Request cut short: {ex}")
                self._streamer.queue.put_nowait(ex)

        self._streamer.queue.put_nowait(None)

    def eof_received(self) -> None:
        pass

    def data_received(self, data: bytes) -> None:
        if self._failed:
            return

        try:
            self._decoder.feed(data)
        except BufferOverflow as ex:
            self._logger.warning(f"{self._who} - {ex}, closing connection")
            self._failed = True
            self._transport.close()
            return

        try:
            for request in self._decoder:
                self._streamer.queue.put_nowait(request)
        except ProtocolError as ex:
            self._logger.warning(f"{self._who} - Malformed request: {ex}")
            self._failed = True
            self._transport.pause_reading()
            self._streamer.queue.put_nowait(ex)

    def pause_writing(self) -> None:
        self._flow.pause_writing()

    def resume_writing(self) -> None:
        self._flow.resume_writing()

    def shutdown(self) -> None:
        self._transport.close()

    @property
    def _who(self) -> str:
        return "%s:%d" % self._client if self._client else ""
