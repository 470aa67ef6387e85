import asyncio
import logging

from tcpdemo.core.codec.response import ResponseCodec
from tcpdemo.core.models.errors import ProtocolError
from tcpdemo.core.models.message import Request, Response
from tcpdemo.core.transport.application import Application
from tcpdemo.core.transport.flow import FlowControl


class Streamer:
    """
    Manages the request/response flow for a single TCP connection.

    It receives decoded Request objects (or the ProtocolError that stopped
    decoding) from the Protocol through an internal queue and exposes them
    to the Application via the asynchronous `receive()` method. When the
    Application sends a Response, the Streamer encodes it and writes the
    whole frame to the transport in one call.

    Streamer enforces backpressure using FlowControl. If the transport signals
    that writing is paused, `send()` waits until writing is possible again.

    The `run_app()` method executes the Application for the lifetime of the
    connection. When the Application returns or raises, the Streamer closes
    the transport.
    """
    def __init__(
        self,
        transport: asyncio.Transport,
        flow: FlowControl,
        codec: ResponseCodec,
        queue: asyncio.Queue[Request | ProtocolError | None],
    ) -> None:
        self.queue = queue
        self._transport = transport
        self._flow = flow
        self._codec = codec
        self._logger = logging.getLogger("core.transport.stream")

    async def send(self, response: Response) -> None:
        if self._flow.write_paused:
            await self._flow.drain()

        if self._flow.closed or self._transport.is_closing():
            self._logger.debug(f"Connection gone, dropping {response!r}")
            return

        try:
            frame = self._codec.encode(response)
            self._transport.write(frame)
        except Exception as exc:
            self._logger.error(f"Failed to send response: {exc}")
            self._transport.close()

    async def receive(self) -> Request | None:
        item = await self.queue.get()
        if isinstance(item, ProtocolError):
            raise item
        return item

    async def run_app(self, app: Application) -> None:
        try:
            await app(self.receive, self.send)
        except Exception as exc:
            self._logger.error("Exception in Application", exc_info=exc)
        finally:
            self._transport.close()
