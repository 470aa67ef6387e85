import asyncio
import logging

from tcpdemo.bootstrap.config.settings import TcpDemoConfig
from tcpdemo.core.models.config import ServerConfig
from tcpdemo.core.transport.application import Application
from tcpdemo.core.transport.server import MessageServer


class ControlPlane:
    """
    Builds the MessageServer from the loaded configuration and runs it
    until the stop event is set.
    """

    def __init__(self, config: TcpDemoConfig, app: Application) -> None:
        self._config = config
        self._app = app
        self._loop = self._create_event_loop()
        self._server_config = self._build_server_config()
        self._server = MessageServer(config=self._server_config, loop=self._loop)

        self._logger = logging.getLogger("tcpdemo.controlplane")

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    async def start(self, stop_event: asyncio.Event) -> None:
        await self._server.start()
        self._logger.info("Server started, waiting for stop signal")

        await stop_event.wait()

        self._logger.info("Stop signal received, shutting down")
        await self._server.shutdown()

    def _build_server_config(self) -> ServerConfig:
        server_config = self._config.server

        return ServerConfig(
            app=self._app,
            host=server_config.host,
            port=server_config.port,
            backlog=server_config.backlog,
            max_buffer_size=server_config.max_buffer_size,
            timeout_graceful_shutdown=server_config.timeout_graceful_shutdown,
        )

    @staticmethod
    def _create_event_loop() -> asyncio.AbstractEventLoop:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        return loop
