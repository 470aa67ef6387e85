import logging
from typing import Callable

from tcpdemo.core.models.errors import ProtocolError
from tcpdemo.core.models.message import Failure, ReceiveMessage, RequestType, SendMessage
from tcpdemo.core.routing.router import RouteHandler, Router


class RoutedApplication:
    """
    Application implementation that dispatches incoming requests to the
    handlers registered in a `Router`.

    - For each request, the handler registered for its RequestType is
      awaited with the request and its Response is sent back.
    - If no handler exists, or a handler returns None, a Failure is sent.
    - An exception raised by a handler is logged and reported as a Failure;
      the connection stays usable since the request itself was well formed.
    - A ProtocolError raised by `receive()` means the peer sent something
      that cannot be decoded. It is reported as a Failure and the
      application returns, which closes the connection.

    The application terminates when `receive()` returns None.
    """

    def __init__(self) -> None:
        self.router = Router()
        self._logger = logging.getLogger("core.routing.app")

    async def __call__(self, receive: ReceiveMessage, send: SendMessage) -> None:
        while True:
            try:
                request = await receive()
            except ProtocolError as exc:
                self._logger.warning(f"Dropping connection after malformed request: {exc}")
                await send(Failure(str(exc)))
                break

            if request is None:
                break

            request_type = request.request_type
            handler = self.router.resolve(request_type)

            if handler is None:
                await send(Failure(f"Unsupported request type '{request_type.name}'"))
                continue

            try:
                result = await handler(request)
                if result is None:
                    result = Failure("Empty response")
                await send(result)
                self._logger.debug(f"Sent response: {result!r}")
            except Exception as exc:
                self._logger.error(f"Error in handler '{request_type.name}': {exc}", exc_info=exc)
                await send(Failure(str(exc)))

    def request(self, request_type: RequestType) -> Callable[[RouteHandler], RouteHandler]:
        return self.router.request(request_type)
