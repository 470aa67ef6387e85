import functools
from typing import Any, Awaitable, Callable

from tcpdemo.core.models.message import RequestType, Response


RouteHandler = Callable[[Any], Awaitable[Response]]


class Router:
    """
    Maps request types to asynchronous handler functions.

    Each handler is a coroutine accepting the decoded request variant and
    returning a Response. Handlers are registered exactly once per request
    type; registering a second one raises a RuntimeError.

    The dispatch loop is implemented by `RoutedApplication`.
    """

    def __init__(self) -> None:
        self._routes: dict[RequestType, RouteHandler] = {}

    def request(self, request_type: RequestType) -> Callable[[RouteHandler], RouteHandler]:
        request_type = RequestType(request_type)

        def decorator(func: RouteHandler) -> RouteHandler:
            if request_type in self._routes:
                raise RuntimeError(f"Handler already registered for '{request_type.name}'")

            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                return await func(*args, **kwargs)

            self._routes[request_type] = wrapper
            return wrapper

        return decorator

    def resolve(self, request_type: RequestType) -> RouteHandler | None:
        return self._routes.get(request_type)

    def routes(self) -> dict[RequestType, RouteHandler]:
        return dict(self._routes)
