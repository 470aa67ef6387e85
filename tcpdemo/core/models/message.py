from dataclasses import dataclass
from enum import IntEnum
from typing import Awaitable, Callable, Union

from tcpdemo.core.codec.scalar import U16_MAX


class RequestType(IntEnum):
    """Tag byte written in front of every request."""
    ECHO = 1
    JUMBLE = 2


class ResponseType(IntEnum):
    """Tag byte written in front of every response."""
    FAILURE = 0
    SUCCESS = 1


def _check_text(name: str, value: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")


@dataclass(frozen=True)
class Echo:
    """Ask the server to send the message back unchanged."""
    message: str

    def __post_init__(self) -> None:
        _check_text("message", self.message)

    @property
    def request_type(self) -> RequestType:
        return REQUEST_TAGS[type(self)]


@dataclass(frozen=True)
class Jumble:
    """
    Ask the server to send the message back with its characters
    rotated by `amount` positions.
    """
    message: str
    amount: int

    def __post_init__(self) -> None:
        _check_text("message", self.message)
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"amount must be an int, got {type(self.amount).__name__}")
        if not 0 <= self.amount <= U16_MAX:
            raise ValueError(f"amount must be within 0..{U16_MAX}, got {self.amount}")

    @property
    def request_type(self) -> RequestType:
        return REQUEST_TAGS[type(self)]


@dataclass(frozen=True)
class Success:
    message: str
    """
    Result text produced by the server.
    """

    def __post_init__(self) -> None:
        _check_text("message", self.message)

    @property
    def ok(self) -> bool:
        return True

    @property
    def text(self) -> str:
        return self.message

    @property
    def response_type(self) -> ResponseType:
        return RESPONSE_TAGS[type(self)]


@dataclass(frozen=True)
class Failure:
    reason: str
    """
    Human readable description of what went wrong.
    """

    def __post_init__(self) -> None:
        _check_text("reason", self.reason)

    @property
    def ok(self) -> bool:
        return False

    @property
    def text(self) -> str:
        return self.reason

    @property
    def response_type(self) -> ResponseType:
        return RESPONSE_TAGS[type(self)]


Request = Union[Echo, Jumble]
Response = Union[Success, Failure]


REQUEST_TAGS: dict[type, RequestType] = {
    Echo: RequestType.ECHO,
    Jumble: RequestType.JUMBLE,
}
"""
Variant -> tag. The inverse table below must stay in sync with this one.
"""

REQUEST_VARIANTS: dict[int, type] = {
    tag: variant for variant, tag in REQUEST_TAGS.items()
}

RESPONSE_TAGS: dict[type, ResponseType] = {
    Success: ResponseType.SUCCESS,
    Failure: ResponseType.FAILURE,
}

RESPONSE_VARIANTS: dict[int, type] = {
    tag: variant for variant, tag in RESPONSE_TAGS.items()
}


ReceiveMessage = Callable[[], Awaitable[Union[Echo, Jumble, None]]]
"""
Coroutine provided to the application for receiving the next request.
It suspends until a request is available and returns None once the
connection is gone. A malformed request surfaces as a ProtocolError.
"""


SendMessage = Callable[[Union[Success, Failure]], Awaitable[None]]
"""
Coroutine provided to the application for sending a response to the client.
"""
