from typing import Protocol

from tcpdemo.core.models.message import ReceiveMessage, SendMessage


class Application(Protocol):
    """
    Per-connection handler executed by the Streamer.

    An Application is an asynchronous callable that receives two functions:
    `receive`, which waits for and returns the next decoded Request (or None
    once the peer is gone), and `send`, which transmits a Response. It runs
    a strict turn-taking loop: one request in, one response out.

    `receive` raises a ProtocolError when the peer sent a malformed request.
    The stream is unusable after that, so the Application should answer with
    a Failure and return. When it returns, the connection is closed.
    """
    async def __call__(self, receive: ReceiveMessage, send: SendMessage) -> None:
        ...
