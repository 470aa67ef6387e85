import asyncio


class FlowControl:
    """
    Write gate shared by a Protocol and its Streamer.

    The transport calls `pause_writing` / `resume_writing` as its send
    buffer crosses the high and low water marks. `Streamer.send` awaits
    `drain()` before writing a Response, so a client that stops reading
    holds up its own connection task instead of growing the server's
    buffer.

    `close()` is called when the connection is lost. It opens the gate for
    good and marks the flow closed, so a Response waiting in `drain()` is
    released and then dropped rather than written to a dead transport.
    """

    def __init__(self) -> None:
        self._open = asyncio.Event()
        self._open.set()
        self.closed = False

    @property
    def write_paused(self) -> bool:
        return not self._open.is_set()

    async def drain(self) -> None:
        await self._open.wait()

    def pause_writing(self) -> None:
        if not self.closed:
            self._open.clear()

    def resume_writing(self) -> None:
        self._open.set()

    def close(self) -> None:
        self.closed = True
        self._open.set()
