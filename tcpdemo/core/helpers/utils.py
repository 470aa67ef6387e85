import asyncio
import contextlib
import logging
import signal
import threading
from typing import Generator

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)

_logger = logging.getLogger("core.helpers.utils")


@contextlib.contextmanager
def stop_on_signals(loop: asyncio.AbstractEventLoop) -> Generator[asyncio.Event, None, None]:
    """
    Yield an event that is set on `loop` when the process receives SIGINT
    or SIGTERM, so MessageServer can drain its connections instead of being
    interrupted mid-response.

    The signal handler only schedules the work with `call_soon_threadsafe`,
    which also wakes a loop blocked in select. The previous handlers are
    restored on exit. Outside the main thread nothing is installed and the
    event is only set by the caller.
    """
    stop_event = asyncio.Event()

    if threading.current_thread() is not threading.main_thread():
        yield stop_event
        return

    def on_signal(sig: signal.Signals) -> None:
        if stop_event.is_set():
            _logger.warning(f"Received {sig.name} again, shutdown already in progress")
            return
        _logger.info(f"Received {sig.name}, stopping server")
        stop_event.set()

    def handle(signum: int, frame) -> None:
        loop.call_soon_threadsafe(on_signal, signal.Signals(signum))

    previous = {sig: signal.signal(sig, handle) for sig in STOP_SIGNALS}

    try:
        yield stop_event
    finally:
        for sig, handler in previous.items():
            if handler is not None:
                signal.signal(sig, handler)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )
    # asyncio reports every reset connection at INFO/DEBUG
    if logging.getLevelName(level) != logging.DEBUG:
        logging.getLogger("asyncio").setLevel(logging.WARNING)
