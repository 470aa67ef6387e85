import os
from pathlib import Path

from tcpdemo.bootstrap.config.settings import TcpDemoConfig
from tcpdemo.core.models.message import Echo, Failure, Jumble, Success


class FakeTcpDemoConfig(TcpDemoConfig):
    """Reads its YAML file from TEST_TCPDEMOCONFIG instead of the CLI."""

    @classmethod
    def configfile(cls):
        raw = os.environ.get("TEST_TCPDEMOCONFIG")
        return Path(raw) if raw else None


async def echo_app(receive, send):
    """Answers every request with its own message."""
    while (request := await receive()) is not None:
        await send(Success(request.message))


SAMPLE_REQUESTS = [
    Echo(""),
    Echo("Hello"),
    Echo("héllo wörld ✓"),
    Echo("x" * 65535),
    Jumble("abcdef", 2),
    Jumble("", 0),
    Jumble("Hello", 65535),
    Jumble("日本語", 1),
]

SAMPLE_RESPONSES = [
    Success(""),
    Success("Hello"),
    Success("cdefab"),
    Failure("Unknown request type: 9"),
    Failure("é" * 100),
]
