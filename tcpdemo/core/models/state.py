from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tcpdemo.core.transport.protocol import Protocol


@dataclass
class ServerState:
    """
    Shared runtime state for a MessageServer.

    This object is mutated by:
    - Protocol: adds/removes active connections, registers the task
      running the application for its connection
    - MessageServer.shutdown(): waits for connections and tasks to complete

    Nothing in here is shared between the connections themselves: a
    malformed request on one connection never touches another.
    """
    connections: set[Protocol] = field(default_factory=set)
    """
    Set of active Protocol instances. Each TCP connection corresponds
    to one Protocol.
    """

    tasks: set[asyncio.Task[None]] = field(default_factory=set)
    """
    Set of per-connection application tasks. Each task removes itself
    via task.add_done_callback(tasks.discard).
    """
