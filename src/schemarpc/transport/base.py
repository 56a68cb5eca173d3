"""Connection port interface.

This is the (small) contract that transport implementations follow. The
correlator only ever talks to a transport through a :class:`Port`, so the
protocol layer remains transport-agnostic.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

from ..errors import TransportConnectionError


Reply = Dict[str, Any]
OnReply = Callable[[Reply], None]


class Port(ABC):
    """Minimal contract for sending commands over a connection.

    A port must eventually invoke *on_reply* exactly once with the reply
    whose 'id' equals the *id* it was given, or never invoke it at all.
    Demultiplexing inbound frames by id is the port's job.
    """

    def __init__(self):
        self._current = None
        self._current_lock = threading.Lock()

    @abstractmethod
    def send_command(self, connection: Any, payload: Dict[str, Any], id: int, on_reply: OnReply) -> None:
        """Transmit *payload* on *connection* and arrange for the reply to
        be handed to *on_reply*."""

    def get_current_connection(self) -> Any:
        """Return the ambient connection used when a command is invoked
        without one."""

        with self._current_lock:
            connection = self._current

        if connection is None:
            raise TransportConnectionError('no current connection is set')

        return connection

    def set_current_connection(self, connection: Any) -> None:
        with self._current_lock:
            self._current = connection
