"""ZeroMQ command transport.

Each :class:`Connection` owns a DEALER socket connected to a single remote
endpoint, and a background thread that does all of the socket I/O. Requests
are handed to that thread through a queue; replies are demultiplexed by
their 'id' field and passed to the callback registered for that id.
"""

from __future__ import annotations

import atexit
import itertools
import logging
import queue
import threading
from typing import Any, Dict, Optional, Tuple

import zmq

from ... import config
from ... import json
from ...errors import TransportConnectionError
from ..base import OnReply, Port


log = logging.getLogger(__name__)

zmq_context = zmq.Context()
_signal_ticker = itertools.count()


class Connection:
    """Issue requests via a ZeroMQ DEALER socket and receive replies.
    Maintains a persistent connection to a single server; the *address*
    and *port* number must be specified.
    """

    poll_interval = 1000

    def __init__(self, address: str, port: int, context: Optional[zmq.Context] = None):

        if context is None:
            context = zmq_context

        self.port = int(port)
        self.address = address
        self.shutdown = False

        server = f"tcp://{address}:{self.port}"
        identity = f"schemarpc.Connection.{id(self)}".encode()

        self.socket = context.socket(zmq.DEALER)
        self.socket.setsockopt(zmq.LINGER, 0)
        self.socket.identity = identity
        self.socket.connect(server)

        # ZeroMQ sockets are not thread-safe. Only the background thread
        # touches self.socket; callers wake it up via the PAIR sockets,
        # and the lock serializes callers using the sending half.

        self._outbox: queue.SimpleQueue = queue.SimpleQueue()

        internal = f"inproc://schemarpc.Connection:signal:{next(_signal_ticker)}"
        self._signal_rx = context.socket(zmq.PAIR)
        self._signal_rx.bind(internal)
        self._signal_tx = context.socket(zmq.PAIR)
        self._signal_tx.connect(internal)
        self._signal_lock = threading.Lock()

        self._callbacks: Dict[Any, OnReply] = {}
        self._callbacks_lock = threading.Lock()

        self._thread = threading.Thread(target=self.run, daemon=True)
        self._thread.start()

    def __repr__(self):
        return f"<Connection tcp://{self.address}:{self.port}>"

    def _handle_incoming(self, frame: bytes) -> None:

        try:
            reply = json.loads(frame)
        except json.DecodeError:
            log.warning("%r: discarding undecodable frame", self)
            return

        try:
            reply_id = reply.get("id")
        except AttributeError:
            log.warning("%r: discarding non-object frame", self)
            return

        with self._callbacks_lock:
            callback = self._callbacks.pop(reply_id, None)

        if callback is None:
            # Events, and replies nobody is waiting for.
            log.debug("%r: no pending command for id %r", self, reply_id)
            return

        try:
            callback(reply)
        except Exception:
            log.exception("%r: reply callback for id %r failed", self, reply_id)

    def _handle_outgoing(self) -> None:
        # Clear one signal and send one request.
        self._signal_rx.recv(flags=zmq.NOBLOCK)
        frame = self._outbox.get(block=False)
        self.socket.send(frame)

    def run(self) -> None:

        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)
        poller.register(self._signal_rx, zmq.POLLIN)

        while self.shutdown == False:
            for active, _flag in poller.poll(self.poll_interval):
                if active == self._signal_rx:
                    self._handle_outgoing()
                elif active == self.socket:
                    parts = self.socket.recv_multipart()
                    self._handle_incoming(parts[-1])

        self.socket.close()
        self._signal_rx.close()

    def send(self, payload: Dict[str, Any], id: Any, on_reply: OnReply) -> None:
        """Queue the request *payload* for transmission. The *on_reply*
        callback is registered under *id* before anything is sent, and is
        invoked from the background thread when the reply arrives.
        """

        if self.shutdown:
            raise TransportConnectionError(f"{self!r} is closed")

        frame = json.dumps(payload)

        with self._callbacks_lock:
            self._callbacks[id] = on_reply

        self._outbox.put(frame)

        with self._signal_lock:
            self._signal_tx.send(b"")

    def close(self) -> None:
        """Stop the background thread and close the sockets. Callers still
        waiting on a reply from this connection will not be released."""

        if self.shutdown:
            return

        self.shutdown = True
        self._thread.join()

        with self._signal_lock:
            self._signal_tx.close()

        with self._callbacks_lock:
            abandoned = len(self._callbacks)
            self._callbacks.clear()

        if abandoned:
            log.warning("%r closed with %d commands outstanding", self, abandoned)


class ZmqPort(Port):
    """The ConnectionPort implementation for :class:`Connection` instances.
    Connections are cached by endpoint; the ambient connection defaults to
    the endpoint returned by :func:`schemarpc.config.endpoint`.
    """

    def __init__(self, context: Optional[zmq.Context] = None):
        Port.__init__(self)
        self.context = context
        self._connections: Dict[Tuple[str, int], Connection] = {}
        self._connections_lock = threading.Lock()

    def connection(self, address: str, port: int) -> Connection:
        """Return a cached :class:`Connection` to *address* and *port*,
        establishing one if necessary."""

        key = (address, int(port))

        with self._connections_lock:
            try:
                instance = self._connections[key]
            except KeyError:
                instance = Connection(address, port, self.context)
                self._connections[key] = instance

        return instance

    def get_current_connection(self) -> Connection:
        try:
            return Port.get_current_connection(self)
        except TransportConnectionError:
            pass

        connection = self.connection(*config.endpoint())
        self.set_current_connection(connection)
        return connection

    def send_command(self, connection: Connection, payload: Dict[str, Any], id: Any, on_reply: OnReply) -> None:
        connection.send(payload, id, on_reply)

    def close(self) -> None:
        with self._connections_lock:
            connections = list(self._connections.values())
            self._connections.clear()

        for connection in connections:
            connection.close()

        self.set_current_connection(None)


_port: Optional[ZmqPort] = None
_port_lock = threading.Lock()


def port() -> ZmqPort:
    """Factory function for the shared :class:`ZmqPort` instance. Use of
    this method is encouraged to streamline re-use of established
    connections."""

    global _port

    with _port_lock:
        if _port is None:
            _port = ZmqPort()
        return _port


def shutdown() -> None:
    with _port_lock:
        instance = _port

    if instance is not None:
        instance.close()


atexit.register(shutdown)
