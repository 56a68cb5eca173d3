"""ZeroMQ transport: a DEALER socket per remote endpoint, carrying one
JSON-encoded request or reply per frame."""

from .request import Connection, ZmqPort, port, shutdown
