"""Transport layer implementations."""

from .base import Port
from ..errors import TransportError, TransportConnectionError
