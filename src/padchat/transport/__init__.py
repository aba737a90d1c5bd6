"""Transport layer implementations."""

from .base import (
    Frame,
    Transport,
    TransportClosed,
    TransportConnectionError,
)
from .connection import Connection
from .websocket import WebSocketTransport
