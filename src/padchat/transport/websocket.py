"""WebSocket transport built on the synchronous ``websockets`` client.

One :class:`WebSocketTransport` wraps one client connection. Frames are
sent as text; inbound frames are returned exactly as received, text or
bytes.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from websockets.exceptions import (
    ConnectionClosed,
    ConnectionClosedOK,
    InvalidHandshake,
    InvalidURI,
)
from websockets.protocol import State
from websockets.sync.client import ClientConnection, connect

from ..errors import TransportFailure
from .base import Frame, Transport, TransportClosed, TransportConnectionError

logger = logging.getLogger(__name__)


class WebSocketTransport(Transport):
    """Client side of one persistent WebSocket connection."""

    max_size = 16 * 1024 * 1024

    def __init__(
        self,
        url: str,
        open_timeout: Optional[float] = 10.0,
        close_timeout: Optional[float] = 10.0,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self.url = url
        self.open_timeout = open_timeout
        self.close_timeout = close_timeout
        self.headers = dict(headers or {})
        self.connection: Optional[ClientConnection] = None

    def __repr__(self) -> str:
        return f"WebSocketTransport({self.url!r})"

    def open(self) -> None:
        if self.connection is not None:
            raise TransportConnectionError(f"{self.url}: already open")

        logger.debug("connecting to %s", self.url)

        try:
            self.connection = connect(
                self.url,
                open_timeout=self.open_timeout,
                close_timeout=self.close_timeout,
                additional_headers=self.headers or None,
                max_size=self.max_size,
            )
        except (OSError, TimeoutError, InvalidHandshake, InvalidURI) as exc:
            raise TransportConnectionError(f"{self.url}: {exc}") from exc

        logger.debug("connected to %s", self.url)

    def close(self) -> None:
        connection = self.connection
        if connection is None:
            return

        try:
            connection.close()
        except OSError as exc:
            logger.debug("error while closing %s: %s", self.url, exc)

    def send(self, frame: str) -> None:
        connection = self.connection
        if connection is None:
            raise TransportFailure(f"{self.url}: not connected")

        try:
            connection.send(frame)
        except (ConnectionClosed, OSError) as exc:
            raise TransportFailure(f"{self.url}: send failed: {exc}") from exc

    def recv(self) -> Frame:
        connection = self.connection
        if connection is None:
            raise TransportClosed(f"{self.url}: not connected")

        try:
            return connection.recv()
        except ConnectionClosedOK as exc:
            raise TransportClosed(f"{self.url}: closed", clean=True, cause=exc) from exc
        except ConnectionClosed as exc:
            raise TransportClosed(f"{self.url}: connection lost: {exc}", clean=False, cause=exc) from exc

    @property
    def is_open(self) -> bool:
        connection = self.connection
        if connection is None:
            return False

        return connection.protocol.state is State.OPEN
