"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`padchat.protocol` so the protocol remains
transport-agnostic: a transport moves whole text frames and nothing else.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Union

from ..errors import TransportFailure


Frame = Union[str, bytes]


class TransportConnectionError(TransportFailure):
    """The transport could not establish a connection."""


class TransportClosed(TransportFailure):
    """The connection has terminated; no further frames will arrive.

    *clean* is True for an orderly shutdown (either side closed normally),
    False when the connection was lost.
    """

    def __init__(self, message: str, clean: bool = True, cause: Optional[BaseException] = None):
        self.clean = clean
        self.cause = cause
        super().__init__(message)


class Transport(ABC):
    """Minimal contract for a frame-oriented transport."""

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection.

        Raises :class:`TransportConnectionError` on failure.
        """

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection. Safe to call repeatedly."""

    @abstractmethod
    def send(self, frame: str) -> None:
        """Send one text frame; raises :class:`TransportFailure` on failure."""

    @abstractmethod
    def recv(self) -> Frame:
        """Block until the next frame arrives.

        Raises :class:`TransportClosed` once the connection terminates.
        """

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
