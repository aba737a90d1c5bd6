"""Exception taxonomy for the padchat client.

Nothing here is process-fatal. :class:`TransportFailure` and
:class:`Timeout` are raised to the caller that issued a command; the
remaining types are delivered as event arguments on the diagnostic
channels and are never raised by the inbound path.
"""

from __future__ import annotations

from typing import Any, Optional


class PadchatError(Exception):
    """Base class for all padchat errors."""


class TransportFailure(PadchatError):
    """A frame could not be delivered over the connection."""


class Timeout(PadchatError, TimeoutError):
    """No correlated reply arrived before the command deadline."""

    def __init__(self, operation: str, cmd_id: str, timeout: float):
        self.operation = operation
        self.cmd_id = cmd_id
        self.timeout = timeout
        super().__init__(
            f"{operation}: no reply to {cmd_id} in {timeout:.2f} sec"
        )


class UnmonitoredReply(PadchatError):
    """A reply arrived for a correlation id that is no longer tracked."""

    def __init__(self, cmd_id: str, payload: Any = None):
        self.cmd_id = cmd_id
        self.payload = payload
        super().__init__(f"reply not monitored: cmdId {cmd_id}")


class DecodeError(PadchatError):
    """An inbound frame was not a JSON object."""

    def __init__(self, message: str, frame: Any = None):
        self.frame = frame
        super().__init__(message)


class ProtocolAnomaly(PadchatError):
    """The server reported a warning, or sent a malformed push batch."""

    def __init__(self, message: str, recoverable: bool = False, data: Optional[Any] = None):
        self.message = message
        self.recoverable = recoverable
        self.data = data
        super().__init__(message)


class UnknownOperation(PadchatError, KeyError):
    """An operation name is not present in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown operation: {self.name!r}"


class UnknownChannel(PadchatError, ValueError):
    """A subscription named a channel outside the fixed channel set."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
