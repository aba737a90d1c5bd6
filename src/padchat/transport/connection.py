"""Connection manager: one persistent transport, one reader thread.

The :class:`Connection` owns a :class:`~padchat.transport.base.Transport`,
surfaces its lifecycle on the ``open``, ``close`` and ``transport-error``
channels, and hands every inbound frame, unmodified and in arrival order,
to a single frame callback.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..errors import TransportFailure
from ..protocol.events import Channel, EventSurface
from ..protocol.message import Outbound
from .base import Frame, Transport, TransportClosed

logger = logging.getLogger(__name__)


class Connection:
    """Drive one transport on behalf of the dispatcher and router.

    No retry or reconnection is attempted; a caller wanting either should
    subscribe to ``close`` and build a new connection.
    """

    def __init__(
        self,
        transport: Transport,
        events: EventSurface,
        on_frame: Callable[[Frame], None],
    ):
        self.transport = transport
        self.events = events
        self.on_frame = on_frame

        self.thread: Optional[threading.Thread] = None
        self.send_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._opened = False
        self._closed = False

    def __repr__(self) -> str:
        return f"Connection({self.transport!r})"

    @property
    def is_open(self) -> bool:
        return self._opened and not self._closed and self.transport.is_open

    def connect(self) -> None:
        """Open the transport, emit ``open``, and start the reader thread.

        A failure to connect emits ``transport-error`` and ``close`` before
        the :class:`~padchat.transport.base.TransportConnectionError` is
        raised to the caller.
        """

        with self._state_lock:
            if self._opened:
                raise RuntimeError("connection already opened")
            self._opened = True

        try:
            self.transport.open()
        except TransportFailure as exc:
            logger.warning("connect failed: %s", exc)
            self.events.emit(Channel.TRANSPORT_ERROR, exc)
            self._finish()
            raise

        self.events.emit(Channel.OPEN)

        self.thread = threading.Thread(
            target=self.run,
            name=f"padchat-reader-{id(self):x}",
            daemon=True,
        )
        self.thread.start()

    def run(self) -> None:
        """Reader loop; frames are processed strictly one at a time."""

        while True:
            try:
                frame = self.transport.recv()
            except TransportClosed as closed:
                if closed.clean:
                    logger.debug("transport closed: %s", closed)
                else:
                    logger.warning("transport lost: %s", closed)
                    self.events.emit(Channel.TRANSPORT_ERROR, closed)
                break
            except TransportFailure as exc:
                logger.warning("transport fault: %s", exc)
                self.events.emit(Channel.TRANSPORT_ERROR, exc)
                if self.transport.is_open:
                    continue
                break

            try:
                self.on_frame(frame)
            except Exception:
                logger.exception("frame handler raised")

        self._finish()

    def transmit(self, envelope: Outbound) -> None:
        """Send one envelope.

        Encoding errors propagate unchanged; any failure to put the frame
        on the wire raises :class:`~padchat.errors.TransportFailure`.
        """

        frame = envelope.encode()

        if not self.is_open:
            raise TransportFailure(f"{envelope.operation}: connection is not open")

        # The transport is shared by every caller thread; frames must not
        # interleave.
        with self.send_lock:
            self.transport.send(frame)

        logger.debug("sent %s", envelope)

    def close(self, timeout: Optional[float] = 10.0) -> None:
        """Close the transport and wait for the reader thread to finish.

        ``close`` is emitted by the reader thread once the transport has
        terminated; closing a connection that never opened does nothing.
        """

        if not self._opened:
            return

        try:
            self.transport.close()
        except TransportFailure as exc:
            logger.debug("close: %s", exc)

        thread = self.thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _finish(self) -> None:
        with self._state_lock:
            if self._closed:
                return
            self._closed = True

        self.events.emit(Channel.CLOSE)
