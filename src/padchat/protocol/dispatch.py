""" Classes and methods implemented here implement the command/response
    correlation aspects of the client: every command carries a unique
    correlation id, and the reply bearing the same id resolves the future
    handed back to the original caller.
"""

import concurrent.futures
import logging
import threading
import time
import uuid

from .. import helpers
from ..errors import Timeout, TransportFailure
from . import fields
from .events import Channel
from .message import Outbound

logger = logging.getLogger(__name__)


def new_id():
    """ Return a new correlation id. Version 1 UUIDs are time-ordered and
        carry a per-process clock sequence, which makes collisions within
        the lifetime of a process negligible.
    """

    return str(uuid.uuid1())



class PendingCommand:
    """ Client-side bookkeeping for one command awaiting its reply. The
        *future* is the single-use resolver; the *timer* is the competing
        deadline that evicts the command if no reply arrives in time.
    """

    def __init__(self, id, operation, timeout, future):

        self.id = id
        self.operation = operation
        self.timeout = timeout
        self.deadline = time.monotonic() + timeout
        self.future = future
        self.timer = None


    def __repr__(self):
        return 'PendingCommand(%r, %r)' % (self.operation, self.id)


    def _complete(self, result):
        """ Resolve the future with the reply payload. Only the holder of a
            :class:`PendingCommand` obtained via :func:`PendingTable.take`
            may call this.
        """

        if self.timer is not None:
            self.timer.cancel()

        self.future.set_result(result)


    def _fail(self, exception):

        if self.timer is not None:
            self.timer.cancel()

        self.future.set_exception(exception)


# end of class PendingCommand



class PendingTable:
    """ The table of commands awaiting a reply, keyed by correlation id. One
        instance is shared by the :class:`Dispatcher`, which is the only
        writer that inserts, and the inbound router. Removal only happens
        through :func:`take`, which is atomic: of a timeout racing a late
        reply, exactly one obtains the entry and the other sees None.
    """

    def __init__(self):

        self._pending = dict()
        self._lock = threading.Lock()


    def __contains__(self, id):
        with self._lock:
            return id in self._pending


    def __len__(self):
        with self._lock:
            return len(self._pending)


    def insert(self, pending):
        """ Add a :class:`PendingCommand`. A ValueError is raised if its id
            is already present.
        """

        with self._lock:
            if pending.id in self._pending:
                raise ValueError('duplicate correlation id: ' + repr(pending.id))
            self._pending[pending.id] = pending


    def take(self, id):
        """ Remove and return the :class:`PendingCommand` for *id*, or None
            if there is no such entry.
        """

        with self._lock:
            return self._pending.pop(id, None)


    def ids(self):
        with self._lock:
            return tuple(self._pending)


# end of class PendingTable



class Dispatcher:
    """ Issue commands over a connection and correlate their replies. The
        *connection* is anything with a ``transmit(envelope)`` method; the
        *events* surface receives the 'cmdRet' diagnostic for every
        completed :func:`send`. The *pending* table is shared with the
        inbound router that completes the commands.

        Two default timeouts apply: *send_timeout* for :func:`send`, and the
        shorter *request_timeout* for the lower-level :func:`request`.
    """

    send_timeout = 30.0
    request_timeout = 10.0

    def __init__(self, connection, events, pending, send_timeout=None, request_timeout=None):

        self.connection = connection
        self.events = events
        self.pending = pending

        if send_timeout is not None:
            self.send_timeout = float(send_timeout)

        if request_timeout is not None:
            self.request_timeout = float(request_timeout)


    def request(self, envelope, timeout=None):
        """ Transmit the :class:`Outbound` *envelope* and return a
            :class:`concurrent.futures.Future` that resolves with the payload
            of the matching reply. An envelope without an id is assigned one.

            The future fails with :class:`Timeout` if no reply arrives within
            *timeout* seconds, or with :class:`TransportFailure` if the
            envelope could not be transmitted. Either way the table entry is
            gone by the time the future completes. The future is already
            running when returned, so it cannot be cancelled; abandoning it
            leaves the command to be reclaimed by its reply or its deadline.
        """

        if timeout is None:
            timeout = self.request_timeout

        timeout = float(timeout)
        if timeout <= 0:
            raise ValueError('timeout must be positive')

        if envelope.id is None:
            if envelope.encoded is not None:
                raise ValueError('envelope was encoded without a correlation id')
            envelope.id = new_id()

        # Encode up front so a payload that cannot be serialized is rejected
        # before anything is registered.

        envelope.encode()

        future = concurrent.futures.Future()
        future.set_running_or_notify_cancel()

        pending = PendingCommand(envelope.id, envelope.operation, timeout, future)
        self.pending.insert(pending)

        timer = threading.Timer(timeout, self._expire, args=(pending.id,))
        timer.daemon = True
        pending.timer = timer
        timer.start()

        try:
            self.connection.transmit(envelope)
        except TransportFailure as exc:
            taken = self.pending.take(pending.id)
            if taken is not None:
                logger.warning("%s: transmit failed: %s", envelope.operation, exc)
                taken._fail(exc)

        return future


    def send(self, operation, payload=None, timeout=None, kind=fields.USER):
        """ Issue the command *operation* with the mapping *payload* and
            return a :class:`concurrent.futures.Future` for its result. This
            is the entry point used by every operation wrapper.

            A 'rawMsgData' field in the payload, carrying a previously
            received push item, is sanitized before transmission. When the
            reply arrives, the 'cmdRet' diagnostic event is emitted with the
            operation name and the result.
        """

        if timeout is None:
            timeout = self.send_timeout

        if payload is not None and not isinstance(payload, dict):
            raise TypeError('payload must be a mapping, not ' + type(payload).__name__)

        if payload and fields.RAW_MSG_DATA in payload:
            payload = dict(payload)
            raw = payload[fields.RAW_MSG_DATA]
            payload[fields.RAW_MSG_DATA] = helpers.clear_raw_message(raw)

        envelope = Outbound(kind, operation, payload)
        future = self.request(envelope, timeout)

        def diagnostic(future):
            if future.exception() is None:
                self.events.emit(Channel.REPLY, operation, future.result())

        future.add_done_callback(diagnostic)
        return future


    def _expire(self, id):
        """ Deadline timer callback. Evicts and fails the command if it is
            still pending; otherwise the reply won the race.
        """

        pending = self.pending.take(id)

        if pending is None:
            return

        logger.info("%s: no reply to %s in %.2f sec", pending.operation, id, pending.timeout)
        pending._fail(Timeout(pending.operation, id, pending.timeout))


# end of class Dispatcher


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
