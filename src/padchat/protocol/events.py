""" The event surface: a fixed set of named channels, and the fan-out of
    emitted events to any/all handlers subscribed to a channel.
"""

import concurrent.futures
import enum
import logging
import threading

from .. import weakref
from ..errors import UnknownChannel

logger = logging.getLogger(__name__)


class Channel(enum.Enum):
    """ Every channel a handler can subscribe to. The value is the name a
        subscriber may use in place of the member; for account lifecycle
        events it is also the event name on the wire.
    """

    # Transport lifecycle.
    OPEN = 'open'
    CLOSE = 'close'
    TRANSPORT_ERROR = 'transport-error'

    # Every decoded frame, before classification, with 'data' in camelCase.
    MESSAGE = 'msg'

    # Account lifecycle events, handler(payload, message).
    QRCODE = 'qrcode'
    SCAN = 'scan'
    LOGIN = 'login'
    LOADED = 'loaded'
    LOGOUT = 'logout'
    OVER = 'over'
    SNS = 'sns'

    # One normalized push item per event, handler(item).
    PUSH = 'push'

    # Server warnings and malformed batches, handler(anomaly, recoverable).
    WARN = 'warn'

    # Frames that could not be decoded, handler(error).
    ERROR = 'error'

    # Diagnostics: completed commands, handler(operation, result), and
    # replies nobody was waiting for, handler(unmonitored).
    REPLY = 'cmdRet'
    UNMONITORED = 'unmonitored'

    # Frames the router does not recognize, handler(frame), 'data' in camelCase.
    OTHER = 'other'


    @classmethod
    def lookup(cls, channel):
        """ Return the :class:`Channel` for *channel*, which may be a member
            or its string value. :class:`UnknownChannel` is raised for
            anything else.
        """

        if isinstance(channel, cls):
            return channel

        try:
            return cls(channel)
        except ValueError:
            raise UnknownChannel('unknown channel: ' + repr(channel)) from None


# end of class Channel



class EventSurface:
    """ Maintain the handlers subscribed to each :class:`Channel` and invoke
        them when an event is emitted. If an *executor* is provided, every
        emitted event is handed to it for delivery; a single-worker executor
        preserves emission order while keeping handlers off the thread that
        emitted the event. Without an executor, handlers are invoked inline.

        An exception raised by a handler is logged and does not prevent the
        remaining handlers from being invoked.
    """

    def __init__(self, executor=None):

        self.executor = executor
        self.callbacks = dict()
        self.lock = threading.Lock()
        self.local = threading.local()


    def subscribe(self, channel, handler, weak=False):
        """ Register *handler* to be invoked for every event emitted on
            *channel*. By default the subscription keeps the handler alive;
            set *weak* to True to hold only a weak reference, in which case
            the subscription quietly lapses once the handler is garbage
            collected. The handler is returned, so this method can be used
            as a decorator via :func:`on`.
        """

        if callable(handler):
            pass
        else:
            raise TypeError('handler must be callable')

        channel = Channel.lookup(channel)
        reference = weakref.ref(handler, weak)

        with self.lock:
            try:
                references = self.callbacks[channel]
            except KeyError:
                references = list()
                self.callbacks[channel] = references

            references.append(reference)

        return handler


    def on(self, channel, weak=False):
        """ Decorator form of :func:`subscribe`.
        """

        def decorator(handler):
            return self.subscribe(channel, handler, weak)

        return decorator


    def unsubscribe(self, channel, handler):
        """ Remove *handler* from *channel*. Returns True if a subscription
            was removed.
        """

        channel = Channel.lookup(channel)

        with self.lock:
            try:
                references = self.callbacks[channel]
            except KeyError:
                return False

            for reference in references:
                if weakref.matches(reference, handler):
                    references.remove(reference)
                    break
            else:
                return False

            if len(references) == 0:
                del self.callbacks[channel]

        return True


    def listeners(self, channel):
        """ Return the list of live handlers subscribed to *channel*.
        """

        channel = Channel.lookup(channel)

        with self.lock:
            references = tuple(self.callbacks.get(channel, ()))

        handlers = list()
        for reference in references:
            handler = reference()
            if handler is not None:
                handlers.append(handler)

        return handlers


    def emit(self, channel, *args):
        """ Emit an event on *channel*; the *args* are passed to every
            subscribed handler.
        """

        channel = Channel.lookup(channel)
        executor = self.executor

        if executor is not None:
            try:
                executor.submit(self.propagate, channel, args)
            except RuntimeError:
                # The executor has been shut down; deliver inline so the
                # final events of a connection are not lost.
                pass
            else:
                return

        self.propagate(channel, args)


    def propagate(self, channel, args):
        """ Invoke any/all handlers subscribed to *channel*.
        """

        with self.lock:
            references = tuple(self.callbacks.get(channel, ()))

        if len(references) == 0:
            logger.debug("no handlers for %s", channel.value)
            return

        invalid = list()

        for reference in references:
            handler = reference()

            if handler is None:
                invalid.append(reference)
                continue

            self.local.depth = getattr(self.local, 'depth', 0) + 1

            try:
                handler(*args)
            except Exception:
                logger.exception("handler for %s raised", channel.value)
                continue
            finally:
                self.local.depth -= 1

        if invalid:
            with self.lock:
                references = self.callbacks.get(channel, [])
                for reference in invalid:
                    try:
                        references.remove(reference)
                    except ValueError:
                        pass


    @property
    def delivering(self):
        """ True when called from within a handler invoked by this surface.
        """

        return getattr(self.local, 'depth', 0) > 0


    def drain(self, timeout=None):
        """ Block until every event emitted so far has been delivered. This
            is a no-op without an executor. Returns True on success, False
            if *timeout* seconds elapsed first. Called from within a handler,
            which itself occupies the executor, it returns False at once.
        """

        executor = self.executor

        if executor is None:
            return True

        if self.delivering:
            return False

        try:
            marker = executor.submit(lambda: None)
        except RuntimeError:
            return True

        try:
            marker.result(timeout)
        except concurrent.futures.TimeoutError:
            return False

        return True


# end of class EventSurface


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
