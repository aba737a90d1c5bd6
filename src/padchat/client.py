""" The :class:`Client` is the public face of the package: it composes one
    connection, its inbound router, the command dispatcher and the event
    surface, sharing a single table of pending commands between them.
"""

import concurrent.futures
import copy
import logging

from . import config
from .protocol import fields
from .protocol import operations
from .protocol.dispatch import Dispatcher, PendingTable
from .protocol.events import EventSurface
from .protocol.message import Outbound
from .protocol.router import Router
from .transport.connection import Connection
from .transport.websocket import WebSocketTransport

logger = logging.getLogger(__name__)


class Client:
    """ One client session with a padchat server. The *url* overrides the
        URL in *settings*, a :class:`padchat.config.Settings` instance that
        is resolved from the environment if not provided.

        A *transport* may be provided in place of the default
        :class:`padchat.transport.WebSocketTransport`, and an *executor* in
        place of the single-worker executor that delivers events to
        handlers. A client-owned executor is shut down by :func:`close`.

        Commands return a :class:`concurrent.futures.Future`::

            with padchat.Client('ws://127.0.0.1:7777') as client:
                client.invoke('init').result()
                client.invoke('login', 'qrcode').result()
    """

    def __init__(self, url=None, settings=None, transport=None, executor=None):

        if settings is None:
            settings = config.Settings(url=url)
        elif url is not None:
            settings = copy.copy(settings)
            settings.url = url

        self.settings = settings

        if executor is None:
            executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix='padchat-events')
            self.owns_executor = True
        else:
            self.owns_executor = False

        if transport is None:
            transport = WebSocketTransport(settings.url, open_timeout=settings.open_timeout)

        self.executor = executor
        self.events = EventSurface(executor)
        self.pending = PendingTable()
        self.router = Router(self.events, self.pending)
        self.connection = Connection(transport, self.events, self.router.route)
        self.dispatcher = Dispatcher(self.connection, self.events, self.pending,
                                     settings.send_timeout, settings.request_timeout)


    def __repr__(self):
        return 'Client(%r)' % (self.settings.url)


    def __enter__(self):
        self.connect()
        return self


    def __exit__(self, *exc_info):
        self.close()


    @property
    def is_open(self):
        return self.connection.is_open


    @property
    def task_id(self):
        """ The most recent session token assigned by the server, or None if
            no frame has carried one yet.
        """

        return self.router.task


    def connect(self):
        """ Open the connection. :class:`padchat.transport.TransportConnectionError`
            is raised if the server cannot be reached.
        """

        logger.info("connecting to %s", self.settings.url)
        self.connection.connect()


    def close(self, timeout=10.0):
        """ Close the connection and wait for the final events to reach their
            handlers. Commands still awaiting a reply are left to their
            deadlines.

            Called from within an event handler, the connection is closed
            but the remaining events are delivered only after the handler
            returns.
        """

        in_handler = self.events.delivering

        self.connection.close(timeout)

        if in_handler:
            if self.owns_executor:
                self.executor.shutdown(wait=False)
            return

        self.events.drain(timeout)

        if self.owns_executor:
            self.executor.shutdown(wait=True)


    def send(self, operation, payload=None, timeout=None, kind=fields.USER):
        """ Issue the raw command *operation* with the mapping *payload*; see
            :func:`padchat.protocol.dispatch.Dispatcher.send`.
        """

        return self.dispatcher.send(operation, payload, timeout, kind)


    def request(self, operation, payload=None, timeout=None, kind=fields.USER):
        """ Issue *operation* without the payload sanitizing and 'cmdRet'
            diagnostic applied by :func:`send`.
        """

        envelope = Outbound(kind, operation, payload)
        return self.dispatcher.request(envelope, timeout)


    def invoke(self, name, *args, timeout=None, **kwargs):
        """ Invoke the registered operation *name*. The remaining arguments
            are bound to the operation's parameters to make up the payload.
            :class:`padchat.errors.UnknownOperation` is raised for a name
            that is not registered.
        """

        operation = operations.lookup(name)
        payload = operation.payload(*args, **kwargs)
        return self.dispatcher.send(operation.command, payload, timeout, operation.kind)


    def call(self, name, *args, timeout=None, **kwargs):
        """ Same as :func:`invoke`, but block until the result is available
            and return it.
        """

        future = self.invoke(name, *args, timeout=timeout, **kwargs)
        return future.result()


    def subscribe(self, channel, handler, weak=False):
        return self.events.subscribe(channel, handler, weak)


    def on(self, channel, weak=False):
        """ Decorator form of :func:`subscribe`::

                @client.on('push')
                def received(item):
                    print(item['mType'], item.get('content'))
        """

        return self.events.on(channel, weak)


    def unsubscribe(self, channel, handler):
        return self.events.unsubscribe(channel, handler)


# end of class Client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
