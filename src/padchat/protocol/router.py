""" The inbound router: every frame received on a connection passes through
    :func:`Router.route`, which decodes it and either completes the pending
    command it answers, or emits it on the event surface.
"""

import logging

from .. import casing
from .. import json
from ..errors import DecodeError, ProtocolAnomaly, UnmonitoredReply
from . import fields
from .events import Channel
from .message import Inbound

logger = logging.getLogger(__name__)


_lifecycle_channels = dict()
for _name in fields.LIFECYCLE_EVENTS:
    _lifecycle_channels[_name] = Channel(_name)
del _name


def decode(frame):
    """ Decode one raw *frame*, text or bytes, into an :class:`Inbound`
        envelope. A :class:`DecodeError` is raised if the frame is not a
        JSON object.
    """

    if isinstance(frame, (bytes, bytearray, memoryview)):
        try:
            frame = bytes(frame).decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError('frame is not UTF-8: ' + str(e), frame) from e

    if not isinstance(frame, str):
        raise DecodeError('frame is not text: ' + type(frame).__name__, frame)

    try:
        raw = json.loads(frame)
    except json.DecodeError as e:
        raise DecodeError('frame is not valid JSON: ' + str(e), frame) from e

    if not isinstance(raw, dict):
        raise DecodeError('frame is not a JSON object', frame)

    return Inbound(raw)



class Router:
    """ Classify inbound frames. Replies are matched against the shared
        *pending* table (see :class:`padchat.protocol.dispatch.PendingTable`);
        everything else is emitted on the *events* surface. Routing never
        raises: a bad frame is reported on the 'error' channel and the
        next frame is handled normally.

        :ivar task: The most recent server-assigned task id seen on any frame.
    """

    def __init__(self, events, pending):

        self.events = events
        self.pending = pending
        self.task = None


    def route(self, frame):
        """ Handle one raw inbound *frame*.
        """

        try:
            inbound = decode(frame)
        except DecodeError as error:
            logger.warning("dropping frame: %s", error)
            self.events.emit(Channel.ERROR, error)
            return

        if inbound.task is not None:
            self.task = inbound.task

        self.events.emit(Channel.MESSAGE, inbound.normalized())

        if inbound.is_reply:
            self._reply(inbound)
            return

        if inbound.is_event:
            event = inbound.event

            try:
                channel = _lifecycle_channels[event]
            except (KeyError, TypeError):
                channel = None

            if channel is not None:
                self._lifecycle(channel, inbound)
            elif event == fields.PUSH:
                self._push(inbound)
            elif event == fields.WARN:
                self._warn(inbound)
            else:
                self._other(inbound)
            return

        self._other(inbound)


    def _reply(self, inbound):

        pending = self.pending.take(inbound.id)

        if pending is None:
            # Either the command already timed out, or nobody asked.
            logger.info("unmonitored reply: cmdId %s", inbound.id)
            unmonitored = UnmonitoredReply(inbound.id, inbound.payload)
            self.events.emit(Channel.UNMONITORED, unmonitored)
            return

        logger.debug("%s: reply to %s", pending.operation, inbound.id)
        pending._complete(casing.to_camel_case(inbound.payload))


    def _lifecycle(self, channel, inbound):

        payload = inbound.payload
        if payload is None:
            payload = dict()

        self.events.emit(channel, casing.to_camel_case(payload), inbound.message)


    def _push(self, inbound):

        try:
            items = inbound.items()
        except ProtocolAnomaly as anomaly:
            logger.warning("push: %s", anomaly)
            self.events.emit(Channel.WARN, anomaly, anomaly.recoverable)
            return

        for item in items:
            if item.noise:
                continue

            try:
                normalized = item.normalize()
            except ProtocolAnomaly as anomaly:
                logger.warning("push: %s", anomaly)
                self.events.emit(Channel.WARN, anomaly, anomaly.recoverable)
                continue

            self.events.emit(Channel.PUSH, normalized)


    def _warn(self, inbound):

        data = inbound.payload
        if not isinstance(data, dict):
            data = dict()

        # A true 'success' field marks the problem as minor.

        recoverable = inbound.success
        if recoverable is None:
            recoverable = data.get(fields.SUCCESS)
        recoverable = bool(recoverable)

        message = inbound.message
        if message is None:
            message = data.get(fields.MSG, '')

        anomaly = ProtocolAnomaly('server warning: ' + str(message), recoverable, data)
        self.events.emit(Channel.WARN, anomaly, recoverable)


    def _other(self, inbound):
        logger.debug("unclassified frame: %r", inbound)
        self.events.emit(Channel.OTHER, inbound.normalized())


# end of class Router


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
