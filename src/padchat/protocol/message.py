""" A class representation of padchat messages: the outbound command
    envelope, the decoded inbound envelope, and the individual items of a
    push batch.
"""

from .. import casing
from .. import json
from ..errors import ProtocolAnomaly
from . import fields


class Outbound:
    """ The :class:`Outbound` envelope is what goes on the wire for every
        command. The fields are in the order they are represented on the
        wire: the envelope *kind* ('sys' or 'user'), the *operation* name,
        the correlation *id*, and the *payload* mapping. The id is optional;
        an envelope without one does not expect a correlated reply.

        Once :func:`encode` has been called the envelope is frozen: the
        encoded text is cached and returned on every subsequent call.
    """

    valid_kinds = set((fields.SYS, fields.USER))

    def __init__(self, kind, operation, payload=None, id=None):

        if kind in self.valid_kinds:
            pass
        else:
            raise ValueError('invalid envelope kind: ' + repr(kind))

        if not isinstance(operation, str) or operation == '':
            raise ValueError('operation must be a non-empty string')

        if payload is None:
            payload = dict()
        elif isinstance(payload, dict):
            payload = dict(payload)
        else:
            raise TypeError('payload must be a mapping, not ' + type(payload).__name__)

        self.kind = kind
        self.operation = operation
        self.payload = payload
        self.id = id

        self.encoded = None


    def __repr__(self):
        return 'Outbound(%r, %r, id=%r)' % (self.kind, self.operation, self.id)


    def to_dict(self):
        envelope = dict()
        envelope[fields.TYPE] = self.kind
        envelope[fields.CMD] = self.operation

        if self.id is not None:
            envelope[fields.CMD_ID] = self.id

        envelope[fields.DATA] = self.payload
        return envelope


    def encode(self):
        """ Return the JSON text frame for this envelope.
        """

        if self.encoded is None:
            self.encoded = json.dumps_text(self.to_dict())

        return self.encoded


# end of class Outbound



class Inbound:
    """ A decoded inbound frame. Only *raw* is guaranteed to be populated;
        the remaining attributes are None when the corresponding field is
        absent from the frame.

        :ivar kind: The envelope 'type' field, for example 'cmdRet'.
        :ivar id: The correlation id, present on replies.
        :ivar task: The server-assigned session token.
        :ivar event: The event name, present on user events.
        :ivar payload: The 'data' field.
        :ivar message: The 'msg' field.
        :ivar success: The 'success' field.
    """

    def __init__(self, raw):

        if not isinstance(raw, dict):
            raise TypeError('inbound frame must decode to a mapping')

        self.raw = raw
        self.kind = raw.get(fields.TYPE)
        self.id = raw.get(fields.CMD_ID)
        self.task = raw.get(fields.TASK_ID)
        self.event = raw.get(fields.EVENT)
        self.payload = raw.get(fields.DATA)
        self.message = raw.get(fields.MSG)
        self.success = raw.get(fields.SUCCESS)


    def __repr__(self):
        return 'Inbound(%r, id=%r, event=%r)' % (self.kind, self.id, self.event)


    @property
    def is_reply(self):
        if self.kind != fields.CMD_RET:
            return False

        return isinstance(self.id, (str, int)) and self.id != ''


    @property
    def is_event(self):
        return self.kind == fields.USER_EVENT


    def items(self):
        """ Return the push batch carried by this envelope as a list of
            :class:`PushItem` instances. A :class:`ProtocolAnomaly` is raised
            if the batch is missing or empty.
        """

        payload = self.payload

        try:
            batch = payload[fields.LIST]
        except (KeyError, TypeError):
            batch = None

        if not isinstance(batch, list) or len(batch) == 0:
            raise ProtocolAnomaly('push batch is missing or empty', data=payload)

        return [PushItem(item) for item in batch]


    def normalized(self):
        """ Return a copy of the raw frame with its 'data' field, if any,
            converted to camelCase keys.
        """

        frame = dict(self.raw)
        if self.payload is not None:
            frame[fields.DATA] = casing.to_camel_case(self.payload)

        return frame


# end of class Inbound



def _alias(raw, names):
    for name in names:
        try:
            value = raw[name]
        except KeyError:
            continue
        if value is not None:
            return value

    return None



class PushItem:
    """ One entry of a push batch. The *primary* type code and the optional
        *sub_type* are read from either spelling of their field names.
        Items whose raw form is not a mapping are kept so that the caller
        can report them; :func:`effective_type` and :func:`normalize` raise
        :class:`ProtocolAnomaly` for them.
    """

    def __init__(self, raw):

        self.raw = raw

        if isinstance(raw, dict):
            self.primary = _alias(raw, fields.MSG_TYPE)
            self.sub_type = _alias(raw, fields.SUB_TYPE)
        else:
            self.primary = None
            self.sub_type = None


    def __repr__(self):
        return 'PushItem(primary=%r, sub_type=%r)' % (self.primary, self.sub_type)


    @property
    def malformed(self):
        return not isinstance(self.raw, dict)


    @property
    def noise(self):
        """ True for items that carry nothing worth dispatching: noise type
            codes, and items without a primary type at all.
        """

        if self.malformed:
            return False

        if self.primary is None:
            return True

        return isinstance(self.primary, int) and self.primary in fields.NOISE_TYPES


    def effective_type(self):
        """ Return the single type discriminant for this item: the sub-type
            when the primary type defers to it, otherwise the primary type.
        """

        if self.malformed:
            raise ProtocolAnomaly('push item is not a mapping', recoverable=True, data=self.raw)

        if self.primary == fields.DEFERRED_TYPE:
            if self.sub_type is None:
                raise ProtocolAnomaly('push item of type 5 has no sub-type', recoverable=True, data=self.raw)
            return self.sub_type

        return self.primary


    def normalize(self):
        """ Return a camelCase copy of the item with the effective type
            attached under 'mType'.
        """

        effective = self.effective_type()

        item = dict(self.raw)
        item[fields.EFFECTIVE_TYPE] = effective
        return casing.to_camel_case(item)


# end of class PushItem


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
