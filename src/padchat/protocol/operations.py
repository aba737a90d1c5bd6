""" The registry of named operations. Each :class:`Operation` describes one
    command the server understands: its registry name, the command name
    used on the wire, and the parameters that make up its payload. Looking
    up a name that is not registered raises :class:`UnknownOperation`.

    Operations only shape parameters; the result of every one of them is
    whatever the server returns, typically a mapping with 'success', 'msg'
    and 'data' fields.
"""

import base64
import inspect
import threading

from .. import helpers
from ..errors import UnknownOperation
from . import fields


REQUIRED = inspect.Parameter.empty

LOGIN_TYPES = frozenset(('token', 'request', 'qrcode', 'phone', 'user'))

# Fields each login type cannot do without.

LOGIN_FIELDS = dict()
LOGIN_FIELDS['token'] = ('token', 'wxData')
LOGIN_FIELDS['request'] = ('token', 'wxData')
LOGIN_FIELDS['phone'] = ('phone',)
LOGIN_FIELDS['user'] = ('username', 'password')


class Operation:
    """ Descriptor for one operation. The *params* are parameter names, or
        (name, default) pairs for optional parameters, in positional order.
        If *extra* is True, arbitrary additional keyword arguments are
        merged into the payload. The optional *shape* callable receives the
        bound payload dictionary and returns the payload to send. *command*
        is the name used on the wire, if it differs from *name*.
    """

    def __init__(self, name, *params, command=None, kind=fields.USER, extra=False, shape=None):

        self.name = name
        self.command = command or name
        self.kind = kind
        self.extra = extra
        self.shape = shape

        parameters = list()
        positional = inspect.Parameter.POSITIONAL_OR_KEYWORD

        for param in params:
            if isinstance(param, tuple):
                param_name, default = param
            else:
                param_name = param
                default = REQUIRED

            parameters.append(inspect.Parameter(param_name, positional, default=default))

        if extra == True:
            keyword = inspect.Parameter.VAR_KEYWORD
            parameters.append(inspect.Parameter('extra', keyword))

        self.signature = inspect.Signature(parameters)


    def __repr__(self):
        return 'Operation(%s%s)' % (self.name, self.signature)


    @property
    def parameters(self):
        names = list(self.signature.parameters)
        if self.extra == True:
            names.remove('extra')
        return tuple(names)


    def payload(self, *args, **kwargs):
        """ Bind the arguments to this operation's parameters and return the
            payload mapping. A TypeError is raised for missing or unexpected
            arguments.
        """

        try:
            bound = self.signature.bind(*args, **kwargs)
        except TypeError as e:
            raise TypeError('%s: %s' % (self.name, e)) from None

        bound.apply_defaults()

        payload = dict(bound.arguments)
        if self.extra == True:
            payload.update(payload.pop('extra', {}))

        if self.shape is not None:
            payload = self.shape(payload)

        return payload


# end of class Operation



def _file(payload):
    """ File contents may be provided as bytes; the wire carries base64.
    """

    content = payload.get('file')
    if isinstance(content, (bytes, bytearray, memoryview)):
        payload['file'] = base64.b64encode(bytes(content)).decode('ascii')

    return payload


def _app_message(payload):

    app = payload.pop('app')
    if not isinstance(app, dict):
        raise TypeError('sendAppMsg: app must be a mapping of appmsg fields')

    payload['content'] = helpers.structure_xml(**app)
    return payload


def _login(payload):

    login_type = payload.get('loginType')
    if login_type not in LOGIN_TYPES:
        raise ValueError('login: unknown login type ' + repr(login_type))

    for required in LOGIN_FIELDS.get(login_type, ()):
        if not payload.get(required):
            raise ValueError('login: %s login requires %s' % (login_type, required))

    return payload



_registry = dict()
_registry_lock = threading.Lock()


def register(operation):
    """ Add an :class:`Operation` to the registry. A ValueError is raised if
        the name is already taken.
    """

    with _registry_lock:
        if operation.name in _registry:
            raise ValueError('duplicate operation: ' + operation.name)
        _registry[operation.name] = operation

    return operation


def lookup(name):
    """ Return the :class:`Operation` registered as *name*.
    """

    try:
        return _registry[name]
    except (KeyError, TypeError):
        raise UnknownOperation(name) from None


def names():
    """ Return the sorted names of every registered operation.
    """

    with _registry_lock:
        return sorted(_registry)


for _operation in (

    # Instance and session.

    Operation('init'),
    Operation('close'),
    Operation('login', ('loginType', 'qrcode'), extra=True, shape=_login),
    Operation('getWxData'),
    Operation('getLoginToken'),
    Operation('syncContact'),
    Operation('logout'),

    # Messages.

    Operation('sendMsg', 'toUserName', 'content', ('atList', ())),
    Operation('massMsg', 'userList', 'content'),
    Operation('sendAppMsg', 'toUserName', 'app', shape=_app_message),
    Operation('shareCard', 'toUserName', 'content', 'userId'),
    Operation('sendImage', 'toUserName', 'file', shape=_file),
    Operation('sendVoice', 'toUserName', 'file', shape=_file),
    Operation('getMsgImage', 'rawMsgData'),
    Operation('getMsgVideo', 'rawMsgData'),
    Operation('getMsgVoice', 'rawMsgData'),

    # Group chats.

    Operation('createRoom', 'userList'),
    Operation('getRoomMembers', 'groupId'),
    Operation('addRoomMember', 'groupId', 'userId'),
    Operation('inviteRoomMember', 'groupId', 'userId'),
    Operation('deleteRoomMember', 'groupId', 'userId'),
    Operation('quitRoom', 'groupId'),
    Operation('setRoomAnnouncement', 'groupId', 'content'),
    Operation('setRoomName', 'groupId', 'content'),
    Operation('getRoomQrcode', 'groupId', ('style', 1)),

    # Contacts.

    Operation('getContact', 'userId'),
    Operation('searchContact', 'userId'),
    Operation('deleteContact', 'userId'),
    Operation('getContactQrcode', 'userId', ('style', 1), command='getUserQrcode'),
    Operation('acceptUser', 'stranger', 'ticket'),
    Operation('addContact', 'stranger', 'ticket', ('type', 3), ('content', '')),
    Operation('sayHello', 'stranger', 'ticket', ('content', '')),
    Operation('setRemark', 'userId', 'remark'),
    Operation('setHeadImg', 'file', shape=_file),

    # Moments.

    Operation('snsUpload', 'file', shape=_file),
    Operation('snsObjectOp', 'momentId', 'type', 'commentId', ('commentType', 2)),
    Operation('snsSendMoment', 'content'),
    Operation('snsUserPage', 'userId', ('momentId', '')),
    Operation('snsTimeline', ('momentId', '')),
    Operation('snsGetObject', 'momentId'),
    Operation('snsComment', 'userId', 'momentId', 'content'),
    Operation('snsLike', 'userId', 'momentId'),

    # Favourites and labels.

    Operation('syncFav', ('favKey', '')),
    Operation('addFav', 'content'),
    Operation('getFav', 'favId'),
    Operation('deleteFav', 'favId'),
    Operation('getLabelList'),
    Operation('addLabel', 'label'),
    Operation('deleteLabel', 'labelId'),
    Operation('setLabel', 'userId', 'labelId'),

    # Official accounts and web pages.

    Operation('getMpInfo', 'userId'),
    Operation('getSubscriptionInfo', 'ghName'),
    Operation('operateSubscription', 'ghName', 'menuId', 'menuKey'),
    Operation('getRequestToken', 'ghName', 'url'),
    Operation('requestUrl', 'url', 'xKey', 'xUin'),
    ):

    register(_operation)

del _operation


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
