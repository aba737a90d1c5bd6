import base64
import pytest

from padchat.errors import UnknownOperation
from padchat.protocol import operations
from padchat.protocol.operations import Operation


def test_lookup():
    operation = operations.lookup('sendMsg')
    assert operation.name == 'sendMsg'
    assert operation.command == 'sendMsg'
    assert operation.parameters == ('toUserName', 'content', 'atList')


def test_unknown_operation():
    with pytest.raises(UnknownOperation) as caught:
        operations.lookup('launchRocket')

    assert caught.value.name == 'launchRocket'
    assert 'launchRocket' in str(caught.value)

    # UnknownOperation doubles as a KeyError.

    with pytest.raises(KeyError):
        operations.lookup('launchRocket')


def test_names():
    names = operations.names()
    assert names == sorted(names)

    for expected in ('init', 'login', 'sendMsg', 'getRoomMembers', 'snsTimeline', 'requestUrl'):
        assert expected in names


def test_payload_binding():
    operation = operations.lookup('sendMsg')

    payload = operation.payload('wxid_a', 'hello')
    assert payload == {'toUserName': 'wxid_a', 'content': 'hello', 'atList': ()}

    payload = operation.payload(toUserName='wxid_a', content='hi', atList=['wxid_b'])
    assert payload['atList'] == ['wxid_b']

    with pytest.raises(TypeError) as caught:
        operation.payload('wxid_a')
    assert str(caught.value).startswith('sendMsg:')

    with pytest.raises(TypeError):
        operation.payload('wxid_a', 'hello', (), 'one too many')


def test_command_alias():
    operation = operations.lookup('getContactQrcode')
    assert operation.command == 'getUserQrcode'
    assert operation.payload('wxid_a') == {'userId': 'wxid_a', 'style': 1}


def test_login():
    operation = operations.lookup('login')

    assert operation.payload() == {'loginType': 'qrcode'}
    assert operation.payload('token', wxData='abc', token='def') == {'loginType': 'token', 'wxData': 'abc', 'token': 'def'}

    with pytest.raises(ValueError):
        operation.payload('password')


def test_login_required_fields():
    operation = operations.lookup('login')

    incomplete = (
        (('token',), {}),
        (('token',), {'token': 'def'}),
        (('request',), {'token': 'x'}),
        (('phone',), {}),
        (('user',), {'username': 'u'}),
        (('user',), {'username': 'u', 'password': ''}),
    )

    for args, kwargs in incomplete:
        with pytest.raises(ValueError) as caught:
            operation.payload(*args, **kwargs)
        assert 'requires' in str(caught.value)

    payload = operation.payload('phone', phone='13800000000', code='1234')
    assert payload['phone'] == '13800000000'

    payload = operation.payload('user', username='u', password='p')
    assert payload == {'loginType': 'user', 'username': 'u', 'password': 'p'}


def test_file_encoding():
    operation = operations.lookup('sendImage')

    payload = operation.payload('wxid_a', b'\x89PNG')
    assert payload['file'] == base64.b64encode(b'\x89PNG').decode('ascii')

    payload = operation.payload('wxid_a', 'already-base64')
    assert payload['file'] == 'already-base64'


def test_app_message():
    operation = operations.lookup('sendAppMsg')

    payload = operation.payload('wxid_a', {'title': 'T', 'url': 'http://x'})
    assert set(payload) == {'toUserName', 'content'}
    assert payload['content'].startswith('<appmsg')
    assert '<title>T</title>' in payload['content']

    with pytest.raises(TypeError):
        operation.payload('wxid_a', 'not a mapping')


def test_register_duplicate():
    with pytest.raises(ValueError):
        operations.register(Operation('sendMsg', 'toUserName'))


def test_sys_kind():
    operation = Operation('ping', ('payload', None), kind='sys')
    assert operation.kind == 'sys'
    assert operation.payload() == {'payload': None}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
