import io
import pytest

import padchat
from padchat import cli

from conftest import FakeTransport, reply


def test_parse_value():
    assert cli.parse_value('42') == 42
    assert cli.parse_value('true') == True
    assert cli.parse_value('["a", "b"]') == ['a', 'b']
    assert cli.parse_value('wxid_a') == 'wxid_a'


def test_parse_parameters():
    args, kwargs = cli.parse_parameters(['wxid_a', 'content=hello', 'style=2'])
    assert args == ['wxid_a']
    assert kwargs == {'content': 'hello', 'style': 2}

    args, kwargs = cli.parse_parameters(['a=b=c'])
    assert kwargs == {'a': 'b=c'}

    with pytest.raises(ValueError):
        cli.parse_parameters(['content=hello', 'wxid_a'])


def test_list():
    stdout = io.StringIO()
    assert cli.main(['--list'], stdout=stdout) == 0

    lines = stdout.getvalue().splitlines()
    assert 'sendMsg toUserName content atList' in lines
    assert len(lines) == len(padchat.protocol.operations.names())


def test_operation_required():
    with pytest.raises(SystemExit):
        cli.arguments([])


@pytest.fixture
def fake(monkeypatch, tmp_path):
    """ Route the command line client through a fake transport.
    """

    monkeypatch.setattr(padchat.config.directory, 'found', str(tmp_path))

    transport = FakeTransport()
    transport.responder = lambda transport, envelope: transport.feed(reply(envelope, {'success': True, 'sent': envelope}))

    def factory(settings):
        return padchat.Client(settings=settings, transport=transport)

    monkeypatch.setattr(cli, 'Client', factory)
    return transport


def test_run_operation(fake):
    stdout = io.StringIO()
    stderr = io.StringIO()

    status = cli.main(['--timeout', '5', 'getContact', 'userId=wxid_a'], stdout=stdout, stderr=stderr)

    assert status == 0
    result = padchat.json.loads(stdout.getvalue())
    assert result['success'] == True
    assert result['sent']['cmd'] == 'getContact'
    assert result['sent']['data'] == {'userId': 'wxid_a'}
    assert fake.closed


def test_bad_operation(fake):
    stdout = io.StringIO()
    stderr = io.StringIO()

    status = cli.main(['launchRocket'], stdout=stdout, stderr=stderr)

    assert status == 1
    assert 'launchRocket' in stderr.getvalue()
    assert stdout.getvalue() == ''


def test_missing_parameter(fake):
    stderr = io.StringIO()

    status = cli.main(['sendMsg', 'wxid_a'], stdout=io.StringIO(), stderr=stderr)

    assert status == 1
    assert 'sendMsg' in stderr.getvalue()


def test_connect_failure(monkeypatch, tmp_path):

    monkeypatch.setattr(padchat.config.directory, 'found', str(tmp_path))

    def factory(settings):
        return padchat.Client(settings=settings, transport=FakeTransport(fail_open=True))

    monkeypatch.setattr(cli, 'Client', factory)

    stderr = io.StringIO()
    status = cli.main(['init'], stdout=io.StringIO(), stderr=stderr)

    assert status == 1
    assert 'connection refused' in stderr.getvalue()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
