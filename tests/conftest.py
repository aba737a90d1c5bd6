import pytest
import queue
import threading

import padchat
from padchat.errors import TransportFailure
from padchat.transport.base import Transport, TransportClosed, TransportConnectionError


class FakeTransport(Transport):
    """ In-memory stand-in for a WebSocket connection. Frames queued with
        :func:`feed` are returned by :func:`recv`, in order; frames sent by
        the client are recorded in :attr:`sent`. If a *responder* is set it
        is invoked with every decoded outbound envelope, and may feed a
        reply in response.
    """

    def __init__(self, fail_open=False, responder=None):
        self.fail_open = fail_open
        self.responder = responder
        self.inbound = queue.Queue()
        self.sent = list()
        self.sent_condition = threading.Condition()
        self.opened = False
        self.closed = False

    def open(self):
        if self.fail_open:
            raise TransportConnectionError('fake: connection refused')
        self.opened = True

    def close(self, clean=True):
        if self.opened and not self.closed:
            self.closed = True
            self.inbound.put(TransportClosed('fake: closed', clean=clean))

    def send(self, frame):
        if not self.is_open:
            raise TransportFailure('fake: not connected')

        with self.sent_condition:
            self.sent.append(frame)
            self.sent_condition.notify_all()

        if self.responder is not None:
            self.responder(self, padchat.json.loads(frame))

    def recv(self):
        frame = self.inbound.get()
        if isinstance(frame, BaseException):
            raise frame
        return frame

    @property
    def is_open(self):
        return self.opened and not self.closed

    def feed(self, frame):
        if isinstance(frame, dict):
            frame = padchat.json.dumps_text(frame)
        self.inbound.put(frame)

    def envelopes(self):
        with self.sent_condition:
            return [padchat.json.loads(frame) for frame in self.sent]

    def wait_for_sent(self, count, timeout=2):
        with self.sent_condition:
            done = self.sent_condition.wait_for(lambda: len(self.sent) >= count, timeout)
        assert done, 'expected %d frames to be sent, saw %d' % (count, len(self.sent))
        return self.envelopes()


def reply(envelope, data, **extra):
    """ Build the reply frame for an outbound *envelope*.
    """

    frame = dict(type='cmdRet', cmdId=envelope['cmdId'], taskId='task-1', data=data)
    frame.update(extra)
    return frame


class Recorder:
    """ Handler that remembers every invocation.
    """

    def __init__(self):
        self.calls = list()
        self.event = threading.Event()

    def __call__(self, *args):
        self.calls.append(args)
        self.event.set()

    def wait(self, timeout=2):
        assert self.event.wait(timeout), 'handler was never invoked'


@pytest.fixture
def settings(tmp_path):
    return padchat.config.Settings(path=str(tmp_path / 'settings.json'), environ={})


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport, settings):

    client = padchat.Client(settings=settings, transport=transport)
    client.connect()

    yield client

    client.close(timeout=2)


@pytest.fixture
def recorder():
    return Recorder()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
