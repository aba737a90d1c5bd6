import os
import pytest

import padchat
from padchat.config import Settings


def write(path, contents):
    with open(path, 'w') as handle:
        handle.write(contents)


def test_defaults(tmp_path):

    settings = Settings(path=str(tmp_path / 'missing.json'), environ={})

    assert settings.url == 'ws://127.0.0.1:7777'
    assert settings.send_timeout == 30.0
    assert settings.request_timeout == 10.0
    assert settings.open_timeout == 10.0


def test_precedence(tmp_path):

    path = str(tmp_path / 'settings.json')
    write(path, '{"url": "ws://file:1", "send_timeout": 5, "open_timeout": 3}')

    environ = {'PADCHAT_URL': 'ws://environment:2', 'PADCHAT_SEND_TIMEOUT': '7'}

    settings = Settings(path=path, environ=environ)
    assert settings.url == 'ws://environment:2'
    assert settings.send_timeout == 7.0
    assert settings.open_timeout == 3.0
    assert settings.request_timeout == 10.0

    settings = Settings(path=path, environ=environ, url='ws://keyword:3')
    assert settings.url == 'ws://keyword:3'


def test_invalid_values(tmp_path):

    path = str(tmp_path / 'settings.json')

    with pytest.raises(ValueError):
        Settings(path=path, environ={'PADCHAT_SEND_TIMEOUT': 'soon'})

    with pytest.raises(ValueError):
        Settings(path=path, environ={}, request_timeout=0)

    with pytest.raises(TypeError):
        Settings(path=path, environ={}, colour='blue')


def test_bad_file(tmp_path):

    path = str(tmp_path / 'settings.json')

    write(path, '[1, 2, 3]')
    with pytest.raises(ValueError):
        Settings(path=path, environ={})

    write(path, '{broken')
    with pytest.raises(ValueError):
        Settings(path=path, environ={})


def test_to_dict(tmp_path):
    settings = Settings(path=str(tmp_path / 'settings.json'), environ={})
    assert settings.to_dict() == padchat.config.defaults


def test_directory(tmp_path, monkeypatch):

    monkeypatch.setattr(padchat.config.directory, 'found', None)
    monkeypatch.setenv('PADCHAT_HOME', str(tmp_path))

    assert padchat.config.directory() == str(tmp_path)
    assert padchat.home() == str(tmp_path)

    with pytest.raises(ValueError):
        padchat.config.directory('relative/path')

    home = tmp_path / 'elsewhere'
    assert padchat.config.directory(str(home)) == str(home)
    assert os.environ['PADCHAT_HOME'] == str(tmp_path)
    assert padchat.config.directory() == str(home)


def test_directory_default(tmp_path, monkeypatch):

    monkeypatch.setattr(padchat.config.directory, 'found', None)
    monkeypatch.delenv('PADCHAT_HOME', raising=False)
    monkeypatch.setenv('HOME', str(tmp_path))

    expected = os.path.join(str(tmp_path), '.padchat')
    assert padchat.config.directory() == expected

    os.makedirs(expected)
    write(os.path.join(expected, 'settings.json'), '{"url": "ws://home:4"}')

    settings = Settings(environ={})
    assert settings.url == 'ws://home:4'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
