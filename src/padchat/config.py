""" Client settings: the server URL and the timeouts applied to commands.
    Every setting resolves, in order of precedence, from an explicit keyword
    argument, a ``PADCHAT_*`` environment variable, the JSON settings file in
    the padchat home directory, and finally the built-in default.
"""

import logging
import os

from . import json

logger = logging.getLogger(__name__)


defaults = dict()
defaults['url'] = 'ws://127.0.0.1:7777'
defaults['send_timeout'] = 30.0
defaults['request_timeout'] = 10.0
defaults['open_timeout'] = 10.0

converters = dict()
converters['url'] = str
converters['send_timeout'] = float
converters['request_timeout'] = float
converters['open_timeout'] = float

filename = 'settings.json'


class Settings:
    """ A resolved set of client settings. Any setting can be given as a
        keyword argument; unrecognized keywords raise a TypeError. The
        settings file is read from *path* if specified, otherwise from
        ``settings.json`` in :func:`directory`; a missing file is not an
        error.

        :ivar url: The WebSocket URL of the server.
        :ivar send_timeout: Default seconds to wait for a command reply.
        :ivar request_timeout: Default seconds for the lower-level request.
        :ivar open_timeout: Seconds to wait for the connection handshake.
    """

    def __init__(self, path=None, environ=None, **overrides):

        for key in overrides:
            if key not in defaults:
                raise TypeError('unknown setting: ' + repr(key))

        if environ is None:
            environ = os.environ

        if path is None:
            path = os.path.join(directory(), filename)

        self.path = path
        from_file = load(path)

        for key, default in defaults.items():
            value = overrides.get(key)
            source = 'keyword'

            if value is None:
                value = environ.get('PADCHAT_' + key.upper())
                source = 'environment'

            if value is None:
                value = from_file.get(key)
                source = path

            if value is None:
                value = default
                source = 'default'

            try:
                value = converters[key](value)
            except (TypeError, ValueError):
                raise ValueError("setting %s from %s is invalid: %r" % (key, source, value)) from None

            if converters[key] is float and value <= 0:
                raise ValueError("setting %s from %s must be positive: %r" % (key, source, value))

            setattr(self, key, value)


    def __repr__(self):
        values = ', '.join('%s=%r' % (key, getattr(self, key)) for key in defaults)
        return 'Settings(' + values + ')'


    def to_dict(self):
        return dict((key, getattr(self, key)) for key in defaults)


# end of class Settings



def load(path):
    """ Return the settings stored in the JSON file at *path*, or an empty
        dictionary if there is no such file. A file that exists but is not
        a JSON object raises a ValueError.
    """

    try:
        with open(path, 'rb') as handle:
            contents = handle.read()
    except FileNotFoundError:
        return dict()

    try:
        loaded = json.loads(contents)
    except json.DecodeError as e:
        raise ValueError('cannot parse settings file %s: %s' % (path, e)) from None

    if not isinstance(loaded, dict):
        raise ValueError('settings file %s does not contain a JSON object' % (path))

    logger.debug("loaded settings from %s", path)
    return loaded



def directory(default=None):
    """ Return the padchat home directory, where the settings file is looked
        for. An absolute *default* replaces the location for the rest of the
        process. Otherwise $PADCHAT_HOME is used if set, and ~/.padchat if
        not; the answer is cached on first use, so the environment variable
        must be set before then.
    """

    if default is not None:
        default = os.path.expanduser(os.path.expandvars(str(default)))
        if not os.path.isabs(default):
            raise ValueError('the padchat home directory must be an absolute path')
        directory.found = default

    if directory.found is None:
        home = os.environ.get('PADCHAT_HOME')
        if not home:
            home = os.path.join(os.path.expanduser('~'), '.padchat')
        directory.found = home

    return directory.found

directory.found = None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
