""" Python client for the padchat server. A single persistent WebSocket
    connection carries commands, each correlated with its reply, and the
    stream of account events and pushed messages the server emits.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Utility components.

from . import json
from . import weakref
from . import casing
from . import helpers
from . import errors

# Submodules used by multiple other components.

from . import protocol
from . import config
home = config.directory

# Primary public-facing interfaces.

from .protocol.events import Channel
from .client import Client

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
