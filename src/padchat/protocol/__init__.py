"""
Padchat Protocol Layer
======================

This package defines the transport-agnostic side of the padchat client:
what goes on the wire, how replies are correlated with the commands that
asked for them, and how everything else the server sends is classified
and delivered to subscribers.

The protocol layer MUST NOT depend on any transport implementation.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Client facade (padchat.client)
    - invoke() any named operation
    - subscribe() to event channels

    │
    ▼
Operation registry (operations.py)
    Maps operation names to wire commands and payload shapes

    │
    ▼
Dispatcher (dispatch.py)               Router (router.py)
    Correlation ids, pending table,        Decode, classify, complete
    deadlines                              pending commands, emit events

    │                                      ▲
    ▼                                      │
Message model (message.py)             Event surface (events.py)
    Outbound / Inbound / PushItem          Fixed channel set, handler
                                           fan-out

Field vocabulary (fields.py)
    Canonical names for envelope keys and type codes

---------------------------------------------------------------------
"""

from . import fields
from . import message
from . import events
from . import dispatch
from . import router
from . import operations


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
