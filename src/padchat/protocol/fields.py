"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Outbound envelope kinds.
SYS = "sys"
USER = "user"

# Inbound envelope kinds.
CMD_RET = "cmdRet"
USER_EVENT = "userEvent"

# Envelope field names.
TYPE = "type"
CMD = "cmd"
CMD_ID = "cmdId"
TASK_ID = "taskId"
EVENT = "event"
DATA = "data"
MSG = "msg"
SUCCESS = "success"
LIST = "list"

# User events carrying account lifecycle signals.
QRCODE = "qrcode"
SCAN = "scan"
LOGIN = "login"
LOADED = "loaded"
LOGOUT = "logout"
OVER = "over"
SNS = "sns"

LIFECYCLE_EVENTS = frozenset((QRCODE, SCAN, LOGIN, LOADED, LOGOUT, OVER, SNS))

PUSH = "push"
WARN = "warn"

# Push item fields. Both spellings of the type fields have appeared on the
# wire; they are aliases of the same value.
MSG_TYPE = ("msg_type", "msgType")
SUB_TYPE = ("sub_type", "subType")
EFFECTIVE_TYPE = "mType"

# A primary type of 5 defers to the sub-type.
DEFERRED_TYPE = 5

# Primary types carrying no useful content.
NOISE_TYPES = frozenset((2048, 32768))

# Field in an outbound payload that carries a previously received push item.
RAW_MSG_DATA = "rawMsgData"
