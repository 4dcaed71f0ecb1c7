"""Public API exports."""
from .session import OpenlaneSession
from .client import execute
from .controls import (
    Control,
    ControlConnection,
    ControlOrder,
    ControlOrderField,
    ControlWhereInput,
    OrderDirection,
    get_controls,
)
from .errors import ConfigError, FetchError, MissingCredentialError, OpenlaneError, OpenlaneGQLError
from .paginate import cursor_pages, fetch_all

__all__ = [
    "OpenlaneSession",
    "execute",
    "Control",
    "ControlConnection",
    "ControlOrder",
    "ControlOrderField",
    "ControlWhereInput",
    "OrderDirection",
    "get_controls",
    "ConfigError",
    "FetchError",
    "MissingCredentialError",
    "OpenlaneError",
    "OpenlaneGQLError",
    "cursor_pages",
    "fetch_all",
]
