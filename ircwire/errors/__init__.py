"""Error types and error logging helpers."""

from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    AlreadyConnected,
    ConnectFailure,
    DecodeFailure,
    InternalError,
    InvalidHostname,
    MalformedLine,
)

__all__ = [
    "AlreadyConnected",
    "ConnectFailure",
    "DecodeFailure",
    "InternalError",
    "InvalidHostname",
    "MalformedLine",
    "log_error",
]
