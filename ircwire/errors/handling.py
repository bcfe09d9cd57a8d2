from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    AlreadyConnected,
    ConnectFailure,
    DecodeFailure,
    InternalError,
    InvalidHostname,
    MalformedLine,
)


def classify_error(error: BaseException) -> str:
    """Map an exception onto the category used for structured error logs.

    Args:
        error: The exception to classify.

    Returns:
        One of ``network``, ``protocol``, ``decode``, ``config``, ``state``,
        ``internal`` or ``unknown``.
    """
    if isinstance(error, ConnectFailure | OSError | ConnectionError):
        return "network"
    if isinstance(error, MalformedLine):
        return "protocol"
    if isinstance(error, DecodeFailure | UnicodeError):
        return "decode"
    if isinstance(error, InvalidHostname | ValueError):
        return "config"
    if isinstance(error, AlreadyConnected):
        return "state"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging. Structured
            ``data`` carried by internal errors is merged in.
    """
    merged: dict = {}
    if isinstance(error, InternalError):
        merged.update(error.data)
    if context:
        merged.update(context)
    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )
