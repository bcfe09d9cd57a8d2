"""ircwire: an asyncio IRC client library.

The package turns a TCP byte stream into typed protocol events and exposes a
small command API (join, part, message, quit).
"""

from .errors.internal import (  # noqa: F401
    AlreadyConnected,
    ConnectFailure,
    DecodeFailure,
    InvalidHostname,
    MalformedLine,
)
from .irc import (  # noqa: F401
    Channel,
    IRCClient,
    IRCObserver,
    LoggingObserver,
    ResponseCode,
    User,
)

__version__ = "0.1.0"

__all__ = [
    "AlreadyConnected",
    "Channel",
    "ConnectFailure",
    "DecodeFailure",
    "IRCClient",
    "IRCObserver",
    "InvalidHostname",
    "LoggingObserver",
    "MalformedLine",
    "ResponseCode",
    "User",
]
