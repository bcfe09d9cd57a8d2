"""IRC protocol subsystem.

Framing (reassembler), tokenizing (parser), response codes, session models,
command dispatch, transport and the client facade.
"""

from .client import IRCClient, split_hostname  # noqa: F401
from .codes import ResponseCode, resolve  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .models import Channel, ConnectionState, SessionState, User, irc_lower  # noqa: F401
from .observer import IRCObserver, LoggingObserver  # noqa: F401
from .parser import ParsedLine, ParsedPrefix, parse_prefix, tokenize  # noqa: F401
from .reassembler import StreamReassembler  # noqa: F401
from .transport import AsyncioTransport, Transport  # noqa: F401

__all__ = [
    "AsyncioTransport",
    "Channel",
    "ConnectionState",
    "IRCClient",
    "IRCDispatcher",
    "IRCObserver",
    "LoggingObserver",
    "ParsedLine",
    "ParsedPrefix",
    "ResponseCode",
    "SessionState",
    "StreamReassembler",
    "Transport",
    "User",
    "irc_lower",
    "parse_prefix",
    "resolve",
    "split_hostname",
    "tokenize",
]
