"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the client and its callers.
Raw OS / codec errors are never surfaced directly from the core; they are
wrapped into one of the classes below.

Classes:
  InternalError        – Base for all internal errors.
  InvalidHostname      – Malformed ``host[:port]`` given to the client or config.
  AlreadyConnected     – ``connect()`` called while a session is open.
  ConnectFailure       – The transport could not open the TCP connection.
  MalformedLine        – A received protocol line could not be tokenized.
  DecodeFailure        – A received byte chunk could not be decoded as text.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class InvalidHostname(InternalError):
    """Raised when a hostname carries an unparseable port suffix.

    Fatal to the construction attempt, not to the process.
    """

    def __init__(self, hostname: str, reason: str = "invalid port") -> None:
        super().__init__(
            f"Invalid hostname {hostname!r}: {reason}",
            data={"hostname": hostname, "reason": reason},
        )
        self.hostname = hostname


class AlreadyConnected(InternalError):
    """Raised when ``connect()`` is called on a client that is connected."""

    def __init__(self, message: str = "Client is already connected") -> None:
        super().__init__(message)


class ConnectFailure(InternalError):
    """Raised by a transport when the connection cannot be established.

    Attributes:
        host: Target host.
        port: Target port.
    """

    def __init__(self, host: str, port: int, cause: str) -> None:
        super().__init__(
            f"Could not connect to {host}:{port}: {cause}",
            data={"host": host, "port": port, "cause": cause},
        )
        self.host = host
        self.port = port


class MalformedLine(InternalError):
    """Raised when a protocol line fails tokenization.

    The line is dropped by the client; processing continues with the next one.
    """

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(
            f"Malformed line ({reason}): {line!r}",
            data={"line": line, "reason": reason},
        )
        self.line = line
        self.reason = reason


class DecodeFailure(InternalError):
    """Raised when a byte chunk cannot be decoded under any supported encoding.

    The chunk is dropped and the reassembly buffer is left untouched.
    """

    def __init__(self, size: int, encodings: tuple[str, ...]) -> None:
        super().__init__(
            f"Could not decode {size} byte chunk as any of {', '.join(encodings)}",
            data={"size": size, "encodings": encodings},
        )
        self.encodings = encodings


__all__ = [
    "InternalError",
    "InvalidHostname",
    "AlreadyConnected",
    "ConnectFailure",
    "MalformedLine",
    "DecodeFailure",
]
