"""Client facade: owns the session and is the transport's single entry point."""

from __future__ import annotations

import logging
import re

from ..constants import (
    IRC_DEFAULT_PORT,
    IRC_DEFAULT_REALNAME,
    IRC_DEFAULT_USERNAME,
    IRC_USER_MODE,
    LINE_TERMINATOR,
    PRIMARY_ENCODING,
)
from ..errors.handling import log_error
from ..errors.internal import (
    AlreadyConnected,
    ConnectFailure,
    DecodeFailure,
    InvalidHostname,
    MalformedLine,
)
from ..logs.logger import logger
from .dispatcher import IRCDispatcher
from .models import Channel, ConnectionState, SessionState, User
from .observer import IRCObserver
from .parser import tokenize
from .reassembler import StreamReassembler
from .transport import AsyncioTransport, Transport

_LINE_BREAK = re.compile(r"[\r\n]")


def split_hostname(hostname: str, default_port: int = IRC_DEFAULT_PORT) -> tuple[str, int]:
    """Split ``host`` or ``host:port`` into its parts.

    Raises:
        InvalidHostname: for an empty host or a port that is not 1-65535.
    """
    host, sep, port_text = hostname.strip().partition(":")
    if not host:
        raise InvalidHostname(hostname, "empty host")
    if not sep:
        return host, default_port
    if not port_text.isdigit():
        raise InvalidHostname(hostname, "invalid port")
    port = int(port_text)
    if not 0 < port < 65536:
        raise InvalidHostname(hostname, "port out of range")
    return host, port


class IRCClient:  # pylint: disable=too-many-instance-attributes
    def __init__(
        self,
        hostname: str,
        user: User,
        observer: IRCObserver | None = None,
        transport: Transport | None = None,
        *,
        realname: str = IRC_DEFAULT_REALNAME,
    ) -> None:
        self.host, self.port = split_hostname(hostname)
        self.user = user
        self.realname = realname
        self.observer = observer
        self.session = SessionState()
        self.reassembler = StreamReassembler()
        self.dispatcher = IRCDispatcher(self)
        self.transport: Transport = transport or AsyncioTransport()
        self.transport.bind(self.on_connected, self.on_bytes, self.on_disconnected)

    # Identity ----------------------------------------------------------------

    @property
    def nickname(self) -> str:
        return self.user.nickname

    def set_nickname(self, nickname: str) -> None:
        if nickname != self.user.nickname:
            logger.log_event(
                "irc", "nickname_set", level=logging.DEBUG, nick=self.user.nickname, new_nick=nickname
            )
        self.user.nickname = nickname

    def set_user(self, user: User) -> None:
        """Replace the local identity; re-registers when connected."""
        self.user = user
        if self.session.connected:
            self.send_authentication()

    def set_observer(self, observer: IRCObserver | None) -> None:
        self.observer = observer

    @property
    def channels(self) -> dict[str, Channel]:
        return self.session.channels

    @property
    def is_authenticated(self) -> bool:
        return self.session.authenticated

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.session.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                nick=self.nickname,
                old_state=self.session.state.name,
                new_state=new_state.name,
            )
            self.session.state = new_state

    # Lifecycle ---------------------------------------------------------------

    async def connect(self) -> None:
        if (
            self.session.connected
            or self.session.state != ConnectionState.DISCONNECTED
            or self.transport.is_connected
        ):
            raise AlreadyConnected()
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event(
            "irc", "connect_start", nick=self.nickname, server=self.host, port=self.port
        )
        try:
            await self.transport.connect(self.host, self.port)
        except ConnectFailure as e:
            log_error("Connection failed", e)
            self._set_state(ConnectionState.DISCONNECTED)
            raise

    async def disconnect(self) -> None:
        await self.transport.close()

    async def wait_closed(self) -> None:
        await self.transport.wait_closed()

    def on_connected(self) -> None:
        self.session.connected = True
        self.reassembler.reset()
        self._set_state(ConnectionState.AUTHENTICATING)
        logger.log_event(
            "irc", "connected", nick=self.nickname, server=self.host, port=self.port
        )
        self.send_authentication()

    def on_disconnected(self) -> None:
        self.session.reset()
        self.reassembler.reset()
        logger.log_event("irc", "disconnected", level=logging.WARNING, nick=self.nickname)
        if self.observer is not None:
            try:
                self.observer.disconnected()
            except Exception as e:  # noqa: BLE001
                logger.log_event(
                    "irc",
                    "observer_error",
                    level=logging.ERROR,
                    nick=self.nickname,
                    callback="disconnected",
                    error=str(e),
                    error_type=type(e).__name__,
                )

    def send_authentication(self) -> None:
        user = self.user
        if user.password:
            self.send_line(f"PASS {user.password}")
        username = user.username or IRC_DEFAULT_USERNAME
        self.send_line(f"USER {username} {IRC_USER_MODE} * :{self.realname}")
        self.send_line(f"NICK {user.nickname}")

    # Inbound -----------------------------------------------------------------

    def on_bytes(self, data: bytes) -> None:
        if not self.session.connected:
            logger.log_event(
                "irc", "bytes_ignored", level=logging.DEBUG, nick=self.nickname, size=len(data)
            )
            return
        try:
            lines = self.reassembler.feed(data)
        except DecodeFailure as e:
            log_error("Dropped undecodable chunk", e)
            return
        for line in lines:
            self.process_line(line)

    def process_line(self, line: str) -> None:
        if not line.strip():
            return
        logger.log_event("irc", "recv", level=logging.DEBUG, nick=self.nickname, raw=line)
        command, _, rest = line.partition(" ")
        if command.upper() == "PING":
            # Unprefixed PING is common; answer it before the prefix check.
            self.send_pong(rest[1:] if rest.startswith(":") else rest or None)
            return
        try:
            parsed = tokenize(line)
        except MalformedLine as e:
            logger.log_event(
                "irc",
                "malformed_line",
                level=logging.WARNING,
                nick=self.nickname,
                reason=e.reason,
                raw=e.line,
            )
            return
        self.dispatcher.dispatch(parsed)

    # Outbound ----------------------------------------------------------------

    def send_line(self, message: str) -> None:
        """Send one protocol line; anything after an embedded CR or LF is dropped."""
        message = message.removesuffix(LINE_TERMINATOR)
        line, *rest = _LINE_BREAK.split(message, maxsplit=1)
        if rest:
            logger.log_event(
                "irc",
                "line_truncated",
                level=logging.WARNING,
                nick=self.nickname,
                dropped=len(message) - len(line),
            )
        shown = "PASS ****" if line.startswith("PASS ") else line
        logger.log_event("irc", "send", level=logging.DEBUG, nick=self.nickname, raw=shown)
        self.transport.send(f"{line}{LINE_TERMINATOR}".encode(PRIMARY_ENCODING))

    def send_pong(self, token: str | None) -> None:
        self.send_line(f"PONG :{token}" if token else "PONG")

    def _skip(self, command: str, reason: str, **context: object) -> bool:
        logger.log_event(
            "irc",
            "command_skipped",
            level=logging.DEBUG,
            nick=self.nickname,
            command=command,
            reason=reason,
            **context,
        )
        return False

    def join_channel(self, name: str) -> bool:
        if not self.session.authenticated:
            return self._skip("JOIN", "not authenticated", channel=name)
        if self.session.is_tracked(name):
            return self._skip("JOIN", "already joined", channel=name)
        self.send_line(f"JOIN {name}")
        return True

    def part_channel(self, name: str, reason: str | None = None) -> bool:
        if not self.session.is_tracked(name):
            return self._skip("PART", "not joined", channel=name)
        self.send_line(f"PART {name} :{reason}" if reason else f"PART {name}")
        return True

    def send_message(self, target: str, text: str) -> bool:
        if not self.session.authenticated:
            return self._skip("PRIVMSG", "not authenticated", target=target)
        self.send_line(f"PRIVMSG {target} :{text}")
        return True

    def quit(self, reason: str | None = None) -> bool:
        if not self.session.connected:
            return self._skip("QUIT", "not connected")
        self.send_line(f"QUIT :{reason}" if reason else "QUIT")
        self.session.reset()
        self.reassembler.reset()
        logger.log_event("irc", "quit", nick=self.nickname, reason=reason or "")
        return True
