"""Command dispatch: routes parsed lines to handlers that update the session."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from ..constants import NAMES_MODE_PREFIXES, NICK_COLLISION_SUFFIX
from ..logs.logger import logger
from .codes import ResponseCode
from .models import ConnectionState, SessionState, User, irc_lower
from .parser import ParsedLine

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient

Handler = Callable[[User, Sequence[str]], None]


class IRCDispatcher:
    def __init__(self, client: IRCClient):
        self.client = client
        self._handlers: dict[ResponseCode, Handler] = {
            ResponseCode.PING: self._handle_ping,
            ResponseCode.WELCOME: self._handle_welcome,
            ResponseCode.JOIN: self._handle_join,
            ResponseCode.PART: self._handle_part,
            ResponseCode.PRIVMSG: self._handle_privmsg,
            ResponseCode.NOTICE: self._handle_notice,
            ResponseCode.NICK: self._handle_nick,
            ResponseCode.QUIT: self._handle_quit,
            ResponseCode.NAME_REPLY: self._handle_names,
            ResponseCode.NICKNAME_IN_USE: self._handle_nickname_in_use,
            ResponseCode.MOTD_START: self._handle_motd_start,
            ResponseCode.MOTD: self._handle_motd_line,
            ResponseCode.END_OF_MOTD: self._handle_motd_end,
            ResponseCode.NO_MOTD: self._handle_no_motd,
        }

    @property
    def handled_codes(self) -> frozenset[ResponseCode]:
        return frozenset(self._handlers)

    @property
    def session(self) -> SessionState:
        return self.client.session

    def dispatch(self, line: ParsedLine) -> None:
        sender = User.from_prefix(line.prefix)
        if line.code is None:
            self._notify("unknown_command", sender, line.command, list(line.params))
            return
        handler = self._handlers.get(line.code)
        if handler is None:
            self._notify("unhandled_command", sender, line.code, list(line.params))
            return
        try:
            handler(sender, line.params)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "handler_error",
                level=logging.ERROR,
                nick=self.client.nickname,
                command=line.command,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )

    # Helpers -----------------------------------------------------------------

    def _notify(self, callback: str, *args: object) -> None:
        observer = self.client.observer
        if observer is None:
            return
        try:
            getattr(observer, callback)(*args)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "observer_error",
                level=logging.ERROR,
                nick=self.client.nickname,
                callback=callback,
                error=str(e),
                error_type=type(e).__name__,
            )

    def _is_self(self, user: User) -> bool:
        return irc_lower(user.nickname) == irc_lower(self.client.nickname)

    def _params_ok(
        self, command: str, params: Sequence[str], low: int, high: int | None = None
    ) -> bool:
        high = low if high is None else high
        if low <= len(params) <= high:
            return True
        expected = str(low) if low == high else f"{low}-{high}"
        logger.log_event(
            "irc",
            "param_mismatch",
            level=logging.WARNING,
            nick=self.client.nickname,
            command=command,
            expected=expected,
            got=len(params),
        )
        return False

    # Connection --------------------------------------------------------------

    def _handle_ping(self, user: User, params: Sequence[str]) -> None:
        self.client.send_pong(params[-1] if params else None)

    def _handle_welcome(self, user: User, params: Sequence[str]) -> None:
        session = self.session
        session.authenticated = True
        session.state = ConnectionState.READY
        # The first parameter is the nickname the server registered us under.
        if params and params[0] and params[0] != "*":
            self.client.set_nickname(params[0])
        logger.log_event(
            "irc", "authenticated", nick=self.client.nickname, server=user.nickname
        )

    def _handle_nickname_in_use(self, user: User, params: Sequence[str]) -> None:
        if self.session.authenticated:
            logger.log_event(
                "irc",
                "nick_in_use",
                level=logging.WARNING,
                nick=self.client.nickname,
                wanted=params[1] if len(params) > 1 else "",
            )
            return
        alternative = f"{self.client.nickname}{NICK_COLLISION_SUFFIX}"
        logger.log_event(
            "irc",
            "nick_retry",
            level=logging.WARNING,
            nick=self.client.nickname,
            alternative=alternative,
        )
        self.client.set_nickname(alternative)
        self.client.send_line(f"NICK {alternative}")

    # Channels ----------------------------------------------------------------

    def _handle_join(self, user: User, params: Sequence[str]) -> None:
        # Extended-join servers append account and realname; only the channel matters.
        if not self._params_ok("JOIN", params, 1, 3):
            return
        name = params[0]
        session = self.session
        if self._is_self(user):
            if session.is_tracked(name):
                logger.log_event(
                    "irc",
                    "join_duplicate",
                    level=logging.DEBUG,
                    nick=self.client.nickname,
                    channel=name,
                )
                return
            channel = session.add_channel(name)
            self._notify("joined_channel", channel)
            return
        channel = session.get_channel(name)
        if channel is None:
            return
        channel.add_user(user)
        self._notify("user_joined_channel", user, channel)

    def _handle_part(self, user: User, params: Sequence[str]) -> None:
        if not self._params_ok("PART", params, 1, 2):
            return
        name = params[0]
        session = self.session
        if self._is_self(user):
            if session.remove_channel(name) is None:
                return
            self._notify("parted_channel", name)
            return
        channel = session.get_channel(name)
        if channel is None:
            return
        channel.remove_user(user)
        reason = params[1] if len(params) > 1 else None
        self._notify("user_parted_channel", user, channel, reason)

    def _handle_names(self, user: User, params: Sequence[str]) -> None:
        # "<me> [<symbol>] <channel> :<names>"
        if not self._params_ok("353", params, 3, 4):
            return
        channel = self.session.get_channel(params[-2])
        if channel is None:
            return
        for entry in params[-1].split():
            nickname = entry.lstrip(NAMES_MODE_PREFIXES)
            if nickname:
                channel.add_user(User(nickname))

    def _handle_nick(self, user: User, params: Sequence[str]) -> None:
        if not self._params_ok("NICK", params, 1):
            return
        new_nickname = params[0]
        if self._is_self(user):
            self.client.set_nickname(new_nickname)
        for channel in self.session.channels.values():
            channel.rename_user(user.nickname, new_nickname)
        self._notify("nick_changed", user, new_nickname)

    def _handle_quit(self, user: User, params: Sequence[str]) -> None:
        if not self._params_ok("QUIT", params, 0, 1):
            return
        if self._is_self(user):
            return
        for channel in self.session.channels.values():
            channel.remove_user(user)
        self._notify("user_quit", user, params[0] if params else None)

    # Messages ----------------------------------------------------------------

    def _handle_privmsg(self, user: User, params: Sequence[str]) -> None:
        if not self._params_ok("PRIVMSG", params, 2):
            return
        target, text = params
        self._notify("private_message", user, target, text)

    def _handle_notice(self, user: User, params: Sequence[str]) -> None:
        if not self._params_ok("NOTICE", params, 2):
            return
        target, text = params
        self._notify("notice", user, target, text)

    # Message of the day --------------------------------------------------------

    def _handle_motd_start(self, user: User, params: Sequence[str]) -> None:
        if not self._params_ok("375", params, 2):
            return
        self.session.motd = params[1]

    def _handle_motd_line(self, user: User, params: Sequence[str]) -> None:
        if not self._params_ok("372", params, 2):
            return
        self.session.motd = f"{self.session.motd or ''}\n{params[1]}"

    def _handle_motd_end(self, user: User, params: Sequence[str]) -> None:
        motd = self.session.motd
        if motd is None:
            return
        self._notify("new_motd", motd)

    def _handle_no_motd(self, user: User, params: Sequence[str]) -> None:
        self._notify("new_motd", "")
