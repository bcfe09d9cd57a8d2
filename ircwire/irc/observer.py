"""Observer contract for decoded protocol events.

Every callback is optional: subclass ``IRCObserver`` and override only the
events of interest. The client holds a reference but does not own it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..logs.logger import logger
from .codes import ResponseCode
from .models import Channel, User


class IRCObserver:
    def joined_channel(self, channel: Channel) -> None:
        """We joined ``channel``."""

    def user_joined_channel(self, user: User, channel: Channel) -> None:
        """Another user joined a channel we are in."""

    def parted_channel(self, channel_name: str) -> None:
        """We left ``channel_name``."""

    def user_parted_channel(
        self, user: User, channel: Channel, reason: str | None
    ) -> None:
        """Another user left a channel we are in."""

    def private_message(self, user: User, target: str, text: str) -> None:
        """PRIVMSG addressed to a channel or to us."""

    def notice(self, user: User, target: str, text: str) -> None:
        pass

    def nick_changed(self, user: User, new_nickname: str) -> None:
        pass

    def user_quit(self, user: User, reason: str | None) -> None:
        pass

    def new_motd(self, motd: str) -> None:
        """The complete message of the day (empty when the server has none)."""

    def disconnected(self) -> None:
        pass

    def unhandled_command(
        self, user: User, code: ResponseCode, params: Sequence[str]
    ) -> None:
        """A recognised code with no registered handler."""

    def unknown_command(self, user: User, command: str, params: Sequence[str]) -> None:
        """A token missing from the response code table."""


class LoggingObserver(IRCObserver):
    """Renders every event through the project logger."""

    def __init__(self, nickname: str | None = None) -> None:
        self.nickname = nickname

    def joined_channel(self, channel: Channel) -> None:
        logger.log_event("chat", "joined", nick=self.nickname, channel=channel.name)

    def user_joined_channel(self, user: User, channel: Channel) -> None:
        logger.log_event(
            "chat",
            "user_joined",
            nick=self.nickname,
            channel=channel.name,
            who=user.nickname,
        )

    def parted_channel(self, channel_name: str) -> None:
        logger.log_event("chat", "parted", nick=self.nickname, channel=channel_name)

    def user_parted_channel(
        self, user: User, channel: Channel, reason: str | None
    ) -> None:
        logger.log_event(
            "chat",
            "user_parted",
            nick=self.nickname,
            channel=channel.name,
            who=user.nickname,
            reason=reason or "",
        )

    def private_message(self, user: User, target: str, text: str) -> None:
        logger.log_event(
            "chat",
            "privmsg",
            nick=self.nickname,
            channel=target,
            who=user.nickname,
            text=text,
        )

    def notice(self, user: User, target: str, text: str) -> None:
        logger.log_event(
            "chat", "notice", nick=self.nickname, who=user.nickname, text=text
        )

    def nick_changed(self, user: User, new_nickname: str) -> None:
        logger.log_event(
            "chat",
            "nick_changed",
            nick=self.nickname,
            who=user.nickname,
            new_nick=new_nickname,
        )

    def user_quit(self, user: User, reason: str | None) -> None:
        logger.log_event(
            "chat", "user_quit", nick=self.nickname, who=user.nickname, reason=reason or ""
        )

    def new_motd(self, motd: str) -> None:
        for line in motd.splitlines() or [""]:
            logger.log_event("server", "motd", nick=self.nickname, text=line)

    def disconnected(self) -> None:
        logger.log_event("irc", "session_closed", level=logging.WARNING, nick=self.nickname)

    def unhandled_command(
        self, user: User, code: ResponseCode, params: Sequence[str]
    ) -> None:
        logger.log_event(
            "server",
            "unhandled",
            level=logging.DEBUG,
            nick=self.nickname,
            code=code.name,
            token=code.value,
            params=" ".join(params),
        )

    def unknown_command(self, user: User, command: str, params: Sequence[str]) -> None:
        logger.log_event(
            "server",
            "unknown",
            level=logging.DEBUG,
            nick=self.nickname,
            token=command,
            params=" ".join(params),
        )
