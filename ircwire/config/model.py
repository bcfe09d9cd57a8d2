from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..constants import IRC_DEFAULT_REALNAME
from ..errors.internal import InvalidHostname
from ..irc.client import split_hostname
from ..irc.models import User

CHANNEL_PREFIXES = "#&+!"
_NICK_FORBIDDEN = set(" ,*?!@:")


def _normalize_channel(name: str) -> str:
    name = name.strip().lower()
    if name and name[0] not in CHANNEL_PREFIXES:
        name = f"#{name}"
    return name


class ClientConfig(BaseModel):
    """Connection settings for one client.

    Attributes:
        server: ``host`` or ``host:port``.
        nickname: Nickname to register.
        username: Username sent in USER (``guest`` when unset).
        password: Server password sent as PASS before registration.
        realname: Real name sent in USER.
        channels: Channels to join once registered.
    """

    server: str
    nickname: str = Field(min_length=1, max_length=30)
    username: str | None = None
    password: str | None = None
    realname: str = IRC_DEFAULT_REALNAME
    channels: list[str] = Field(default_factory=list)

    @field_validator("server")
    @classmethod
    def validate_server(cls, v: str) -> str:
        try:
            split_hostname(v)
        except InvalidHostname as e:
            raise ValueError(str(e)) from e
        return v.strip()

    @field_validator("nickname")
    @classmethod
    def validate_nickname(cls, v: str) -> str:
        v = v.strip()
        if not v or _NICK_FORBIDDEN & set(v):
            raise ValueError(f"invalid nickname {v!r}")
        return v

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> list[str]:
        """Normalize channel names to lowercase with a leading prefix, deduplicated and sorted."""
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list):
            raise ValueError("channels must be a list")
        validated = [
            _normalize_channel(c) for c in v if isinstance(c, str) and c.strip()
        ]
        return sorted(dict.fromkeys(validated))

    @property
    def host(self) -> str:
        return split_hostname(self.server)[0]

    @property
    def port(self) -> int:
        return split_hostname(self.server)[1]

    def to_user(self) -> User:
        return User(self.nickname, username=self.username, password=self.password)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
