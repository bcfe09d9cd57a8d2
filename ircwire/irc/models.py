"""Session data models: users, channels and the per-connection state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from .parser import ParsedPrefix


def irc_lower(name: str) -> str:
    """Key used for nickname and channel lookups; comparisons ignore case."""
    return name.lower()


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    AUTHENTICATING = auto()
    READY = auto()


@dataclass(eq=False)
class User:
    """A participant identified by nickname (compared without case).

    ``password`` is only meaningful for the local identity and is never
    populated for remote users.
    """

    nickname: str
    username: str | None = None
    hostname: str | None = None
    password: str | None = field(default=None, repr=False)

    @classmethod
    def from_prefix(cls, prefix: ParsedPrefix) -> User:
        return cls(prefix.nickname, prefix.username, prefix.hostname)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return irc_lower(self.nickname) == irc_lower(other.nickname)

    def __hash__(self) -> int:
        return hash(irc_lower(self.nickname))


@dataclass(eq=False)
class Channel:
    """A joined channel; ``members`` is keyed by lowercased nickname."""

    name: str
    members: dict[str, User] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Channel):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def add_user(self, user: User) -> None:
        self.members[irc_lower(user.nickname)] = user

    def remove_user(self, user: User | str) -> User | None:
        nickname = user.nickname if isinstance(user, User) else user
        return self.members.pop(irc_lower(nickname), None)

    def rename_user(self, old: str, new: str) -> bool:
        member = self.members.pop(irc_lower(old), None)
        if member is None:
            return False
        member.nickname = new
        self.members[irc_lower(new)] = member
        return True

    def connected_users(self) -> list[User]:
        return list(self.members.values())

    def __contains__(self, user: object) -> bool:
        if isinstance(user, User):
            return irc_lower(user.nickname) in self.members
        return isinstance(user, str) and irc_lower(user) in self.members

    def __len__(self) -> int:
        return len(self.members)


@dataclass
class SessionState:
    """Mutable state for one connection.

    Channels are only added on a self-JOIN and only removed on a self-PART
    (or wholesale when the session ends). ``channels`` is keyed by lowercased
    name so lookups ignore case.
    """

    connected: bool = False
    authenticated: bool = False
    state: ConnectionState = ConnectionState.DISCONNECTED
    channels: dict[str, Channel] = field(default_factory=dict)
    motd: str | None = None

    def is_tracked(self, name: str) -> bool:
        return irc_lower(name) in self.channels

    def get_channel(self, name: str) -> Channel | None:
        return self.channels.get(irc_lower(name))

    def add_channel(self, name: str) -> Channel:
        channel = Channel(name)
        self.channels[irc_lower(name)] = channel
        return channel

    def remove_channel(self, name: str) -> Channel | None:
        return self.channels.pop(irc_lower(name), None)

    def reset(self) -> None:
        self.connected = False
        self.authenticated = False
        self.state = ConnectionState.DISCONNECTED
        self.channels.clear()
        self.motd = None
