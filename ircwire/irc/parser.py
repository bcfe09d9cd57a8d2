"""IRC line tokenizer and prefix parser."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors.internal import MalformedLine
from .codes import ResponseCode, resolve

_PREFIX_FORBIDDEN = frozenset("!@")


@dataclass(frozen=True, slots=True)
class ParsedPrefix:
    nickname: str
    username: str | None = None
    hostname: str | None = None


@dataclass(frozen=True, slots=True)
class ParsedLine:
    prefix: ParsedPrefix
    command: str
    code: ResponseCode | None
    params: tuple[str, ...] = ()
    raw: str = field(default="", compare=False)

    @property
    def is_known(self) -> bool:
        return self.code is not None


def _valid_part(part: str | None) -> bool:
    return part is None or (bool(part) and not (_PREFIX_FORBIDDEN & set(part)))


def parse_prefix(raw_prefix: str) -> ParsedPrefix:
    """Split ``nick[!user][@host]`` into its parts.

    Anything that does not fit the grammar (empty parts, stray separators)
    falls back to the raw text as nickname. Never raises.
    """
    head, at, hostname = raw_prefix.partition("@")
    nickname, bang, username = head.partition("!")
    parts = (
        nickname,
        username if bang else None,
        hostname if at else None,
    )
    if not parts[0] or not all(_valid_part(p) for p in parts):
        return ParsedPrefix(nickname=raw_prefix)
    return ParsedPrefix(*parts)


def _reduce_params(tokens: list[str]) -> tuple[str, ...]:
    params: list[str] = []
    for index, token in enumerate(tokens):
        if token.startswith(":"):
            # Trailing parameter: keeps its inner spacing, may be empty.
            params.append(" ".join(tokens[index:])[1:])
            break
        if token:
            params.append(token)
    return tuple(params)


def tokenize(line: str) -> ParsedLine:
    """Tokenize one complete protocol line.

    Raises:
        MalformedLine: when the line lacks a ``:prefix`` or a command token.
    """
    text = line.rstrip("\r\n")
    if not text.startswith(":"):
        raise MalformedLine(text, "missing prefix")
    tokens = text.split(" ")
    if len(tokens) < 2:
        raise MalformedLine(text, "missing command")
    raw_prefix, command = tokens[0][1:], tokens[1]
    if not raw_prefix:
        raise MalformedLine(text, "empty prefix")
    if not command:
        raise MalformedLine(text, "empty command")
    return ParsedLine(
        prefix=parse_prefix(raw_prefix),
        command=command,
        code=resolve(command),
        params=_reduce_params(tokens[2:]),
        raw=text,
    )


__all__ = ["ParsedLine", "ParsedPrefix", "parse_prefix", "tokenize"]
