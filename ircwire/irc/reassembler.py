"""Byte stream to protocol line reassembly."""

from __future__ import annotations

import codecs

from ..constants import IRC_FALLBACK_ENCODING, LINE_TERMINATOR, PRIMARY_ENCODING
from ..errors.internal import DecodeFailure


class StreamReassembler:
    """Turns arbitrarily fragmented reads into complete lines.

    Text is decoded with the primary codec. An incomplete multibyte sequence
    at the end of a read is held back as bytes until the next read completes
    it. Only byte runs that are invalid under the primary codec go through the
    single-byte fallback. A chunk whose invalid bytes decode under neither
    raises ``DecodeFailure`` and leaves both buffers untouched. The pending
    text fragment never contains a full terminator.
    """

    def __init__(
        self,
        encoding: str = PRIMARY_ENCODING,
        fallback_encoding: str = IRC_FALLBACK_ENCODING,
    ) -> None:
        self.encodings: tuple[str, ...] = (encoding, fallback_encoding)
        self._decoder_factory = codecs.getincrementaldecoder(encoding)
        self._buffer = ""
        self._partial = b""

    @property
    def pending(self) -> str:
        return self._buffer

    @property
    def pending_bytes(self) -> bytes:
        """Bytes of an incomplete multibyte sequence awaiting the next read."""
        return self._partial

    def reset(self) -> None:
        self._buffer = ""
        self._partial = b""

    def _fallback(self, raw: bytes, size: int) -> str:
        for encoding in self.encodings[1:]:
            try:
                return raw.decode(encoding)
            except UnicodeDecodeError:
                continue
        raise DecodeFailure(size, self.encodings)

    def decode(self, data: bytes) -> str:
        """Decode one read, carrying an incomplete trailing sequence over."""
        raw = self._partial + data
        parts: list[str] = []
        while True:
            decoder = self._decoder_factory()
            try:
                parts.append(decoder.decode(raw, final=False))
            except UnicodeDecodeError as e:
                parts.append(raw[: e.start].decode(self.encodings[0]))
                parts.append(self._fallback(raw[e.start : e.end], len(data)))
                raw = raw[e.end :]
                continue
            self._partial = decoder.getstate()[0]
            return "".join(parts)

    def feed(self, data: bytes) -> list[str]:
        """Append a chunk and return the lines it completed, in order."""
        text = self.decode(data)
        if not text:
            return []
        pieces = (self._buffer + text).split(LINE_TERMINATOR)
        # The last piece is "" when the data ended on a terminator.
        self._buffer = pieces.pop()
        return pieces
