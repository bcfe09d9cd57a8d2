"""TCP transport collaborator.

The client only talks to a transport through ``Transport``: open, send bytes,
close, and three callbacks bound once. ``AsyncioTransport`` is the default
implementation over ``asyncio.open_connection``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from ..constants import IRC_CONNECT_TIMEOUT, IRC_READ_CHUNK_SIZE
from ..errors.internal import ConnectFailure
from ..logs.logger import logger

ConnectedCallback = Callable[[], None]
BytesCallback = Callable[[bytes], None]
DisconnectedCallback = Callable[[], None]


class Transport(Protocol):
    @property
    def is_connected(self) -> bool:
        """Whether the underlying connection is open."""
        ...

    def bind(
        self,
        on_connected: ConnectedCallback,
        on_bytes: BytesCallback,
        on_disconnected: DisconnectedCallback,
    ) -> None:
        """Register the lifecycle callbacks."""
        ...

    async def connect(self, host: str, port: int) -> None:
        """Open the connection, call ``on_connected`` and start reading.

        Raises:
            ConnectFailure: when the connection cannot be opened.
        """
        ...

    def send(self, data: bytes) -> None:
        """Queue bytes for transmission without waiting."""
        ...

    async def close(self) -> None:
        ...

    async def wait_closed(self) -> None:
        """Return once the read loop has ended."""
        ...


class AsyncioTransport:
    def __init__(
        self,
        connect_timeout: float = IRC_CONNECT_TIMEOUT,
        chunk_size: int = IRC_READ_CHUNK_SIZE,
    ) -> None:
        self.connect_timeout = connect_timeout
        self.chunk_size = chunk_size
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self._read_task: asyncio.Task[None] | None = None
        self._on_connected: ConnectedCallback | None = None
        self._on_bytes: BytesCallback | None = None
        self._on_disconnected: DisconnectedCallback | None = None

    @property
    def is_connected(self) -> bool:
        return self.writer is not None and not self.writer.is_closing()

    def bind(
        self,
        on_connected: ConnectedCallback,
        on_bytes: BytesCallback,
        on_disconnected: DisconnectedCallback,
    ) -> None:
        self._on_connected = on_connected
        self._on_bytes = on_bytes
        self._on_disconnected = on_disconnected

    async def connect(self, host: str, port: int) -> None:
        logger.log_event(
            "transport",
            "open_connection",
            level=logging.DEBUG,
            host=host,
            port=port,
            timeout=self.connect_timeout,
        )
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=self.connect_timeout,
            )
        except TimeoutError as e:
            raise ConnectFailure(host, port, f"timed out after {self.connect_timeout}s") from e
        except OSError as e:
            raise ConnectFailure(host, port, str(e)) from e
        logger.log_event(
            "transport", "connection_established", level=logging.DEBUG, host=host, port=port
        )
        if self._on_connected:
            self._on_connected()
        self._read_task = asyncio.create_task(self._read_loop())

    async def _read_loop(self) -> None:
        reader = self.reader
        try:
            while reader is not None:
                data = await reader.read(self.chunk_size)
                if not data:
                    logger.log_event("transport", "eof", level=logging.DEBUG)
                    break
                if self._on_bytes:
                    self._on_bytes(data)
        except (ConnectionError, OSError) as e:
            logger.log_event(
                "transport",
                "read_error",
                level=logging.ERROR,
                error=str(e),
                error_type=type(e).__name__,
            )
        finally:
            self._release()
            if self._on_disconnected:
                self._on_disconnected()

    def _release(self) -> None:
        writer = self.writer
        self.writer = None
        self.reader = None
        if writer is not None and not writer.is_closing():
            writer.close()

    def send(self, data: bytes) -> None:
        if not self.is_connected:
            logger.log_event(
                "transport", "send_dropped", level=logging.DEBUG, size=len(data)
            )
            return
        self.writer.write(data)  # type: ignore[union-attr]

    async def close(self) -> None:
        writer = self.writer
        if writer is None:
            return
        writer.close()
        try:
            await writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.log_event(
                "transport",
                "close_error",
                level=logging.WARNING,
                error=str(e),
            )
        await self.wait_closed()

    async def wait_closed(self) -> None:
        task = self._read_task
        if task is None or task is asyncio.current_task():
            return
        await task
