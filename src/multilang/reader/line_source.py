"""Sequential, newline-framed text reads from child stdout."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from multilang.constants import MAX_LINE_BYTES

logger = logging.getLogger(__name__)

#: Bytes requested from the stream per read.
_CHUNK_SIZE = 65_536


class ByteStream(Protocol):
    """Anything with an awaitable ``read`` (e.g. ``asyncio.StreamReader``)."""

    async def read(self, n: int = -1) -> bytes:
        """Return up to *n* bytes, or ``b""`` at EOF."""
        ...


class LineSource:
    """Reads decoded lines from a byte stream, one at a time.

    Lines are handed out strictly in stream order and never twice.  Once
    the stream reports EOF the source stays exhausted: further calls to
    :meth:`next_line` return ``None`` without touching the stream again.

    A line longer than *max_line_bytes* is dropped whole, up to and
    including its newline, even when it arrives across several reads.
    No fragment of it is ever returned as a line of its own.
    """

    def __init__(
        self,
        stream: ByteStream,
        stream_id: str,
        encoding: str = "utf-8",
        max_line_bytes: int = MAX_LINE_BYTES,
    ) -> None:
        self._stream = stream
        self._stream_id = stream_id
        self._encoding = encoding
        self._max_line_bytes = max_line_bytes
        self._buffer = bytearray()
        # Set while skipping the rest of an over-long line.
        self._discarding = False
        self._eof = False
        self.lines_read = 0

    @classmethod
    async def from_pipe(
        cls,
        pipe: Any,
        stream_id: str,
        *,
        limit: int = MAX_LINE_BYTES,
        encoding: str = "utf-8",
    ) -> LineSource:
        """Connect a raw pipe (``Popen.stdout``, ``sys.stdin.buffer``, ...)."""
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader()
        protocol = asyncio.StreamReaderProtocol(reader)
        await loop.connect_read_pipe(lambda: protocol, pipe)
        return cls(reader, stream_id, encoding=encoding, max_line_bytes=limit)

    @property
    def stream_id(self) -> str:
        return self._stream_id

    @property
    def at_eof(self) -> bool:
        """``True`` once the underlying stream has reported end of stream."""
        return self._eof

    async def next_line(self) -> str | None:
        """Return the next line without its terminator, or ``None`` at EOF.

        Raises:
            OSError: The underlying stream failed.  Bytes already buffered
                are kept, so a later call resumes where this one stopped.
        """
        while not self._eof:
            newline = self._buffer.find(b"\n")
            if newline != -1:
                raw = bytes(self._buffer[:newline])
                del self._buffer[: newline + 1]
                if self._discarding:
                    self._discarding = False
                    continue
                if len(raw) > self._max_line_bytes:
                    self._warn_over_limit()
                    continue
                return self._emit(raw)

            if self._discarding:
                self._buffer.clear()
            elif len(self._buffer) > self._max_line_bytes:
                self._warn_over_limit()
                self._buffer.clear()
                self._discarding = True

            chunk = await self._stream.read(_CHUNK_SIZE)
            if not chunk:
                self._eof = True
                raw = bytes(self._buffer)
                self._buffer.clear()
                if raw and not self._discarding:
                    return self._emit(raw)
                break
            self._buffer.extend(chunk)

        return None

    def _emit(self, raw: bytes) -> str:
        self.lines_read += 1
        return raw.decode(self._encoding, errors="replace").rstrip("\r")

    def _warn_over_limit(self) -> None:
        logger.warning(
            "%s: stdout line exceeds %d bytes, skipping",
            self._stream_id,
            self._max_line_bytes,
        )
