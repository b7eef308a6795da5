"""Shared fixtures: stand-ins for a child process's stdout."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest


class MockAsyncStdout:
    """Async-aware mock stdout that yields chunks on demand.

    Chunks can be added at any time via ``feed()``.  ``read()`` blocks
    until a chunk is available and returns it whole, ``close()`` signals
    EOF and ``fail()`` makes the next read raise.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[bytes | BaseException] = asyncio.Queue()
        self.read_calls = 0

    def feed(self, data: bytes) -> None:
        self._queue.put_nowait(data)

    def feed_lines(self, *lines: str) -> None:
        for line in lines:
            self.feed(line.encode() + b"\n")

    def close(self) -> None:
        """Signal EOF."""
        self._queue.put_nowait(b"")

    def fail(self, exc: BaseException) -> None:
        self._queue.put_nowait(exc)

    async def read(self, n: int = -1) -> bytes:
        self.read_calls += 1
        item = await self._queue.get()
        if isinstance(item, BaseException):
            raise item
        return item


def _fed_stream(data: bytes) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader


@pytest.fixture
def stdout() -> MockAsyncStdout:
    """A mock stdout the test feeds by hand."""
    return MockAsyncStdout()


@pytest.fixture
def fed_stream() -> Callable[[bytes], asyncio.StreamReader]:
    """Factory for a real StreamReader pre-fed with data and EOF."""
    return _fed_stream
