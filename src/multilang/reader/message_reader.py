"""MessageReader — hands out tasks that read protocol messages from a child.

A child's stdout may contain more than protocol messages: debug prints,
and the blank lines children write around each message to keep it on a
line of its own.  :meth:`MessageReader.get_next_message` skips all of that
and resolves with the next real message.  :meth:`drain_remaining_output`
reads whatever is left, purely for logging, once the caller no longer
expects messages (e.g. while shutting the child down).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from multilang.config.models import ReaderConfig
from multilang.reader.decoder import JsonMessageDecoder, MessageDecoder
from multilang.reader.line_source import ByteStream, LineSource
from multilang.reader.tasks import DrainTask, GetNextMessageTask

logger = logging.getLogger(__name__)

#: Submits a coroutine for execution and returns its awaitable handle.
#: ``asyncio.create_task`` and ``asyncio.TaskGroup.create_task`` both fit.
Spawner = Callable[[Coroutine[Any, Any, Any]], asyncio.Future[Any]]


class MessageReader:
    """Reads protocol messages from one child process's stdout.

    The reader owns the line source; every stream read happens inside a
    task it submitted.  Requesting a task does no I/O and returns at once.
    The caller awaits, times out or cancels the returned handle.

    Only one task should read at a time.  Two concurrent
    ``get_next_message`` tasks, or one running next to a drain, split the
    remaining lines between them in no particular order.
    """

    def __init__(
        self,
        source: LineSource,
        decoder: MessageDecoder[Any] | None = None,
        spawn: Spawner | None = None,
        config: ReaderConfig | None = None,
    ) -> None:
        self._source = source
        self._decoder: MessageDecoder[Any] = (
            decoder if decoder is not None else JsonMessageDecoder()
        )
        self._spawn: Spawner = spawn or asyncio.create_task
        self._config = config or ReaderConfig()
        self._tasks: set[asyncio.Future[Any]] = set()

    @classmethod
    def from_stream(
        cls,
        stream: ByteStream,
        stream_id: str,
        decoder: MessageDecoder[Any] | None = None,
        spawn: Spawner | None = None,
        config: ReaderConfig | None = None,
    ) -> MessageReader:
        """Build a reader over an already-buffered byte stream."""
        config = config or ReaderConfig()
        source = LineSource(
            stream,
            stream_id,
            encoding=config.encoding,
            max_line_bytes=config.max_line_bytes,
        )
        return cls(source, decoder=decoder, spawn=spawn, config=config)

    @classmethod
    async def open(
        cls,
        pipe: Any,
        stream_id: str,
        decoder: MessageDecoder[Any] | None = None,
        spawn: Spawner | None = None,
        config: ReaderConfig | None = None,
    ) -> MessageReader:
        """Build a reader over a raw pipe such as ``Popen.stdout``."""
        config = config or ReaderConfig()
        source = await LineSource.from_pipe(
            pipe,
            stream_id,
            limit=config.max_line_bytes,
            encoding=config.encoding,
        )
        return cls(source, decoder=decoder, spawn=spawn, config=config)

    # ------------------------------------------------------------------ #
    # Public properties
    # ------------------------------------------------------------------ #

    @property
    def stream_id(self) -> str:
        return self._source.stream_id

    @property
    def lines_read(self) -> int:
        """Lines consumed from stdout so far, by any task."""
        return self._source.lines_read

    @property
    def pending_tasks(self) -> int:
        """Number of submitted tasks that haven't finished yet."""
        return len(self._tasks)

    # ------------------------------------------------------------------ #
    # Task submission
    # ------------------------------------------------------------------ #

    def get_next_message(self) -> asyncio.Future[Any]:
        """Submit a task that resolves with the next message on stdout.

        The handle fails with :class:`~multilang.reader.tasks.EndOfStreamError`
        if stdout closes before a message is found, or with the
        ``OSError`` raised while reading.
        """
        task = GetNextMessageTask(
            self._source,
            self._decoder,
            preview_chars=self._config.preview_chars,
        )
        return self._submit(task.run())

    def drain_remaining_output(self) -> asyncio.Future[bool]:
        """Submit a task that logs the rest of stdout until it closes.

        The handle resolves with ``True`` when the end of the stream is
        reached and ``False`` if reading failed.
        """
        task = DrainTask(self._source, log_level=self._config.drain_level)
        return self._submit(task.run())

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def aclose(self) -> None:
        """Cancel any in-flight tasks and wait for them to finish."""
        pending = [t for t in self._tasks if not t.done()]
        if not pending:
            return
        logger.debug(
            "%s: cancelling %d in-flight reader task(s)", self.stream_id, len(pending)
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    def _submit(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Future[Any]:
        handle = self._spawn(coro)
        # Hold a strong reference until the task completes.
        self._tasks.add(handle)
        handle.add_done_callback(self._tasks.discard)
        return handle
