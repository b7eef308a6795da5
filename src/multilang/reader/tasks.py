"""Reader tasks — the units of work the message reader submits.

``GetNextMessageTask`` scans child output until one line decodes into a
message.  ``DrainTask`` logs everything that is left until the stream
closes.  Each instance is meant to be run once.
"""

from __future__ import annotations

import logging
from typing import Any

from multilang.constants import PREVIEW_CHARS, preview
from multilang.reader.decoder import MessageDecoder
from multilang.reader.line_source import LineSource

logger = logging.getLogger(__name__)


class MessageReaderError(Exception):
    """Base class for message reader failures."""


class EndOfStreamError(MessageReaderError):
    """Raised when the child's stdout closed before a message was found."""

    def __init__(self, stream_id: str, lines_skipped: int = 0) -> None:
        self.stream_id = stream_id
        self.lines_skipped = lines_skipped
        super().__init__(
            f"{stream_id}: stdout closed before a message was found "
            f"({lines_skipped} lines skipped)"
        )


class GetNextMessageTask:
    """Reads lines until one decodes to a message.

    Lines that don't decode (blank lines, debug prints, JSON of the wrong
    shape) are skipped.  They are consumed from the stream and lost.
    """

    def __init__(
        self,
        source: LineSource,
        decoder: MessageDecoder[Any],
        preview_chars: int = PREVIEW_CHARS,
    ) -> None:
        self._source = source
        self._decoder = decoder
        self._preview_chars = preview_chars
        self.lines_skipped = 0

    async def run(self) -> Any:
        """Return the next message.

        Raises:
            EndOfStreamError: The stream ended first.
            OSError: Reading from the stream failed.
        """
        stream_id = self._source.stream_id
        while True:
            try:
                line = await self._source.next_line()
            except OSError as exc:
                logger.error("%s: error reading child stdout: %s", stream_id, exc)
                raise

            if line is None:
                raise EndOfStreamError(stream_id, self.lines_skipped)

            message = self._decoder.decode(line)
            if message is not None:
                return message

            self.lines_skipped += 1
            if line.strip():
                logger.debug(
                    "%s: ignoring non-message output: %s",
                    stream_id,
                    preview(line, self._preview_chars),
                )


class DrainTask:
    """Logs every remaining line of child output until the stream closes.

    Best effort: a read error ends the drain with ``False`` instead of
    raising.  Cancellation is still propagated.
    """

    def __init__(self, source: LineSource, log_level: int = logging.INFO) -> None:
        self._source = source
        self._log_level = log_level
        self.lines_drained = 0

    async def run(self) -> bool:
        """Return ``True`` on a clean end of stream, ``False`` on a read error."""
        stream_id = self._source.stream_id
        while True:
            try:
                line = await self._source.next_line()
            except OSError as exc:
                logger.warning(
                    "%s: error while draining child stdout: %s", stream_id, exc
                )
                return False

            if line is None:
                logger.debug(
                    "%s: child stdout closed after draining %d lines",
                    stream_id,
                    self.lines_drained,
                )
                return True

            self.lines_drained += 1
            logger.log(self._log_level, "%s: [stdout] %s", stream_id, line)
