"""Message reader for child-process stdout."""

from multilang.reader.decoder import JsonMessageDecoder, MessageDecoder
from multilang.reader.line_source import ByteStream, LineSource
from multilang.reader.message_reader import MessageReader, Spawner
from multilang.reader.tasks import (
    DrainTask,
    EndOfStreamError,
    GetNextMessageTask,
    MessageReaderError,
)

__all__ = [
    "ByteStream",
    "DrainTask",
    "EndOfStreamError",
    "GetNextMessageTask",
    "JsonMessageDecoder",
    "LineSource",
    "MessageDecoder",
    "MessageReader",
    "MessageReaderError",
    "Spawner",
]
