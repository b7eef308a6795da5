"""Decoders that turn one line of child output into a message."""

from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from multilang.messages import Message

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class MessageDecoder(Protocol[T_co]):
    """Decodes a single line; returns ``None`` when the line isn't a message.

    Implementations must not raise for bad input and must not carry state
    from one line to the next.
    """

    def decode(self, line: str) -> T_co | None:
        """Decode *line* or return ``None``."""
        ...


class JsonMessageDecoder(Generic[T_co]):
    """Decoder for one JSON document per line, validated with pydantic.

    Defaults to the multi-language protocol :data:`~multilang.messages.Message`
    union.  Pass another type (a model or an annotated union) to decode a
    different schema.
    """

    def __init__(self, message_type: Any = Message) -> None:
        self._adapter: TypeAdapter[Any] = TypeAdapter(message_type)

    def decode(self, line: str) -> T_co | None:
        stripped = line.strip()
        if not stripped:
            return None
        try:
            return self._adapter.validate_json(stripped)
        except ValidationError:
            # Covers malformed JSON as well as JSON of the wrong shape.
            return None
