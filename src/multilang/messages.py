"""Pydantic v2 models for multi-language protocol messages.

Every message is a single JSON object carrying an ``action`` field that
selects its shape.  Wire field names are camelCase; the models expose them
as snake_case attributes and serialize back with ``by_alias=True``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


class _MessageBase(BaseModel):
    """Common configuration shared by every protocol message."""

    # Children may attach fields we don't know about; tolerate them.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Record(BaseModel):
    """A single data record delivered inside ``processRecords``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: str = Field(description="Base64-encoded record payload")
    partition_key: str = Field(alias="partitionKey")
    sequence_number: str = Field(alias="sequenceNumber")
    sub_sequence_number: int | None = Field(default=None, alias="subSequenceNumber")
    approximate_arrival_timestamp: int | None = Field(
        default=None,
        alias="approximateArrivalTimestamp",
        description="Arrival time in epoch milliseconds",
    )


class InitializeMessage(_MessageBase):
    """Sent once to a child when it is attached to a shard."""

    action: Literal["initialize"] = "initialize"
    shard_id: str = Field(alias="shardId")
    sequence_number: str | None = Field(default=None, alias="sequenceNumber")
    sub_sequence_number: int | None = Field(default=None, alias="subSequenceNumber")


class ProcessRecordsMessage(_MessageBase):
    """A batch of records for the child to process."""

    action: Literal["processRecords"] = "processRecords"
    records: list[Record] = Field(default_factory=list)
    millis_behind_latest: int | None = Field(default=None, alias="millisBehindLatest")


class LeaseLostMessage(_MessageBase):
    """The worker no longer holds the lease for this shard."""

    action: Literal["leaseLost"] = "leaseLost"


class ShardEndedMessage(_MessageBase):
    """The shard has been fully consumed."""

    action: Literal["shardEnded"] = "shardEnded"


class ShutdownRequestedMessage(_MessageBase):
    """The worker is shutting down and offers a final checkpoint."""

    action: Literal["shutdownRequested"] = "shutdownRequested"


class ShutdownMessage(_MessageBase):
    """Legacy shutdown notification with a reason."""

    action: Literal["shutdown"] = "shutdown"
    reason: str | None = Field(default=None, description="TERMINATE, ZOMBIE, ...")


class CheckpointMessage(_MessageBase):
    """A checkpoint request from the child, or its acknowledgement."""

    action: Literal["checkpoint"] = "checkpoint"
    sequence_number: str | None = Field(default=None, alias="sequenceNumber")
    sub_sequence_number: int | None = Field(default=None, alias="subSequenceNumber")
    error: str | None = Field(
        default=None,
        description="Set on the acknowledgement when checkpointing failed",
    )


class StatusMessage(_MessageBase):
    """Reports that the child finished handling a message."""

    action: Literal["status"] = "status"
    response_for: str | None = Field(
        default=None,
        alias="responseFor",
        description="Action of the message this status answers",
    )


def _action_discriminator(v: Any) -> str:
    """Extract the ``action`` value from raw data or a model instance."""
    if isinstance(v, dict):
        return str(v.get("action", ""))
    return str(getattr(v, "action", ""))


Message = Annotated[
    Annotated[InitializeMessage, Tag("initialize")]
    | Annotated[ProcessRecordsMessage, Tag("processRecords")]
    | Annotated[LeaseLostMessage, Tag("leaseLost")]
    | Annotated[ShardEndedMessage, Tag("shardEnded")]
    | Annotated[ShutdownRequestedMessage, Tag("shutdownRequested")]
    | Annotated[ShutdownMessage, Tag("shutdown")]
    | Annotated[CheckpointMessage, Tag("checkpoint")]
    | Annotated[StatusMessage, Tag("status")],
    Discriminator(_action_discriminator),
]
"""Discriminated union of all protocol messages."""
