"""Conversions between wire messages and native snapshot types."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from google.protobuf.timestamp_pb2 import Timestamp

from snapshotkit.messages import InfoMessage
from snapshotkit.models import Info, Kind

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS_PER_SECOND = 1_000_000_000

_KIND_TO_INT = {
    Kind.UNKNOWN: 0,
    Kind.VIEW: 1,
    Kind.ACTIVE: 2,
    Kind.COMMITTED: 3,
}
_INT_TO_KIND = {value: kind for kind, value in _KIND_TO_INT.items()}


class ConversionError(Exception):
    """A wire message could not be converted to a native type."""


class InvalidEnumValueError(ConversionError):
    """An integer does not name a snapshot kind."""

    def __init__(self, value: int) -> None:
        super().__init__(f"Invalid enum value: {value}")
        self.value = value


class TimestampError(ConversionError):
    """A timestamp is outside the representable range."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to convert GRPC timestamp: {reason}")
        self.reason = reason


def kind_to_int(kind: Kind) -> int:
    """Return the wire value of a snapshot kind."""
    return _KIND_TO_INT[kind]


def kind_from_int(value: int) -> Kind:
    """Return the snapshot kind for a wire value."""
    try:
        return _INT_TO_KIND[value]
    except KeyError:
        raise InvalidEnumValueError(value) from None


def datetime_to_timestamp(value: datetime) -> Timestamp:
    """Convert a datetime (naive values are taken as UTC) to a timestamp."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - _EPOCH
    return Timestamp(
        seconds=delta.days * 86400 + delta.seconds,
        nanos=delta.microseconds * 1000,
    )


def timestamp_to_datetime(timestamp: Timestamp) -> datetime:
    """Convert a timestamp to an aware UTC datetime."""
    total = timestamp.seconds * _NANOS_PER_SECOND + timestamp.nanos
    seconds, nanos = divmod(total, _NANOS_PER_SECOND)
    try:
        return _EPOCH + timedelta(seconds=seconds, microseconds=nanos // 1000)
    except (OverflowError, ValueError):
        raise TimestampError(
            f"timestamp {timestamp.seconds}s {timestamp.nanos}ns out of range"
        ) from None


def info_from_message(message: InfoMessage) -> Info:
    """Build native snapshot info; missing timestamps mean the epoch."""
    created = message.created_at if message.created_at is not None else Timestamp()
    updated = message.updated_at if message.updated_at is not None else Timestamp()
    return Info(
        kind=kind_from_int(message.kind),
        name=message.name,
        parent=message.parent,
        labels=dict(message.labels),
        created_at=timestamp_to_datetime(created),
        updated_at=timestamp_to_datetime(updated),
    )


def info_to_message(info: Info) -> InfoMessage:
    """Build the wire form of snapshot info."""
    return InfoMessage(
        name=info.name,
        parent=info.parent,
        kind=kind_to_int(info.kind),
        created_at=datetime_to_timestamp(info.created_at),
        updated_at=datetime_to_timestamp(info.updated_at),
        labels=dict(info.labels),
    )