"""Request and response messages of the snapshots service."""

from __future__ import annotations

from dataclasses import dataclass, field

from google.protobuf.field_mask_pb2 import FieldMask
from google.protobuf.timestamp_pb2 import Timestamp

from snapshotkit.models import Mount


@dataclass
class InfoMessage:
    """Wire form of snapshot info."""

    name: str = ""
    parent: str = ""
    kind: int = 0
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class PrepareSnapshotRequest:
    snapshotter: str = ""
    key: str = ""
    parent: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class PrepareSnapshotResponse:
    mounts: list[Mount] = field(default_factory=list)


@dataclass
class ViewSnapshotRequest:
    snapshotter: str = ""
    key: str = ""
    parent: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class ViewSnapshotResponse:
    mounts: list[Mount] = field(default_factory=list)


@dataclass
class MountsRequest:
    snapshotter: str = ""
    key: str = ""


@dataclass
class MountsResponse:
    mounts: list[Mount] = field(default_factory=list)


@dataclass
class CommitSnapshotRequest:
    snapshotter: str = ""
    name: str = ""
    key: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class RemoveSnapshotRequest:
    snapshotter: str = ""
    key: str = ""


@dataclass
class StatSnapshotRequest:
    snapshotter: str = ""
    key: str = ""


@dataclass
class StatSnapshotResponse:
    info: InfoMessage | None = None


@dataclass
class UpdateSnapshotRequest:
    snapshotter: str = ""
    info: InfoMessage | None = None
    update_mask: FieldMask | None = None


@dataclass
class UpdateSnapshotResponse:
    info: InfoMessage | None = None


@dataclass
class ListSnapshotsRequest:
    snapshotter: str = ""
    filters: list[str] = field(default_factory=list)


@dataclass
class ListSnapshotsResponse:
    info: list[InfoMessage] = field(default_factory=list)


@dataclass
class UsageRequest:
    snapshotter: str = ""
    key: str = ""


@dataclass
class UsageResponse:
    size: int = 0
    inodes: int = 0


@dataclass
class CleanupRequest:
    snapshotter: str = ""