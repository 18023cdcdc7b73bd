"""Native snapshot types and the snapshotter interface."""

from __future__ import annotations

import abc
import asyncio
import enum
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import datetime, timezone


class Kind(enum.Enum):
    """Snapshot kinds."""

    UNKNOWN = "Unknown"
    VIEW = "View"
    ACTIVE = "Active"
    COMMITTED = "Committed"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Mount:
    """A filesystem mount that makes a snapshot available."""

    type: str = ""
    source: str = ""
    target: str = ""
    options: list[str] = field(default_factory=list)


@dataclass
class Info:
    """Information about a particular snapshot."""

    kind: Kind = Kind.UNKNOWN
    name: str = ""
    parent: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


@dataclass
class Usage:
    """Disk resources consumed by a snapshot itself, excluding its parents."""

    inodes: int = 0
    size: int = 0

    def __iadd__(self, other: Usage) -> Usage:
        if not isinstance(other, Usage):
            return NotImplemented
        self.inodes += other.inodes
        self.size += other.size
        return self


class Snapshotter(abc.ABC):
    """Allocates, snapshots and mounts filesystem changesets.

    Every snapshot has a parent; the empty parent is the empty string.
    Exceptions raised by an implementation are reported to clients as
    errors by the server wrapper.
    """

    @abc.abstractmethod
    async def stat(self, key: str) -> Info:
        """Return the info for an active or committed snapshot."""

    @abc.abstractmethod
    async def update(self, info: Info, fieldpaths: list[str] | None) -> Info:
        """Update the mutable properties of a snapshot and return its info."""

    @abc.abstractmethod
    async def usage(self, key: str) -> Usage:
        """Return the resource usage of a snapshot, excluding its parents."""

    @abc.abstractmethod
    async def mounts(self, key: str) -> list[Mount]:
        """Return the mounts of the active snapshot identified by key."""

    @abc.abstractmethod
    async def prepare(self, key: str, parent: str, labels: dict[str, str]) -> list[Mount]:
        """Create an active snapshot descending from parent."""

    @abc.abstractmethod
    async def view(self, key: str, parent: str, labels: dict[str, str]) -> list[Mount]:
        """Create a read-only view on parent tracked by key."""

    @abc.abstractmethod
    async def commit(self, name: str, key: str, labels: dict[str, str]) -> None:
        """Capture the changes of key into a committed snapshot called name."""

    @abc.abstractmethod
    async def remove(self, key: str) -> None:
        """Remove the committed or active snapshot identified by key."""

    async def clear(self) -> None:
        """Perform deferred resource cleanup.

        Snapshotters without deferred cleanup have nothing to release, so the
        default only yields control to the event loop once and succeeds.
        """
        await asyncio.sleep(0)

    @abc.abstractmethod
    def list(self, snapshotter: str, filters: list[str]) -> AsyncIterator[Info]:
        """Return an asynchronous iterator over all matching snapshots."""