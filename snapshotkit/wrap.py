"""Serve snapshot service requests by delegating to a Snapshotter."""

from __future__ import annotations

import contextlib
import enum
from collections.abc import AsyncIterator, Iterator

from snapshotkit.convert import ConversionError, info_from_message, info_to_message
from snapshotkit.messages import (
    CleanupRequest,
    CommitSnapshotRequest,
    ListSnapshotsRequest,
    ListSnapshotsResponse,
    MountsRequest,
    MountsResponse,
    PrepareSnapshotRequest,
    PrepareSnapshotResponse,
    RemoveSnapshotRequest,
    StatSnapshotRequest,
    StatSnapshotResponse,
    UpdateSnapshotRequest,
    UpdateSnapshotResponse,
    UsageRequest,
    UsageResponse,
    ViewSnapshotRequest,
    ViewSnapshotResponse,
)
from snapshotkit.models import Snapshotter

LIST_BATCH_SIZE = 100


class StatusCode(enum.IntEnum):
    """Status codes of the RPC protocol."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


class Status(Exception):
    """An RPC error carrying a status code and a message."""

    def __init__(self, code: StatusCode, message: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"Status(code={self.code.name}, message={self.message!r})"

    @classmethod
    def internal(cls, message: str) -> Status:
        return cls(StatusCode.INTERNAL, message)

    @classmethod
    def invalid_argument(cls, message: str) -> Status:
        return cls(StatusCode.INVALID_ARGUMENT, message)

    @classmethod
    def failed_precondition(cls, message: str) -> Status:
        return cls(StatusCode.FAILED_PRECONDITION, message)


def to_status(error: BaseException) -> Status:
    """Turn an exception raised by a snapshotter into a status."""
    if isinstance(error, Status):
        return error
    if isinstance(error, ConversionError):
        return Status.internal(str(error))
    return Status.internal(str(error) or type(error).__name__)


@contextlib.contextmanager
def _reporting() -> Iterator[None]:
    try:
        yield
    except Status:
        raise
    except Exception as error:
        raise to_status(error) from error


class Wrapper:
    """Answers snapshot service requests using a snapshotter."""

    def __init__(self, snapshotter: Snapshotter) -> None:
        self.snapshotter = snapshotter

    async def prepare(self, request: PrepareSnapshotRequest) -> PrepareSnapshotResponse:
        with _reporting():
            mounts = await self.snapshotter.prepare(
                request.key, request.parent, dict(request.labels)
            )
        return PrepareSnapshotResponse(mounts=list(mounts))

    async def view(self, request: ViewSnapshotRequest) -> ViewSnapshotResponse:
        with _reporting():
            mounts = await self.snapshotter.view(
                request.key, request.parent, dict(request.labels)
            )
        return ViewSnapshotResponse(mounts=list(mounts))

    async def mounts(self, request: MountsRequest) -> MountsResponse:
        with _reporting():
            mounts = await self.snapshotter.mounts(request.key)
        return MountsResponse(mounts=list(mounts))

    async def commit(self, request: CommitSnapshotRequest) -> None:
        with _reporting():
            await self.snapshotter.commit(request.name, request.key, dict(request.labels))

    async def remove(self, request: RemoveSnapshotRequest) -> None:
        with _reporting():
            await self.snapshotter.remove(request.key)

    async def stat(self, request: StatSnapshotRequest) -> StatSnapshotResponse:
        with _reporting():
            info = await self.snapshotter.stat(request.key)
            message = info_to_message(info)
        return StatSnapshotResponse(info=message)

    async def update(self, request: UpdateSnapshotRequest) -> UpdateSnapshotResponse:
        if request.info is None:
            raise Status.failed_precondition("info is required")
        try:
            info = info_from_message(request.info)
        except ConversionError as error:
            raise Status.invalid_argument(f"Failed to convert timestamp: {error}") from error

        fields = list(request.update_mask.paths) if request.update_mask is not None else None

        with _reporting():
            updated = await self.snapshotter.update(info, fields)
            message = info_to_message(updated)
        return UpdateSnapshotResponse(info=message)

    async def list(self, request: ListSnapshotsRequest) -> AsyncIterator[ListSnapshotsResponse]:
        """Yield the snapshots in batches of at most LIST_BATCH_SIZE."""
        with _reporting():
            infos = aiter(self.snapshotter.list(request.snapshotter, list(request.filters)))
        batch = []
        while True:
            with _reporting():
                try:
                    info = await anext(infos)
                except StopAsyncIteration:
                    break
                batch.append(info_to_message(info))
            if len(batch) >= LIST_BATCH_SIZE:
                yield ListSnapshotsResponse(info=batch)
                batch = []
        if batch:
            yield ListSnapshotsResponse(info=batch)

    async def usage(self, request: UsageRequest) -> UsageResponse:
        with _reporting():
            usage = await self.snapshotter.usage(request.key)
        return UsageResponse(size=usage.size, inodes=usage.inodes)

    async def cleanup(self, request: CleanupRequest) -> None:
        with _reporting():
            await self.snapshotter.clear()


def server(snapshotter: Snapshotter) -> Wrapper:
    """Create a service handler for any snapshotter."""
    return Wrapper(snapshotter)