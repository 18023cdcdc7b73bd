# snapshotkit

Building blocks for writing a container snapshotter in Python.

A snapshotter allocates, snapshots and mounts filesystem changesets. Every
snapshot has a parent (the empty string stands for "no parent"), and a diff
between a snapshot and its parent forms a classic image layer. The package
contains:

- `snapshotkit.models`: `Kind`, `Info`, `Usage` (which supports `+=`),
  `Mount`, and the abstract `Snapshotter` base class whose asynchronous
  methods you implement.
- `snapshotkit.messages`: the request and response messages of the
  snapshots service as dataclasses, such as `PrepareSnapshotRequest`,
  `StatSnapshotResponse`, `UpdateSnapshotRequest` and
  `ListSnapshotsResponse`. Timestamps and update masks are protobuf
  `Timestamp` and `FieldMask` values.
- `snapshotkit.convert`: conversions between native data and wire messages:
  `kind_to_int`, `kind_from_int`, `datetime_to_timestamp`,
  `timestamp_to_datetime`, `info_to_message` and `info_from_message`.
- `snapshotkit.wrap`: `server(snapshotter)` wraps any `Snapshotter` in a
  `Wrapper` that takes request messages, calls your implementation and
  returns response messages, reporting failures as a `Status` exception
  carrying a `StatusCode`.
- `snapshotkit.example`: `ExampleSnapshotter`, a reference implementation
  that logs each call and returns default or empty results.
- `snapshotkit.util`: runtime option files (`JsonOptions`), a Unix socket
  `connect` helper, timestamp helpers and small option helpers.

## Implementing a snapshotter

Subclass `Snapshotter` and implement its methods. All are coroutines except
`list`, which returns an asynchronous iterator of `Info`; an async generator
does the job.

```python
from snapshotkit.models import Info, Kind, Snapshotter, Usage


class MemorySnapshotter(Snapshotter):
    def __init__(self):
        self.snapshots = {}

    async def stat(self, key):
        return self.snapshots[key]

    async def update(self, info, fieldpaths):
        self.snapshots[info.name] = info
        return info

    async def usage(self, key):
        return Usage()

    async def mounts(self, key):
        return []

    async def prepare(self, key, parent, labels):
        self.snapshots[key] = Info(kind=Kind.ACTIVE, name=key, parent=parent, labels=dict(labels))
        return []

    async def view(self, key, parent, labels):
        self.snapshots[key] = Info(kind=Kind.VIEW, name=key, parent=parent, labels=dict(labels))
        return []

    async def commit(self, name, key, labels):
        active = self.snapshots.pop(key)
        self.snapshots[name] = Info(
            kind=Kind.COMMITTED, name=name, parent=active.parent, labels=dict(labels)
        )

    async def remove(self, key):
        del self.snapshots[key]

    async def list(self, snapshotter, filters):
        for info in list(self.snapshots.values()):
            yield info
```

`clear()` has a default implementation that only yields to the event loop
once and succeeds; override it if your snapshotter defers resource cleanup.

## Handling requests

```python
import asyncio

from snapshotkit.messages import ListSnapshotsRequest, PrepareSnapshotRequest
from snapshotkit.wrap import server


async def main():
    service = server(MemorySnapshotter())
    await service.prepare(PrepareSnapshotRequest(key="layer-1", parent=""))
    async for batch in service.list(ListSnapshotsRequest()):
        print([info.name for info in batch.info])


asyncio.run(main())
```

`Wrapper.list` yields `ListSnapshotsResponse` batches of at most 100
entries (`LIST_BATCH_SIZE`), and yields nothing when there are no snapshots.

Errors:

- Any exception raised by your snapshotter is turned into a `Status` by
  `to_status`: a `Status` passes through unchanged, anything else becomes
  `StatusCode.INTERNAL` with the exception's message.
- `Wrapper.update` raises `FAILED_PRECONDITION` ("info is required") when
  the request has no info, and `INVALID_ARGUMENT` when the info cannot be
  converted (an unknown kind or an out-of-range timestamp).

## Conversions

```python
from snapshotkit.convert import info_from_message, info_to_message, kind_from_int, kind_to_int
from snapshotkit.models import Info, Kind

assert kind_to_int(Kind.COMMITTED) == 3
assert kind_from_int(1) is Kind.VIEW
message = info_to_message(Info(name="base"))
assert info_from_message(message).name == "base"
```

An integer outside 0–3 raises `InvalidEnumValueError`; a timestamp that
cannot be represented as a `datetime` raises `TimestampError`. Both derive
from `ConversionError`. Missing timestamps in an `InfoMessage` are read as
the Unix epoch; naive datetimes are taken as UTC.

## Shim utilities

```python
from snapshotkit.util import JsonOptions, as_option, none_if, timestamp

options = JsonOptions.from_json(text)   # unknown or missing fields raise ValueError
text = options.to_json()

now = timestamp()                        # protobuf Timestamp for the current time
as_option("")                            # None
none_if(0, lambda v: v == 0)             # None
```

`convert_to_timestamp` turns an optional `datetime` into a `Timestamp` (zero
for `None`), and `convert_to_any` packs a protobuf message into an `Any`
with the message's full name as its type URL. `connect(address)` returns a
connected Unix stream socket. The file-name constants `CONFIG_FILE_NAME`,
`OPTIONS_FILE_NAME` and `RUNTIME_FILE_NAME` are also provided.

## What the package does not do

There is no network server and no command to start one. `Wrapper` handles
request message objects in-process; binding a socket, registering the
service with an RPC framework and encoding the dataclass messages on the
wire are left to the application.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.