from datetime import datetime, timezone

import pytest

from snapshotkit.models import Info, Kind, Mount, Snapshotter, Usage


class _Minimal(Snapshotter):
    def __init__(self, infos=()):
        self.infos = list(infos)

    async def stat(self, key):
        return Info(name=key)

    async def update(self, info, fieldpaths):
        return info

    async def usage(self, key):
        return Usage()

    async def mounts(self, key):
        return []

    async def prepare(self, key, parent, labels):
        return []

    async def view(self, key, parent, labels):
        return []

    async def commit(self, name, key, labels):
        return None

    async def remove(self, key):
        return None

    async def list(self, snapshotter, filters):
        for info in self.infos:
            yield info


def test_info_defaults():
    before = datetime.now(timezone.utc)
    info = Info()
    after = datetime.now(timezone.utc)
    assert info.kind is Kind.UNKNOWN
    assert info.name == ""
    assert info.parent == ""
    assert info.labels == {}
    assert before <= info.created_at <= after
    assert before <= info.updated_at <= after


def test_info_labels_not_shared():
    first = Info()
    second = Info()
    first.labels["a"] = "b"
    assert second.labels == {}


def test_mount_defaults_independent():
    first = Mount()
    second = Mount()
    first.options.append("ro")
    assert second.options == []
    assert first.options == ["ro"]


def test_usage_iadd_accumulates_in_place():
    usage = Usage(inodes=1, size=10)
    original = usage
    usage += Usage(inodes=2, size=20)
    assert usage is original
    assert usage == Usage(inodes=3, size=30)


def test_usage_iadd_rejects_other_types():
    usage = Usage(inodes=4, size=40)
    with pytest.raises(TypeError):
        usage += 5
    assert usage == Usage(inodes=4, size=40)


def test_snapshotter_is_abstract():
    with pytest.raises(TypeError):
        Snapshotter()


@pytest.mark.asyncio
async def test_default_clear_returns_none():
    snap = _Minimal()
    assert await Snapshotter.clear(snap) is None


@pytest.mark.asyncio
async def test_subclass_list_iterates():
    expected = [Info(name="only"), Info(name="second", kind=Kind.VIEW)]
    snap = _Minimal(expected)
    listed = [info async for info in snap.list("fs", [])]
    assert [(info.name, info.kind) for info in listed] == [
        ("only", Kind.UNKNOWN),
        ("second", Kind.VIEW),
    ]