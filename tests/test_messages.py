from google.protobuf.field_mask_pb2 import FieldMask
from google.protobuf.timestamp_pb2 import Timestamp

from snapshotkit.messages import (
    CleanupRequest,
    InfoMessage,
    ListSnapshotsResponse,
    PrepareSnapshotRequest,
    PrepareSnapshotResponse,
    StatSnapshotResponse,
    UpdateSnapshotRequest,
    UsageResponse,
)
from snapshotkit.models import Mount


def test_info_message_defaults():
    msg = InfoMessage()
    assert msg.kind == 0
    assert msg.created_at is None
    assert msg.updated_at is None
    assert msg.labels == {}


def test_info_message_equality_with_timestamps():
    first = InfoMessage(name="a", created_at=Timestamp(seconds=7))
    second = InfoMessage(name="a", created_at=Timestamp(seconds=7))
    third = InfoMessage(name="a", created_at=Timestamp(seconds=8))
    assert first == second
    assert not first == third


def test_request_labels_not_shared():
    first = PrepareSnapshotRequest(key="k")
    second = PrepareSnapshotRequest(key="k")
    first.labels["x"] = "y"
    assert second.labels == {}
    assert first.labels == {"x": "y"}


def test_prepare_response_holds_mounts():
    mount = Mount(type="bind", source="/src", options=["rbind"])
    response = PrepareSnapshotResponse(mounts=[mount])
    assert response.mounts[0].options == ["rbind"]
    assert PrepareSnapshotResponse().mounts == []


def test_update_request_mask_paths():
    request = UpdateSnapshotRequest(
        info=InfoMessage(name="n"), update_mask=FieldMask(paths=["labels.a"])
    )
    assert list(request.update_mask.paths) == ["labels.a"]
    assert UpdateSnapshotRequest().update_mask is None


def test_stat_and_list_responses():
    info = InfoMessage(name="snap")
    assert StatSnapshotResponse(info=info).info.name == "snap"
    assert ListSnapshotsResponse().info == []
    assert ListSnapshotsResponse(info=[info]).info == [info]


def test_usage_and_cleanup():
    usage = UsageResponse(size=4096, inodes=2)
    assert (usage.size, usage.inodes) == (4096, 2)
    assert CleanupRequest().snapshotter == ""