"""Shim helpers: runtime options, socket connection and timestamps."""

from __future__ import annotations

import json
import socket
import time
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any as AnyType, TypeVar

from google.protobuf.any_pb2 import Any
from google.protobuf.message import Message
from google.protobuf.timestamp_pb2 import Timestamp

from snapshotkit.convert import datetime_to_timestamp

CONFIG_FILE_NAME = "config.json"
OPTIONS_FILE_NAME = "options.json"
RUNTIME_FILE_NAME = "runtime"

_U32_MAX = 0xFFFFFFFF

_T = TypeVar("_T")

_FIELD_TYPES: dict[str, type] = {
    "no_pivot_root": bool,
    "no_new_keyring": bool,
    "shim_cgroup": str,
    "io_uid": int,
    "io_gid": int,
    "binary_name": str,
    "root": str,
    "criu_path": str,
    "systemd_cgroup": bool,
    "criu_image_path": str,
    "criu_work_path": str,
}
_REQUIRED = frozenset(name for name, kind in _FIELD_TYPES.items() if kind is str)


@dataclass(kw_only=True)
class JsonOptions:
    """Runtime options as stored in the JSON options file."""

    no_pivot_root: bool = False
    no_new_keyring: bool = False
    shim_cgroup: str
    io_uid: int = 0
    io_gid: int = 0
    binary_name: str
    root: str
    criu_path: str
    systemd_cgroup: bool = False
    criu_image_path: str
    criu_work_path: str

    @classmethod
    def from_dict(cls, data: Mapping[str, AnyType]) -> JsonOptions:
        """Build options from a mapping, rejecting unknown or missing fields."""
        if not isinstance(data, Mapping):
            raise ValueError("options must be a JSON object")
        for name in data:
            if name not in _FIELD_TYPES:
                raise ValueError(f"unknown field `{name}`")
        for name in _FIELD_TYPES:
            if name in _REQUIRED and name not in data:
                raise ValueError(f"missing field `{name}`")
        for name, value in data.items():
            _check_field(name, value)
        return cls(**data)

    def to_dict(self) -> dict[str, AnyType]:
        return asdict(self)

    @classmethod
    def from_json(cls, text: str | bytes) -> JsonOptions:
        return cls.from_dict(json.loads(text))

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


def _check_field(name: str, value: AnyType) -> None:
    expected = _FIELD_TYPES[name]
    if expected is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"field `{name}` must be an integer")
        if not 0 <= value <= _U32_MAX:
            raise ValueError(f"field `{name}` out of range: {value}")
    elif not isinstance(value, expected):
        raise ValueError(f"field `{name}` must be of type {expected.__name__}")


def connect(address: str) -> socket.socket:
    """Connect to a Unix stream socket; the descriptor is close-on-exec."""
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.connect(address)
    except OSError:
        sock.close()
        raise
    return sock


def timestamp() -> Timestamp:
    """Return the current time as a timestamp."""
    seconds, nanos = divmod(time.time_ns(), 1_000_000_000)
    return Timestamp(seconds=seconds, nanos=nanos)


def convert_to_timestamp(exited_at: datetime | None) -> Timestamp:
    """Convert an optional datetime; None gives the zero timestamp."""
    if exited_at is None:
        return Timestamp()
    return datetime_to_timestamp(exited_at)


def convert_to_any(message: Message) -> Any:
    """Pack a message, using its full name as the type URL."""
    return Any(
        type_url=message.DESCRIPTOR.full_name,
        value=message.SerializeToString(),
    )


def none_if(value: _T, callback: Callable[[_T], bool]) -> _T | None:
    """Return None when callback(value) is true, otherwise value."""
    return None if callback(value) else value


def as_option(text: str) -> str | None:
    """Return None for an empty string, otherwise the string."""
    return text or None