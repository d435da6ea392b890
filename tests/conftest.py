"""Shared fixtures: an in-memory EC2 manager and a scripted operator."""

import os
import tempfile
from dataclasses import replace
from typing import Any, Dict, List, Optional

import pytest

# Keep test log files out of the working tree
os.environ.setdefault("LOG_PATH", tempfile.mkdtemp(prefix="ebs-resize-logs-"))

from ebs_resize.core.context import OperationContext, PollingSettings
from ebs_resize.core.models import (
    AttachmentInfo,
    ServerInfo,
    SnapshotInfo,
    VolumeInfo,
)
from ebs_resize.utils.config import ConfigManager

INSTANCE_ID = "i-0123456789abcdef0"
INSTANCE_NAME = "EC2-X01-0001"
ROOT_VOLUME_ID = "vol-0aaaaaaaaaaaaaaa1"
DATA_VOLUME_ID = "vol-0bbbbbbbbbbbbbbb2"
ZONE = "ap-southeast-2a"

MUTATING_CALLS = {
    "stop_instance",
    "start_instance",
    "create_snapshot",
    "create_volume",
    "create_tags",
    "detach_volume",
    "attach_volume",
}


class FakeEC2Manager:
    """In-memory stand-in for EC2Manager.

    Each mutating call settles the resource in its final state and queues
    the intermediate views a real control plane reports first, so every
    poll loop observes at least one transitional state.
    """

    def __init__(self):
        self.instances: Dict[str, Dict[str, Any]] = {}
        self.volumes: Dict[str, VolumeInfo] = {}
        self.snapshots: Dict[str, SnapshotInfo] = {}
        self.tags: Dict[str, Dict[str, str]] = {}
        self.calls: List[tuple] = []
        self._pending: Dict[str, List[Any]] = {}
        self._counter = 0

    # Setup helpers

    def add_instance(
        self,
        instance_id: str = INSTANCE_ID,
        name: Optional[str] = INSTANCE_NAME,
        state: str = "running",
        shutdown_behavior: str = "stop",
        root_device: str = "/dev/sda1",
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        all_tags = dict(tags or {})
        if name is not None:
            all_tags["Name"] = name
        self.instances[instance_id] = {
            "state": state,
            "shutdown_behavior": shutdown_behavior,
            "root_device": root_device,
            "tags": all_tags,
        }

    def add_volume(
        self,
        volume_id: str,
        size: int,
        device: Optional[str],
        instance_id: str = INSTANCE_ID,
        volume_type: str = "gp3",
        iops: Optional[int] = 3000,
        throughput: Optional[int] = 125,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        attachment = (
            AttachmentInfo(device=device, instance_id=instance_id, state="attached")
            if device
            else None
        )
        self.volumes[volume_id] = VolumeInfo(
            volume_id=volume_id,
            size=size,
            volume_type=volume_type,
            availability_zone=ZONE,
            state="in-use" if attachment else "available",
            iops=iops,
            throughput=throughput,
            attachment=attachment,
            tags=dict(tags or {}),
        )

    def queue(self, resource_id: str, *views: Any) -> None:
        self._pending.setdefault(resource_id, []).extend(views)

    @property
    def mutating_calls(self) -> List[tuple]:
        return [call for call in self.calls if call[0] in MUTATING_CALLS]

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def _next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-0{self._counter:016x}"

    def _pop(self, resource_id: str):
        pending = self._pending.get(resource_id)
        if pending:
            return pending.pop(0)
        return None

    def _server(self, instance_id: str) -> ServerInfo:
        data = self.instances[instance_id]
        return ServerInfo(
            instance_id=instance_id,
            name=data["tags"].get("Name") or instance_id,
            state=data["state"],
            root_device_name=data["root_device"],
            availability_zone=ZONE,
            tags=dict(data["tags"]),
        )

    # EC2Manager interface

    def find_instances_by_name(self, name: str) -> List[ServerInfo]:
        self.calls.append(("find_instances_by_name", name))
        return [
            self._server(instance_id)
            for instance_id, data in self.instances.items()
            if data["tags"].get("Name") == name
            and data["state"] not in ("shutting-down", "terminated")
        ]

    def get_instance(self, instance_id: str) -> Optional[ServerInfo]:
        self.calls.append(("get_instance", instance_id))
        if instance_id not in self.instances:
            return None
        return self._server(instance_id)

    def get_instance_state(self, instance_id: str) -> str:
        self.calls.append(("get_instance_state", instance_id))
        return self._pop(instance_id) or self.instances[instance_id]["state"]

    def get_shutdown_behavior(self, instance_id: str) -> str:
        self.calls.append(("get_shutdown_behavior", instance_id))
        return self.instances[instance_id]["shutdown_behavior"]

    def stop_instance(self, instance_id: str) -> None:
        self.calls.append(("stop_instance", instance_id))
        self.queue(instance_id, "running", "stopping")
        self.instances[instance_id]["state"] = "stopped"

    def start_instance(self, instance_id: str) -> None:
        self.calls.append(("start_instance", instance_id))
        self.queue(instance_id, "pending")
        self.instances[instance_id]["state"] = "running"

    def list_attached_volumes(self, instance_id: str) -> List[VolumeInfo]:
        self.calls.append(("list_attached_volumes", instance_id))
        return [
            volume
            for volume in self.volumes.values()
            if volume.attachment and volume.attachment.instance_id == instance_id
        ]

    def get_volume(self, volume_id: str) -> VolumeInfo:
        self.calls.append(("get_volume", volume_id))
        return self._pop(volume_id) or self.volumes[volume_id]

    def create_volume(
        self,
        snapshot_id: str,
        size: int,
        availability_zone: str,
        volume_type: str,
        iops: Optional[int] = None,
        throughput: Optional[int] = None,
    ) -> VolumeInfo:
        self.calls.append(
            ("create_volume", snapshot_id, size, availability_zone, volume_type, iops, throughput)
        )
        volume_id = self._next_id("vol")
        volume = VolumeInfo(
            volume_id=volume_id,
            size=size,
            volume_type=volume_type,
            availability_zone=availability_zone,
            state="available",
            iops=iops,
            throughput=throughput,
        )
        self.volumes[volume_id] = volume
        self.queue(volume_id, replace(volume, state="creating"))
        return replace(volume, state="creating")

    def detach_volume(self, volume_id: str, instance_id: str, device: str) -> None:
        self.calls.append(("detach_volume", volume_id, instance_id, device))
        volume = self.volumes[volume_id]
        self.queue(
            volume_id,
            replace(volume, attachment=replace(volume.attachment, state="detaching")),
        )
        self.volumes[volume_id] = replace(volume, state="available", attachment=None)

    def attach_volume(self, volume_id: str, instance_id: str, device: str) -> None:
        self.calls.append(("attach_volume", volume_id, instance_id, device))
        volume = self.volumes[volume_id]
        self.queue(
            volume_id,
            replace(
                volume,
                attachment=AttachmentInfo(device=device, instance_id=instance_id, state="attaching"),
            ),
        )
        self.volumes[volume_id] = replace(
            volume,
            state="in-use",
            attachment=AttachmentInfo(device=device, instance_id=instance_id, state="attached"),
        )

    def create_snapshot(self, volume_id: str, description: str) -> SnapshotInfo:
        self.calls.append(("create_snapshot", volume_id, description))
        snapshot_id = self._next_id("snap")
        snapshot = SnapshotInfo(
            snapshot_id=snapshot_id,
            volume_id=volume_id,
            state="completed",
            progress="100%",
            description=description,
        )
        self.snapshots[snapshot_id] = snapshot
        self.queue(
            snapshot_id,
            replace(snapshot, state="pending", progress="0%"),
            replace(snapshot, state="pending", progress="45%"),
        )
        return replace(snapshot, state="pending", progress="")

    def get_snapshot(self, snapshot_id: str) -> SnapshotInfo:
        self.calls.append(("get_snapshot", snapshot_id))
        return self._pop(snapshot_id) or self.snapshots[snapshot_id]

    def create_tags(self, resource_id: str, tags: Dict[str, str]) -> None:
        if not tags:
            return
        self.calls.append(("create_tags", resource_id, dict(tags)))
        self.tags.setdefault(resource_id, {}).update(tags)


class ScriptedConfirm:
    """Answers prompts from a script and remembers what was asked."""

    def __init__(self, *answers: bool, default: bool = True):
        self.answers = list(answers)
        self.default = default
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if self.answers:
            return self.answers.pop(0)
        return self.default


@pytest.fixture
def fake_ec2():
    ec2 = FakeEC2Manager()
    ec2.add_instance(tags={"Environment": "prod", "Owner": "platform"})
    ec2.add_volume(ROOT_VOLUME_ID, 20, "/dev/sda1", tags={"Name": "root-disk", "Backup": "daily"})
    ec2.add_volume(DATA_VOLUME_ID, 100, "/dev/sdf", volume_type="io2", iops=5000, throughput=None)
    return ec2


@pytest.fixture
def confirm():
    return ScriptedConfirm()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def context(fake_ec2, confirm, sleeps):
    return OperationContext(
        ec2=fake_ec2,
        confirm=confirm,
        polling=PollingSettings(),
        correlation_id="test0001",
        sleep=sleeps.append,
    )


@pytest.fixture
def config_dir(tmp_path):
    """An empty config directory; every setting falls back to its default."""
    directory = tmp_path / "configs"
    directory.mkdir()
    return directory


@pytest.fixture
def config_manager(config_dir):
    return ConfigManager(config_dir)
