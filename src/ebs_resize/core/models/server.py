"""Simple Server Data Models

Simple data models for the EC2 instance whose volume is resized."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Any
from ebs_resize.utils.ec2_utils import get_display_name, tags_to_dict


class InstanceState(Enum):
    """EC2 Instance states."""
    PENDING = "pending"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
    SHUTTING_DOWN = "shutting-down"
    TERMINATED = "terminated"


class ShutdownBehavior(Enum):
    """Instance-initiated shutdown behaviors."""
    STOP = "stop"
    TERMINATE = "terminate"


@dataclass
class ServerInfo:
    """Simple server information model."""
    instance_id: str
    name: str
    state: str
    instance_type: str = ""
    root_device_name: Optional[str] = None
    availability_zone: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)

    @property
    def is_running(self) -> bool:
        return self.state == InstanceState.RUNNING.value

    @property
    def is_stopped(self) -> bool:
        return self.state == InstanceState.STOPPED.value

    def get_tag(self, key: str, default: str = "") -> str:
        return self.tags.get(key, default)

    @classmethod
    def from_aws_instance(cls, instance: Dict[str, Any]) -> "ServerInfo":
        """Create ServerInfo from AWS instance data."""
        tags = tags_to_dict(instance.get("Tags"))

        return cls(
            instance_id=instance["InstanceId"],
            name=get_display_name(tags, instance["InstanceId"]),
            state=instance.get("State", {}).get("Name", ""),
            instance_type=instance.get("InstanceType", ""),
            root_device_name=instance.get("RootDeviceName"),
            availability_zone=instance.get("Placement", {}).get("AvailabilityZone"),
            tags=tags,
        )
