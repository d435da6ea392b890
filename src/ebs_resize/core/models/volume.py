"""Simple data models for AWS EBS volume management."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Any
from ebs_resize.utils.ec2_utils import tags_to_dict


class VolumeState(Enum):
    """EBS Volume states."""
    CREATING = "creating"
    AVAILABLE = "available"
    IN_USE = "in-use"
    DELETING = "deleting"
    DELETED = "deleted"
    ERROR = "error"


class AttachmentState(Enum):
    """EBS Volume attachment states."""
    ATTACHING = "attaching"
    ATTACHED = "attached"
    DETACHING = "detaching"
    DETACHED = "detached"


@dataclass
class AttachmentInfo:
    """Attachment of a volume to an instance at a device path."""
    device: str
    instance_id: str
    state: str

    @classmethod
    def from_aws_attachment(cls, attachment: Dict[str, Any]) -> "AttachmentInfo":
        return cls(
            device=attachment.get("Device", ""),
            instance_id=attachment.get("InstanceId", ""),
            state=attachment.get("State", ""),
        )


@dataclass
class VolumeInfo:
    """Simple volume information model."""
    volume_id: str
    size: int
    volume_type: str
    availability_zone: str
    state: str
    iops: Optional[int] = None
    throughput: Optional[int] = None
    encrypted: bool = False
    attachment: Optional[AttachmentInfo] = None
    tags: Dict[str, str] = field(default_factory=dict)

    @property
    def is_available(self) -> bool:
        return self.state == VolumeState.AVAILABLE.value

    @property
    def device(self) -> Optional[str]:
        return self.attachment.device if self.attachment else None

    @property
    def attachment_state(self) -> str:
        """Attachment state, or ``detached`` when the volume has no attachment."""
        if self.attachment is None:
            return AttachmentState.DETACHED.value
        return self.attachment.state

    def get_tag(self, key: str, default: str = "") -> str:
        return self.tags.get(key, default)

    @classmethod
    def from_aws_volume(cls, volume: Dict[str, Any]) -> "VolumeInfo":
        """Create VolumeInfo from AWS volume data."""
        # A volume has at most one active attachment
        attachments = volume.get("Attachments") or []
        attachment = (
            AttachmentInfo.from_aws_attachment(attachments[0]) if attachments else None
        )

        return cls(
            volume_id=volume["VolumeId"],
            size=volume.get("Size", 0),
            volume_type=volume.get("VolumeType", ""),
            availability_zone=volume.get("AvailabilityZone", ""),
            state=volume.get("State", ""),
            iops=volume.get("Iops"),
            throughput=volume.get("Throughput"),
            encrypted=volume.get("Encrypted", False),
            attachment=attachment,
            tags=tags_to_dict(volume.get("Tags")),
        )
