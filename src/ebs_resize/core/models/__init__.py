"""Simple data models for AWS resources."""

# Server models
from .server import (
    InstanceState,
    ShutdownBehavior,
    ServerInfo,
)

# Volume models
from .volume import (
    AttachmentInfo,
    AttachmentState,
    VolumeInfo,
    VolumeState,
)

# Snapshot models
from .snapshot import (
    SnapshotState,
    SnapshotInfo,
)

# Tag models
from .tags import (
    TagSet,
)

__all__ = [
    # Server models
    "InstanceState",
    "ShutdownBehavior",
    "ServerInfo",
    # Volume models
    "AttachmentInfo",
    "AttachmentState",
    "VolumeInfo",
    "VolumeState",
    # Snapshot models
    "SnapshotState",
    "SnapshotInfo",
    # Tag models
    "TagSet",
]
