"""Stages of the volume resize workflow, in execution order."""

from .resolver import ResolvedTarget, ResourceResolver
from .safety import SafetyGate
from .lifecycle import LifecycleController
from .snapshots import SnapshotManager
from .volumes import VolumeProvisioner
from .attachments import AttachmentSwapper

__all__ = [
    "ResolvedTarget",
    "ResourceResolver",
    "SafetyGate",
    "LifecycleController",
    "SnapshotManager",
    "VolumeProvisioner",
    "AttachmentSwapper",
]
