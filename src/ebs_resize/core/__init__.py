"""Core volume resize modules."""

from .aws import EC2Manager, create_ec2_manager
from .models import (
    ServerInfo,
    VolumeInfo,
    AttachmentInfo,
    SnapshotInfo,
    TagSet,
    InstanceState,
    ShutdownBehavior,
    VolumeState,
    AttachmentState,
    SnapshotState,
)
from .processors import CSVReportGenerator, PollResult, StatePoller
from .context import OperationContext, PollingSettings

__all__ = [
    # AWS Managers
    "EC2Manager",
    "create_ec2_manager",
    # Models
    "ServerInfo",
    "VolumeInfo",
    "AttachmentInfo",
    "SnapshotInfo",
    "TagSet",
    # Enums
    "InstanceState",
    "ShutdownBehavior",
    "VolumeState",
    "AttachmentState",
    "SnapshotState",
    # Processors
    "CSVReportGenerator",
    "PollResult",
    "StatePoller",
    # Context
    "OperationContext",
    "PollingSettings",
]
