#!/usr/bin/env python3
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Optional

import click

from .base import BaseJob
from ebs_resize.core.aws.ec2 import EC2Manager, create_ec2_manager
from ebs_resize.core.context import OperationContext, PollingSettings
from ebs_resize.core.operations import (
    AttachmentSwapper,
    LifecycleController,
    ResourceResolver,
    SafetyGate,
    SnapshotManager,
    VolumeProvisioner,
)
from ebs_resize.utils.config import ConfigManager


@dataclass
class ResizeMetrics:
    """Timing of each stage of a resize run, in seconds"""

    snapshot_duration: float = 0.0
    volume_duration: float = 0.0
    swap_duration: float = 0.0
    operation_duration: float = 0.0
    stop_requested: bool = False
    start_requested: bool = False


@dataclass
class ResizeResult:
    """Outcome of a resize run."""

    status: str
    instance_id: str
    instance_name: str
    device: Optional[str]
    old_volume_id: str
    old_size: int
    new_size: int
    new_volume_id: Optional[str] = None
    snapshot_id: Optional[str] = None
    correlation_id: Optional[str] = None
    metrics: ResizeMetrics = field(default_factory=ResizeMetrics)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten for reports."""
        data = asdict(self)
        metrics = data.pop("metrics")
        data.update(metrics)
        return data

    def cleanup_message(self) -> str:
        return (
            f"Review and delete manually once the instance is verified: "
            f"snapshot {self.snapshot_id}, old volume {self.old_volume_id} "
            f"({self.old_size} GiB)"
        )


class ResizeVolumeJob(BaseJob):
    """
    Grow an instance's EBS volume Job:

    Stages, in order:
    - resolve instance and volume, confirm the resize
    - check the instance's shutdown behavior
    - stop the instance
    - snapshot the volume
    - restore the snapshot into a larger volume
    - swap the volumes at the same device
    - start the instance

    The snapshot and the old volume are left for the operator to delete.
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        ec2: Optional[EC2Manager] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(
            config_manager=config_manager,
            job_name="resize_volume",
            region=region,
            profile=profile,
        )
        self._ec2 = ec2
        self.confirm = confirm or (lambda prompt: click.confirm(prompt, default=False))
        self.sleep = sleep
        # Resources the operator may need to act on if the run stops early
        self.resources: Dict[str, str] = {}

    @property
    def ec2(self) -> EC2Manager:
        if self._ec2 is None:
            self._ec2 = create_ec2_manager(self.create_aws_session(), self.region)
        return self._ec2

    def build_context(self, force: bool = False) -> OperationContext:
        return OperationContext(
            ec2=self.ec2,
            confirm=(lambda prompt: True) if force else self.confirm,
            polling=PollingSettings.from_config(self.config_manager.get_polling_config()),
            correlation_id=self.correlation_id,
            strict_name_match=self.config_manager.get_strict_name_match(),
            sleep=self.sleep,
            logger=self.logger,
        )

    def execute(
        self,
        size: int,
        instance_name: Optional[str] = None,
        instance_id: Optional[str] = None,
        volume_id: Optional[str] = None,
        dry_run: bool = False,
        force: bool = False,
        **kwargs,
    ) -> ResizeResult:
        """Run the resize workflow; every failure propagates to the caller."""
        operation_start = time.time()
        metrics = ResizeMetrics()
        context = self.build_context(force)
        self.resources = context.resources

        self.logger.info(
            f"[{self.correlation_id}] Starting volume resize - "
            f"Instance: {instance_name or instance_id}, Volume: {volume_id or 'root'}, "
            f"Size: {size} GiB, Region: {self.region}, Dry Run: {dry_run}"
        )

        target = ResourceResolver(context).resolve(
            size,
            instance_name=instance_name,
            instance_id=instance_id,
            volume_id=volume_id,
            confirm=not dry_run,
        )
        context.record("old_volume", target.volume_id)
        SafetyGate(context).verify(target.instance_id)

        result = ResizeResult(
            status="dry_run" if dry_run else "success",
            instance_id=target.instance_id,
            instance_name=target.instance_name,
            device=target.device,
            old_volume_id=target.volume_id,
            old_size=target.volume.size,
            new_size=size,
            correlation_id=self.correlation_id,
            metrics=metrics,
        )

        if dry_run:
            self.logger.info(
                f"[{self.correlation_id}] DRY RUN: Would stop {target.instance_id}, snapshot "
                f"{target.volume_id}, restore it as a {size} GiB "
                f"{target.volume.volume_type} volume in {target.volume.availability_zone}, "
                f"swap it in at {target.device} and start {target.instance_id}"
            )
            metrics.operation_duration = time.time() - operation_start
            return result

        lifecycle = LifecycleController(context)
        metrics.stop_requested = lifecycle.stop(target.instance_id, target.instance_name)

        stage_start = time.time()
        result.snapshot_id = SnapshotManager(context).create_snapshot(
            target.volume_id, target.instance_name, target.instance_id
        )
        metrics.snapshot_duration = time.time() - stage_start

        stage_start = time.time()
        result.new_volume_id = VolumeProvisioner(context).restore_snapshot(
            result.snapshot_id, size, target.volume_id
        )
        metrics.volume_duration = time.time() - stage_start

        stage_start = time.time()
        result.device = AttachmentSwapper(context).swap(
            target.instance_id, target.volume_id, result.new_volume_id
        )
        metrics.swap_duration = time.time() - stage_start

        metrics.start_requested = lifecycle.start(target.instance_id, target.instance_name)
        metrics.operation_duration = time.time() - operation_start

        self.logger.info(
            f"[{self.correlation_id}] Volume resize completed in {metrics.operation_duration:.2f}s - "
            f"{target.instance_name} ({target.instance_id}) now has {result.new_volume_id} "
            f"({size} GiB) at {result.device}"
        )
        self.logger.info(f"[{self.correlation_id}] {result.cleanup_message()}")
        return result
