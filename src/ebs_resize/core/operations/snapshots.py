"""Snapshot the source volume and wait for it to complete."""

from ebs_resize.core.context import OperationContext
from ebs_resize.core.models import SnapshotInfo, SnapshotState, TagSet
from ebs_resize.utils.exceptions import ResolutionError


class SnapshotManager:
    """Creates the restore snapshot, tags it and polls it to completion."""

    def __init__(self, context: OperationContext):
        self.context = context
        self.ec2 = context.ec2

    @staticmethod
    def build_description(instance_name: str, instance_id: str) -> str:
        return f"{instance_name} ({instance_id}) volume resize snapshot"

    def create_snapshot(self, volume_id: str, instance_name: str, instance_id: str) -> str:
        """Snapshot ``volume_id`` and return the completed snapshot's ID.

        Instance tags are copied onto the snapshot with Name carried as
        ``ec2Name``; the snapshot's own Name is ``snap-<volume_id>``.
        """
        description = self.build_description(instance_name, instance_id)
        snapshot = self.ec2.create_snapshot(volume_id, description)
        snapshot_id = snapshot.snapshot_id
        self.context.record("snapshot", snapshot_id)
        self.context.info(f"Snapshot {snapshot_id} of {volume_id} started: {description}")

        instance = self.ec2.get_instance(instance_id)
        if instance is None:
            raise ResolutionError(f"Instance {instance_id} not found", resource_id=instance_id)
        source_tags = TagSet(instance.tags)
        snapshot_tags = source_tags.for_snapshot(volume_id)
        self.ec2.create_tags(snapshot_id, snapshot_tags.tags)
        self.context.info(f"Tagged snapshot {snapshot_id} with {len(snapshot_tags)} tags")

        poller = self.context.poller("snapshot", self.context.polling.snapshot_interval)
        poller.wait_for(
            snapshot_id,
            fetch=lambda: self.ec2.get_snapshot(snapshot_id),
            targets=[SnapshotState.COMPLETED.value],
            failures=[SnapshotState.ERROR.value],
            state_of=lambda snap: snap.state,
            describe=self._progress,
        )
        self.context.info(f"Snapshot {snapshot_id} completed")
        return snapshot_id

    @staticmethod
    def _progress(snapshot: SnapshotInfo) -> str:
        return f"progress {snapshot.progress or '0%'}"
