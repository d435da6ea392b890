"""Restore the snapshot into a larger volume in the source's zone."""

from ebs_resize.core.constants import PROVISIONED_IOPS_TYPES, PROVISIONED_THROUGHPUT_TYPES
from ebs_resize.core.context import OperationContext
from ebs_resize.core.models import TagSet, VolumeState


class VolumeProvisioner:
    """Creates the replacement volume and polls it until available."""

    def __init__(self, context: OperationContext):
        self.context = context
        self.ec2 = context.ec2

    def restore_snapshot(self, snapshot_id: str, size: int, source_volume_id: str) -> str:
        """Create a ``size`` GiB volume from ``snapshot_id`` and return its ID.

        Zone and type come from the source volume so the new volume can be
        attached to the same instance; provisioned IOPS and throughput carry
        over for the types that have them.
        """
        source = self.ec2.get_volume(source_volume_id)
        iops = source.iops if source.volume_type in PROVISIONED_IOPS_TYPES else None
        throughput = (
            source.throughput if source.volume_type in PROVISIONED_THROUGHPUT_TYPES else None
        )

        volume = self.ec2.create_volume(
            snapshot_id,
            size,
            availability_zone=source.availability_zone,
            volume_type=source.volume_type,
            iops=iops,
            throughput=throughput,
        )
        volume_id = volume.volume_id
        self.context.record("new_volume", volume_id)
        self.context.info(
            f"Volume {volume_id} ({size} GiB {source.volume_type}) creating in "
            f"{source.availability_zone} from {snapshot_id}"
        )

        tags = TagSet(source.tags).copy()
        self.ec2.create_tags(volume_id, tags.tags)
        self.context.info(f"Copied {len(tags)} tags from {source_volume_id} to {volume_id}")

        poller = self.context.poller("volume", self.context.polling.volume_interval)
        poller.wait_for(
            volume_id,
            fetch=lambda: self.ec2.get_volume(volume_id),
            targets=[VolumeState.AVAILABLE.value],
            failures=[VolumeState.ERROR.value],
            state_of=lambda vol: vol.state,
        )
        self.context.info(f"Volume {volume_id} is available")
        return volume_id
