"""Swap the old volume for the new one at the same device path."""

from ebs_resize.core.context import OperationContext
from ebs_resize.core.models import AttachmentState
from ebs_resize.utils.exceptions import ResizeError, ResolutionError


class AttachmentSwapper:
    """Detaches the old volume and attaches the new one in its place.

    There is no automatic rollback. When the attach fails after the detach
    completed, the instance has nothing at the device; the error is logged
    with the command that re-attaches the old volume and then re-raised.
    """

    def __init__(self, context: OperationContext):
        self.context = context
        self.ec2 = context.ec2

    def swap(self, instance_id: str, old_volume_id: str, new_volume_id: str) -> str:
        """Replace ``old_volume_id`` with ``new_volume_id``; returns the device path."""
        old_volume = self.ec2.get_volume(old_volume_id)
        device = old_volume.device
        if not device or old_volume.attachment.instance_id != instance_id:
            raise ResolutionError(
                f"Volume {old_volume_id} is not attached to {instance_id}",
                resource_id=old_volume_id,
            )

        self.detach(instance_id, old_volume_id, device)
        try:
            self.attach(instance_id, new_volume_id, device)
        except (ResizeError, KeyboardInterrupt):
            self.context.error(
                f"Instance {instance_id} has no volume at {device}. To recover, re-attach "
                f"the original volume: aws ec2 attach-volume --volume-id {old_volume_id} "
                f"--instance-id {instance_id} --device {device}"
            )
            raise
        return device

    def detach(self, instance_id: str, volume_id: str, device: str) -> None:
        self.context.info(f"Detaching {volume_id} from {instance_id} at {device}")
        self.ec2.detach_volume(volume_id, instance_id, device)

        poller = self.context.poller("detach", self.context.polling.attachment_interval)
        poller.wait_for(
            volume_id,
            fetch=lambda: self.ec2.get_volume(volume_id),
            targets=[AttachmentState.DETACHED.value],
            state_of=lambda vol: vol.attachment_state,
        )
        self.context.info(f"Volume {volume_id} detached")

    def attach(self, instance_id: str, volume_id: str, device: str) -> None:
        self.context.info(f"Attaching {volume_id} to {instance_id} at {device}")
        self.ec2.attach_volume(volume_id, instance_id, device)

        poller = self.context.poller("attach", self.context.polling.attachment_interval)
        poller.wait_for(
            volume_id,
            fetch=lambda: self.ec2.get_volume(volume_id),
            targets=[AttachmentState.ATTACHED.value],
            state_of=lambda vol: vol.attachment_state,
        )
        self.context.info(f"Volume {volume_id} attached at {device}")
