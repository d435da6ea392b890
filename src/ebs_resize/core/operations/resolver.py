"""Resolve the instance and volume a resize run operates on."""

from dataclasses import dataclass
from typing import Optional
from ebs_resize.core.context import OperationContext
from ebs_resize.core.models import ServerInfo, VolumeInfo
from ebs_resize.utils.ec2_utils import format_size
from ebs_resize.utils.exceptions import CLIError, PreconditionError, ResolutionError


@dataclass
class ResolvedTarget:
    """The instance, its volume to replace and the requested size."""

    instance: ServerInfo
    volume: VolumeInfo
    requested_size: int

    @property
    def instance_id(self) -> str:
        return self.instance.instance_id

    @property
    def instance_name(self) -> str:
        return self.instance.name

    @property
    def volume_id(self) -> str:
        return self.volume.volume_id

    @property
    def device(self) -> Optional[str]:
        return self.volume.device

    def describe(self) -> str:
        return (
            f"volume {self.volume_id} ({format_size(self.volume.size)} "
            f"{self.volume.volume_type} at {self.device}) on "
            f"{self.instance_name} ({self.instance_id})"
        )


class ResourceResolver:
    """Turns operator input into a canonical instance and volume."""

    def __init__(self, context: OperationContext):
        self.context = context
        self.ec2 = context.ec2

    def resolve_instance(
        self, instance_name: Optional[str] = None, instance_id: Optional[str] = None
    ) -> ServerInfo:
        """Find the instance by Name tag or by ID."""
        if bool(instance_name) == bool(instance_id):
            raise CLIError("Exactly one of instance name or instance ID must be given")

        if instance_name:
            matches = self.ec2.find_instances_by_name(instance_name)
            if not matches:
                raise ResolutionError(
                    f"No instance found with Name tag '{instance_name}'",
                    resource_id=instance_name,
                )
            if len(matches) > 1:
                ids = ", ".join(server.instance_id for server in matches)
                if self.context.strict_name_match:
                    raise ResolutionError(
                        f"Name tag '{instance_name}' matches {len(matches)} instances: {ids}",
                        resource_id=instance_name,
                    )
                self.context.warning(
                    f"Name tag '{instance_name}' matches {len(matches)} instances ({ids}); "
                    f"using {matches[0].instance_id}"
                )
            instance = matches[0]
        else:
            instance = self.ec2.get_instance(instance_id)
            if instance is None:
                raise ResolutionError(
                    f"Instance {instance_id} not found", resource_id=instance_id
                )

        self.context.info(
            f"Resolved instance {instance.name} ({instance.instance_id}), state {instance.state}"
        )
        return instance

    def resolve_volume(self, instance: ServerInfo, volume_id: Optional[str] = None) -> VolumeInfo:
        """Pick the explicit volume, or the one attached at the root device."""
        volumes = self.ec2.list_attached_volumes(instance.instance_id)

        if volume_id:
            for volume in volumes:
                if volume.volume_id == volume_id:
                    return volume
            raise ResolutionError(
                f"Volume {volume_id} is not attached to {instance.name} ({instance.instance_id})",
                resource_id=volume_id,
            )

        for volume in volumes:
            if instance.root_device_name and volume.device == instance.root_device_name:
                return volume
        raise ResolutionError(
            f"No root volume found at {instance.root_device_name} on "
            f"{instance.name} ({instance.instance_id})",
            resource_id=instance.instance_id,
        )

    @staticmethod
    def check_size(volume: VolumeInfo, size: int) -> None:
        """The new size must be strictly larger than the current one."""
        if size <= volume.size:
            raise PreconditionError(
                f"Requested size {format_size(size)} must be larger than the current "
                f"{format_size(volume.size)} of {volume.volume_id}; minimum is "
                f"{format_size(volume.size + 1)}",
                resource_id=volume.volume_id,
            )

    def resolve(
        self,
        size: int,
        instance_name: Optional[str] = None,
        instance_id: Optional[str] = None,
        volume_id: Optional[str] = None,
        confirm: bool = True,
    ) -> ResolvedTarget:
        """Resolve instance and volume, check the size and confirm the resize."""
        instance = self.resolve_instance(instance_name, instance_id)
        volume = self.resolve_volume(instance, volume_id)
        self.check_size(volume, size)

        target = ResolvedTarget(instance=instance, volume=volume, requested_size=size)
        self.context.info(f"Target is {target.describe()}")

        if confirm:
            self.context.require_confirmation(
                "resize volume",
                f"Replace {target.describe()} with a new {format_size(size)} volume?",
            )
        return target
