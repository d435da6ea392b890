"""Shutdown-behavior check run before the instance is stopped."""

from ebs_resize.core.constants import SAFE_SHUTDOWN_BEHAVIOR
from ebs_resize.core.context import OperationContext
from ebs_resize.utils.exceptions import PreconditionError


class SafetyGate:
    """Refuses to continue unless an OS shutdown stops the instance."""

    def __init__(self, context: OperationContext):
        self.context = context

    def verify(self, instance_id: str) -> str:
        behavior = self.context.ec2.get_shutdown_behavior(instance_id)
        if behavior != SAFE_SHUTDOWN_BEHAVIOR:
            raise PreconditionError(
                f"Instance {instance_id} has shutdown behavior '{behavior}'; stopping it "
                f"could destroy its volumes. Set it to '{SAFE_SHUTDOWN_BEHAVIOR}' first",
                resource_id=instance_id,
            )
        self.context.info(f"Instance {instance_id} shutdown behavior is '{behavior}'")
        return behavior
