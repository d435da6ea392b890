"""Stop and start the instance around the volume swap."""

from dataclasses import dataclass
from typing import Optional
from ebs_resize.core.context import OperationContext
from ebs_resize.core.models import InstanceState
from ebs_resize.utils.exceptions import UnexpectedStateError


@dataclass(frozen=True)
class Transition:
    """One direction of the running <-> stopped state machine."""

    action: str
    source: str
    in_progress: str
    target: str


STOP = Transition(
    action="stop",
    source=InstanceState.RUNNING.value,
    in_progress=InstanceState.STOPPING.value,
    target=InstanceState.STOPPED.value,
)
START = Transition(
    action="start",
    source=InstanceState.STOPPED.value,
    in_progress=InstanceState.PENDING.value,
    target=InstanceState.RUNNING.value,
)


class LifecycleController:
    """Drives an instance to stopped or running, issuing at most one request."""

    def __init__(self, context: OperationContext):
        self.context = context
        self.ec2 = context.ec2

    def stop(self, instance_id: str, instance_name: Optional[str] = None, confirm: bool = True) -> bool:
        """Stop the instance. Returns True when a stop request was sent."""
        return self._drive(instance_id, STOP, instance_name, confirm)

    def start(self, instance_id: str, instance_name: Optional[str] = None, confirm: bool = True) -> bool:
        """Start the instance. Returns True when a start request was sent."""
        return self._drive(instance_id, START, instance_name, confirm)

    def _drive(
        self,
        instance_id: str,
        transition: Transition,
        instance_name: Optional[str],
        confirm: bool,
    ) -> bool:
        label = f"{instance_name} ({instance_id})" if instance_name else instance_id
        state = self.ec2.get_instance_state(instance_id)
        requested = False

        if state == transition.target:
            self.context.info(f"Instance {label} is already {state}; nothing to {transition.action}")
            return False

        if state == transition.source:
            if confirm:
                self.context.require_confirmation(
                    f"{transition.action} instance",
                    f"{transition.action.capitalize()} instance {label}?",
                )
            self.context.info(f"Requesting {transition.action} of instance {label}")
            if transition is STOP:
                self.ec2.stop_instance(instance_id)
            else:
                self.ec2.start_instance(instance_id)
            requested = True
        elif state == transition.in_progress:
            self.context.info(
                f"Instance {label} is already {state}; waiting for {transition.target}"
            )
        else:
            raise UnexpectedStateError(
                f"Instance {label} is in state '{state}', cannot {transition.action} it; "
                f"operator intervention required",
                resource_id=instance_id,
                state=state,
            )

        poller = self.context.poller(
            f"instance {transition.action}", self.context.polling.instance_interval
        )
        poller.wait_for(
            instance_id,
            fetch=lambda: self.ec2.get_instance_state(instance_id),
            targets=[transition.target],
            transitional=[transition.source, transition.in_progress],
        )
        self.context.info(f"Instance {label} is {transition.target}")
        return requested
