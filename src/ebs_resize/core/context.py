"""Run context shared by every resize stage."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
from ebs_resize.core.aws.ec2 import EC2Manager
from ebs_resize.core.constants import (
    ATTACHMENT_POLL_INTERVAL,
    INSTANCE_POLL_INTERVAL,
    SNAPSHOT_POLL_INTERVAL,
    VOLUME_POLL_INTERVAL,
)
from ebs_resize.core.processors.state_poller import StatePoller
from ebs_resize.utils.exceptions import OperationCancelled
from ebs_resize.utils.logger import setup_logger


@dataclass
class PollingSettings:
    """Poll intervals in seconds and the optional deadline for every wait."""

    instance_interval: float = INSTANCE_POLL_INTERVAL
    attachment_interval: float = ATTACHMENT_POLL_INTERVAL
    snapshot_interval: float = SNAPSHOT_POLL_INTERVAL
    volume_interval: float = VOLUME_POLL_INTERVAL
    timeout: Optional[float] = None

    @classmethod
    def from_config(cls, polling: Dict[str, Any]) -> "PollingSettings":
        known = {key: value for key, value in polling.items() if key in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class OperationContext:
    """Everything a stage needs to talk to EC2 and the operator.

    Attributes:
        ec2: EC2 manager bound to the run's session and region
        confirm: Prompt callable returning True when the operator agrees
        polling: Poll intervals and deadline
        correlation_id: Short ID prefixed to every log line of the run
        strict_name_match: Fail instead of picking the first of several
            instances sharing a Name tag
        sleep: Sleep function handed to every poller
        resources: IDs of resources touched so far, keyed by role, for
            reporting when the run stops early
    """

    ec2: EC2Manager
    confirm: Callable[[str], bool]
    polling: PollingSettings = field(default_factory=PollingSettings)
    correlation_id: str = ""
    strict_name_match: bool = False
    sleep: Callable[[float], None] = time.sleep
    resources: Dict[str, str] = field(default_factory=dict)
    logger: logging.Logger = field(
        default_factory=lambda: setup_logger("ebs_resize.operations", "operations.log")
    )

    def _prefix(self, message: str) -> str:
        return f"[{self.correlation_id}] {message}" if self.correlation_id else message

    def info(self, message: str) -> None:
        self.logger.info(self._prefix(message))

    def warning(self, message: str) -> None:
        self.logger.warning(self._prefix(message))

    def error(self, message: str) -> None:
        self.logger.error(self._prefix(message))

    def require_confirmation(self, action: str, prompt: str) -> None:
        """Ask the operator; raise OperationCancelled when they decline."""
        if not self.confirm(prompt):
            self.warning(f"Operator declined: {action}")
            raise OperationCancelled(action)

    def record(self, role: str, resource_id: str) -> None:
        self.resources[role] = resource_id

    def poller(self, name: str, interval: float) -> StatePoller:
        return StatePoller(
            name=name,
            interval=interval,
            timeout=self.polling.timeout,
            sleep=self.sleep,
            correlation_id=self.correlation_id,
        )
