"""Exception classes and validation utilities for volume resize operations.

Every fatal condition raised by the resize workflow derives from
``ResizeError`` so that the CLI has a single place to report it. A declined
confirmation is signalled with ``OperationCancelled``, which is a clean
abort rather than a failure.
"""

import re
from typing import Optional


class CLIError(Exception):
    """Custom exception for CLI-related errors."""

    pass


class ResizeError(Exception):
    """Base class for fatal resize workflow errors."""

    def __init__(self, message: str, resource_id: Optional[str] = None):
        super().__init__(message)
        self.resource_id = resource_id


class ResolutionError(ResizeError):
    """An instance or volume could not be resolved."""

    pass


class PreconditionError(ResizeError):
    """A safety or sizing precondition does not hold."""

    pass


class UnexpectedStateError(ResizeError):
    """A resource reported a lifecycle state the workflow cannot handle."""

    def __init__(self, message: str, resource_id: Optional[str] = None, state: Optional[str] = None):
        super().__init__(message, resource_id)
        self.state = state


class WaitTimeoutError(ResizeError):
    """A resource did not reach its target state before the configured deadline."""

    pass


class AwsOperationError(ResizeError):
    """An EC2 API call failed."""

    def __init__(self, operation: str, error_code: str, message: str, resource_id: Optional[str] = None):
        super().__init__(f"{operation} failed ({error_code}): {message}", resource_id)
        self.operation = operation
        self.error_code = error_code


class OperationCancelled(Exception):
    """The operator declined a confirmation prompt."""

    def __init__(self, action: str):
        super().__init__(f"Operation cancelled by user at: {action}")
        self.action = action


class ValidationRules:
    """Validation utilities for AWS resource identifiers."""

    @staticmethod
    def validate_instance_id(instance_id: str) -> bool:
        """Validate EC2 instance ID format (i- followed by 8 or 17 hex chars)."""
        return bool(re.match(r"^i-([0-9a-f]{8}|[0-9a-f]{17})$", instance_id))

    @staticmethod
    def validate_volume_id(volume_id: str) -> bool:
        """Validate EBS volume ID format (vol- followed by 8 or 17 hex chars)."""
        return bool(re.match(r"^vol-([0-9a-f]{8}|[0-9a-f]{17})$", volume_id))
