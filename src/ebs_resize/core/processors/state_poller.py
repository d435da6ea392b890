#!/usr/bin/env python3
"""Fixed-interval state poller for EC2 resources.

Every wait in the resize workflow is a ``StatePoller``: fetch the resource,
read its state, stop on a target state, fail on a failure state or on a
state outside the expected set, otherwise sleep and try again. The deadline
is optional; without one the poller waits until the process is interrupted.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Set
from ebs_resize.utils.exceptions import UnexpectedStateError, WaitTimeoutError
from ebs_resize.utils.logger import setup_logger


@dataclass
class PollResult:
    """Result of a completed poll loop."""

    resource_id: str
    final_state: str
    value: Any
    attempts: int
    execution_time: float = 0.0
    states_seen: list = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for logging."""
        return {
            "resource_id": self.resource_id,
            "final_state": self.final_state,
            "attempts": self.attempts,
            "execution_time": f"{self.execution_time:.2f}s",
            "states_seen": self.states_seen,
        }


class StatePoller:
    """Poll a resource until it reaches one of its target states.

    Args:
        name: Name of the poll loop, used as the log prefix
        interval: Seconds to sleep between polls
        timeout: Optional deadline in seconds; None waits forever
        sleep: Sleep function, injectable for tests
        clock: Monotonic clock, injectable for tests
        correlation_id: Correlation ID for tracking operations across logs
    """

    def __init__(
        self,
        name: str,
        interval: float,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        correlation_id: Optional[str] = None,
    ):
        self.name = name
        self.interval = interval
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock
        self.correlation_id = correlation_id
        self.logger = setup_logger(__name__, "state_poller.log")

    def wait_for(
        self,
        resource_id: str,
        fetch: Callable[[], Any],
        targets: Iterable[str],
        transitional: Optional[Iterable[str]] = None,
        failures: Iterable[str] = (),
        state_of: Callable[[Any], str] = lambda value: value,
        describe: Optional[Callable[[Any], str]] = None,
    ) -> PollResult:
        """Poll ``fetch`` until ``state_of(value)`` is one of ``targets``.

        Args:
            resource_id: ID of the resource being polled, for diagnostics
            fetch: Callable returning the current resource (or its state)
            targets: States that end the loop successfully
            transitional: States to keep waiting on; when given, any state
                outside targets and transitional is fatal
            failures: States that are always fatal
            state_of: Extracts the state string from the fetched value
            describe: Optional formatter adding detail to the per-poll log line

        Raises:
            UnexpectedStateError: On a failure state or an unrecognized state
            WaitTimeoutError: When the deadline passes before a target state
        """
        target_set: Set[str] = set(targets)
        failure_set: Set[str] = set(failures)
        allowed: Optional[Set[str]] = (
            target_set | set(transitional) if transitional is not None else None
        )
        prefix = f"[{self.correlation_id}] " if self.correlation_id else ""

        start = self._clock()
        attempts = 0
        states_seen = []

        while True:
            attempts += 1
            value = fetch()
            state = state_of(value)
            if not states_seen or states_seen[-1] != state:
                states_seen.append(state)

            detail = f" ({describe(value)})" if describe else ""
            self.logger.info(
                f"{prefix}{self.name}: {resource_id} is {state}{detail} [poll {attempts}]"
            )

            if state in target_set:
                result = PollResult(
                    resource_id=resource_id,
                    final_state=state,
                    value=value,
                    attempts=attempts,
                    execution_time=self._clock() - start,
                    states_seen=states_seen,
                )
                self.logger.debug(f"{prefix}{self.name} finished: {result.to_dict()}")
                return result

            if state in failure_set:
                raise UnexpectedStateError(
                    f"{resource_id} entered failure state '{state}' while waiting for "
                    f"{'/'.join(sorted(target_set))}",
                    resource_id=resource_id,
                    state=state,
                )

            if allowed is not None and state not in allowed:
                raise UnexpectedStateError(
                    f"{resource_id} is in unrecognized state '{state}' while waiting for "
                    f"{'/'.join(sorted(target_set))}; operator intervention required",
                    resource_id=resource_id,
                    state=state,
                )

            delay = self.interval
            if self.timeout is not None:
                remaining = self.timeout - (self._clock() - start)
                if remaining <= 0:
                    raise WaitTimeoutError(
                        f"{resource_id} did not reach {'/'.join(sorted(target_set))} within "
                        f"{self.timeout:.0f}s (last state '{state}')",
                        resource_id=resource_id,
                    )
                # The last sleep ends at the deadline
                delay = min(delay, remaining)
            self._sleep(delay)
