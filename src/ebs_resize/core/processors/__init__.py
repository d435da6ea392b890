"""Core processors for volume resize operations."""

from .report_generator import CSVReportGenerator
from .state_poller import PollResult, StatePoller

__all__ = [
    "CSVReportGenerator",
    "PollResult",
    "StatePoller",
]
