"""Volume resize jobs package."""

from .base import BaseJob
from .resize_volume import ResizeMetrics, ResizeResult, ResizeVolumeJob

__all__ = [
    "BaseJob",
    "ResizeMetrics",
    "ResizeResult",
    "ResizeVolumeJob",
]
