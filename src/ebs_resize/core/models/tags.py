"""Simple data models for AWS resource tag propagation."""

from dataclasses import dataclass, field
from typing import Dict
from ebs_resize.core.constants import (
    NAME_TAG_KEY,
    SNAPSHOT_NAME_PREFIX,
    SOURCE_NAME_TAG_KEY,
)
from ebs_resize.utils.ec2_utils import writable_tags


@dataclass
class TagSet:
    """Tags read once from a source resource and re-applied elsewhere."""
    tags: Dict[str, str] = field(default_factory=dict)

    def copy(self) -> "TagSet":
        """Full copy for another resource, minus reserved keys."""
        return TagSet(writable_tags(self.tags))

    def for_snapshot(self, volume_id: str) -> "TagSet":
        """Tags for a snapshot taken from ``volume_id``.

        The source Name tag is carried as ``ec2Name`` and the snapshot gets its
        own Name of ``snap-<volume_id>``.
        """
        tags = {}
        for key, value in writable_tags(self.tags).items():
            if key == NAME_TAG_KEY:
                tags[SOURCE_NAME_TAG_KEY] = value
            else:
                tags[key] = value
        tags[NAME_TAG_KEY] = f"{SNAPSHOT_NAME_PREFIX}{volume_id}"
        return TagSet(tags)

    def __len__(self) -> int:
        return len(self.tags)
