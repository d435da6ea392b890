#!/usr/bin/env python3
"""
EC2 utility functions for volume resize operations.

This module provides shared helpers for turning raw EC2 API structures into
plain Python values, reducing duplication across the models and the EC2
manager.
"""

from typing import Any, Dict, List, Optional
from ebs_resize.core.constants import NAME_TAG_KEY, RESERVED_TAG_PREFIX


def tags_to_dict(tags: Optional[List[Dict[str, str]]]) -> Dict[str, str]:
    """
    Convert an EC2 ``Tags`` list into a key-value dictionary.

    Args:
        tags: List of ``{"Key": ..., "Value": ...}`` entries, or None

    Returns:
        Dictionary of tag keys and values

    Example:
        tags = tags_to_dict(instance.get("Tags"))
        name = tags.get("Name", "")
    """
    result = {}
    for tag in tags or []:
        key = tag.get("Key")
        if key:
            result[key] = tag.get("Value", "")
    return result


def dict_to_tags(tags: Dict[str, str]) -> List[Dict[str, str]]:
    """Convert a key-value dictionary into the EC2 ``Tags`` list form."""
    return [{"Key": key, "Value": value} for key, value in tags.items()]


def writable_tags(tags: Dict[str, str]) -> Dict[str, str]:
    """Drop tags under the reserved ``aws:`` prefix, which CreateTags rejects."""
    return {
        key: value
        for key, value in tags.items()
        if not key.lower().startswith(RESERVED_TAG_PREFIX)
    }


def name_tag_filter(name: str) -> List[Dict[str, Any]]:
    """Build a describe filter matching the Name tag exactly."""
    return [{"Name": f"tag:{NAME_TAG_KEY}", "Values": [name]}]


def get_display_name(tags: Dict[str, str], fallback: str) -> str:
    """
    Get the Name tag value, falling back to another identifier.

    Example:
        name = get_display_name(tags, instance_id)
    """
    return tags.get(NAME_TAG_KEY) or fallback


def format_size(size_gib: int) -> str:
    """Format a volume size for logging and prompts."""
    return f"{size_gib} GiB"
