#!/usr/bin/env python3
"""Core constants for volume resize operations."""

# AWS Service Constants
DEFAULT_AWS_REGION = "ap-southeast-2"

# Tag Constants
NAME_TAG_KEY = "Name"
SOURCE_NAME_TAG_KEY = "ec2Name"  # Instance Name tag as carried on the snapshot
SNAPSHOT_NAME_PREFIX = "snap-"
RESERVED_TAG_PREFIX = "aws:"

# Instance states a Name lookup considers; terminated namesakes stay
# visible to describe calls for a while after termination
LIVE_INSTANCE_STATES = ("pending", "running", "stopping", "stopped")

# Instance attribute controlling OS-initiated shutdown
SHUTDOWN_BEHAVIOR_ATTRIBUTE = "instanceInitiatedShutdownBehavior"
SAFE_SHUTDOWN_BEHAVIOR = "stop"

# Polling intervals (seconds)
INSTANCE_POLL_INTERVAL = 5
ATTACHMENT_POLL_INTERVAL = 5
SNAPSHOT_POLL_INTERVAL = 30
VOLUME_POLL_INTERVAL = 30

# Volume types that carry provisioned performance settings
PROVISIONED_IOPS_TYPES = ("io1", "io2", "gp3")
PROVISIONED_THROUGHPUT_TYPES = ("gp3",)

# Report Format Constants
REPORT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
