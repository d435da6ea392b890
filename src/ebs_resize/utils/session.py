#!/usr/bin/env python3
"""
utils/session.py

Session management utilities for AWS interactions.

Provides functions and classes to handle AWS session creation and role assumption.
Credential resolution itself stays with boto3: a named profile, the standard
environment variables or an instance profile.
"""

import boto3
from typing import Optional
from botocore.exceptions import BotoCoreError, ClientError
from ebs_resize.core.constants import DEFAULT_AWS_REGION
from .logger import setup_logger

logger = setup_logger(__name__, "session.log")


def assume_role(
    role_arn: str,
    region: str = DEFAULT_AWS_REGION,
    role_session_name: str = "ebs-resize",
    base_session: Optional[boto3.Session] = None,
) -> boto3.Session:
    """Assumes a role and returns a boto3 Session holding its temporary credentials."""
    if not role_arn.startswith("arn:"):
        raise ValueError(f"Invalid role ARN: {role_arn}")

    try:
        source = base_session or boto3.Session(region_name=region)
        sts_client = source.client("sts", region_name=region)
        response = sts_client.assume_role(
            RoleArn=role_arn, RoleSessionName=role_session_name
        )
        credentials = response["Credentials"]

        return boto3.Session(
            aws_access_key_id=credentials["AccessKeyId"],
            aws_secret_access_key=credentials["SecretAccessKey"],
            aws_session_token=credentials["SessionToken"],
            region_name=region,
        )
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        raise RuntimeError(f"Failed to assume role {role_arn}: {error_code} - {e}") from e
    except BotoCoreError as e:
        raise RuntimeError(f"Unexpected error assuming role {role_arn}: {e}") from e


class SessionManager:
    """Manages AWS sessions for profile, environment and role-based credentials."""

    @classmethod
    def get_session(
        cls,
        region: str = DEFAULT_AWS_REGION,
        profile: Optional[str] = None,
        role_arn: Optional[str] = None,
        role_session_name: str = "ebs-resize",
    ) -> boto3.Session:
        """Create a boto3 Session, optionally assuming a role on top of it."""
        session = boto3.Session(profile_name=profile, region_name=region)
        if role_arn:
            logger.info(f"Assuming role {role_arn} in {region}")
            return assume_role(role_arn, region, role_session_name, base_session=session)
        return session
