#!/usr/bin/env python3
"""
utils/config.py

Simple configuration management utilities.
Provides centralized configuration loading.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from ebs_resize.core.constants import (
    DEFAULT_AWS_REGION,
    INSTANCE_POLL_INTERVAL,
    ATTACHMENT_POLL_INTERVAL,
    SNAPSHOT_POLL_INTERVAL,
    VOLUME_POLL_INTERVAL,
)
from ebs_resize.utils.logger import setup_logger

logger = setup_logger(__name__, "config.log")


class ConfigManager:
    """
    Simple configuration manager.

    Features:
    - YAML configuration loading
    - Environment variable override support
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize ConfigManager.

        Args:
            config_dir: Custom config directory path (defaults to PROJECT_ROOT/configs)
        """
        self.project_root = Path(__file__).parent.parent.parent.parent
        self.config_dir = Path(config_dir) if config_dir else (self.project_root / "configs")

        # Try both .yml and .yaml extensions
        yml_file = self.config_dir / "settings.yml"
        yaml_file = self.config_dir / "settings.yaml"

        if yml_file.exists():
            self.settings_file = yml_file
        elif yaml_file.exists():
            self.settings_file = yaml_file
        else:
            self.settings_file = yaml_file  # Default to .yaml for error messages

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load a YAML file safely.
        """
        if not file_path.exists():
            logger.warning(f"Config file not found: {file_path}")
            return {}

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
                return content or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading {file_path}: {e}")
            return {}

    def load_settings(self) -> Dict[str, Any]:
        """
        Load application settings.
        """
        return self._load_yaml_file(self.settings_file)

    def get_value(
        self, key_path: str, default: Any = None, env_var: Optional[str] = None
    ) -> Any:
        """
        Get configuration value with dot notation support and environment variable override.

        A key that is present but empty in the YAML file yields the default.
        """
        # Check environment variable first
        if env_var and os.environ.get(env_var):
            return os.environ[env_var]

        # Navigate through nested dictionary
        current = self.config
        try:
            for key in key_path.split("."):
                current = current[key]
        except (KeyError, TypeError):
            return default
        return default if current is None else current

    def get_aws_config(self) -> Dict[str, Any]:
        """Get AWS-specific configuration section."""
        return self.get_value("aws", {})

    def get_aws_region(self) -> str:
        """Get AWS region with environment variable override support."""
        return self.get_value("aws.region", DEFAULT_AWS_REGION, env_var="AWS_REGION")

    def get_aws_profile(self) -> Optional[str]:
        """Get the named AWS profile, if any."""
        return self.get_value("aws.profile", None, env_var="AWS_PROFILE")

    def get_role_arn(self) -> Optional[str]:
        """Get the ARN of a role to assume before calling EC2."""
        return self.get_value("aws.role_arn", None)

    def get_polling_config(self) -> Dict[str, Any]:
        """Get polling intervals (seconds) and the optional wait timeout."""
        timeout = self.get_value("polling.timeout", None)
        return {
            "instance_interval": float(
                self.get_value("polling.instance_interval", INSTANCE_POLL_INTERVAL)
            ),
            "attachment_interval": float(
                self.get_value("polling.attachment_interval", ATTACHMENT_POLL_INTERVAL)
            ),
            "snapshot_interval": float(
                self.get_value("polling.snapshot_interval", SNAPSHOT_POLL_INTERVAL)
            ),
            "volume_interval": float(
                self.get_value("polling.volume_interval", VOLUME_POLL_INTERVAL)
            ),
            "timeout": float(timeout) if timeout is not None else None,
        }

    def get_strict_name_match(self) -> bool:
        """Whether several instances sharing a Name tag is fatal."""
        value = self.get_value("resolver.strict_name_match", False)
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes")
        return bool(value)

    def get_logging_level(self) -> str:
        """Get logging level."""
        return self.get_value("logging.level", "INFO", env_var="LOG_LEVEL")

    def get_logging_path(self) -> str:
        """Get logging file path."""
        return self.get_value("logging.path", "logs", env_var="LOG_PATH")

    def get_report_path(self) -> str:
        """Get report output path."""
        return self.get_value("report.path", "results")

    @property
    def config(self) -> Dict[str, Any]:
        """Get the full configuration as a cached property."""
        if not hasattr(self, "_cached_config"):
            self._cached_config = self.load_settings()
        return self._cached_config

    def reload_config(self) -> None:
        """Force reload of configuration from file."""
        if hasattr(self, "_cached_config"):
            delattr(self, "_cached_config")
