"""Base job class for volume resize operations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import boto3
import uuid
from ebs_resize.utils.logger import setup_logger
from ebs_resize.utils.config import ConfigManager
from ebs_resize.utils.session import SessionManager


class BaseJob(ABC):
    """Base class for all AWS operations jobs."""

    # Class-level configuration cache
    _config_manager: Optional[ConfigManager] = None

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        job_name: Optional[str] = None,
        region: Optional[str] = None,
        profile: Optional[str] = None,
    ):
        """Initialize the job with configuration."""
        # Use provided config_manager or create/reuse cached one
        if config_manager is not None:
            self.config_manager = config_manager
        else:
            self.config_manager = self._get_or_create_config_manager()

        self.job_name = job_name or self.__class__.__name__.lower().replace("job", "")
        self.correlation_id = str(uuid.uuid4())[:8]  # Short correlation ID for tracking

        # Command-line values win over configuration
        self.region = region or self.config_manager.get_aws_region()
        self.profile = profile or self.config_manager.get_aws_profile()

        self.logger = setup_logger(
            name=self.__class__.__module__,
            log_file=f"{self.job_name}.log",
            level=self.config_manager.get_logging_level(),
            log_dir=self.config_manager.get_logging_path(),
        )

    @classmethod
    def _get_or_create_config_manager(cls) -> ConfigManager:
        """Get or create a cached ConfigManager instance."""
        if cls._config_manager is None:
            cls._config_manager = ConfigManager()
        return cls._config_manager

    @property
    def config(self) -> Dict[str, Any]:
        return self.config_manager.config

    def create_aws_session(self, operation_name: Optional[str] = None) -> boto3.Session:
        """
        Create AWS session from the configured profile, optionally assuming a role
        """
        operation_name = operation_name or self.job_name
        role_arn = self.config_manager.get_role_arn()

        self.logger.info(
            f"[{self.correlation_id}] Creating AWS session in {self.region}"
            f"{f' with profile {self.profile}' if self.profile else ''}"
            f"{f' assuming {role_arn}' if role_arn else ''}"
        )

        return SessionManager.get_session(
            region=self.region,
            profile=self.profile,
            role_arn=role_arn,
            role_session_name=f"{operation_name}-{self.correlation_id}",
        )

    @abstractmethod
    def execute(self, **kwargs) -> Any:
        """Execute the job with given parameters."""
        pass
