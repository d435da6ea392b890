# utils/logger.py
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = "INFO",
    log_dir: Optional[str] = None,
    enable_rotation: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Setup logger with console output and an optional rotating log file"""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Prevent duplicate handlers
    if not logger.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # Console handler for immediate feedback
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(logging.INFO)
        logger.addHandler(stream_handler)

        if log_file:
            logs_dir = Path(log_dir or os.environ.get("LOG_PATH", "logs"))
            log_path = logs_dir / log_file

            try:
                logs_dir.mkdir(parents=True, exist_ok=True)
                if enable_rotation:
                    file_handler = logging.handlers.RotatingFileHandler(
                        log_path,
                        maxBytes=max_bytes,
                        backupCount=backup_count,
                        encoding="utf-8",
                    )
                else:
                    file_handler = logging.FileHandler(log_path, encoding="utf-8")

                file_handler.setFormatter(formatter)
                file_handler.setLevel(logging.DEBUG)  # All levels to file
                logger.addHandler(file_handler)

            except (OSError, PermissionError) as e:
                # Fallback: log to console if file creation fails
                logger.warning(
                    f"Failed to create log file {log_path}: {e}. Logging to console only."
                )

        # Prevent propagation to root logger to avoid duplicate messages
        logger.propagate = False

    return logger


def set_log_level(logger: logging.Logger, level: str) -> None:
    """Change the level of an already configured logger and its console handler."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric)
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ):
            handler.setLevel(numeric)
