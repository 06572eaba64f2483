"""
Centralized logging configuration for contributor-stats.

Console narration of the report goes to stdout through click; everything
logged here goes to stderr (and optionally a rotating log file) so it never
mixes with the report itself.
"""

import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger


class LoggingManager:
    """Manages logging configuration for the tool."""

    def __init__(self, service_name: str = "contributor-stats"):
        """
        Initialize logging manager.

        Args:
            service_name: Name of the service for logging identification
        """
        self.service_name = service_name
        self._configured = False

    @property
    def configured(self) -> bool:
        return self._configured

    def configure_logging(
        self,
        level: str = "WARNING",
        enable_file_logging: bool = False,
        log_file_path: Path | None = None,
        structured_format: bool = False,
    ) -> None:
        """
        Configure logging sinks for the entire application.

        Calling this again replaces the previous configuration, so the CLI can
        lower the level after the environment defaults were applied.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            enable_file_logging: Whether to enable file logging
            log_file_path: Path for log file (auto-generated if None)
            structured_format: Whether to serialize file records as JSON
        """
        # Remove default loguru handler
        logger.remove()

        logger.add(
            sys.stderr,
            format=self._get_console_format(level),
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=level == "DEBUG",
        )

        if enable_file_logging:
            if log_file_path is None:
                log_file_path = Path.cwd() / "logs" / f"{self.service_name}.log"

            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                str(log_file_path),
                format=self._get_file_format(),
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="gz",
                backtrace=True,
                serialize=structured_format,
            )

        logger.configure(extra={"service_name": self.service_name})

        self._configured = True
        logger.debug(
            "Logging configured",
            level=level,
            file_logging=enable_file_logging,
        )

    def _get_console_format(self, level: str) -> str:
        """Get console logging format."""
        if level == "DEBUG":
            return (
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level> | "
                "{extra}"
            )
        return "<level>{level: <8}</level> | <level>{message}</level>"

    def _get_file_format(self) -> str:
        """Get file logging format."""
        return (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
            "{name}:{function}:{line} | {message} | {extra}"
        )

    def get_logger(self, name: str) -> Any:
        """
        Get a logger instance with the given name.

        Args:
            name: Logger name (usually __name__)

        Returns:
            Configured logger instance
        """
        return logger.bind(component=name)


# Global logging manager instance
_logging_manager: LoggingManager | None = None


def get_logging_manager() -> LoggingManager:
    """Get or create the global logging manager instance."""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()
    return _logging_manager


def configure_logging(
    level: str | None = None,
    enable_file_logging: bool | None = None,
    structured: bool = False,
) -> None:
    """
    Configure application logging with environment-based defaults.

    Args:
        level: Logging level, falls back to LOG_LEVEL or WARNING
        enable_file_logging: Enable file logging, falls back to ENABLE_FILE_LOGGING
        structured: Serialize file log records as JSON
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING")
    level = level.upper()

    if enable_file_logging is None:
        enable_file_logging = (
            os.getenv("ENABLE_FILE_LOGGING", "false").lower() == "true"
        )

    get_logging_manager().configure_logging(
        level=level,
        enable_file_logging=enable_file_logging,
        structured_format=structured,
    )


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given component.

    Args:
        name: Component name (usually __name__)

    Returns:
        Configured logger instance
    """
    return get_logging_manager().get_logger(name)
