"""
Loguru logger configuration with runtime level control
"""
from loguru import logger
import sys
from pathlib import Path
from typing import Optional
from tam.config import settings

LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class LoggerManager:
    """Manages library logging with runtime level control.

    The package disables its own records on import. setup_logger() (the CLI
    calls it on start-up) re-enables them and installs the sinks.
    """

    def __init__(self):
        self.current_level = settings.LOGGER.default_level
        self.log_file_path: Optional[Path] = (
            Path(settings.LOGGER.file_path) if settings.LOGGER.file_path else None
        )
        self.log_rotation = settings.LOGGER.rotation
        self.log_retention = settings.LOGGER.retention
        self.configured = False

    def setup_logger(self):
        """Configure logger with console and (optional) file handlers"""
        # Remove default handler
        logger.remove()

        # Console handler, stderr so piped indicator output stays clean
        logger.add(
            sys.stderr,
            level=self.current_level,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

        if self.log_file_path is not None:
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                str(self.log_file_path),
                level="DEBUG",  # Always log DEBUG and above to file
                format=(
                    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                    "{level: <8} | "
                    "{name}:{function}:{line} - "
                    "{message}"
                ),
                rotation=self.log_rotation,
                retention=self.log_retention,
                compression="zip",
                backtrace=True,
                diagnose=False,
                enqueue=True,
            )

        logger.enable("tam")
        self.configured = True
        logger.debug(f"Logger initialized with level: {self.current_level}")

    def set_level(self, level: str) -> str:
        """
        Change log level at runtime

        Args:
            level: New log level (TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)

        Returns:
            The new log level

        Raises:
            ValueError: If level is invalid
        """
        level_upper = level.upper()

        if level_upper not in LEVELS:
            raise ValueError(f"Invalid level '{level}'. Choose from: {', '.join(LEVELS)}")

        old_level = self.current_level
        self.current_level = level_upper

        if self.configured:
            self.setup_logger()

        logger.debug(f"Log level changed from {old_level} to {level_upper}")
        return self.current_level

    def get_level(self) -> str:
        """Get current log level"""
        return self.current_level

    def get_available_levels(self) -> list[str]:
        """Get list of available log levels"""
        return list(LEVELS)


# Global logger manager instance
logger_manager = LoggerManager()

# Export logger for use throughout the package
__all__ = ["logger", "logger_manager"]
