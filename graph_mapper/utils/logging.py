"""
Logging utilities for the graph mapper package.

The library itself only emits records through loguru's global `logger`.
Applications that want the records formatted the project way call
`setup_logging()` once at startup.
"""

import sys
from typing import Optional

from loguru import logger

from graph_mapper.configs.project import ProjectSettings, get_project_settings

DEBUG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
DEFAULT_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


class LoggingConfig:
    """Centralized logging configuration."""

    def __init__(self, settings: Optional[ProjectSettings] = None, sink=sys.stderr):
        self.settings = settings or get_project_settings()
        self.sink = sink
        self.handler_ids: list[int] = []
        self._setup_loggers()

    def _setup_loggers(self):
        """Configure loggers with appropriate levels and formats."""
        # Remove default logger
        logger.remove()

        if self.settings.debug:
            log_level = "DEBUG"
            format_string = DEBUG_FORMAT
        else:
            log_level = self.settings.log_level
            format_string = DEFAULT_FORMAT

        self.handler_ids.append(
            logger.add(
                self.sink,
                level=log_level,
                format=format_string,
                colorize=False,
                backtrace=True,
                diagnose=self.settings.debug,
            ),
        )

        if self.settings.log_file:
            self.handler_ids.append(
                logger.add(
                    self.settings.log_file,
                    level=log_level,
                    format=FILE_FORMAT,
                    rotation="10 MB",
                    retention="30 days",
                ),
            )

    def teardown(self):
        """Remove the sinks installed by this configuration."""
        for handler_id in self.handler_ids:
            logger.remove(handler_id)
        self.handler_ids = []


# Global logging configuration
_logging_config: Optional[LoggingConfig] = None


def setup_logging(settings: Optional[ProjectSettings] = None, sink=sys.stderr) -> LoggingConfig:
    """Initialize logging configuration once per process."""
    global _logging_config
    if _logging_config is None:
        _logging_config = LoggingConfig(settings=settings, sink=sink)
    return _logging_config


def reset_logging():
    """Drop the global configuration so the next setup_logging() reinstalls sinks."""
    global _logging_config
    if _logging_config is not None:
        _logging_config.teardown()
    _logging_config = None


def get_logger(name: Optional[str] = None):
    """
    Get a logger instance with proper configuration.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    setup_logging()
    if name:
        return logger.bind(name=name)
    return logger
