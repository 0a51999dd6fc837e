"""
Structured Logging Utilities

Provides logging setup plus utilities for adding structured context
(job and video IDs) to log messages.
"""

import logging
import sys
from contextvars import ContextVar
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Union


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE_NAME = "encoder.log"

# Context variable for operation-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

_ID_KEYS = ("job_id", "video_id", "resource_id", "bucket_name")


def configure_logging(log_dir: Optional[Union[str, Path]] = None, level: str = "INFO") -> Optional[Path]:
    """
    Configure the root logger with a stdout handler and, when log_dir is
    given, a rotating file handler (10MB per file, keep 5 backups).

    Calling it again replaces the handlers it installed before.

    Returns:
        Path of the log file, or None when only console logging is set up
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    log_formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_encoder_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(log_level)
    console_handler._encoder_handler = True
    root_logger.addHandler(console_handler)

    log_file = None
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = log_path / LOG_FILE_NAME

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(log_formatter)
        file_handler.setLevel(log_level)
        file_handler._encoder_handler = True
        root_logger.addHandler(file_handler)

    root_logger.setLevel(log_level)
    return log_file


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Download finished", extra={
            "video_id": video.id,
            "bucket": bucket_name,
        })
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__)
        """
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Add context from ContextVar to extra dict.

        Args:
            extra: Additional context dict

        Returns:
            Merged context dict
        """
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with structured context."""
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with structured context."""
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with structured context."""
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log error message with structured context."""
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current operation.

    This context will be automatically included in all log messages
    emitted through StructuredLogger within the current context.

    Example:
        set_logging_context(job_id=job.id, video_id=job.video.id)
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def get_logging_context() -> Dict[str, Any]:
    return _logging_context.get().copy()


def _extract_context(operation_name: str, args: tuple, kwargs: dict) -> Dict[str, Any]:
    context: Dict[str, Any] = {"operation": operation_name}

    for key in _ID_KEYS:
        if key in kwargs:
            context[key] = kwargs[key]

    # Methods of services bound to a video
    if args:
        video = getattr(args[0], "video", None)
        video_id = getattr(video, "id", None)
        if video_id and "video_id" not in context:
            context["video_id"] = video_id

    return context


def log_operation(operation_name: str):
    """
    Decorator to automatically log operation start/end with structured context.

    Args:
        operation_name: Name of the operation

    Example:
        @log_operation("fragment")
        def fragment(self):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _extract_context(operation_name, args, kwargs)

            logger.info(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
                logger.info(f"Completed {operation_name}", extra=context)
                return result
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)
                raise

        return wrapper

    return decorator
