"""
Centralized logging configuration for the gateway.

Provides request-tagged logging so every line emitted while serving a
request can be correlated through its X-Request-ID.
"""

import logging
import sys
from typing import Optional


class RequestLogger:
    """
    Logger wrapper that prefixes messages with the request id.

    Handlers create one per request; the underlying stdlib logger is shared.
    """

    def __init__(self, name: str, request_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.request_id = request_id

    def _format_message(self, message: str) -> str:
        if self.request_id:
            return f"[req:{self.request_id[:8]}] {message}"
        return message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_message(message), **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_message(message), **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_message(message), **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_message(message), **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message), **kwargs)


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ("simple" or "json")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format == "json":
        # One JSON object per line for log aggregators
        formatter = logging.Formatter(
            '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str, request_id: Optional[str] = None) -> RequestLogger:
    """
    Get a request-tagged logger instance.

    Args:
        name: Logger name (usually __name__)
        request_id: Optional request identifier

    Returns:
        RequestLogger instance
    """
    return RequestLogger(name, request_id)
