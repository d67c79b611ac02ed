"""Common utilities for Shorty."""

from .logging_config import JsonFormatter, setup_logging, get_logger

__all__ = ["JsonFormatter", "setup_logging", "get_logger"]
