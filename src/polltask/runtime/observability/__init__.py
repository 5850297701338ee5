"""Observability: logging configuration for polltask."""

from .logging import JsonFormatter, configure_logging, get_logger

__all__ = ["JsonFormatter", "configure_logging", "get_logger"]
