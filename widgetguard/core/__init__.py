"""Core utilities shared across widgetguard."""

from .log import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
