"""Centralized configuration management for widgetguard.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from widgetguard.config import EnvVar, get_environment
    >>>
    >>> depth = get_environment(EnvVar.MAX_DEPTH)  # Returns int: 64
    >>> depth = get_environment(EnvVar.MAX_DEPTH, override=8)

Environment Variable Categories:
    validation: Validator behaviour (unknown-type policy, depth limit)
    schema: Schema registry source
    logging: Log output configuration
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_environment,
    get_environment_info,
    get_log_level,
    get_schema_file,
    # Introspection
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_schema_file",
    "get_log_level",
    # Introspection
    "list_environment_variables",
]
