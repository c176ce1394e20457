"""Centralized environment configuration management for widgetguard.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from widgetguard.config import EnvVar, get_environment
    >>>
    >>> policy = get_environment(EnvVar.UNKNOWN_TYPE_POLICY)  # Returns str
    >>> depth = get_environment(EnvVar.MAX_DEPTH, override=16)
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

from widgetguard.core.log import get_logger

logger = get_logger(__name__)

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "WIDGETGUARD_MAX_DEPTH").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by widgetguard.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - validation: Validator behaviour
        - schema: Schema registry source
        - logging: Log output configuration
    """

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------
    UNKNOWN_TYPE_POLICY = EnvConfig(
        name="WIDGETGUARD_UNKNOWN_TYPE_POLICY",
        default="strict",
        var_type=str,
        description="Handling of unregistered widget types: 'strict' or 'permissive'",
        category="validation",
    )
    MAX_DEPTH = EnvConfig(
        name="WIDGETGUARD_MAX_DEPTH",
        default=64,
        var_type=int,
        description="Deepest tree level that is still validated (root is 0)",
        category="validation",
    )

    # -------------------------------------------------------------------------
    # Schema Source
    # -------------------------------------------------------------------------
    SCHEMA_FILE = EnvConfig(
        name="WIDGETGUARD_SCHEMA_FILE",
        default=None,  # Built-in catalog when unset
        var_type=Path,
        description="JSON file with widget schema configuration",
        category="schema",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    LOG_LEVEL = EnvConfig(
        name="WIDGETGUARD_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )


# =============================================================================
# Value Conversion
# =============================================================================

_CONVERTERS: dict[type, Callable[[str], Any]] = {
    str: str.strip,
    int: int,
    Path: Path,
}


def _convert_value(config: EnvConfig, raw: str | None) -> Any:
    """Convert a raw environment string to the variable's type.

    Unset or blank values give the default. Values that do not parse are
    logged and also give the default.
    """
    if raw is None or not raw.strip():
        return config.default
    converter = _CONVERTERS.get(config.var_type, str)
    try:
        return converter(raw.strip())
    except ValueError:
        logger.warning(
            "Ignoring %s=%r: not a valid %s, using default %r",
            config.name,
            raw,
            config.var_type.__name__,
            config.default,
        )
        return config.default


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Resolve a configuration value.

    Resolution: explicit override > ``os.environ`` > EnvConfig default.

    Example:
        >>> get_environment(EnvVar.MAX_DEPTH)
        64
        >>> get_environment(EnvVar.MAX_DEPTH, override=8)
        8
    """
    if override is not None:
        return override
    config: EnvConfig = env_var.value
    return _convert_value(config, os.environ.get(config.name))


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List environment variables, optionally filtered by category.

    Args:
        category: Category name such as "validation". None lists all.

    Returns:
        Matching EnvVar members in declaration order.
    """
    if category is None:
        return list(EnvVar)
    return [var for var in EnvVar if var.value.category == category]


# =============================================================================
# Convenience Functions
# =============================================================================


def get_schema_file(override: Path | str | None = None) -> Path | None:
    """Get the schema configuration file, or None for the built-in catalog."""
    if override is not None:
        return Path(override)
    return get_environment(EnvVar.SCHEMA_FILE)


def get_log_level(override: str | None = None) -> str:
    """Get the configured log level name, upper-cased."""
    return str(get_environment(EnvVar.LOG_LEVEL, override=override)).upper()


__all__ = [
    "EnvConfig",
    "EnvVar",
    "get_environment",
    "get_environment_info",
    "list_environment_variables",
    "get_schema_file",
    "get_log_level",
]
