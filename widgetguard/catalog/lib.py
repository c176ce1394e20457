"""Registry construction from the built-in catalog or a configured file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from widgetguard.config import get_schema_file
from widgetguard.core.log import get_logger
from widgetguard.schema import SchemaRegistry, load_registry

from .schemas import WIDGET_SCHEMAS

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def default_registry() -> SchemaRegistry:
    """Build (once) the registry of built-in widget schemas."""
    registry = SchemaRegistry.from_config(WIDGET_SCHEMAS)
    logger.debug("Built-in catalog registered %d widget types", len(registry))
    return registry


def get_registry(schema_file: Path | str | None = None) -> SchemaRegistry:
    """Resolve the registry to validate against.

    Resolution: explicit ``schema_file`` > ``WIDGETGUARD_SCHEMA_FILE`` >
    built-in catalog.
    """
    path = get_schema_file(schema_file)
    if path is None:
        return default_registry()
    return load_registry(path)
