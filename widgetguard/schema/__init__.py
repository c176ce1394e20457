"""Schema module - authoritative source for widget property schemas.

This module provides:
- JSON value kinds and a total classifier
- Property constraints and per-widget schema definitions
- The immutable SchemaRegistry
- Construction from, and export to, JSON Schema

Example usage:
    >>> from widgetguard.schema import SchemaRegistry
    >>> registry = SchemaRegistry.from_config({
    ...     "ProgressRing": {
    ...         "properties": {"progress": {"type": "number", "minimum": 0, "maximum": 1}},
    ...     },
    ... })
    >>> registry.lookup("ProgressRing").closed
    True
"""

from .lib import (
    ConstraintKind,
    JsonKind,
    PropertyConstraint,
    SchemaDefinition,
    SchemaDefinitionError,
    SchemaRegistry,
    constraint_from_config,
    definition_from_config,
    export_json_schema,
    kind_of,
    load_registry,
)

__all__ = [
    # Kinds
    "JsonKind",
    "ConstraintKind",
    "kind_of",
    # Model
    "PropertyConstraint",
    "SchemaDefinition",
    "SchemaDefinitionError",
    "SchemaRegistry",
    # Configuration
    "definition_from_config",
    "constraint_from_config",
    "load_registry",
    "export_json_schema",
]
