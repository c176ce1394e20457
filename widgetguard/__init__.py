"""widgetguard: Schema validation for widget-tree JSON documents."""

from widgetguard.catalog import default_registry, get_registry
from widgetguard.schema import (
    PropertyConstraint,
    SchemaDefinition,
    SchemaDefinitionError,
    SchemaRegistry,
    export_json_schema,
)
from widgetguard.tree import WidgetDocumentError, WidgetNode, parse_widget_tree
from widgetguard.validation import (
    ErrorCode,
    UnknownTypePolicy,
    ValidationError,
    ValidationResult,
    ValidatorConfig,
    WidgetValidator,
    is_valid,
    validate_document,
    validate_tree,
)

__all__ = [
    # Tree
    "WidgetNode",
    "WidgetDocumentError",
    "parse_widget_tree",
    # Schema
    "PropertyConstraint",
    "SchemaDefinition",
    "SchemaDefinitionError",
    "SchemaRegistry",
    "export_json_schema",
    # Catalog
    "default_registry",
    "get_registry",
    # Validation
    "ErrorCode",
    "UnknownTypePolicy",
    "ValidatorConfig",
    "ValidationError",
    "ValidationResult",
    "WidgetValidator",
    "validate_tree",
    "validate_document",
    "is_valid",
]
