"""Widget tree validation against the schema registry.

Example usage:
    >>> from widgetguard.catalog import default_registry
    >>> from widgetguard.validation import validate_document
    >>> result = validate_document(
    ...     {"type": "ProgressRing", "properties": {"progress": 1.5}},
    ...     default_registry(),
    ... )
    >>> result.valid
    False
"""

from .lib import (
    MAX_DEPTH_LIMIT,
    ErrorCode,
    UnknownTypePolicy,
    ValidationError,
    ValidationResult,
    ValidatorConfig,
    WidgetValidator,
    check_properties,
    is_valid,
    validate_document,
    validate_tree,
)

__all__ = [
    # Results
    "ErrorCode",
    "ValidationError",
    "ValidationResult",
    # Configuration
    "UnknownTypePolicy",
    "ValidatorConfig",
    "MAX_DEPTH_LIMIT",
    # Validation
    "check_properties",
    "validate_tree",
    "validate_document",
    "is_valid",
    "WidgetValidator",
]
