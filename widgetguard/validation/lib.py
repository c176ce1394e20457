"""Widget tree validation.

This module checks widget descriptions against a SchemaRegistry before they
are handed to a renderer. Validation never stops at the first problem: every
violation in the tree is collected, with the path to the offending node, so
a document author (or an upstream generator) can fix everything in one pass.

Two layers:
    check_properties: one property map against one SchemaDefinition.
    validate_tree: depth-first, pre-order walk applying check_properties
        to every node and aggregating the errors.

Validation is a pure read-only computation. The registry is shared and
immutable, and each call owns its input and result.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any

from widgetguard.config import EnvVar, get_environment
from widgetguard.core.log import get_logger
from widgetguard.schema import (
    ConstraintKind,
    JsonKind,
    PropertyConstraint,
    SchemaDefinition,
    SchemaRegistry,
    kind_of,
)
from widgetguard.tree import WidgetNode, parse_widget_tree

logger = get_logger(__name__)

MAX_DEPTH_LIMIT = 200


class ErrorCode(str, Enum):
    """Machine-readable reason codes for validation errors."""

    UNKNOWN_WIDGET_TYPE = "UnknownWidgetType"
    UNKNOWN_PROPERTY = "UnknownProperty"
    TYPE_MISMATCH = "TypeMismatch"
    PATTERN_MISMATCH = "PatternMismatch"
    OUT_OF_RANGE = "OutOfRange"
    ARRAY_ELEMENT_MISMATCH = "ArrayElementMismatch"
    MISSING_REQUIRED = "MissingRequired"
    MAX_DEPTH_EXCEEDED = "MaxDepthExceeded"


class UnknownTypePolicy(str, Enum):
    """How to treat nodes whose type has no registered schema.

    - PERMISSIVE: pass the node through unchecked (forward compatibility
      with renderer extensions)
    - STRICT: report UnknownWidgetType
    Children are validated under both policies.
    """

    PERMISSIVE = "permissive"
    STRICT = "strict"


@dataclass(frozen=True)
class ValidatorConfig:
    """Validator settings.

    Attributes:
        unknown_type_policy: Handling of unregistered widget types.
        max_depth: Deepest level that is validated; the root is level 0.
    """

    unknown_type_policy: UnknownTypePolicy = UnknownTypePolicy.STRICT
    max_depth: int = 64

    def __post_init__(self) -> None:
        policy = self.unknown_type_policy
        if isinstance(policy, str) and not isinstance(policy, UnknownTypePolicy):
            policy = policy.strip().lower()
        object.__setattr__(self, "unknown_type_policy", UnknownTypePolicy(policy))
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise TypeError("max_depth must be an integer")
        if not 0 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must be between 0 and {MAX_DEPTH_LIMIT}")

    @classmethod
    def from_environment(
        cls,
        unknown_type_policy: UnknownTypePolicy | str | None = None,
        max_depth: int | None = None,
    ) -> ValidatorConfig:
        """Build a config from explicit overrides, then environment, then defaults."""
        return cls(
            unknown_type_policy=get_environment(
                EnvVar.UNKNOWN_TYPE_POLICY, override=unknown_type_policy
            ),
            max_depth=get_environment(EnvVar.MAX_DEPTH, override=max_depth),
        )


@dataclass(frozen=True)
class ValidationError:
    """A single violation found in a widget tree.

    Attributes:
        path: Child indices from the root to the offending node.
        property: Offending property (dotted for nested objects), or None
            for node-level errors.
        code: Reason code.
        message: Human-readable description.
        details: Machine-readable parameters of the violation.
    """

    path: tuple[int, ...]
    property: str | None
    code: ErrorCode
    message: str
    details: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable record."""
        return {
            "path": list(self.path),
            "property": self.property,
            "code": self.code.value,
            "message": self.message,
            "details": {
                key: list(value) if isinstance(value, tuple) else value
                for key, value in self.details.items()
            },
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one widget tree.

    Attributes:
        errors: Every violation found, in traversal order.
    """

    errors: tuple[ValidationError, ...] = ()

    @property
    def valid(self) -> bool:
        """True when no violation was found."""
        return not self.errors

    def codes(self) -> list[ErrorCode]:
        """Reason codes of all errors, in order."""
        return [error.code for error in self.errors]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable report."""
        return {
            "valid": self.valid,
            "errors": [error.to_dict() for error in self.errors],
        }


# =============================================================================
# Property-Level Validation
# =============================================================================


def _kind_matches(kind: ConstraintKind, value: Any, actual: JsonKind) -> bool:
    if kind is ConstraintKind.INTEGER:
        if actual is not JsonKind.NUMBER:
            return False
        return isinstance(value, int) or value.is_integer()
    if kind is ConstraintKind.NUMBER:
        return actual is JsonKind.NUMBER
    return kind.value == actual.value


def _check_value(
    name: str,
    value: Any,
    constraint: PropertyConstraint,
    path: tuple[int, ...],
) -> list[ValidationError]:
    """Check one present value against its constraint."""
    actual = kind_of(value)
    if not _kind_matches(constraint.kind, value, actual):
        # Range and pattern checks only make sense once the kind is right.
        return [
            ValidationError(
                path=path,
                property=name,
                code=ErrorCode.TYPE_MISMATCH,
                message=(
                    f"Property '{name}' must be {constraint.kind.value}, "
                    f"got {actual.value}"
                ),
                details={"expected": constraint.kind.value, "actual": actual.value},
            )
        ]

    errors: list[ValidationError] = []

    if constraint.regex is not None and not constraint.regex.fullmatch(value):
        errors.append(
            ValidationError(
                path=path,
                property=name,
                code=ErrorCode.PATTERN_MISMATCH,
                message=f"Property '{name}' does not match pattern {constraint.pattern}",
                details={"pattern": constraint.pattern, "actual": value},
            )
        )

    # Negated comparisons so NaN fails every bound.
    if constraint.minimum is not None and not value >= constraint.minimum:
        errors.append(_out_of_range(name, "minimum", constraint.minimum, value, path))
    elif constraint.maximum is not None and not value <= constraint.maximum:
        errors.append(_out_of_range(name, "maximum", constraint.maximum, value, path))

    if constraint.kind is ConstraintKind.ARRAY and constraint.items is not None:
        for index, element in enumerate(value):
            element_errors = _check_value(
                f"{name}[{index}]", element, constraint.items, path
            )
            if element_errors:
                errors.append(
                    ValidationError(
                        path=path,
                        property=name,
                        code=ErrorCode.ARRAY_ELEMENT_MISMATCH,
                        message=(
                            f"Element {index} of property '{name}' does not match "
                            f"{constraint.items.kind.value}: {element_errors[0].message}"
                        ),
                        details={
                            "index": index,
                            "reasons": tuple(e.code.value for e in element_errors),
                        },
                    )
                )

    if constraint.kind is ConstraintKind.OBJECT and constraint.schema is not None:
        errors.extend(
            _check_properties(value, constraint.schema, path, prefix=f"{name}.")
        )

    return errors


def _out_of_range(
    name: str, bound: str, limit: float, value: float, path: tuple[int, ...]
) -> ValidationError:
    comparison = ">=" if bound == "minimum" else "<="
    return ValidationError(
        path=path,
        property=name,
        code=ErrorCode.OUT_OF_RANGE,
        message=f"Property '{name}' must be {comparison} {limit}, got {value}",
        details={"bound": bound, "limit": limit, "actual": value},
    )


def _check_properties(
    properties: Mapping[str, Any],
    schema: SchemaDefinition,
    path: tuple[int, ...],
    prefix: str = "",
) -> list[ValidationError]:
    errors: list[ValidationError] = []

    for name, value in properties.items():
        constraint = schema.properties.get(name)
        if constraint is None:
            if schema.closed:
                errors.append(
                    ValidationError(
                        path=path,
                        property=f"{prefix}{name}",
                        code=ErrorCode.UNKNOWN_PROPERTY,
                        message=f"Unknown property '{prefix}{name}'",
                    )
                )
            continue
        errors.extend(_check_value(f"{prefix}{name}", value, constraint, path))

    for name in schema.required:
        if name not in properties:
            errors.append(
                ValidationError(
                    path=path,
                    property=f"{prefix}{name}",
                    code=ErrorCode.MISSING_REQUIRED,
                    message=f"Missing required property '{prefix}{name}'",
                )
            )

    return errors


def check_properties(
    properties: Mapping[str, Any], schema: SchemaDefinition
) -> list[ValidationError]:
    """Check a property map against a schema definition.

    Every problem is reported; the check never stops early. Returned errors
    carry an empty path, callers place them in the tree.

    Args:
        properties: Property names mapped to JSON-typed values.
        schema: Definition to check against.

    Returns:
        Errors in input-property order, followed by missing required
        properties in declaration order. Empty if the map is valid.

    Example:
        >>> schema = registry.lookup("ProgressRing")
        >>> [e.code for e in check_properties({"progress": 1.5}, schema)]
        [<ErrorCode.OUT_OF_RANGE: 'OutOfRange'>]
    """
    return _check_properties(properties, schema, ())


# =============================================================================
# Tree Validation
# =============================================================================


def _visit(
    node: WidgetNode,
    path: tuple[int, ...],
    registry: SchemaRegistry,
    config: ValidatorConfig,
    errors: list[ValidationError],
) -> None:
    if len(path) > config.max_depth:
        errors.append(
            ValidationError(
                path=path,
                property=None,
                code=ErrorCode.MAX_DEPTH_EXCEEDED,
                message=f"Tree depth exceeds maximum of {config.max_depth}",
                details={"max_depth": config.max_depth},
            )
        )
        return

    schema = registry.lookup(node.type)
    if schema is None:
        if config.unknown_type_policy is UnknownTypePolicy.STRICT:
            errors.append(
                ValidationError(
                    path=path,
                    property=None,
                    code=ErrorCode.UNKNOWN_WIDGET_TYPE,
                    message=f"Unknown widget type '{node.type}'",
                    details={"type": node.type},
                )
            )
    else:
        errors.extend(_check_properties(node.properties, schema, path))

    for index, child in enumerate(node.children):
        _visit(child, path + (index,), registry, config, errors)


def validate_tree(
    root: WidgetNode,
    registry: SchemaRegistry,
    config: ValidatorConfig | None = None,
) -> ValidationResult:
    """Validate every node of a widget tree.

    Nodes are visited depth-first, pre-order, children in document order.
    A node deeper than ``config.max_depth`` is reported once with
    MaxDepthExceeded and its subtree is skipped; the rest of the tree is
    still validated.

    Args:
        root: Root node of the tree.
        registry: Schemas to validate against.
        config: Validator settings. Defaults to ``ValidatorConfig()``.

    Returns:
        ValidationResult holding every error found.

    Example:
        >>> result = validate_tree(root, registry)
        >>> if not result.valid:
        ...     for e in result.errors:
        ...         print(e.path, e.property, e.code.value)
    """
    config = config or ValidatorConfig()
    errors: list[ValidationError] = []
    _visit(root, (), registry, config, errors)
    logger.debug(
        "Validated '%s' tree: %d error(s)", root.type, len(errors)
    )
    return ValidationResult(errors=tuple(errors))


def validate_document(
    document: Mapping[str, Any] | str | bytes,
    registry: SchemaRegistry,
    config: ValidatorConfig | None = None,
) -> ValidationResult:
    """Parse a widget description and validate it.

    Raises:
        WidgetDocumentError: If the document is not shaped like a widget tree.
    """
    return validate_tree(parse_widget_tree(document), registry, config)


def is_valid(
    root: WidgetNode,
    registry: SchemaRegistry,
    config: ValidatorConfig | None = None,
) -> bool:
    """Check if a widget tree is valid.

    Example:
        >>> if is_valid(root, registry):
        ...     renderer.render(root)
    """
    return validate_tree(root, registry, config).valid


class WidgetValidator:
    """A registry and a config bundled for repeated validation.

    Example:
        >>> validator = WidgetValidator(default_registry())
        >>> validator.validate({"type": "PieChart", "properties": {"title": 3}}).valid
        False
    """

    def __init__(self, registry: SchemaRegistry, config: ValidatorConfig | None = None):
        self.registry = registry
        self.config = config or ValidatorConfig()

    def with_policy(self, policy: UnknownTypePolicy | str) -> WidgetValidator:
        """Return a validator sharing the registry with a different unknown-type policy."""
        return WidgetValidator(self.registry, replace(self.config, unknown_type_policy=policy))

    def validate(
        self, tree: WidgetNode | Mapping[str, Any] | str | bytes
    ) -> ValidationResult:
        """Validate a parsed tree or a raw document."""
        if isinstance(tree, WidgetNode):
            return validate_tree(tree, self.registry, self.config)
        return validate_document(tree, self.registry, self.config)


__all__ = [
    "ErrorCode",
    "UnknownTypePolicy",
    "ValidatorConfig",
    "ValidationError",
    "ValidationResult",
    "MAX_DEPTH_LIMIT",
    "check_properties",
    "validate_tree",
    "validate_document",
    "is_valid",
    "WidgetValidator",
]
