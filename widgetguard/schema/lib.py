"""Authoritative schema model for widget property validation.

This module is the single source of truth for what a widget's property map
may contain. It provides:
- The closed set of JSON value kinds and a total classifier for them
- Property constraints (kind, pattern, bounds, array items, nested objects)
- Per-widget schema definitions with closed-object semantics
- An immutable registry keyed by widget type name
- Construction from a JSON-Schema-subset configuration and export back to it

Schema definitions are checked for internal consistency when they are built.
A misconfigured schema raises SchemaDefinitionError immediately instead of
surfacing later as a document validation error.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

from widgetguard.core.log import get_logger

logger = get_logger(__name__)


class SchemaDefinitionError(ValueError):
    """Raised when a schema definition or schema configuration is inconsistent."""


# =============================================================================
# Value Kinds
# =============================================================================


class JsonKind(str, Enum):
    """Kinds of JSON values a property may hold."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


def kind_of(value: Any) -> JsonKind:
    """Classify a JSON-typed Python value.

    ``bool`` is checked before numbers since it subclasses ``int``.

    Args:
        value: Value produced by a JSON parser (or an equivalent literal).

    Returns:
        The JsonKind of the value.

    Raises:
        TypeError: If the value is not a JSON value.
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


class ConstraintKind(str, Enum):
    """Kinds a property constraint can require."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


_NUMERIC_KINDS = (ConstraintKind.NUMBER, ConstraintKind.INTEGER)


# =============================================================================
# Schema Model
# =============================================================================


@dataclass(frozen=True)
class PropertyConstraint:
    """Constraint on a single property value.

    Attributes:
        kind: Required value kind.
        required: Whether the property must be present.
        pattern: Regular expression a string value must match in full.
        minimum: Inclusive lower bound for numeric values.
        maximum: Inclusive upper bound for numeric values.
        items: Constraint every array element must satisfy (None = any).
        schema: Nested schema for object values (None = any object).
        description: Human-readable note, used only for export.
    """

    kind: ConstraintKind
    required: bool = False
    pattern: str | None = None
    minimum: float | None = None
    maximum: float | None = None
    items: PropertyConstraint | None = None
    schema: SchemaDefinition | None = None
    description: str = ""
    _regex: re.Pattern[str] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "kind", ConstraintKind(self.kind))
        except ValueError as e:
            raise SchemaDefinitionError(f"Unsupported property kind: {self.kind!r}") from e

        if self.pattern is not None:
            if self.kind is not ConstraintKind.STRING:
                raise SchemaDefinitionError(
                    f"'pattern' applies to string properties, not {self.kind.value}"
                )
            if not isinstance(self.pattern, str):
                raise SchemaDefinitionError("'pattern' must be a string")
            try:
                object.__setattr__(self, "_regex", re.compile(self.pattern))
            except re.error as e:
                raise SchemaDefinitionError(
                    f"Invalid pattern {self.pattern!r}: {e}"
                ) from e

        for bound_name in ("minimum", "maximum"):
            bound = getattr(self, bound_name)
            if bound is None:
                continue
            if self.kind not in _NUMERIC_KINDS:
                raise SchemaDefinitionError(
                    f"'{bound_name}' applies to numeric properties, not {self.kind.value}"
                )
            if isinstance(bound, bool) or not isinstance(bound, (int, float)):
                raise SchemaDefinitionError(f"'{bound_name}' must be a number")

        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise SchemaDefinitionError(
                f"minimum {self.minimum} is greater than maximum {self.maximum}"
            )

        if self.items is not None and self.kind is not ConstraintKind.ARRAY:
            raise SchemaDefinitionError(
                f"'items' applies to array properties, not {self.kind.value}"
            )
        if self.schema is not None and self.kind is not ConstraintKind.OBJECT:
            raise SchemaDefinitionError(
                f"nested schema applies to object properties, not {self.kind.value}"
            )

    @property
    def regex(self) -> re.Pattern[str] | None:
        """Compiled pattern, if any."""
        return self._regex

    def to_json_schema(self) -> dict[str, Any]:
        """Export this constraint as a JSON Schema fragment."""
        if self.kind is ConstraintKind.OBJECT and self.schema is not None:
            result = self.schema.to_json_schema()
        else:
            result = {"type": self.kind.value}
        if self.pattern is not None:
            result["pattern"] = self.pattern
        if self.minimum is not None:
            result["minimum"] = self.minimum
        if self.maximum is not None:
            result["maximum"] = self.maximum
        if self.items is not None:
            result["items"] = self.items.to_json_schema()
        if self.description:
            result["description"] = self.description
        return result


@dataclass(frozen=True)
class SchemaDefinition:
    """Property contract for one widget type (or one nested object).

    Attributes:
        properties: Declared property names and their constraints.
        closed: Reject properties that are not declared.
        description: Human-readable note, used only for export.
    """

    properties: Mapping[str, PropertyConstraint] = field(default_factory=dict)
    closed: bool = True
    description: str = ""

    def __post_init__(self) -> None:
        for name, constraint in self.properties.items():
            if not isinstance(name, str) or not name:
                raise SchemaDefinitionError(f"Invalid property name: {name!r}")
            if not isinstance(constraint, PropertyConstraint):
                raise SchemaDefinitionError(
                    f"Property '{name}' must map to a PropertyConstraint"
                )
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @property
    def required(self) -> tuple[str, ...]:
        """Names of required properties in declaration order."""
        return tuple(name for name, c in self.properties.items() if c.required)

    def to_json_schema(self) -> dict[str, Any]:
        """Export this definition as a JSON Schema object."""
        result: dict[str, Any] = {
            "type": "object",
            "properties": {
                name: constraint.to_json_schema()
                for name, constraint in self.properties.items()
            },
            "additionalProperties": not self.closed,
        }
        if self.required:
            result["required"] = list(self.required)
        if self.description:
            result["description"] = self.description
        return result


# =============================================================================
# Registry
# =============================================================================


class SchemaRegistry:
    """Immutable mapping from widget type name to SchemaDefinition.

    The registry is populated once at construction and offers no mutation
    API, so a single instance can be shared by any number of validations.

    Example:
        >>> registry = SchemaRegistry({"ProgressRing": ring_schema})
        >>> registry.lookup("ProgressRing") is ring_schema
        True
        >>> registry.lookup("Widget99") is None
        True
    """

    def __init__(self, definitions: Mapping[str, SchemaDefinition]):
        for type_name, definition in definitions.items():
            if not isinstance(type_name, str) or not type_name:
                raise SchemaDefinitionError(f"Invalid widget type name: {type_name!r}")
            if not isinstance(definition, SchemaDefinition):
                raise SchemaDefinitionError(
                    f"Widget type '{type_name}' must map to a SchemaDefinition"
                )
        self._definitions: Mapping[str, SchemaDefinition] = MappingProxyType(
            dict(definitions)
        )
        logger.debug("Built schema registry with %d widget types", len(self))

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> SchemaRegistry:
        """Build a registry from a widget-type -> JSON-Schema-subset mapping.

        Args:
            config: Mapping of widget type names to schema objects.

        Returns:
            A populated registry.

        Raises:
            SchemaDefinitionError: If any schema uses unsupported keywords or
                is internally inconsistent.
        """
        if not isinstance(config, Mapping):
            raise SchemaDefinitionError("Schema configuration must be an object")
        return cls(
            {
                type_name: definition_from_config(spec, where=type_name)
                for type_name, spec in config.items()
            }
        )

    def lookup(self, type_name: str) -> SchemaDefinition | None:
        """Return the schema for a widget type, or None if it is not registered."""
        return self._definitions.get(type_name)

    def type_names(self) -> list[str]:
        """Registered widget type names in registration order."""
        return list(self._definitions)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"SchemaRegistry({len(self)} widget types)"


# =============================================================================
# Configuration Parsing
# =============================================================================

_DEFINITION_KEYS = frozenset(
    {"type", "properties", "additionalProperties", "required", "description"}
)
_CONSTRAINT_KEYS = frozenset(
    {
        "type",
        "pattern",
        "minimum",
        "maximum",
        "items",
        "properties",
        "additionalProperties",
        "required",
        "description",
    }
)


def definition_from_config(spec: Mapping[str, Any], where: str = "schema") -> SchemaDefinition:
    """Build a SchemaDefinition from a JSON Schema object.

    Objects are closed unless ``additionalProperties`` is explicitly true.
    Required names may be listed in ``required`` or flagged on the property
    itself with ``"required": true``.

    Args:
        spec: JSON Schema object with ``properties``.
        where: Location used in error messages.

    Returns:
        The parsed definition.
    """
    if not isinstance(spec, Mapping):
        raise SchemaDefinitionError(f"{where}: schema must be an object")
    unknown = set(spec) - _DEFINITION_KEYS
    if unknown:
        raise SchemaDefinitionError(
            f"{where}: unsupported schema keywords: {', '.join(sorted(unknown))}"
        )
    if spec.get("type", "object") != "object":
        raise SchemaDefinitionError(f"{where}: widget schemas must have type 'object'")

    additional = spec.get("additionalProperties", False)
    if not isinstance(additional, bool):
        raise SchemaDefinitionError(f"{where}: 'additionalProperties' must be a boolean")

    raw_properties = spec.get("properties", {})
    if not isinstance(raw_properties, Mapping):
        raise SchemaDefinitionError(f"{where}: 'properties' must be an object")

    required_names = spec.get("required", [])
    if not isinstance(required_names, list) or not all(
        isinstance(n, str) for n in required_names
    ):
        raise SchemaDefinitionError(f"{where}: 'required' must be a list of names")
    undeclared = [n for n in required_names if n not in raw_properties]
    if undeclared:
        raise SchemaDefinitionError(
            f"{where}: required properties not declared: {', '.join(undeclared)}"
        )

    properties = {
        name: constraint_from_config(
            prop_spec, required=name in required_names, where=f"{where}.{name}"
        )
        for name, prop_spec in raw_properties.items()
    }
    return SchemaDefinition(
        properties=properties,
        closed=not additional,
        description=spec.get("description", ""),
    )


def constraint_from_config(
    spec: Mapping[str, Any], required: bool = False, where: str = "property"
) -> PropertyConstraint:
    """Build a PropertyConstraint from a JSON Schema property fragment."""
    if not isinstance(spec, Mapping):
        raise SchemaDefinitionError(f"{where}: property schema must be an object")
    unknown = set(spec) - _CONSTRAINT_KEYS
    if unknown:
        raise SchemaDefinitionError(
            f"{where}: unsupported schema keywords: {', '.join(sorted(unknown))}"
        )
    if "type" not in spec:
        raise SchemaDefinitionError(f"{where}: missing 'type'")
    try:
        kind = ConstraintKind(spec["type"])
    except ValueError as e:
        raise SchemaDefinitionError(f"{where}: unsupported type {spec['type']!r}") from e

    nested: SchemaDefinition | None = None
    own_required = spec.get("required", False)
    if kind is ConstraintKind.OBJECT:
        nested_required = isinstance(own_required, list)
        if nested_required:
            # Object-level "required" lists the nested required names.
            own_required = False
        if "properties" in spec or "additionalProperties" in spec or nested_required:
            nested_spec = {k: v for k, v in spec.items() if k in _DEFINITION_KEYS}
            nested_spec.pop("description", None)
            if "required" in nested_spec and not isinstance(nested_spec["required"], list):
                nested_spec.pop("required")
            nested = definition_from_config(nested_spec, where=where)
    elif "properties" in spec or "additionalProperties" in spec:
        raise SchemaDefinitionError(f"{where}: nested properties on a {kind.value} property")

    if not isinstance(own_required, bool):
        raise SchemaDefinitionError(f"{where}: 'required' must be a boolean")

    items = None
    if "items" in spec:
        items = constraint_from_config(spec["items"], where=f"{where}[]")

    return PropertyConstraint(
        kind=kind,
        required=required or own_required,
        pattern=spec.get("pattern"),
        minimum=spec.get("minimum"),
        maximum=spec.get("maximum"),
        items=items,
        schema=nested,
        description=spec.get("description", ""),
    )


def load_registry(path: Path | str) -> SchemaRegistry:
    """Load a registry from a JSON schema configuration file.

    Args:
        path: File holding a widget-type -> schema object mapping.

    Returns:
        The populated registry.

    Raises:
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the file is not valid JSON.
        SchemaDefinitionError: If a schema is invalid.
    """
    path = Path(path)
    config = json.loads(path.read_text(encoding="utf-8"))
    registry = SchemaRegistry.from_config(config)
    logger.info("Loaded %d widget schemas from %s", len(registry), path)
    return registry


def export_json_schema(registry: SchemaRegistry) -> dict[str, Any]:
    """Export every registered widget schema as JSON Schema.

    Returns:
        Mapping of widget type name to its JSON Schema object.
    """
    return {
        type_name: registry.lookup(type_name).to_json_schema()
        for type_name in registry
    }


__all__ = [
    "SchemaDefinitionError",
    "JsonKind",
    "kind_of",
    "ConstraintKind",
    "PropertyConstraint",
    "SchemaDefinition",
    "SchemaRegistry",
    "definition_from_config",
    "constraint_from_config",
    "load_registry",
    "export_json_schema",
]
