"""Widget tree model.

A widget description is a tree of nodes, each naming a widget type, a flat
property map and an ordered list of children. Children are owned values,
never references, so every parsed tree is finite and acyclic.

Nodes are frozen pydantic models. Parsing checks only the document shape;
property contents are checked later against the schema registry by
``widgetguard.validation``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, JsonValue
from pydantic import ValidationError as PydanticValidationError

from widgetguard.core.log import get_logger

logger = get_logger(__name__)


class WidgetDocumentError(ValueError):
    """Raised when an input document does not have the widget-node shape.

    Attributes:
        errors: One entry per shape problem, each with ``loc`` (location
            inside the document, dotted) and ``msg``.
    """

    def __init__(self, message: str, errors: list[dict[str, str]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class WidgetNode(BaseModel):
    """Recursive node definition for a widget description.

    Attributes:
        type: Widget type name, used as the registry key.
        properties: Flat map of JSON-typed property values.
        children: Nested child nodes in render order.
    """

    type: str = Field(..., min_length=1, description="Widget type name")
    properties: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Widget properties, checked against the type's schema",
    )
    children: list["WidgetNode"] = Field(
        default_factory=list,
        description="Nested child widgets",
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }


def _location(path: tuple[int, ...], loc: tuple[Any, ...]) -> str:
    parts = [f"children.{index}" for index in path]
    parts.extend(str(part) for part in loc)
    return ".".join(parts) or "root"


def _load_json(document: str | bytes) -> Any:
    try:
        return json.loads(document)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise WidgetDocumentError(
            f"Malformed widget document: root: Invalid JSON: {e}",
            [{"loc": "root", "msg": f"Invalid JSON: {e}"}],
        ) from e
    except RecursionError as e:
        raise WidgetDocumentError(
            "Malformed widget document: root: nesting too deep to parse",
            [{"loc": "root", "msg": "Nesting too deep to parse"}],
        ) from e


def parse_widget_tree(document: Mapping[str, Any] | str | bytes) -> WidgetNode:
    """Parse a widget description into a WidgetNode tree.

    Nodes are built bottom-up without recursion, so arbitrarily deep trees
    parse and depth is left for the validator to limit. Each node's own
    shape is checked by pydantic; already-built children are passed in as
    model instances and are not revalidated.

    Args:
        document: Parsed JSON mapping, or raw JSON text.

    Returns:
        The root node.

    Raises:
        WidgetDocumentError: If the document is not shaped like a widget node
            (missing ``type``, non-list ``children``, non-JSON values, ...).

    Example:
        >>> root = parse_widget_tree('{"type": "Column", "children": []}')
        >>> root.type
        'Column'
    """
    if isinstance(document, (str, bytes)):
        document = _load_json(document)

    # Pre-order listing of raw nodes; a parent always precedes its children.
    ordered: list[tuple[Any, tuple[int, ...]]] = []
    stack: list[tuple[Any, tuple[int, ...]]] = [(document, ())]
    while stack:
        raw, path = stack.pop()
        ordered.append((raw, path))
        children = raw.get("children") if isinstance(raw, Mapping) else None
        if isinstance(children, list):
            stack.extend(
                (child, path + (index,))
                for index, child in reversed(list(enumerate(children)))
            )

    built: dict[tuple[int, ...], WidgetNode] = {}
    failures: dict[int, list[dict[str, str]]] = {}
    for position in range(len(ordered) - 1, -1, -1):
        raw, path = ordered[position]
        data = raw
        if isinstance(raw, Mapping) and isinstance(raw.get("children"), list):
            count = len(raw["children"])
            child_paths = [path + (index,) for index in range(count)]
            if not all(child in built for child in child_paths):
                # A descendant is already reported; this node cannot be built.
                continue
            data = {**raw, "children": [built.pop(child) for child in child_paths]}
        try:
            built[path] = WidgetNode.model_validate(data)
        except PydanticValidationError as e:
            failures[position] = [
                {"loc": _location(path, tuple(err["loc"])), "msg": err["msg"]}
                for err in e.errors()
            ]

    if failures:
        errors = [err for position in sorted(failures) for err in failures[position]]
        logger.debug("Rejected widget document with %d shape errors", len(errors))
        summary = "; ".join(f"{err['loc']}: {err['msg']}" for err in errors[:3])
        raise WidgetDocumentError(f"Malformed widget document: {summary}", errors)
    return built[()]


__all__ = [
    "WidgetNode",
    "WidgetDocumentError",
    "parse_widget_tree",
]
