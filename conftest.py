"""Root pytest configuration and fixtures.

This module provides:
- Environment isolation for WIDGETGUARD_* variables
- Registry fixtures
- Common widget tree fixtures
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from widgetguard.schema import SchemaRegistry
    from widgetguard.tree import WidgetNode


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove WIDGETGUARD_* variables so tests see the documented defaults."""
    from widgetguard.config import EnvVar

    for var in EnvVar:
        monkeypatch.delenv(var.value.name, raising=False)


# =============================================================================
# Registry Fixtures
# =============================================================================


@pytest.fixture
def registry() -> SchemaRegistry:
    """Registry of built-in widget schemas.

    Returns:
        The shared default registry.
    """
    from widgetguard.catalog import default_registry

    return default_registry()


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """Write a small schema configuration file.

    Returns:
        Path to a JSON file registering ``Badge`` and ``Banner``.
    """
    path = tmp_path / "widgets.json"
    path.write_text(
        json.dumps(
            {
                "Badge": {
                    "type": "object",
                    "properties": {
                        "label": {"type": "string"},
                        "count": {"type": "integer", "minimum": 0},
                    },
                    "required": ["label"],
                },
                "Banner": {
                    "type": "object",
                    "properties": {"message": {"type": "string"}},
                    "additionalProperties": True,
                },
            }
        )
    )
    return path


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def sample_tree() -> WidgetNode:
    """Create a small valid dashboard tree.

    Returns:
        A Column with a statistic card and a nested column of two charts.
    """
    from widgetguard.tree import WidgetNode

    return WidgetNode(
        type="Column",
        properties={"spacing": 8},
        children=[
            WidgetNode(
                type="StatisticCard",
                properties={"label": "Users", "value": "1,024"},
            ),
            WidgetNode(
                type="Column",
                children=[
                    WidgetNode(
                        type="LineChart",
                        properties={"title": "Signups", "dataPoints": [3, 5, 8]},
                    ),
                    WidgetNode(
                        type="BarChart",
                        properties={"dataPoints": [1.5, 2.5], "barColor": "#4CAF50"},
                    ),
                ],
            ),
        ],
    )
