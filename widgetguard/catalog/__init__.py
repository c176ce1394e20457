"""Built-in widget catalog: default schemas and example documents.

Example usage:
    >>> from widgetguard.catalog import default_registry
    >>> "ProgressRing" in default_registry()
    True
"""

from .examples import EXAMPLES, WidgetExample, get_examples
from .lib import default_registry, get_registry
from .schemas import (
    DATA_DISPLAY_SCHEMAS,
    HEX_COLOR_PATTERN,
    LAYOUT_SCHEMAS,
    NAVIGATION_SCHEMAS,
    WIDGET_SCHEMAS,
)

__all__ = [
    # Schemas
    "HEX_COLOR_PATTERN",
    "LAYOUT_SCHEMAS",
    "DATA_DISPLAY_SCHEMAS",
    "NAVIGATION_SCHEMAS",
    "WIDGET_SCHEMAS",
    # Registry
    "default_registry",
    "get_registry",
    # Examples
    "EXAMPLES",
    "WidgetExample",
    "get_examples",
]
