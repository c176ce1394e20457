"""Widget tree model and document parsing."""

from .lib import WidgetDocumentError, WidgetNode, parse_widget_tree

__all__ = [
    "WidgetNode",
    "WidgetDocumentError",
    "parse_widget_tree",
]
