"""Built-in widget schema configuration.

Schemas are written in the JSON Schema subset understood by
``SchemaRegistry.from_config``. Every widget object is closed; nested item
objects are closed as well.
"""

from typing import Any

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


def _color(description: str) -> dict[str, Any]:
    return {"type": "string", "pattern": HEX_COLOR_PATTERN, "description": description}


def _string_list(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def _number_list(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "number"}, "description": description}


def _closed(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }
    if required:
        schema["required"] = required
    return schema


_ALIGNMENT_PATTERN = r"^(start|end|center|spaceBetween|spaceAround|spaceEvenly)$"
_CROSS_ALIGNMENT_PATTERN = r"^(start|end|center|stretch|baseline)$"
_FONT_WEIGHT_PATTERN = r"^(normal|bold|w[1-9]00)$"


# =============================================================================
# Layout
# =============================================================================

LAYOUT_SCHEMAS: dict[str, dict[str, Any]] = {
    "Column": _closed(
        {
            "mainAxisAlignment": {"type": "string", "pattern": _ALIGNMENT_PATTERN},
            "crossAxisAlignment": {"type": "string", "pattern": _CROSS_ALIGNMENT_PATTERN},
            "spacing": {"type": "number", "minimum": 0},
        }
    ),
    "Row": _closed(
        {
            "mainAxisAlignment": {"type": "string", "pattern": _ALIGNMENT_PATTERN},
            "crossAxisAlignment": {"type": "string", "pattern": _CROSS_ALIGNMENT_PATTERN},
            "spacing": {"type": "number", "minimum": 0},
        }
    ),
    "Container": _closed(
        {
            "padding": {"type": "number", "minimum": 0},
            "width": {"type": "number", "minimum": 0},
            "height": {"type": "number", "minimum": 0},
            "color": _color("Fill color in hex format"),
        }
    ),
    "Padding": _closed({"padding": {"type": "number", "minimum": 0}}),
    "Card": _closed(
        {
            "margin": {"type": "number", "minimum": 0},
            "elevation": {"type": "number", "minimum": 0, "maximum": 24},
            "color": _color("Card color in hex format"),
        }
    ),
    "Text": _closed(
        {
            "text": {"type": "string", "description": "Displayed text"},
            "fontSize": {"type": "number", "minimum": 1, "maximum": 200},
            "fontWeight": {"type": "string", "pattern": _FONT_WEIGHT_PATTERN},
            "color": _color("Text color in hex format"),
        },
        required=["text"],
    ),
}


# =============================================================================
# Data Display
# =============================================================================

DATA_DISPLAY_SCHEMAS: dict[str, dict[str, Any]] = {
    "LineChart": _closed(
        {
            "title": {"type": "string", "description": "Chart title"},
            "dataPoints": _number_list("Array of numeric data points"),
            "backgroundColor": _color("Background color in hex format"),
            "lineColor": _color("Line color in hex format"),
        }
    ),
    "BarChart": _closed(
        {
            "title": {"type": "string", "description": "Chart title"},
            "dataPoints": _number_list("Array of bar heights"),
            "barColor": _color("Bar color in hex format"),
        }
    ),
    "PieChart": _closed(
        {
            "title": {"type": "string", "description": "Chart title"},
            "dataPoints": _number_list("Array of pie slice values"),
        }
    ),
    "ScatterChart": _closed(
        {
            "title": {"type": "string", "description": "Chart title"},
            "dataCount": {
                "type": "integer",
                "minimum": 1,
                "description": "Number of data points to display",
            },
        }
    ),
    "AreaChart": _closed(
        {
            "title": {"type": "string", "description": "Chart title"},
            "dataPoints": _number_list("Array of area data points"),
            "areaColor": _color("Area fill color in hex format"),
        }
    ),
    "Timeline": _closed(
        {
            "events": _string_list("Array of event descriptions"),
            "lineColor": _color("Timeline line color in hex format"),
        }
    ),
    "Calendar": _closed(
        {
            "monthYear": {
                "type": "string",
                "description": 'Month and year display (e.g., "October 2025")',
            },
            "selectedDates": {
                "type": "array",
                # Day-of-month range, as stated in the description.
                "items": {"type": "integer", "minimum": 1, "maximum": 31},
                "description": "Array of selected date numbers (1-31)",
            },
        }
    ),
    "ProgressRing": _closed(
        {
            "progress": {
                "type": "number",
                "minimum": 0,
                "maximum": 1,
                "description": "Progress value from 0 to 1",
            },
            "size": {"type": "number", "minimum": 50, "description": "Ring size in pixels"},
            "ringColor": _color("Ring color in hex format"),
        }
    ),
    "StatisticCard": _closed(
        {
            "label": {"type": "string", "description": "Card label"},
            "value": {"type": "string", "description": "Statistic value"},
            "backgroundColor": _color("Background color in hex format"),
        }
    ),
    "TableView": _closed(
        {
            "headers": _string_list("Table header names"),
            "rows": {
                "type": "array",
                "items": {"type": "array"},
                "description": "Array of table rows (each row is array of values)",
            },
        }
    ),
    "InfiniteList": _closed(
        {
            "itemCount": {"type": "integer", "minimum": 1, "description": "Number of list items"},
            "title": {"type": "string", "description": "List item title prefix"},
        }
    ),
    "VirtualGrid": _closed(
        {
            "itemCount": {"type": "integer", "minimum": 1, "description": "Number of grid items"},
            "crossAxisCount": {"type": "integer", "minimum": 1, "description": "Number of columns"},
            "backgroundColor": _color("Item background color in hex format"),
        }
    ),
    "MasonryGrid": _closed(
        {
            "itemCount": {"type": "integer", "minimum": 1, "description": "Number of masonry items"},
        }
    ),
    "TimelineView": _closed(
        {
            "events": {
                "type": "array",
                "items": _closed(
                    {
                        "title": {"type": "string"},
                        "description": {"type": "string"},
                        "time": {"type": "string"},
                    }
                ),
                "description": "Array of timeline events",
            },
        }
    ),
    "DataGrid": _closed(
        {
            "title": {"type": "string", "description": "Grid title"},
            "columnCount": {"type": "integer", "minimum": 1, "description": "Number of columns"},
            "rowCount": {"type": "integer", "minimum": 1, "description": "Number of rows"},
        }
    ),
}


# =============================================================================
# Navigation
# =============================================================================

_LABELLED_ITEM = _closed({"label": {"type": "string"}, "icon": {"type": "string"}}, ["label"])

NAVIGATION_SCHEMAS: dict[str, dict[str, Any]] = {
    "NavigationRail": _closed(
        {
            "destinations": {
                "type": "array",
                "items": _closed(
                    {"label": {"type": "string"}, "icon": {"type": "string"}},
                    ["label", "icon"],
                ),
            },
            "selectedIndex": {"type": "integer", "minimum": 0},
            "extended": {"type": "boolean"},
            "groupAlignment": {"type": "number", "minimum": -1, "maximum": 1},
            "backgroundColor": _color("Rail background color in hex format"),
            "minWidth": {"type": "number", "minimum": 50},
            "minExtendedWidth": {"type": "number", "minimum": 150},
            "leading": {"type": "boolean"},
            "trailing": {"type": "boolean"},
        },
        required=["destinations"],
    ),
    "Breadcrumb": _closed(
        {
            "items": {
                "type": "array",
                "items": _closed({"label": {"type": "string"}, "onTap": {"type": "boolean"}}, ["label"]),
            },
            "separator": {"type": "string"},
            "fontSize": {"type": "number", "minimum": 8, "maximum": 48},
            "spacing": {"type": "number", "minimum": 0},
        },
        required=["items"],
    ),
    "BreadcrumbItem": _closed(
        {"label": {"type": "string"}, "isClickable": {"type": "boolean"}},
        required=["label"],
    ),
    "StackedNavigation": _closed(
        {
            "screens": {
                "type": "array",
                "items": _closed({"title": {"type": "string"}, "content": {"type": "string"}}, ["title"]),
            },
            "currentIndex": {"type": "integer", "minimum": 0},
            "animationDuration": {"type": "integer", "minimum": 0, "maximum": 5000},
        },
        required=["screens"],
    ),
    "NavigationStack": _closed({"stack": _string_list("Screen names, bottom first")}, ["stack"]),
    "DrawerNavigation": _closed(
        {
            "items": {"type": "array", "items": _LABELLED_ITEM},
            "headerTitle": {"type": "string"},
            "backgroundColor": _color("Drawer background color in hex format"),
        },
        required=["items"],
    ),
    "MenuBar": _closed(
        {
            "items": {
                "type": "array",
                "items": _closed(
                    {
                        "label": {"type": "string"},
                        "submenu": {
                            "type": "array",
                            "items": _closed({"label": {"type": "string"}}),
                        },
                    },
                    ["label"],
                ),
            },
            "backgroundColor": _color("Menu bar background color in hex format"),
            "height": {"type": "number", "minimum": 40, "maximum": 100},
        },
        required=["items"],
    ),
    "SideBar": _closed(
        {
            "items": {
                "type": "array",
                "items": _closed(
                    {
                        "label": {"type": "string"},
                        "expanded": {"type": "boolean"},
                        "children": {
                            "type": "array",
                            "items": _closed({"label": {"type": "string"}}),
                        },
                    },
                    ["label"],
                ),
            },
            "width": {"type": "number", "minimum": 150, "maximum": 500},
            "backgroundColor": _color("Sidebar background color in hex format"),
        },
        required=["items"],
    ),
    "ContextMenu": _closed(
        {
            "items": {"type": "array", "items": _LABELLED_ITEM},
            "triggerText": {"type": "string"},
        },
        required=["items"],
    ),
    "AdvancedBottomNav": _closed(
        {
            "items": {
                "type": "array",
                "items": _closed(
                    {
                        "label": {"type": "string"},
                        "icon": {"type": "string"},
                        "badge": {"type": "string"},
                    },
                    ["label", "icon"],
                ),
            },
            "selectedIndex": {"type": "integer", "minimum": 0},
            "backgroundColor": _color("Navigation bar background color in hex format"),
        },
        required=["items"],
    ),
    "TabBarEnhanced": _closed(
        {
            "tabs": {"type": "array", "items": _closed({"label": {"type": "string"}}, ["label"])},
            "selectedIndex": {"type": "integer", "minimum": 0},
            "indicatorColor": _color("Selected tab indicator color in hex format"),
            "backgroundColor": _color("Tab bar background color in hex format"),
        },
        required=["tabs"],
    ),
    "AnimatedDrawer": _closed(
        {
            "items": _string_list("Drawer entry labels"),
            "isOpen": {"type": "boolean"},
            "animationDuration": {"type": "integer", "minimum": 0, "maximum": 5000},
        },
        required=["items"],
    ),
    "PaginationNav": _closed(
        {
            "currentPage": {"type": "integer", "minimum": 1},
            "totalPages": {"type": "integer", "minimum": 1},
            "maxButtons": {"type": "integer", "minimum": 1, "maximum": 20},
            "backgroundColor": _color("Pagination background color in hex format"),
        },
        required=["currentPage", "totalPages"],
    ),
}


WIDGET_SCHEMAS: dict[str, dict[str, Any]] = {
    **LAYOUT_SCHEMAS,
    **DATA_DISPLAY_SCHEMAS,
    **NAVIGATION_SCHEMAS,
}
