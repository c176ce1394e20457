"""Example widget descriptions.

Read-only showcase documents for the built-in widgets. They document
typical usage and serve as fixtures; validation never depends on them.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WidgetExample:
    """A named example document.

    Attributes:
        name: Short human-readable title.
        document: Widget description in input-document form.
    """

    name: str
    document: dict[str, Any]

    @property
    def widget_type(self) -> str:
        """Type of the example's root node."""
        return self.document["type"]


def _leaf(widget_type: str, **properties: Any) -> dict[str, Any]:
    return {"type": widget_type, "properties": properties}


EXAMPLES: tuple[WidgetExample, ...] = (
    # === DATA DISPLAY ===
    WidgetExample(
        "Basic Line Chart",
        _leaf(
            "LineChart",
            title="Sales Trend",
            dataPoints=[10, 25, 15, 30, 20, 35, 28],
            backgroundColor="#FFFFFF",
            lineColor="#2196F3",
        ),
    ),
    WidgetExample(
        "Basic Bar Chart",
        _leaf("BarChart", title="Monthly Revenue", dataPoints=[12, 25, 18, 30, 22, 28], barColor="#2196F3"),
    ),
    WidgetExample(
        "Market Share",
        _leaf("PieChart", title="Market Distribution", dataPoints=[30, 25, 20, 15, 10]),
    ),
    WidgetExample("Correlation Plot", _leaf("ScatterChart", title="Price vs Demand", dataCount=20)),
    WidgetExample(
        "Sales Progression",
        _leaf("AreaChart", title="Cumulative Sales", dataPoints=[10, 25, 35, 50, 65, 80, 95], areaColor="#81C784"),
    ),
    WidgetExample(
        "Release Milestones",
        _leaf("Timeline", events=["Planning", "Design", "Build", "Launch"], lineColor="#3F51B5"),
    ),
    WidgetExample(
        "Booked Days",
        _leaf("Calendar", monthYear="October 2025", selectedDates=[3, 14, 27]),
    ),
    WidgetExample(
        "Download Progress",
        _leaf("ProgressRing", progress=0.65, size=120, ringColor="#2196F3"),
    ),
    WidgetExample(
        "Installation Complete",
        _leaf("ProgressRing", progress=1.0, size=120, ringColor="#4ECDC4"),
    ),
    WidgetExample(
        "Revenue Card",
        _leaf("StatisticCard", label="Total Revenue", value="$125,400", backgroundColor="#FF6B35"),
    ),
    WidgetExample(
        "Sales Table",
        _leaf(
            "TableView",
            headers=["Product", "Q1", "Q2", "Q3"],
            rows=[
                ["Widget A", "250", "320", "380"],
                ["Widget B", "180", "220", "260"],
                ["Widget C", "320", "350", "410"],
            ],
        ),
    ),
    WidgetExample("News Feed", _leaf("InfiniteList", itemCount=50, title="News Item")),
    WidgetExample(
        "Photo Grid",
        _leaf("VirtualGrid", itemCount=50, crossAxisCount=3, backgroundColor="#FFFFFF"),
    ),
    WidgetExample("Pinterest Style", _leaf("MasonryGrid", itemCount=30)),
    WidgetExample(
        "Project History",
        _leaf(
            "TimelineView",
            events=[
                {"title": "Project Started", "description": "Initial kickoff meeting", "time": "09:00 AM"},
                {"title": "Design Review", "description": "UI/UX design approved", "time": "02:00 PM"},
                {"title": "Development Begins", "description": "Team starts coding", "time": "04:30 PM"},
            ],
        ),
    ),
    WidgetExample(
        "Analytics Dashboard",
        _leaf("DataGrid", title="Performance Metrics", columnCount=4, rowCount=5),
    ),
    # === NAVIGATION ===
    WidgetExample(
        "Mail Navigation Rail",
        _leaf(
            "NavigationRail",
            destinations=[
                {"label": "Inbox", "icon": "inbox"},
                {"label": "Sent", "icon": "send"},
                {"label": "Archive", "icon": "archive"},
            ],
            selectedIndex=0,
            extended=False,
            groupAlignment=-1.0,
            backgroundColor="#FAFAFA",
        ),
    ),
    WidgetExample(
        "Settings Breadcrumb",
        _leaf(
            "Breadcrumb",
            items=[{"label": "Home", "onTap": True}, {"label": "Settings", "onTap": True}, {"label": "Privacy"}],
            separator="/",
            fontSize=14,
        ),
    ),
    WidgetExample(
        "App Menu Bar",
        _leaf(
            "MenuBar",
            items=[
                {"label": "File", "submenu": [{"label": "New"}, {"label": "Open"}]},
                {"label": "Edit", "submenu": [{"label": "Undo"}, {"label": "Redo"}]},
            ],
            backgroundColor="#EEEEEE",
            height=48,
        ),
    ),
    WidgetExample(
        "Shop Bottom Navigation",
        _leaf(
            "AdvancedBottomNav",
            items=[
                {"label": "Home", "icon": "home"},
                {"label": "Cart", "icon": "shopping_cart", "badge": "3"},
                {"label": "Profile", "icon": "person"},
            ],
            selectedIndex=1,
        ),
    ),
    WidgetExample(
        "Search Results Pages",
        _leaf("PaginationNav", currentPage=3, totalPages=12, maxButtons=5),
    ),
    # === COMPOSITE ===
    WidgetExample(
        "Sales Dashboard",
        {
            "type": "Column",
            "properties": {"mainAxisAlignment": "start", "spacing": 16.0},
            "children": [
                _leaf("Text", text="Sales Overview", fontSize=24.0, fontWeight="bold"),
                {
                    "type": "Row",
                    "properties": {"mainAxisAlignment": "spaceEvenly"},
                    "children": [
                        _leaf("StatisticCard", label="Revenue", value="$48,200", backgroundColor="#E3F2FD"),
                        _leaf("StatisticCard", label="Orders", value="1,284", backgroundColor="#E8F5E9"),
                    ],
                },
                {
                    "type": "Card",
                    "properties": {"margin": 16.0},
                    "children": [
                        _leaf("LineChart", title="Weekly Sales", dataPoints=[120, 140, 90, 180, 160]),
                        _leaf("ProgressRing", progress=0.72, size=80),
                    ],
                },
            ],
        },
    ),
)


def get_examples(widget_type: str | None = None) -> list[WidgetExample]:
    """Return example documents, optionally filtered by root widget type."""
    if widget_type is None:
        return list(EXAMPLES)
    return [example for example in EXAMPLES if example.widget_type == widget_type]
