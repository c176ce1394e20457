"""Unit tests for catalog module."""

import pytest

from widgetguard.schema import ConstraintKind
from widgetguard.tree import parse_widget_tree
from widgetguard.validation import ErrorCode, validate_document

from .examples import EXAMPLES, get_examples
from .lib import default_registry, get_registry
from .schemas import (
    DATA_DISPLAY_SCHEMAS,
    HEX_COLOR_PATTERN,
    LAYOUT_SCHEMAS,
    NAVIGATION_SCHEMAS,
    WIDGET_SCHEMAS,
)


class TestDefaultRegistry:
    """Tests for the built-in registry."""

    @pytest.mark.unit
    def test_registers_every_widget(self):
        """Layout, data display and navigation schemas are all registered."""
        registry = default_registry()
        assert len(registry) == len(WIDGET_SCHEMAS)
        assert len(LAYOUT_SCHEMAS) == 6
        assert len(DATA_DISPLAY_SCHEMAS) == 15
        assert len(NAVIGATION_SCHEMAS) == 13
        assert len(registry) == 34

    @pytest.mark.unit
    def test_groups_do_not_overlap(self):
        """No widget type is defined in two groups."""
        names = [*LAYOUT_SCHEMAS, *DATA_DISPLAY_SCHEMAS, *NAVIGATION_SCHEMAS]
        assert len(names) == len(set(names))

    @pytest.mark.unit
    def test_cached(self):
        """The registry is built once."""
        assert default_registry() is default_registry()

    @pytest.mark.unit
    def test_widget_schemas_are_closed(self):
        """Built-in widgets reject undeclared properties."""
        registry = default_registry()
        assert all(registry.lookup(name).closed for name in registry)

    @pytest.mark.unit
    def test_progress_ring_bounds(self):
        """ProgressRing progress is bounded to [0, 1]."""
        progress = default_registry().lookup("ProgressRing").properties["progress"]
        assert progress.kind is ConstraintKind.NUMBER
        assert (progress.minimum, progress.maximum) == (0, 1)

    @pytest.mark.unit
    def test_calendar_dates_are_days_of_month(self):
        """Calendar selectedDates items are whole days 1 to 31."""
        registry = default_registry()
        dates = registry.lookup("Calendar").properties["selectedDates"]
        assert dates.items.kind is ConstraintKind.INTEGER
        assert (dates.items.minimum, dates.items.maximum) == (1, 31)
        result = validate_document(
            {"type": "Calendar", "properties": {"selectedDates": [0, 31, 32]}}, registry
        )
        assert [e.details["index"] for e in result.errors] == [0, 2]

    @pytest.mark.unit
    def test_color_properties_use_hex_pattern(self):
        """Every *Color property is a 6-digit hex string."""
        registry = default_registry()
        colors = [
            constraint
            for name in registry
            for prop, constraint in registry.lookup(name).properties.items()
            if prop.lower().endswith("color")
        ]
        assert colors
        assert all(c.pattern == HEX_COLOR_PATTERN for c in colors)

    @pytest.mark.unit
    def test_required_navigation_items(self):
        """Navigation widgets declare their item lists as required."""
        registry = default_registry()
        assert registry.lookup("NavigationRail").required == ("destinations",)
        assert registry.lookup("PaginationNav").required == ("currentPage", "totalPages")


class TestExamples:
    """Tests for the example documents."""

    @pytest.mark.unit
    @pytest.mark.parametrize("example", EXAMPLES, ids=lambda e: e.name)
    def test_example_is_valid(self, example):
        """Every example validates against the built-in registry."""
        result = validate_document(example.document, default_registry())
        assert result.valid, result.to_dict()

    @pytest.mark.unit
    def test_examples_parse(self):
        """Example documents are well-formed widget trees."""
        for example in EXAMPLES:
            assert parse_widget_tree(example.document).type == example.widget_type

    @pytest.mark.unit
    def test_example_types_are_registered(self):
        """Examples only use registered root types."""
        registry = default_registry()
        assert all(example.widget_type in registry for example in EXAMPLES)

    @pytest.mark.unit
    def test_filter_by_type(self):
        """Filtering returns only examples rooted at the given type."""
        rings = get_examples("ProgressRing")
        assert len(rings) == 2
        assert {e.name for e in rings} == {"Download Progress", "Installation Complete"}

    @pytest.mark.unit
    def test_filter_unknown_type(self):
        """Unknown types have no examples."""
        assert get_examples("Widget99") == []

    @pytest.mark.unit
    def test_all_examples(self):
        """Without a filter every example is returned."""
        assert get_examples() == list(EXAMPLES)

    @pytest.mark.unit
    def test_broken_example_is_caught(self):
        """Changing an example value out of range is reported."""
        document = dict(get_examples("ProgressRing")[0].document)
        document["properties"] = {**document["properties"], "progress": 1.5}
        result = validate_document(document, default_registry())
        assert result.codes() == [ErrorCode.OUT_OF_RANGE]


class TestGetRegistry:
    """Tests for registry resolution."""

    @pytest.mark.unit
    def test_default(self):
        """Without a file the built-in catalog is used."""
        assert get_registry() is default_registry()

    @pytest.mark.unit
    def test_explicit_file(self, schema_file):
        """An explicit schema file replaces the built-in catalog."""
        registry = get_registry(schema_file)
        assert registry.type_names() == ["Badge", "Banner"]
        assert "ProgressRing" not in registry

    @pytest.mark.unit
    def test_file_from_environment(self, schema_file, monkeypatch):
        """WIDGETGUARD_SCHEMA_FILE selects the schema file."""
        monkeypatch.setenv("WIDGETGUARD_SCHEMA_FILE", str(schema_file))
        registry = get_registry()
        assert registry.type_names() == ["Badge", "Banner"]

    @pytest.mark.unit
    def test_loaded_schemas_validate(self, schema_file):
        """Loaded schemas keep their closed/open and required settings."""
        registry = get_registry(schema_file)
        result = validate_document(
            {"type": "Badge", "properties": {"count": -1, "tone": "red"}}, registry
        )
        assert result.codes() == [
            ErrorCode.OUT_OF_RANGE,
            ErrorCode.UNKNOWN_PROPERTY,
            ErrorCode.MISSING_REQUIRED,
        ]
        banner = validate_document(
            {"type": "Banner", "properties": {"message": "Hi", "tone": "red"}}, registry
        )
        assert banner.valid

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        """A missing schema file is an error, not a silent fallback."""
        with pytest.raises(OSError):
            get_registry(tmp_path / "missing.json")
