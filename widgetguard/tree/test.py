"""Unit tests for the widget tree model."""

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from widgetguard.tree import (
    WidgetDocumentError,
    WidgetNode,
    parse_widget_tree,
)


class TestWidgetNode:
    """Tests for the WidgetNode model."""

    @pytest.mark.unit
    def test_defaults(self):
        """Properties and children default to empty."""
        node = WidgetNode(type="Divider")
        assert node.properties == {}
        assert node.children == []

    @pytest.mark.unit
    def test_frozen(self):
        """Nodes cannot be reassigned after construction."""
        node = WidgetNode(type="Divider")
        with pytest.raises(PydanticValidationError):
            node.type = "Spacer"

    @pytest.mark.unit
    def test_nested_children(self, sample_tree):
        """Children keep their order."""
        assert [child.type for child in sample_tree.children] == [
            "StatisticCard",
            "Column",
        ]


class TestParseWidgetTree:
    """Tests for parse_widget_tree."""

    @pytest.mark.unit
    def test_parse_mapping(self):
        """Mappings parse into nodes with defaults filled in."""
        root = parse_widget_tree(
            {"type": "Column", "children": [{"type": "PieChart", "properties": {"title": "Share"}}]}
        )
        assert root.type == "Column"
        assert root.properties == {}
        assert root.children[0].properties == {"title": "Share"}

    @pytest.mark.unit
    def test_parse_json_text(self):
        """Raw JSON text is accepted."""
        root = parse_widget_tree('{"type": "ProgressRing", "properties": {"progress": 0.5}}')
        assert root.properties["progress"] == 0.5

    @pytest.mark.unit
    def test_missing_type(self):
        """Documents without a type are malformed."""
        with pytest.raises(WidgetDocumentError) as exc_info:
            parse_widget_tree({"properties": {}})
        assert exc_info.value.errors[0]["loc"] == "type"

    @pytest.mark.unit
    def test_empty_type(self):
        """The type name must be non-empty."""
        with pytest.raises(WidgetDocumentError):
            parse_widget_tree({"type": ""})

    @pytest.mark.unit
    def test_children_must_be_list(self):
        """A non-list children value is malformed."""
        with pytest.raises(WidgetDocumentError):
            parse_widget_tree({"type": "Column", "children": {"type": "Text"}})

    @pytest.mark.unit
    def test_nested_error_location(self):
        """Shape errors report where in the document they occurred."""
        with pytest.raises(WidgetDocumentError) as exc_info:
            parse_widget_tree({"type": "Column", "children": [{"type": "Row"}, {}]})
        assert exc_info.value.errors[0]["loc"] == "children.1.type"

    @pytest.mark.unit
    def test_unexpected_node_keys(self):
        """Nodes only carry type, properties and children."""
        with pytest.raises(WidgetDocumentError):
            parse_widget_tree({"type": "Column", "style": {}})

    @pytest.mark.unit
    def test_invalid_json_text(self):
        """Broken JSON text is reported as a malformed document."""
        with pytest.raises(WidgetDocumentError):
            parse_widget_tree('{"type": "Column"')

    @pytest.mark.unit
    def test_error_is_value_error(self):
        """WidgetDocumentError is a ValueError."""
        assert issubclass(WidgetDocumentError, ValueError)


def _nested_columns(depth: int) -> dict:
    """Build a chain of Column nodes ``depth`` levels below the root."""
    node: dict = {"type": "Column"}
    for _ in range(depth):
        node = {"type": "Column", "children": [node]}
    return node


def _depth(root: WidgetNode) -> int:
    depth = 0
    while root.children:
        root = root.children[0]
        depth += 1
    return depth


class TestDeepDocuments:
    """Parsing is not limited by nesting depth."""

    @pytest.mark.unit
    def test_deep_mapping(self):
        """Mappings far deeper than pydantic's own recursion guard parse."""
        assert _depth(parse_widget_tree(_nested_columns(400))) == 400

    @pytest.mark.unit
    def test_deep_json_text(self):
        """JSON text with hundreds of levels parses."""
        text = json.dumps(_nested_columns(250))
        assert _depth(parse_widget_tree(text)) == 250

    @pytest.mark.unit
    def test_deep_error_location(self):
        """Shape errors deep in the tree carry the full child path."""
        document = _nested_columns(150)
        leaf = document
        for _ in range(150):
            leaf = leaf["children"][0]
        leaf["children"] = [{"properties": {}}]
        with pytest.raises(WidgetDocumentError) as exc_info:
            parse_widget_tree(document)
        assert exc_info.value.errors[0]["loc"] == "children.0." * 151 + "type"

    @pytest.mark.unit
    def test_errors_in_document_order(self):
        """Errors from several nodes are reported in document order."""
        with pytest.raises(WidgetDocumentError) as exc_info:
            parse_widget_tree(
                {"type": "Column", "children": [{}, {"type": "Row", "children": [{"type": ""}]}, 5]}
            )
        locs = [err["loc"] for err in exc_info.value.errors]
        assert locs[0] == "children.0.type"
        assert locs[1] == "children.1.children.0.type"
        assert locs[2].startswith("children.2")

    @pytest.mark.unit
    def test_sibling_order_preserved(self):
        """Siblings keep their order and content after bottom-up building."""
        root = parse_widget_tree(
            {"type": "Row", "children": [{"type": "Text", "properties": {"text": str(i)}} for i in range(5)]}
        )
        assert [child.properties["text"] for child in root.children] == ["0", "1", "2", "3", "4"]


class TestPublicApi:
    """Tests for the package surface."""

    @pytest.mark.unit
    def test_exports(self):
        """The package exports the model, its error and the parser only."""
        import widgetguard.tree as tree

        assert sorted(tree.__all__) == ["WidgetDocumentError", "WidgetNode", "parse_widget_tree"]
        assert not hasattr(tree, "tree_stats")
