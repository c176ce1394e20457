"""Unit tests for validation module."""

import json
import math
from dataclasses import FrozenInstanceError

import pytest

from widgetguard.schema import SchemaRegistry
from widgetguard.tree import WidgetDocumentError, WidgetNode
from widgetguard.validation import (
    MAX_DEPTH_LIMIT,
    ErrorCode,
    UnknownTypePolicy,
    ValidationError,
    ValidationResult,
    ValidatorConfig,
    WidgetValidator,
    check_properties,
    is_valid,
    validate_document,
    validate_tree,
)

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


@pytest.fixture
def small_registry() -> SchemaRegistry:
    """Registry with one schema per constraint feature."""
    return SchemaRegistry.from_config(
        {
            "Panel": {"properties": {"color": {"type": "string", "pattern": HEX_COLOR}}},
            "Gauge": {
                "properties": {
                    "progress": {"type": "number", "minimum": 0, "maximum": 1},
                    "ticks": {"type": "integer", "minimum": 1},
                    "label": {"type": "string"},
                    "visible": {"type": "boolean"},
                }
            },
            "Chart": {
                "properties": {
                    "title": {"type": "string"},
                    "dataPoints": {"type": "array", "items": {"type": "number"}},
                },
                "required": ["title"],
            },
            "Legend": {
                "properties": {
                    "entry": {
                        "type": "object",
                        "properties": {
                            "label": {"type": "string"},
                            "weight": {"type": "number", "minimum": 0},
                        },
                        "required": ["label"],
                    }
                }
            },
            "Loose": {"properties": {"name": {"type": "string"}}, "additionalProperties": True},
        }
    )


def _codes(errors: list[ValidationError]) -> list[ErrorCode]:
    return [e.code for e in errors]


class TestCheckProperties:
    """Tests for property-level validation."""

    @pytest.mark.unit
    def test_valid_properties(self, small_registry):
        """Declared, well-typed, in-range values produce no errors."""
        schema = small_registry.lookup("Gauge")
        errors = check_properties(
            {"progress": 0.4, "ticks": 10, "label": "CPU", "visible": True}, schema
        )
        assert errors == []

    @pytest.mark.unit
    def test_empty_properties(self, small_registry):
        """Absent optional properties are always valid."""
        assert check_properties({}, small_registry.lookup("Gauge")) == []

    @pytest.mark.unit
    def test_unknown_property_closed_schema(self, small_registry):
        """Each undeclared name yields exactly one UnknownProperty."""
        errors = check_properties(
            {"progress": 0.5, "glow": True}, small_registry.lookup("Gauge")
        )
        assert _codes(errors) == [ErrorCode.UNKNOWN_PROPERTY]
        assert errors[0].property == "glow"
        assert errors[0].path == ()

    @pytest.mark.unit
    def test_unknown_property_independent_of_other_errors(self, small_registry):
        """Unknown names are reported alongside other violations."""
        errors = check_properties(
            {"progress": "full", "glow": True}, small_registry.lookup("Gauge")
        )
        assert sorted(e.code.value for e in errors) == ["TypeMismatch", "UnknownProperty"]
        assert [e.property for e in errors if e.code is ErrorCode.UNKNOWN_PROPERTY] == ["glow"]

    @pytest.mark.unit
    def test_open_schema_allows_extra(self, small_registry):
        """Open schemas ignore undeclared names but still check declared ones."""
        schema = small_registry.lookup("Loose")
        assert check_properties({"name": "a", "extra": [1]}, schema) == []
        assert _codes(check_properties({"name": 1}, schema)) == [ErrorCode.TYPE_MISMATCH]

    @pytest.mark.unit
    def test_type_mismatch_details(self, small_registry):
        """TypeMismatch names the expected and actual kinds."""
        errors = check_properties({"label": 42}, small_registry.lookup("Gauge"))
        assert _codes(errors) == [ErrorCode.TYPE_MISMATCH]
        assert errors[0].details == {"expected": "string", "actual": "number"}

    @pytest.mark.unit
    def test_type_mismatch_skips_further_checks(self, small_registry):
        """A wrong kind never cascades into range or pattern errors."""
        errors = check_properties({"progress": "2"}, small_registry.lookup("Gauge"))
        assert _codes(errors) == [ErrorCode.TYPE_MISMATCH]
        errors = check_properties({"color": 123456}, small_registry.lookup("Panel"))
        assert _codes(errors) == [ErrorCode.TYPE_MISMATCH]

    @pytest.mark.unit
    def test_boolean_is_not_a_number(self, small_registry):
        """Booleans do not satisfy numeric constraints."""
        errors = check_properties({"progress": True}, small_registry.lookup("Gauge"))
        assert errors[0].details["actual"] == "boolean"

    @pytest.mark.unit
    def test_null_is_a_type_mismatch(self, small_registry):
        """A present null value does not satisfy any kind."""
        errors = check_properties({"label": None}, small_registry.lookup("Gauge"))
        assert errors[0].details == {"expected": "string", "actual": "null"}

    @pytest.mark.unit
    def test_integer_kind(self, small_registry):
        """Integers accept whole numbers, including integral floats."""
        schema = small_registry.lookup("Gauge")
        assert check_properties({"ticks": 3}, schema) == []
        assert check_properties({"ticks": 3.0}, schema) == []
        errors = check_properties({"ticks": 2.5}, schema)
        assert errors[0].details == {"expected": "integer", "actual": "number"}

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["#1A2b3C", "#000000", "#ffffff"])
    def test_pattern_full_match_accepted(self, small_registry, value):
        """Values matching the whole pattern pass."""
        assert check_properties({"color": value}, small_registry.lookup("Panel")) == []

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["1A2b3C", "#1A2B3", "#1A2B3C4", "x#1A2B3C", "#1A2B3C\n"])
    def test_pattern_partial_match_rejected(self, small_registry, value):
        """Partial or substring matches fail."""
        errors = check_properties({"color": value}, small_registry.lookup("Panel"))
        assert _codes(errors) == [ErrorCode.PATTERN_MISMATCH]
        assert errors[0].details["pattern"] == HEX_COLOR

    @pytest.mark.unit
    def test_unanchored_pattern_needs_full_match(self):
        """Patterns without anchors still have to match the whole string."""
        registry = SchemaRegistry.from_config(
            {"Tag": {"properties": {"code": {"type": "string", "pattern": "[A-Z]{3}"}}}}
        )
        schema = registry.lookup("Tag")
        assert check_properties({"code": "ABC"}, schema) == []
        assert _codes(check_properties({"code": "ABCD"}, schema)) == [
            ErrorCode.PATTERN_MISMATCH
        ]

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [0, 1, 0.5, 0.0, 1.0])
    def test_bounds_inclusive(self, small_registry, value):
        """Values on either bound pass."""
        assert check_properties({"progress": value}, small_registry.lookup("Gauge")) == []

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,bound", [(-0.0001, "minimum"), (1.0001, "maximum")]
    )
    def test_bounds_exceeded(self, small_registry, value, bound):
        """Values just outside the range fail with the violated bound."""
        errors = check_properties({"progress": value}, small_registry.lookup("Gauge"))
        assert _codes(errors) == [ErrorCode.OUT_OF_RANGE]
        assert errors[0].details["bound"] == bound
        assert errors[0].details["actual"] == value

    @pytest.mark.unit
    def test_one_sided_bound(self, small_registry):
        """A missing bound is unbounded on that side."""
        schema = small_registry.lookup("Gauge")
        assert check_properties({"ticks": 10_000_000}, schema) == []
        assert _codes(check_properties({"ticks": 0}, schema)) == [ErrorCode.OUT_OF_RANGE]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,bound",
        [(math.nan, "minimum"), (math.inf, "maximum"), (-math.inf, "minimum")],
    )
    def test_non_finite_numbers_fail_bounds(self, small_registry, value, bound):
        """NaN and infinities never satisfy a bounded range."""
        errors = check_properties({"progress": value}, small_registry.lookup("Gauge"))
        assert _codes(errors) == [ErrorCode.OUT_OF_RANGE]
        assert errors[0].details["bound"] == bound

    @pytest.mark.unit
    def test_nan_against_maximum_only(self):
        """NaN fails a constraint that only has an upper bound."""
        registry = SchemaRegistry.from_config(
            {"Dial": {"properties": {"level": {"type": "number", "maximum": 10}}}}
        )
        errors = check_properties({"level": math.nan}, registry.lookup("Dial"))
        assert _codes(errors) == [ErrorCode.OUT_OF_RANGE]
        assert errors[0].details["bound"] == "maximum"

    @pytest.mark.unit
    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_json_literals(self, registry, literal):
        """Non-standard JSON number literals are caught on both input paths."""
        text = f'{{"type": "ProgressRing", "properties": {{"progress": {literal}}}}}'
        for document in (text, json.loads(text)):
            result = validate_document(document, registry)
            assert result.codes() == [ErrorCode.OUT_OF_RANGE]

    @pytest.mark.unit
    def test_non_finite_integer_is_type_mismatch(self, small_registry):
        """Infinity is not a whole number."""
        errors = check_properties({"ticks": math.inf}, small_registry.lookup("Gauge"))
        assert _codes(errors) == [ErrorCode.TYPE_MISMATCH]

    @pytest.mark.unit
    def test_array_element_mismatch(self, small_registry):
        """A bad element is reported by index."""
        errors = check_properties(
            {"title": "Sales", "dataPoints": [1, "two", 3]}, small_registry.lookup("Chart")
        )
        assert _codes(errors) == [ErrorCode.ARRAY_ELEMENT_MISMATCH]
        assert errors[0].property == "dataPoints"
        assert errors[0].details["index"] == 1
        assert errors[0].details["reasons"] == ("TypeMismatch",)

    @pytest.mark.unit
    def test_array_collects_all_bad_elements(self, small_registry):
        """Every failing element is reported, not only the first."""
        errors = check_properties(
            {"title": "Sales", "dataPoints": ["a", 2, None, False]},
            small_registry.lookup("Chart"),
        )
        assert [e.details["index"] for e in errors] == [0, 2, 3]

    @pytest.mark.unit
    def test_array_not_a_list(self, small_registry):
        """A non-array value is a TypeMismatch, not an element error."""
        errors = check_properties(
            {"title": "Sales", "dataPoints": "1,2,3"}, small_registry.lookup("Chart")
        )
        assert _codes(errors) == [ErrorCode.TYPE_MISMATCH]

    @pytest.mark.unit
    def test_empty_array_valid(self, small_registry):
        """An empty array has no bad elements."""
        assert check_properties({"title": "x", "dataPoints": []}, small_registry.lookup("Chart")) == []

    @pytest.mark.unit
    def test_array_elements_respect_bounds(self, registry):
        """Element constraints include bounds, not only kinds."""
        errors = check_properties(
            {"selectedDates": [1, 32, 15]}, registry.lookup("Calendar")
        )
        assert _codes(errors) == [ErrorCode.ARRAY_ELEMENT_MISMATCH]
        assert errors[0].details == {"index": 1, "reasons": ("OutOfRange",)}

    @pytest.mark.unit
    def test_missing_required(self, small_registry):
        """Absent required properties are reported."""
        errors = check_properties({"dataPoints": [1]}, small_registry.lookup("Chart"))
        assert _codes(errors) == [ErrorCode.MISSING_REQUIRED]
        assert errors[0].property == "title"

    @pytest.mark.unit
    def test_missing_required_runs_with_other_errors(self, small_registry):
        """Required checks run regardless of other outcomes."""
        errors = check_properties(
            {"dataPoints": ["x"], "legend": True}, small_registry.lookup("Chart")
        )
        assert _codes(errors) == [
            ErrorCode.ARRAY_ELEMENT_MISMATCH,
            ErrorCode.UNKNOWN_PROPERTY,
            ErrorCode.MISSING_REQUIRED,
        ]

    @pytest.mark.unit
    def test_nested_object_valid(self, small_registry):
        """Nested objects are checked against their own schema."""
        errors = check_properties(
            {"entry": {"label": "Revenue", "weight": 2}}, small_registry.lookup("Legend")
        )
        assert errors == []

    @pytest.mark.unit
    def test_nested_object_errors_are_prefixed(self, small_registry):
        """Nested violations carry the outer property name."""
        errors = check_properties(
            {"entry": {"weight": -1, "icon": "x"}}, small_registry.lookup("Legend")
        )
        assert [(e.code, e.property) for e in errors] == [
            (ErrorCode.OUT_OF_RANGE, "entry.weight"),
            (ErrorCode.UNKNOWN_PROPERTY, "entry.icon"),
            (ErrorCode.MISSING_REQUIRED, "entry.label"),
        ]

    @pytest.mark.unit
    def test_array_of_objects(self, registry):
        """Array items that are objects are checked with the nested schema."""
        errors = check_properties(
            {
                "destinations": [
                    {"label": "Inbox", "icon": "inbox"},
                    {"label": "Sent"},
                    {"label": "Spam", "icon": "report", "color": "#FF0000"},
                ]
            },
            registry.lookup("NavigationRail"),
        )
        assert [e.details["index"] for e in errors] == [1, 2]
        assert errors[0].details["reasons"] == ("MissingRequired",)
        assert errors[1].details["reasons"] == ("UnknownProperty",)

    @pytest.mark.unit
    def test_deterministic_order(self, small_registry):
        """Errors follow input order, then required declaration order."""
        schema = small_registry.lookup("Gauge")
        properties = {"visible": "yes", "progress": 9, "zzz": 1, "label": 0}
        first = check_properties(properties, schema)
        second = check_properties(properties, schema)
        assert first == second
        assert [e.property for e in first] == ["visible", "progress", "zzz", "label"]


class TestValidateTree:
    """Tests for recursive tree validation."""

    @pytest.mark.unit
    def test_valid_tree(self, registry, sample_tree):
        """A well-formed tree validates without errors."""
        result = validate_tree(sample_tree, registry)
        assert result.valid is True
        assert result.errors == ()

    @pytest.mark.unit
    def test_single_node(self, registry):
        """A lone valid node is valid."""
        node = WidgetNode(type="MasonryGrid", properties={"itemCount": 30})
        assert validate_tree(node, registry).valid

    @pytest.mark.unit
    def test_progress_out_of_range(self, registry):
        """progress 1.5 yields exactly one OutOfRange on 'progress'."""
        node = WidgetNode(type="ProgressRing", properties={"progress": 1.5})
        result = validate_tree(node, registry)
        assert result.valid is False
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.code is ErrorCode.OUT_OF_RANGE
        assert error.property == "progress"
        assert error.path == ()

    @pytest.mark.unit
    def test_nested_error_path(self, registry):
        """The second grandchild of the second child is reported at [1, 1]."""
        root = WidgetNode(
            type="Column",
            children=[
                WidgetNode(type="Text", properties={"text": "Header"}),
                WidgetNode(
                    type="Row",
                    children=[
                        WidgetNode(type="PieChart", properties={"title": "Share"}),
                        WidgetNode(type="BarChart", properties={"barColor": "blue"}),
                    ],
                ),
            ],
        )
        result = validate_tree(root, registry)
        assert len(result.errors) == 1
        assert result.errors[0].path == (1, 1)
        assert result.errors[0].to_dict()["path"] == [1, 1]
        assert result.errors[0].code is ErrorCode.PATTERN_MISMATCH

    @pytest.mark.unit
    def test_preorder_traversal(self, registry):
        """Parents are reported before children, children in order."""
        root = WidgetNode(
            type="Column",
            properties={"spacing": -1},
            children=[
                WidgetNode(
                    type="Row",
                    properties={"spacing": -1},
                    children=[WidgetNode(type="Text", properties={"text": 1})],
                ),
                WidgetNode(type="Text"),
            ],
        )
        result = validate_tree(root, registry)
        assert [e.path for e in result.errors] == [(), (0,), (0, 0), (1,)]
        assert result.codes() == [
            ErrorCode.OUT_OF_RANGE,
            ErrorCode.OUT_OF_RANGE,
            ErrorCode.TYPE_MISMATCH,
            ErrorCode.MISSING_REQUIRED,
        ]

    @pytest.mark.unit
    def test_collects_errors_across_tree(self, registry):
        """Errors from every node are aggregated."""
        root = WidgetNode(
            type="Column",
            children=[
                WidgetNode(type="ProgressRing", properties={"progress": 2}),
                WidgetNode(type="ProgressRing", properties={"progress": -2}),
                WidgetNode(type="ProgressRing", properties={"progress": 0.3}),
            ],
        )
        result = validate_tree(root, registry)
        assert [e.path for e in result.errors] == [(0,), (1,)]

    @pytest.mark.unit
    def test_unknown_type_permissive(self, registry):
        """Permissive policy skips the unknown node but validates its children."""
        root = WidgetNode(
            type="Widget99",
            properties={"anything": "goes"},
            children=[WidgetNode(type="ProgressRing", properties={"progress": 1.5})],
        )
        config = ValidatorConfig(unknown_type_policy=UnknownTypePolicy.PERMISSIVE)
        result = validate_tree(root, registry, config)
        assert [(e.path, e.code) for e in result.errors] == [((0,), ErrorCode.OUT_OF_RANGE)]

    @pytest.mark.unit
    def test_unknown_type_permissive_valid_children(self, registry):
        """Permissive policy with valid children yields a valid result."""
        root = WidgetNode(type="Widget99", children=[WidgetNode(type="Text", properties={"text": "Hi"})])
        config = ValidatorConfig(unknown_type_policy="permissive")
        assert validate_tree(root, registry, config).valid

    @pytest.mark.unit
    def test_unknown_type_strict(self, registry):
        """Strict policy reports the unknown node and still validates children."""
        root = WidgetNode(
            type="Widget99",
            properties={"anything": "goes"},
            children=[WidgetNode(type="ProgressRing", properties={"progress": 1.5})],
        )
        config = ValidatorConfig(unknown_type_policy=UnknownTypePolicy.STRICT)
        result = validate_tree(root, registry, config)
        assert [(e.path, e.code) for e in result.errors] == [
            ((), ErrorCode.UNKNOWN_WIDGET_TYPE),
            ((0,), ErrorCode.OUT_OF_RANGE),
        ]
        assert result.errors[0].property is None
        assert result.errors[0].details == {"type": "Widget99"}

    @pytest.mark.unit
    def test_strict_is_default(self, registry):
        """Without a config, unknown types are rejected."""
        result = validate_tree(WidgetNode(type="Widget99"), registry)
        assert result.codes() == [ErrorCode.UNKNOWN_WIDGET_TYPE]

    @pytest.mark.unit
    def test_max_depth_exceeded(self, registry):
        """Nodes below the depth limit are reported once and not descended into."""
        leaf = WidgetNode(type="Text", properties={"text": 1})
        node = leaf
        for _ in range(5):
            node = WidgetNode(type="Column", children=[node])
        config = ValidatorConfig(max_depth=3)
        result = validate_tree(node, registry, config)
        assert result.codes() == [ErrorCode.MAX_DEPTH_EXCEEDED]
        assert result.errors[0].path == (0, 0, 0, 0)
        assert result.errors[0].details == {"max_depth": 3}

    @pytest.mark.unit
    def test_max_depth_keeps_earlier_errors(self, registry):
        """Errors found before the limit are kept; siblings are still checked."""
        deep = WidgetNode(type="Column", children=[WidgetNode(type="Column", children=[WidgetNode(type="Text")])])
        root = WidgetNode(
            type="Column",
            properties={"spacing": -5},
            children=[deep, WidgetNode(type="Text", properties={"text": 2})],
        )
        result = validate_tree(root, registry, ValidatorConfig(max_depth=2))
        assert [(e.path, e.code) for e in result.errors] == [
            ((), ErrorCode.OUT_OF_RANGE),
            ((0, 0, 0), ErrorCode.MAX_DEPTH_EXCEEDED),
            ((1,), ErrorCode.TYPE_MISMATCH),
        ]

    @pytest.mark.unit
    def test_depth_at_limit_is_validated(self, registry):
        """A node exactly at max_depth is still validated."""
        root = WidgetNode(type="Column", children=[WidgetNode(type="Text")])
        result = validate_tree(root, registry, ValidatorConfig(max_depth=1))
        assert result.codes() == [ErrorCode.MISSING_REQUIRED]

    @pytest.mark.unit
    def test_idempotent(self, registry):
        """Validating the same tree twice gives identical results."""
        root = WidgetNode(
            type="Column",
            children=[
                WidgetNode(type="LineChart", properties={"dataPoints": [1, "x"], "lineColor": "red", "z": 1}),
                WidgetNode(type="Widget99"),
            ],
        )
        first = validate_tree(root, registry)
        second = validate_tree(root, registry)
        assert first == second
        assert first.to_dict() == second.to_dict()

    @pytest.mark.unit
    def test_tree_not_mutated(self, registry):
        """Validation is a read-only traversal."""
        root = WidgetNode(type="ProgressRing", properties={"progress": 3})
        before = root.model_dump()
        validate_tree(root, registry)
        assert root.model_dump() == before

    @pytest.mark.unit
    def test_errors_are_immutable(self, registry):
        """Reported errors and their details cannot be changed."""
        result = validate_tree(
            WidgetNode(type="ProgressRing", properties={"progress": 3}), registry
        )
        error = result.errors[0]
        with pytest.raises(FrozenInstanceError):
            error.code = ErrorCode.TYPE_MISMATCH
        with pytest.raises(TypeError):
            error.details["bound"] = "maximum"
        assert hash(error) == hash(result.errors[0])


def _nested_columns(depth: int, leaf: dict | None = None) -> dict:
    """Build a chain of Column nodes ``depth`` levels below the root."""
    node = leaf or {"type": "Column"}
    for _ in range(depth):
        node = {"type": "Column", "children": [node]}
    return node


class TestDeepDocuments:
    """Documents deeper than the limit are reported, not rejected."""

    @pytest.mark.unit
    def test_deep_json_text_default_limit(self, registry):
        """A 120-level document yields MaxDepthExceeded under the default limit."""
        text = json.dumps(_nested_columns(120))
        result = validate_document(text, registry)
        assert result.valid is False
        assert result.codes() == [ErrorCode.MAX_DEPTH_EXCEEDED]
        assert result.errors[0].path == (0,) * 65

    @pytest.mark.unit
    def test_deep_mapping_keeps_earlier_errors(self, registry):
        """Errors above the limit are returned with the depth error."""
        document = _nested_columns(300)
        document["properties"] = {"spacing": -1}
        result = validate_document(document, registry)
        assert result.codes() == [ErrorCode.OUT_OF_RANGE, ErrorCode.MAX_DEPTH_EXCEEDED]

    @pytest.mark.unit
    def test_deeper_than_maximum_limit(self, registry):
        """Every accepted max_depth is reachable for JSON text input."""
        text = json.dumps(_nested_columns(MAX_DEPTH_LIMIT + 20))
        config = ValidatorConfig(max_depth=MAX_DEPTH_LIMIT)
        result = validate_document(text, registry, config)
        assert result.codes() == [ErrorCode.MAX_DEPTH_EXCEEDED]
        assert len(result.errors[0].path) == MAX_DEPTH_LIMIT + 1

    @pytest.mark.unit
    def test_deep_valid_document(self, registry):
        """A document exactly at the limit is fully validated."""
        leaf = {"type": "Text", "properties": {"text": "bottom"}}
        text = json.dumps(_nested_columns(MAX_DEPTH_LIMIT, leaf))
        config = ValidatorConfig(max_depth=MAX_DEPTH_LIMIT)
        assert validate_document(text, registry, config).valid


class TestValidatorConfig:
    """Tests for ValidatorConfig."""

    @pytest.mark.unit
    def test_defaults(self):
        """Strict policy and depth 64 by default."""
        config = ValidatorConfig()
        assert config.unknown_type_policy is UnknownTypePolicy.STRICT
        assert config.max_depth == 64

    @pytest.mark.unit
    def test_policy_from_string(self):
        """Policies may be given by name, case-insensitively."""
        assert ValidatorConfig(unknown_type_policy="PERMISSIVE").unknown_type_policy is (
            UnknownTypePolicy.PERMISSIVE
        )

    @pytest.mark.unit
    def test_invalid_policy(self):
        """Unknown policy names are rejected."""
        with pytest.raises(ValueError):
            ValidatorConfig(unknown_type_policy="lenient")

    @pytest.mark.unit
    @pytest.mark.parametrize("depth", [-1, MAX_DEPTH_LIMIT + 1])
    def test_depth_limits(self, depth):
        """max_depth must stay within the supported range."""
        with pytest.raises(ValueError):
            ValidatorConfig(max_depth=depth)

    @pytest.mark.unit
    def test_depth_type(self):
        """max_depth must be an integer."""
        with pytest.raises(TypeError):
            ValidatorConfig(max_depth="10")

    @pytest.mark.unit
    def test_from_environment(self, monkeypatch):
        """Environment variables supply defaults."""
        monkeypatch.setenv("WIDGETGUARD_UNKNOWN_TYPE_POLICY", "permissive")
        monkeypatch.setenv("WIDGETGUARD_MAX_DEPTH", "12")
        config = ValidatorConfig.from_environment()
        assert config.unknown_type_policy is UnknownTypePolicy.PERMISSIVE
        assert config.max_depth == 12

    @pytest.mark.unit
    def test_from_environment_overrides(self, monkeypatch):
        """Explicit arguments win over the environment."""
        monkeypatch.setenv("WIDGETGUARD_MAX_DEPTH", "12")
        config = ValidatorConfig.from_environment(unknown_type_policy="strict", max_depth=4)
        assert config.max_depth == 4


class TestValidateDocument:
    """Tests for document-level entry points."""

    @pytest.mark.unit
    def test_scenario_array_element(self, registry):
        """dataPoints [1, "two", 3] yields one ArrayElementMismatch at index 1."""
        result = validate_document(
            {"type": "LineChart", "properties": {"title": "Sales", "dataPoints": [1, "two", 3]}},
            registry,
        )
        assert result.valid is False
        assert result.codes() == [ErrorCode.ARRAY_ELEMENT_MISMATCH]
        assert result.errors[0].details["index"] == 1

    @pytest.mark.unit
    def test_json_text(self, registry):
        """JSON text is parsed before validation."""
        result = validate_document('{"type": "Text", "properties": {"text": "Hi"}}', registry)
        assert result.valid

    @pytest.mark.unit
    def test_malformed_document_raises(self, registry):
        """Shape errors are raised, not reported as validation errors."""
        with pytest.raises(WidgetDocumentError):
            validate_document({"children": []}, registry)

    @pytest.mark.unit
    def test_is_valid(self, registry):
        """is_valid mirrors ValidationResult.valid."""
        assert is_valid(WidgetNode(type="Text", properties={"text": "a"}), registry) is True
        assert is_valid(WidgetNode(type="Text"), registry) is False

    @pytest.mark.unit
    def test_result_to_dict(self, registry):
        """Reports carry path, property, code and message."""
        result = validate_document({"type": "ProgressRing", "properties": {"progress": 1.5}}, registry)
        report = result.to_dict()
        assert report["valid"] is False
        assert report["errors"][0]["path"] == []
        assert report["errors"][0]["property"] == "progress"
        assert report["errors"][0]["code"] == "OutOfRange"
        assert "progress" in report["errors"][0]["message"]

    @pytest.mark.unit
    def test_empty_result(self):
        """An empty result is valid."""
        assert ValidationResult().valid


class TestWidgetValidator:
    """Tests for the WidgetValidator convenience wrapper."""

    @pytest.mark.unit
    def test_validates_nodes_and_documents(self, registry):
        """Both parsed trees and raw documents are accepted."""
        validator = WidgetValidator(registry)
        assert validator.validate(WidgetNode(type="Text", properties={"text": "a"})).valid
        assert not validator.validate({"type": "PieChart", "properties": {"title": 3}}).valid

    @pytest.mark.unit
    def test_with_policy(self, registry):
        """with_policy returns a new validator sharing the registry."""
        strict = WidgetValidator(registry)
        permissive = strict.with_policy("permissive")
        assert permissive.registry is strict.registry
        assert strict.validate({"type": "Widget99"}).valid is False
        assert permissive.validate({"type": "Widget99"}).valid is True
