"""Unit tests for the Schema module."""

import json

import pytest

from widgetguard.schema import (
    ConstraintKind,
    JsonKind,
    PropertyConstraint,
    SchemaDefinition,
    SchemaDefinitionError,
    SchemaRegistry,
    constraint_from_config,
    definition_from_config,
    export_json_schema,
    kind_of,
    load_registry,
)

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class TestKindOf:
    """Tests for JSON value classification."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("text", JsonKind.STRING),
            (3, JsonKind.NUMBER),
            (0.5, JsonKind.NUMBER),
            (True, JsonKind.BOOLEAN),
            (False, JsonKind.BOOLEAN),
            ([1, 2], JsonKind.ARRAY),
            ({"a": 1}, JsonKind.OBJECT),
            (None, JsonKind.NULL),
        ],
    )
    def test_classifies_json_values(self, value, expected):
        """Each JSON value maps to exactly one kind."""
        assert kind_of(value) is expected

    @pytest.mark.unit
    def test_rejects_non_json_values(self):
        """Values outside the JSON model are a programming error."""
        with pytest.raises(TypeError):
            kind_of(object())


class TestPropertyConstraint:
    """Tests for construction-time invariants."""

    @pytest.mark.unit
    def test_kind_coerced_from_string(self):
        """Kind names are accepted as plain strings."""
        constraint = PropertyConstraint(kind="number")
        assert constraint.kind is ConstraintKind.NUMBER

    @pytest.mark.unit
    def test_unknown_kind_rejected(self):
        """Unsupported kinds fail loudly."""
        with pytest.raises(SchemaDefinitionError):
            PropertyConstraint(kind="date")

    @pytest.mark.unit
    def test_minimum_greater_than_maximum_rejected(self):
        """Inverted bounds are a registry misconfiguration."""
        with pytest.raises(SchemaDefinitionError, match="greater than maximum"):
            PropertyConstraint(kind=ConstraintKind.NUMBER, minimum=2, maximum=1)

    @pytest.mark.unit
    def test_equal_bounds_allowed(self):
        """A single-value range is valid."""
        constraint = PropertyConstraint(kind=ConstraintKind.INTEGER, minimum=3, maximum=3)
        assert constraint.minimum == constraint.maximum == 3

    @pytest.mark.unit
    def test_pattern_only_on_strings(self):
        """Patterns cannot be attached to non-string kinds."""
        with pytest.raises(SchemaDefinitionError):
            PropertyConstraint(kind=ConstraintKind.NUMBER, pattern="^1$")

    @pytest.mark.unit
    def test_invalid_pattern_rejected(self):
        """Patterns must compile."""
        with pytest.raises(SchemaDefinitionError, match="Invalid pattern"):
            PropertyConstraint(kind=ConstraintKind.STRING, pattern="[unclosed")

    @pytest.mark.unit
    def test_pattern_compiled(self):
        """Valid patterns are compiled once at construction."""
        constraint = PropertyConstraint(kind=ConstraintKind.STRING, pattern=HEX_COLOR)
        assert constraint.regex is not None
        assert constraint.regex.fullmatch("#A1B2C3")

    @pytest.mark.unit
    def test_bounds_only_on_numbers(self):
        """Bounds cannot be attached to strings."""
        with pytest.raises(SchemaDefinitionError):
            PropertyConstraint(kind=ConstraintKind.STRING, minimum=0)

    @pytest.mark.unit
    def test_boolean_bound_rejected(self):
        """Booleans are not numeric bounds."""
        with pytest.raises(SchemaDefinitionError):
            PropertyConstraint(kind=ConstraintKind.NUMBER, maximum=True)

    @pytest.mark.unit
    def test_items_only_on_arrays(self):
        """Element constraints require an array kind."""
        with pytest.raises(SchemaDefinitionError):
            PropertyConstraint(
                kind=ConstraintKind.STRING,
                items=PropertyConstraint(kind=ConstraintKind.STRING),
            )

    @pytest.mark.unit
    def test_nested_schema_only_on_objects(self):
        """Nested schemas require an object kind."""
        with pytest.raises(SchemaDefinitionError):
            PropertyConstraint(kind=ConstraintKind.ARRAY, schema=SchemaDefinition())


class TestSchemaDefinition:
    """Tests for SchemaDefinition."""

    @pytest.mark.unit
    def test_closed_by_default(self):
        """Definitions are closed objects unless opened explicitly."""
        assert SchemaDefinition().closed is True

    @pytest.mark.unit
    def test_properties_are_read_only(self):
        """The property mapping cannot be mutated after construction."""
        definition = SchemaDefinition(
            properties={"title": PropertyConstraint(kind=ConstraintKind.STRING)}
        )
        with pytest.raises(TypeError):
            definition.properties["extra"] = PropertyConstraint(kind="string")

    @pytest.mark.unit
    def test_source_mapping_is_copied(self):
        """Later changes to the source dict do not leak into the definition."""
        source = {"title": PropertyConstraint(kind=ConstraintKind.STRING)}
        definition = SchemaDefinition(properties=source)
        source["extra"] = PropertyConstraint(kind=ConstraintKind.STRING)
        assert "extra" not in definition.properties

    @pytest.mark.unit
    def test_required_in_declaration_order(self):
        """Required names follow declaration order."""
        definition = SchemaDefinition(
            properties={
                "b": PropertyConstraint(kind="string", required=True),
                "a": PropertyConstraint(kind="string"),
                "c": PropertyConstraint(kind="string", required=True),
            }
        )
        assert definition.required == ("b", "c")

    @pytest.mark.unit
    def test_rejects_non_constraint_values(self):
        """Property values must be PropertyConstraint instances."""
        with pytest.raises(SchemaDefinitionError):
            SchemaDefinition(properties={"title": {"type": "string"}})


class TestSchemaRegistry:
    """Tests for the immutable registry."""

    @pytest.mark.unit
    def test_lookup_found(self):
        """Registered types resolve to their definition."""
        definition = SchemaDefinition()
        registry = SchemaRegistry({"Spacer": definition})
        assert registry.lookup("Spacer") is definition

    @pytest.mark.unit
    def test_lookup_not_found(self):
        """Unregistered types resolve to None."""
        registry = SchemaRegistry({"Spacer": SchemaDefinition()})
        assert registry.lookup("Widget99") is None

    @pytest.mark.unit
    def test_container_protocol(self):
        """Registry supports len, iteration and membership."""
        registry = SchemaRegistry({"A": SchemaDefinition(), "B": SchemaDefinition()})
        assert len(registry) == 2
        assert list(registry) == ["A", "B"]
        assert registry.type_names() == ["A", "B"]
        assert "A" in registry
        assert "C" not in registry

    @pytest.mark.unit
    def test_source_mapping_is_copied(self):
        """Mutating the source mapping does not affect the registry."""
        source = {"A": SchemaDefinition()}
        registry = SchemaRegistry(source)
        source["B"] = SchemaDefinition()
        assert "B" not in registry

    @pytest.mark.unit
    def test_no_mutation_api(self):
        """The registry exposes no way to add definitions."""
        registry = SchemaRegistry({})
        assert not hasattr(registry, "register")
        with pytest.raises(TypeError):
            registry._definitions["A"] = SchemaDefinition()

    @pytest.mark.unit
    def test_rejects_invalid_entries(self):
        """Keys must be names and values must be definitions."""
        with pytest.raises(SchemaDefinitionError):
            SchemaRegistry({"": SchemaDefinition()})
        with pytest.raises(SchemaDefinitionError):
            SchemaRegistry({"A": {"properties": {}}})


class TestFromConfig:
    """Tests for building schemas from JSON Schema configuration."""

    @pytest.mark.unit
    def test_line_chart_schema(self):
        """A typical chart schema parses into constraints."""
        definition = definition_from_config(
            {
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Chart title"},
                    "dataPoints": {"type": "array", "items": {"type": "number"}},
                    "lineColor": {"type": "string", "pattern": HEX_COLOR},
                },
                "additionalProperties": False,
            }
        )
        assert definition.closed is True
        assert definition.properties["dataPoints"].items.kind is ConstraintKind.NUMBER
        assert definition.properties["lineColor"].pattern == HEX_COLOR
        assert definition.properties["title"].description == "Chart title"

    @pytest.mark.unit
    def test_additional_properties_true_opens_schema(self):
        """Explicit additionalProperties=true produces an open schema."""
        definition = definition_from_config({"properties": {}, "additionalProperties": True})
        assert definition.closed is False

    @pytest.mark.unit
    def test_required_list_and_flag(self):
        """Required names come from the list or the per-property flag."""
        definition = definition_from_config(
            {
                "properties": {
                    "label": {"type": "string", "required": True},
                    "items": {"type": "array"},
                    "hint": {"type": "string"},
                },
                "required": ["items"],
            }
        )
        assert definition.required == ("label", "items")

    @pytest.mark.unit
    def test_required_must_be_declared(self):
        """Required names must refer to declared properties."""
        with pytest.raises(SchemaDefinitionError, match="not declared"):
            definition_from_config({"properties": {}, "required": ["ghost"]})

    @pytest.mark.unit
    def test_nested_object_items(self):
        """Array items may be closed nested objects with required fields."""
        constraint = constraint_from_config(
            {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {"label": {"type": "string"}, "icon": {"type": "string"}},
                    "required": ["label"],
                },
            }
        )
        nested = constraint.items.schema
        assert nested is not None
        assert nested.closed is True
        assert nested.required == ("label",)
        assert constraint.items.required is False

    @pytest.mark.unit
    def test_object_without_properties_accepts_any_object(self):
        """Objects without declared properties carry no nested schema."""
        constraint = constraint_from_config({"type": "object"})
        assert constraint.kind is ConstraintKind.OBJECT
        assert constraint.schema is None

    @pytest.mark.unit
    def test_closed_object_without_properties(self):
        """additionalProperties alone yields a closed, empty nested schema."""
        constraint = constraint_from_config({"type": "object", "additionalProperties": False})
        assert constraint.schema is not None
        assert constraint.schema.closed is True
        assert dict(constraint.schema.properties) == {}

    @pytest.mark.unit
    def test_required_names_without_properties_rejected(self):
        """A nested required list naming undeclared properties fails loudly."""
        with pytest.raises(SchemaDefinitionError, match="not declared"):
            SchemaRegistry.from_config(
                {
                    "Widget": {
                        "properties": {
                            "meta": {
                                "type": "object",
                                "required": ["id"],
                                "additionalProperties": False,
                            }
                        }
                    }
                }
            )

    @pytest.mark.unit
    def test_closed_empty_object_rejects_keys(self):
        """Keys inside a closed, empty nested object are reported."""
        from widgetguard.validation import ErrorCode, check_properties

        registry = SchemaRegistry.from_config(
            {"Widget": {"properties": {"meta": {"type": "object", "additionalProperties": False}}}}
        )
        errors = check_properties({"meta": {"anything": 1}}, registry.lookup("Widget"))
        assert [(e.code, e.property) for e in errors] == [
            (ErrorCode.UNKNOWN_PROPERTY, "meta.anything")
        ]

    @pytest.mark.unit
    def test_unsupported_keyword_rejected(self):
        """Keywords outside the supported subset fail loudly."""
        with pytest.raises(SchemaDefinitionError, match="unsupported"):
            definition_from_config({"properties": {"size": {"type": "number", "oneOf": []}}})

    @pytest.mark.unit
    def test_missing_type_rejected(self):
        """Every property schema names its type."""
        with pytest.raises(SchemaDefinitionError, match="missing 'type'"):
            definition_from_config({"properties": {"size": {"minimum": 1}}})

    @pytest.mark.unit
    def test_inverted_bounds_rejected(self):
        """Inverted bounds in configuration fail at construction."""
        with pytest.raises(SchemaDefinitionError):
            SchemaRegistry.from_config(
                {"Slider": {"properties": {"value": {"type": "number", "minimum": 5, "maximum": 1}}}}
            )

    @pytest.mark.unit
    def test_non_object_widget_schema_rejected(self):
        """Widget schemas must describe objects."""
        with pytest.raises(SchemaDefinitionError):
            definition_from_config({"type": "array"})

    @pytest.mark.unit
    def test_registry_from_config(self):
        """from_config builds one definition per widget type."""
        registry = SchemaRegistry.from_config(
            {
                "PieChart": {"properties": {"title": {"type": "string"}}},
                "MasonryGrid": {"properties": {"itemCount": {"type": "integer", "minimum": 1}}},
            }
        )
        assert registry.type_names() == ["PieChart", "MasonryGrid"]
        assert registry.lookup("MasonryGrid").properties["itemCount"].minimum == 1


class TestExport:
    """Tests for JSON Schema export."""

    @pytest.mark.unit
    def test_definition_export_matches_config(self):
        """Exported schemas carry the constraints they were built from."""
        config = {
            "type": "object",
            "properties": {
                "progress": {"type": "number", "minimum": 0, "maximum": 1},
                "ringColor": {"type": "string", "pattern": HEX_COLOR},
            },
            "additionalProperties": False,
            "required": ["progress"],
        }
        exported = definition_from_config(config).to_json_schema()
        assert exported == config

    @pytest.mark.unit
    def test_export_registry(self):
        """Registry export is keyed by widget type."""
        registry = SchemaRegistry.from_config({"Spacer": {"properties": {}}})
        assert export_json_schema(registry) == {
            "Spacer": {"type": "object", "properties": {}, "additionalProperties": False}
        }


class TestLoadRegistry:
    """Tests for loading schema configuration files."""

    @pytest.mark.unit
    def test_load_from_file(self, tmp_path):
        """A JSON configuration file produces a registry."""
        path = tmp_path / "widgets.json"
        path.write_text(
            json.dumps({"Badge": {"properties": {"text": {"type": "string"}}}}),
            encoding="utf-8",
        )
        registry = load_registry(path)
        assert "Badge" in registry

    @pytest.mark.unit
    def test_load_rejects_non_object(self, tmp_path):
        """The top-level configuration must be an object."""
        path = tmp_path / "widgets.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(SchemaDefinitionError):
            load_registry(path)
