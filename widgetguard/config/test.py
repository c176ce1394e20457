"""Tests for configuration management."""

import logging
from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    get_log_level,
    get_schema_file,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("WIDGETGUARD_MAX_DEPTH", raising=False)
        assert get_environment(EnvVar.MAX_DEPTH) == 64

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("WIDGETGUARD_MAX_DEPTH", "99")
        assert get_environment(EnvVar.MAX_DEPTH, override=5) == 5

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("WIDGETGUARD_MAX_DEPTH", "12")
        result = get_environment(EnvVar.MAX_DEPTH)
        assert result == 12
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        """Unparseable integers fall back to the default."""
        monkeypatch.setenv("WIDGETGUARD_MAX_DEPTH", "deep")
        assert get_environment(EnvVar.MAX_DEPTH) == 64

    @pytest.mark.unit
    def test_invalid_value_is_logged(self, monkeypatch, caplog):
        """Ignored values produce a warning naming the variable."""
        monkeypatch.setenv("WIDGETGUARD_MAX_DEPTH", "deep")
        with caplog.at_level(logging.WARNING, logger="widgetguard"):
            get_environment(EnvVar.MAX_DEPTH)
        assert "WIDGETGUARD_MAX_DEPTH" in caplog.text

    @pytest.mark.unit
    def test_string_type(self, monkeypatch):
        """String values are returned with surrounding whitespace removed."""
        monkeypatch.setenv("WIDGETGUARD_UNKNOWN_TYPE_POLICY", " permissive ")
        assert get_environment(EnvVar.UNKNOWN_TYPE_POLICY) == "permissive"

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch):
        """Path variables are converted to Path objects."""
        monkeypatch.setenv("WIDGETGUARD_SCHEMA_FILE", "schemas/widgets.json")
        result = get_environment(EnvVar.SCHEMA_FILE)
        assert result == Path("schemas/widgets.json")

    @pytest.mark.unit
    def test_empty_value_uses_default(self, monkeypatch):
        """An empty variable is treated as unset."""
        monkeypatch.setenv("WIDGETGUARD_LOG_LEVEL", "")
        assert get_environment(EnvVar.LOG_LEVEL) == "INFO"


class TestIntrospection:
    """Tests for metadata and listing helpers."""

    @pytest.mark.unit
    def test_environment_info(self):
        """Metadata is returned as EnvConfig."""
        info = get_environment_info(EnvVar.UNKNOWN_TYPE_POLICY)
        assert isinstance(info, EnvConfig)
        assert info.name == "WIDGETGUARD_UNKNOWN_TYPE_POLICY"
        assert info.category == "validation"

    @pytest.mark.unit
    def test_list_by_category(self):
        """Category filter returns only matching variables."""
        found = list_environment_variables("validation")
        assert found == [EnvVar.UNKNOWN_TYPE_POLICY, EnvVar.MAX_DEPTH]

    @pytest.mark.unit
    def test_list_all(self):
        """No filter lists every variable."""
        assert len(list_environment_variables()) == len(EnvVar)

    @pytest.mark.unit
    def test_all_names_are_prefixed(self):
        """Every variable lives in the WIDGETGUARD_ namespace."""
        for var in EnvVar:
            assert var.value.name.startswith("WIDGETGUARD_")


class TestConvenienceFunctions:
    """Tests for convenience accessors."""

    @pytest.mark.unit
    def test_schema_file_unset(self, monkeypatch):
        """Unset schema file means the built-in catalog."""
        monkeypatch.delenv("WIDGETGUARD_SCHEMA_FILE", raising=False)
        assert get_schema_file() is None

    @pytest.mark.unit
    def test_schema_file_override(self):
        """Override accepts plain strings."""
        assert get_schema_file("custom.json") == Path("custom.json")

    @pytest.mark.unit
    def test_log_level_upper_cased(self, monkeypatch):
        """Log level names are normalised to upper case."""
        monkeypatch.setenv("WIDGETGUARD_LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"
