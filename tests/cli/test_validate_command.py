"""Tests for the widgetguard CLI commands."""

import json
import subprocess
import sys

import pytest

from widgetguard.__main__ import EXIT_ERROR, EXIT_INVALID, EXIT_VALID, main


@pytest.fixture
def write_document(tmp_path):
    """Write a widget document to a temporary file and return its path."""

    def _write(document) -> str:
        path = tmp_path / "document.json"
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text)
        return str(path)

    return _write


class TestValidateCommand:
    """Tests for `validate`."""

    @pytest.mark.unit
    def test_valid_document(self, write_document, capsys):
        """A valid document exits 0."""
        path = write_document({"type": "Text", "properties": {"text": "Hello"}})
        assert main(["validate", path]) == EXIT_VALID
        assert capsys.readouterr().out.strip() == "valid"

    @pytest.mark.unit
    def test_invalid_document(self, write_document, capsys):
        """Violations exit 1 and are listed with their path."""
        path = write_document(
            {
                "type": "Column",
                "children": [{"type": "ProgressRing", "properties": {"progress": 1.5}}],
            }
        )
        assert main(["validate", path]) == EXIT_INVALID
        out = capsys.readouterr().out
        assert "invalid: 1 error(s)" in out
        assert "/0 progress [OutOfRange]" in out

    @pytest.mark.unit
    def test_json_output(self, write_document, capsys):
        """--json prints the machine-readable report."""
        path = write_document(
            {"type": "LineChart", "properties": {"dataPoints": [1, "two", 3]}}
        )
        assert main(["validate", path, "--json"]) == EXIT_INVALID
        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is False
        assert report["errors"][0]["code"] == "ArrayElementMismatch"
        assert report["errors"][0]["details"]["index"] == 1

    @pytest.mark.unit
    def test_policy_flags(self, write_document):
        """--permissive and --strict select the unknown-type policy."""
        path = write_document({"type": "Widget99"})
        assert main(["validate", path]) == EXIT_INVALID
        assert main(["validate", path, "--permissive"]) == EXIT_VALID
        assert main(["validate", path, "--strict"]) == EXIT_INVALID

    @pytest.mark.unit
    def test_policy_from_environment(self, write_document, monkeypatch):
        """WIDGETGUARD_UNKNOWN_TYPE_POLICY applies when no flag is given."""
        monkeypatch.setenv("WIDGETGUARD_UNKNOWN_TYPE_POLICY", "permissive")
        path = write_document({"type": "Widget99"})
        assert main(["validate", path]) == EXIT_VALID

    @pytest.mark.unit
    def test_max_depth(self, write_document, capsys):
        """--max-depth bounds the validated depth."""
        path = write_document(
            {"type": "Column", "children": [{"type": "Column", "children": [{"type": "Column"}]}]}
        )
        assert main(["validate", path, "--max-depth", "1", "--json"]) == EXIT_INVALID
        report = json.loads(capsys.readouterr().out)
        assert [e["code"] for e in report["errors"]] == ["MaxDepthExceeded"]

    @pytest.mark.unit
    def test_deep_document_is_invalid_not_malformed(self, write_document, capsys):
        """Documents deeper than the limit exit 1 with MaxDepthExceeded."""
        document = {"type": "Column"}
        for _ in range(120):
            document = {"type": "Column", "children": [document]}
        path = write_document(document)
        assert main(["validate", path, "--json"]) == EXIT_INVALID
        report = json.loads(capsys.readouterr().out)
        assert [e["code"] for e in report["errors"]] == ["MaxDepthExceeded"]
        assert len(report["errors"][0]["path"]) == 65

    @pytest.mark.unit
    def test_non_finite_number(self, write_document, capsys):
        """NaN in a bounded property is reported as out of range."""
        path = write_document('{"type": "ProgressRing", "properties": {"progress": NaN}}')
        assert main(["validate", path]) == EXIT_INVALID
        assert "[OutOfRange]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_invalid_max_depth(self, write_document):
        """Out-of-range depth limits are rejected."""
        path = write_document({"type": "Column"})
        assert main(["validate", path, "--max-depth", "9999"]) == EXIT_ERROR

    @pytest.mark.unit
    def test_malformed_document(self, write_document):
        """Documents without a widget shape exit 2."""
        assert main(["validate", write_document({"children": []})]) == EXIT_ERROR
        assert main(["validate", write_document("{not json")]) == EXIT_ERROR

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        """Unreadable files exit 2."""
        assert main(["validate", str(tmp_path / "nope.json")]) == EXIT_ERROR

    @pytest.mark.unit
    def test_custom_schema_file(self, write_document, schema_file):
        """--schema-file replaces the built-in catalog."""
        path = write_document({"type": "Badge", "properties": {"label": "New"}})
        assert main(["validate", path]) == EXIT_INVALID
        assert main(["validate", path, "--schema-file", str(schema_file)]) == EXIT_VALID

    @pytest.mark.unit
    def test_broken_schema_file(self, write_document, tmp_path):
        """Invalid schema configuration exits 2."""
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"Gauge": {"properties": {"v": {"type": "number", "minimum": 2, "maximum": 1}}}}))
        path = write_document({"type": "Gauge"})
        assert main(["validate", path, "--schema-file", str(bad)]) == EXIT_ERROR


class TestCatalogCommands:
    """Tests for `types`, `schema` and `examples`."""

    @pytest.mark.unit
    def test_types(self, capsys):
        """types lists every registered widget."""
        assert main(["types"]) == EXIT_VALID
        names = capsys.readouterr().out.split()
        assert len(names) == 34
        assert "ProgressRing" in names

    @pytest.mark.unit
    def test_schema_single_type(self, capsys):
        """schema TYPE prints one JSON Schema object."""
        assert main(["schema", "ProgressRing"]) == EXIT_VALID
        schema = json.loads(capsys.readouterr().out)
        assert schema["additionalProperties"] is False
        assert schema["properties"]["progress"]["maximum"] == 1

    @pytest.mark.unit
    def test_schema_unknown_type(self):
        """Unknown types exit 1."""
        assert main(["schema", "Widget99"]) == EXIT_INVALID

    @pytest.mark.unit
    def test_schema_all(self, capsys):
        """schema without a type exports the whole registry."""
        assert main(["schema"]) == EXIT_VALID
        assert len(json.loads(capsys.readouterr().out)) == 34

    @pytest.mark.unit
    def test_examples(self, capsys):
        """examples TYPE prints matching example documents."""
        assert main(["examples", "ProgressRing"]) == EXIT_VALID
        examples = json.loads(capsys.readouterr().out)
        assert [e["document"]["type"] for e in examples] == ["ProgressRing", "ProgressRing"]

    @pytest.mark.unit
    def test_no_command(self):
        """Running without a command prints help and fails."""
        assert main([]) == EXIT_ERROR


def test_module_entry_point(tmp_path):
    """python -m widgetguard runs the CLI."""
    path = tmp_path / "document.json"
    path.write_text(json.dumps({"type": "ProgressRing", "properties": {"progress": 0.5}}))
    result = subprocess.run(
        [sys.executable, "-m", "widgetguard", "validate", str(path)],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "valid"
