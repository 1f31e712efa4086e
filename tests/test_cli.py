"""Tests for the typedform CLI."""

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from typed_form.io import read_jsonl, write_jsonl
from typedform import __version__
from typedform.cli import app

runner = CliRunner()


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    """A JSONL file with one payload and one list of payloads."""
    path = tmp_path / "contacts.jsonl"
    write_jsonl(path, [
        {"id": 7, "zipCode": 501, "age": "30"},
        [{"zipCode": "00501"}, {"zipCode": 2134, "isActive": 1}],
    ])
    return path


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestNormalizeCommand:
    """Tests for `typedform normalize`."""

    def test_with_spec(self, input_file: Path, tmp_path: Path, registry_path: Path) -> None:
        output = tmp_path / "out.jsonl"
        result = runner.invoke(app, [
            "normalize",
            "--in", str(input_file),
            "--out", str(output),
            "--spec", "contact",
            "--registry", str(registry_path),
        ])

        assert result.exit_code == 0, result.stdout
        assert "contact@1.1.0" in result.stdout

        records = list(read_jsonl(output))
        assert records[0] == {"id": "7", "zipCode": "501", "age": 30}
        assert records[1] == [{"zipCode": "00501"}, {"zipCode": "2134", "isActive": True}]

    def test_with_pinned_spec_version(self, input_file: Path, tmp_path: Path, registry_path: Path) -> None:
        output = tmp_path / "out.jsonl"
        result = runner.invoke(app, [
            "normalize",
            "--in", str(input_file),
            "--out", str(output),
            "--spec", "contact",
            "--spec-version", "1.0.0",
            "--registry", str(registry_path),
        ])

        assert result.exit_code == 0, result.stdout
        records = list(read_jsonl(output))
        assert records[1][1]["isActive"] == 1

    def test_with_types_file(self, input_file: Path, tmp_path: Path) -> None:
        types_path = tmp_path / "types.yaml"
        types_path.write_text("zipCode: string\n")
        output = tmp_path / "out.jsonl"

        result = runner.invoke(app, [
            "normalize",
            "--in", str(input_file),
            "--out", str(output),
            "--types", str(types_path),
        ])

        assert result.exit_code == 0, result.stdout
        records = list(read_jsonl(output))
        assert records[0] == {"id": 7, "zipCode": "501", "age": "30"}

    def test_writes_diagnostics(self, input_file: Path, tmp_path: Path) -> None:
        types_path = tmp_path / "types.json"
        types_path.write_text(json.dumps({"zipCode": "string", "phoneNumber": "string"}))
        diagnostics = tmp_path / "diag.jsonl"

        result = runner.invoke(app, [
            "normalize",
            "--in", str(input_file),
            "--out", str(tmp_path / "out.jsonl"),
            "--types", str(types_path),
            "--diagnostics", str(diagnostics),
        ])

        assert result.exit_code == 0, result.stdout
        rows = list(read_jsonl(diagnostics))
        assert [row["line"] for row in rows] == [1, 2]

        first = rows[0]["results"][0]
        assert first["absent_fields"] == ["phoneNumber"]
        assert first["records"][0]["field"] == "zipCode"
        assert first["records"][0]["changed"] is True
        assert len(rows[1]["results"]) == 2

    def test_requires_exactly_one_source(self, input_file: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, [
            "normalize",
            "--in", str(input_file),
            "--out", str(tmp_path / "out.jsonl"),
        ])
        assert result.exit_code == 1
        assert "exactly one of --spec or --types" in result.stdout

    def test_missing_input(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [
            "normalize",
            "--in", str(tmp_path / "missing.jsonl"),
            "--out", str(tmp_path / "out.jsonl"),
            "--types", str(tmp_path / "types.json"),
        ])
        assert result.exit_code == 1
        assert "Input file not found" in result.stdout

    def test_unknown_spec(self, input_file: Path, tmp_path: Path, registry_path: Path) -> None:
        result = runner.invoke(app, [
            "normalize",
            "--in", str(input_file),
            "--out", str(tmp_path / "out.jsonl"),
            "--spec", "matter",
            "--registry", str(registry_path),
        ])
        assert result.exit_code == 1
        assert "No versions found" in result.stdout

    def test_bad_types_file(self, input_file: Path, tmp_path: Path) -> None:
        types_path = tmp_path / "types.json"
        types_path.write_text('{"zipCode": "zip"}')

        result = runner.invoke(app, [
            "normalize",
            "--in", str(input_file),
            "--out", str(tmp_path / "out.jsonl"),
            "--types", str(types_path),
        ])
        assert result.exit_code == 1
        assert "Cannot load field types" in result.stdout

    def test_malformed_yaml_types_file(self, input_file: Path, tmp_path: Path) -> None:
        types_path = tmp_path / "types.yaml"
        types_path.write_text("zipCode: [string\n")

        result = runner.invoke(app, [
            "normalize",
            "--in", str(input_file),
            "--out", str(tmp_path / "out.jsonl"),
            "--types", str(types_path),
        ])
        assert result.exit_code == 1
        assert "Cannot load field types" in result.stdout

    def test_invalid_json_line(self, tmp_path: Path) -> None:
        input_path = tmp_path / "bad.jsonl"
        input_path.write_text('{"zipCode": 1}\nnot json\n')
        types_path = tmp_path / "types.json"
        types_path.write_text('{"zipCode": "string"}')

        result = runner.invoke(app, [
            "normalize",
            "--in", str(input_path),
            "--out", str(tmp_path / "out.jsonl"),
            "--types", str(types_path),
        ])
        assert result.exit_code == 1
        assert "line 2" in result.stdout


class TestValidateCommand:
    """Tests for `typedform validate`."""

    def test_valid_spec(self, registry_path: Path) -> None:
        spec_path = registry_path / "specs" / "contact" / "1-0-0.json"
        result = runner.invoke(app, ["validate", str(spec_path)])
        assert result.exit_code == 0
        assert "Valid" in result.stdout

    def test_invalid_spec(self, tmp_path: Path) -> None:
        spec_path = tmp_path / "spec.json"
        spec_path.write_text(json.dumps({"type": "field_type_spec", "spec_id": "x"}))

        result = runner.invoke(app, ["validate", str(spec_path)])
        assert result.exit_code == 1
        assert "Invalid" in result.stdout

    def test_missing_spec(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "Spec file not found" in result.stdout


class TestCoerceCommand:
    """Tests for `typedform coerce`."""

    def test_string_keeps_leading_zero(self) -> None:
        result = runner.invoke(app, ["coerce", "00501", "--type", "string"])
        assert result.exit_code == 0
        assert "'00501' (str)" in result.stdout

    def test_number(self) -> None:
        result = runner.invoke(app, ["coerce", "30", "--type", "number"])
        assert "30 (int)" in result.stdout

    def test_json_value(self) -> None:
        result = runner.invoke(app, ["coerce", "501", "--type", "string", "--json"])
        assert "'501' (str)" in result.stdout

    def test_boolean(self) -> None:
        result = runner.invoke(app, ["coerce", "0", "--type", "boolean", "--json"])
        assert "False (bool)" in result.stdout

    def test_unknown_type(self) -> None:
        result = runner.invoke(app, ["coerce", "1", "--type", "date"])
        assert result.exit_code == 1
        assert "Unknown field type" in result.stdout


class TestInitCommand:
    """Tests for `typedform init`."""

    def test_init_copies_registry(self, project_root: Path, isolated_home: Path) -> None:
        result = runner.invoke(app, ["init", "--from", str(project_root)])

        assert result.exit_code == 0, result.stdout
        registry_dest = isolated_home / "registry" / "field-type-registry"
        assert (registry_dest / "specs" / "contact" / "1-0-0.json").exists()

        config = yaml.safe_load((isolated_home / "config.yaml").read_text())
        assert config == {"default_field_type_registry_path": str(registry_dest)}

    def test_init_refuses_overwrite(self, project_root: Path) -> None:
        runner.invoke(app, ["init", "--from", str(project_root)])
        result = runner.invoke(app, ["init", "--from", str(project_root)])
        assert result.exit_code == 1
        assert "--force" in result.stdout

    def test_init_force(self, project_root: Path) -> None:
        runner.invoke(app, ["init", "--from", str(project_root)])
        result = runner.invoke(app, ["init", "--from", str(project_root), "--force"])
        assert result.exit_code == 0

    def test_init_missing_source(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", "--from", str(tmp_path)])
        assert result.exit_code == 1

    def test_normalize_uses_initialized_registry(
        self, project_root: Path, input_file: Path, tmp_path: Path
    ) -> None:
        """Test that the registry path is read from config.yaml after init."""
        runner.invoke(app, ["init", "--from", str(project_root)])
        output = tmp_path / "out.jsonl"

        result = runner.invoke(app, [
            "normalize", "--in", str(input_file), "--out", str(output), "--spec", "contact",
        ])

        assert result.exit_code == 0, result.stdout
        assert list(read_jsonl(output))[0]["zipCode"] == "501"
