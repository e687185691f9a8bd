"""Unit tests for the paramguard CLI."""

import json
import logging
import textwrap

import pytest
from typer.testing import CliRunner

from paramguard import __version__
from paramguard.cli import app

runner = CliRunner()

MODEL_SOURCE = textwrap.dedent('''
    from pydantic import BaseModel, Field


    class Customer(BaseModel):
        name: str = Field(min_length=1)
        age: int = Field(ge=0)
''')


@pytest.fixture
def model_module(tmp_path, monkeypatch):
    """Importable module holding a sample request model."""
    (tmp_path / "cli_sample_models.py").write_text(MODEL_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_sample_models:Customer"


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / ".paramguard.json"
    path.write_text(json.dumps({"validators": ["null_check", "annotations"]}), encoding="utf-8")
    return path


def write_payload(tmp_path, data):
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestCheckCommand:
    """Test the check command."""

    def test_passes(self, tmp_path, model_module, config_file):
        """Test valid inputs pass with exit code 0."""
        payload = write_payload(tmp_path, [{"name": "Ada", "age": 36}])

        result = runner.invoke(app, [
            "check", str(payload), "--model", model_module, "--config", str(config_file)
        ])

        assert result.exit_code == 0
        assert "passed validation" in result.stdout

    def test_fault_json(self, tmp_path, model_module, config_file):
        """Test failures are reported as one JSON fault with exit code 1."""
        payload = write_payload(tmp_path, [{"name": "", "age": -1}, None])

        result = runner.invoke(app, [
            "check", str(payload),
            "--model", model_module,
            "--operation", "CreateCustomer",
            "--config", str(config_file),
            "--format", "json"
        ])

        assert result.exit_code == 1
        output = json.loads(result.stdout)
        assert output["ok"] is False
        fault = output["fault"]
        assert fault["operation"] == "CreateCustomer"
        assert [f["member"] for f in fault["failures"]] == ["name", "age", ""]
        assert fault["failures"][-1]["rule"] == "null_check"

    def test_fault_table(self, tmp_path, config_file):
        """Test table output lists the failures."""
        payload = write_payload(tmp_path, [None])

        result = runner.invoke(app, ["check", str(payload), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "rejected" in result.stdout
        assert "Input is null." in result.stdout

    def test_single_object_payload(self, tmp_path, model_module, config_file):
        """Test a single object is treated as one input."""
        payload = write_payload(tmp_path, {"name": "Ada", "age": 1})

        result = runner.invoke(app, [
            "check", str(payload), "--model", model_module,
            "--config", str(config_file), "--format", "json"
        ])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"ok": True, "fault": None}

    def test_missing_payload(self, tmp_path, config_file):
        """Test a missing payload file is an error."""
        result = runner.invoke(app, [
            "check", str(tmp_path / "missing.json"), "--config", str(config_file)
        ])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_bad_model_reference(self, tmp_path, config_file):
        """Test malformed model references are rejected."""
        payload = write_payload(tmp_path, [])

        result = runner.invoke(app, [
            "check", str(payload), "--model", "no_colon", "--config", str(config_file)
        ])

        assert result.exit_code == 1
        assert "module:Class" in result.stdout

    def test_invalid_format(self, tmp_path):
        """Test unknown output formats are rejected."""
        payload = write_payload(tmp_path, [])

        result = runner.invoke(app, ["check", str(payload), "--format", "xml"])

        assert result.exit_code == 1
        assert "Invalid format" in result.stdout


class TestConfigCommand:
    """Test the config command."""

    def test_json_output(self, config_file):
        """Test effective configuration as JSON."""
        result = runner.invoke(app, ["config", "--config", str(config_file), "--format", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["validators"] == ["null_check", "annotations"]

    def test_unknown_validator(self, tmp_path):
        """Test configuration naming an unknown validator fails."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"validators": ["nope"]}), encoding="utf-8")

        result = runner.invoke(app, ["config", "--config", str(path)])

        assert result.exit_code == 1
        assert "Unknown validator" in result.stdout


class TestMiscCommands:
    """Test version and validators listing."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_validators(self):
        """Test built-in validators are listed."""
        result = runner.invoke(app, ["validators"])

        assert result.exit_code == 0
        assert "null_check" in result.stdout
        assert "annotations" in result.stdout


class TestLogging:
    """Test logging level configuration."""

    @pytest.fixture(autouse=True)
    def restore_root_level(self):
        root = logging.getLogger()
        level = root.level
        yield
        root.setLevel(level)

    def test_log_level_applied_on_each_run(self, config_file):
        """Test a later --log-level still takes effect in the same process."""
        runner.invoke(app, ["--log-level", "debug", "config", "--config", str(config_file)])
        assert logging.getLogger().level == logging.DEBUG

        runner.invoke(app, ["--log-level", "error", "config", "--config", str(config_file)])
        assert logging.getLogger().level == logging.ERROR

    def test_configured_level_applied(self, tmp_path):
        """Test the configuration file level is used without --log-level."""
        path = tmp_path / "warn.json"
        path.write_text(json.dumps({"logging": {"level": "warn"}}), encoding="utf-8")

        result = runner.invoke(app, ["config", "--config", str(path)])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.WARNING
