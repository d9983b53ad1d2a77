"""Tests for transmute CLI commands."""

import json

import pytest
from click.testing import CliRunner

from transmute.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "spec.json"
    path.write_text(json.dumps({"num": "=abs", "label": ["=notNull(@(1,name))", "unnamed"]}))
    return path


class TestRun:
    def test_run_with_input_file(self, runner, spec_file, tmp_path):
        input_file = tmp_path / "input.json"
        input_file.write_text('{"num": -1.0}')

        result = runner.invoke(cli, ["run", str(spec_file), str(input_file)])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"num": 1.0, "label": "unnamed"}

    def test_run_reads_stdin(self, runner, spec_file):
        result = runner.invoke(cli, ["run", str(spec_file)], input='{"num": "xyz", "name": "n"}')
        assert result.exit_code == 0
        assert json.loads(result.output) == {"num": "xyz", "name": "n", "label": "n"}

    def test_run_mode_option(self, runner, spec_file):
        result = runner.invoke(
            cli,
            ["run", "--mode", "define", "--indent", "0", str(spec_file)],
            input='{"num": -3, "label": "kept"}',
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {"num": -3, "label": "kept"}

    def test_run_invalid_json_input(self, runner, spec_file):
        result = runner.invoke(cli, ["run", str(spec_file)], input="{not json")
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_run_invalid_spec(self, runner, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("- operation: shift\n  spec: {}\n")
        result = runner.invoke(cli, ["run", str(bad)], input="{}")
        assert result.exit_code == 1
        assert "Unknown modify operation" in result.output

    def test_run_missing_spec_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["run", str(tmp_path / "nope.json")], input="{}")
        assert result.exit_code != 0


class TestFunctions:
    def test_lists_functions_by_category(self, runner):
        result = runner.invoke(cli, ["functions"])
        assert result.exit_code == 0
        assert "math:" in result.output
        assert "abs(value)" in result.output
        assert "concat(values...)" in result.output

    def test_json_export(self, runner):
        result = runner.invoke(cli, ["functions", "--json"])
        assert result.exit_code == 0
        docs = json.loads(result.output)
        assert "toLong" in docs["functions"]
        assert docs["byCategory"]["existence"] == ["noop", "isPresent", "notNull", "isNull"]

    def test_log_level_option(self, runner):
        result = runner.invoke(cli, ["--log-level", "debug", "functions"])
        assert result.exit_code == 0


class TestEnvironment:
    def test_invalid_mode_env_reports_error(self, runner, monkeypatch):
        monkeypatch.setenv("TRANSMUTE_MODE", "shift")
        result = runner.invoke(cli, ["functions"])
        assert result.exit_code == 1
        assert "invalid TRANSMUTE_MODE" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_mode_env_used_by_run(self, runner, spec_file, monkeypatch):
        monkeypatch.setenv("TRANSMUTE_MODE", "define")
        result = runner.invoke(cli, ["run", str(spec_file)], input='{"num": -3}')
        assert result.exit_code == 0
        assert json.loads(result.output) == {"num": -3, "label": "unnamed"}
