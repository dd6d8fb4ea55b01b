"""Tests for the camber command line."""

import json

import pytest
from click.testing import CliRunner
from loguru import logger

from precast_camber.cli import main
from precast_camber.input_parser import generate_template
from precast_camber.utils.measurements import format_inches_fraction


@pytest.fixture(autouse=True)
def quiet_logger():
    yield
    logger.remove()
    logger.disable("precast_camber")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "member.yaml"
    path.write_text(generate_template(), encoding="utf-8")
    return path


class TestTemplate:

    def test_prints_template(self, runner):
        result = runner.invoke(main, ["template"])
        assert result.exit_code == 0
        assert "strand_pattern:" in result.output


class TestRun:

    def test_summary(self, runner, template_file):
        result = runner.invoke(main, ["run", str(template_file)])
        assert result.exit_code == 0, result.output
        assert "Recommended camber" in result.output
        assert "40'-0\"" in result.output

    def test_json(self, runner, template_file):
        result = runner.invoke(main, ["run", str(template_file), "--json"])
        assert result.exit_code == 0, result.output
        output = result.output
        record = json.loads(output[output.index("{"):output.rindex("}") + 1])
        assert record["initialCamber"] > 0
        assert record["activeStrandCount"] == 6

    def test_summary_shows_sixteenth_fractions(self, runner, template_file):
        as_json = runner.invoke(main, ["run", str(template_file), "--json"]).output
        record = json.loads(as_json[as_json.index("{"):as_json.rindex("}") + 1])
        result = runner.invoke(main, ["run", str(template_file)])
        assert result.exit_code == 0, result.output
        expected = format_inches_fraction(record["recommendedCamber"])
        assert f"({expected})" in result.output

    def test_validation_failure_exits_1(self, runner, tmp_path):
        text = generate_template().replace("product_width: 48", "product_width: 30")
        path = tmp_path / "cut.yaml"
        path.write_text(text, encoding="utf-8")
        result = runner.invoke(main, ["run", str(path)])
        assert result.exit_code == 1
        assert "Select which side was removed" in result.output

    def test_bad_input_file(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("member:\n  span: abc\n", encoding="utf-8")
        result = runner.invoke(main, ["run", str(path)])
        assert result.exit_code == 1
        assert "Error parsing input" in result.output

    def test_bad_tables_exits_2(self, runner, template_file, tmp_path):
        tables = tmp_path / "tables.yaml"
        tables.write_text("code_name: x\n", encoding="utf-8")
        result = runner.invoke(main, ["run", str(template_file), "--tables", str(tables)])
        assert result.exit_code == 2
        assert "Configuration error" in result.output


class TestValidate:

    def test_valid(self, runner, template_file):
        result = runner.invoke(main, ["validate", str(template_file)])
        assert result.exit_code == 0
        assert "Input is valid." in result.output

    def test_invalid(self, runner, tmp_path):
        text = generate_template().replace("release_strength: 3500", "release_strength: 9500")
        path = tmp_path / "bad.yaml"
        path.write_text(text, encoding="utf-8")
        result = runner.invoke(main, ["validate", str(path)])
        assert result.exit_code == 1
        assert "1 issue(s)" in result.output
