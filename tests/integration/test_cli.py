"""
Integration Tests - Command Line

Drives the typer application end to end through CliRunner.
"""
import json

import pytest
import yaml
from typer.testing import CliRunner

from valuation_ui_cli.cli import app


runner = CliRunner()


def _write_case(tmp_path, name="case.yaml", **overrides):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(overrides))
    return path


@pytest.fixture
def case_file(tmp_path):
    return _write_case(tmp_path)


class TestRun:
    def test_run_displays_tables(self, case_file):
        result = runner.invoke(app, ["run", str(case_file)])

        assert result.exit_code == 0, result.output
        assert "Valuation Complete" in result.output

    def test_run_with_exports(self, case_file, tmp_path):
        result = runner.invoke(app, [
            "run", "--input", str(case_file), "--quiet",
            "--output", str(tmp_path / "out.xlsx"),
            "--csv-dir", str(tmp_path / "csv"),
            "--json", str(tmp_path / "out.json"),
            "--charts-dir", str(tmp_path / "charts"),
        ])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "out.xlsx").exists()
        assert (tmp_path / "csv" / "1_Assumptions.csv").exists()
        assert (tmp_path / "charts" / "waterfall.html").exists()
        assert (tmp_path / "charts" / "cashflow_timeline.html").exists()
        assert (tmp_path / "charts" / "balance_sheet.html").exists()
        with open(tmp_path / "out.json") as f:
            assert json.load(f)["format_version"] == 1

    def test_undefined_terminal_value_fails(self, tmp_path):
        path = _write_case(tmp_path, wacc=4, terminal_growth_rate=4)
        result = runner.invoke(app, ["run", str(path), "--quiet"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_overflowing_horizon_fails(self, tmp_path):
        path = _write_case(tmp_path, projection_years=8000)
        result = runner.invoke(app, ["run", str(path), "--quiet"])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "Discount factor" in result.output

    def test_missing_input_fails(self, tmp_path):
        result = runner.invoke(app, ["run", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1

    def test_no_input_fails(self):
        result = runner.invoke(app, ["run"])
        assert result.exit_code == 1


class TestValidate:
    def test_valid_file(self, case_file):
        result = runner.invoke(app, ["validate", str(case_file)])

        assert result.exit_code == 0, result.output
        assert "Input file is valid" in result.output

    def test_warnings_do_not_fail(self, tmp_path):
        path = _write_case(tmp_path, terminal_growth_rate=12)
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 0, result.output
        assert "HIGH" in result.output

    def test_strict_fails_on_high_severity(self, tmp_path):
        path = _write_case(tmp_path, terminal_growth_rate=12)
        result = runner.invoke(app, ["validate", str(path), "--strict"])

        assert result.exit_code == 1

    def test_hard_error_fails(self, tmp_path):
        path = _write_case(tmp_path, tax_rate=150)
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "invalid assumptions" in result.output


class TestExport:
    @pytest.mark.parametrize("fmt,name", [("json", "out.json"), ("xlsx", "out.xlsx")])
    def test_file_formats(self, case_file, tmp_path, fmt, name):
        result = runner.invoke(app, ["export", str(case_file), "--output", str(tmp_path / name), "--format", fmt])

        assert result.exit_code == 0, result.output
        assert (tmp_path / name).exists()

    def test_csv_format(self, case_file, tmp_path):
        result = runner.invoke(app, ["export", str(case_file), "--output", str(tmp_path / "csv"), "--format", "csv"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "csv" / "9_DCF_Valuation.csv").exists()

    def test_unknown_format(self, case_file, tmp_path):
        result = runner.invoke(app, ["export", str(case_file), "--output", str(tmp_path / "out.pdf"), "--format", "pdf"])
        assert result.exit_code == 1


class TestDefaults:
    def test_prints_yaml(self):
        result = runner.invoke(app, ["defaults"])

        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["base_revenue"] == 1e9
        assert data["shares_outstanding"] == 100_000_000

    def test_writes_file(self, tmp_path):
        path = tmp_path / "defaults.yaml"
        result = runner.invoke(app, ["defaults", "--output", str(path)])

        assert result.exit_code == 0
        assert yaml.safe_load(path.read_text())["wacc"] == 10


def test_log_level_option(case_file):
    result = runner.invoke(app, ["--log-level", "DEBUG", "run", str(case_file), "--quiet"])
    assert result.exit_code == 0, result.output
