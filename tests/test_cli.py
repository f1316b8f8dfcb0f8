# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the CLI layer using Click's CliRunner."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
import pytest

from cooling_tco.cli.app import cli

FIXTURES = Path(__file__).parent / "fixtures"


class TestCLI:
    """Tests for CLI commands."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "cooling-tco" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_calculate_help_lists_fields(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["calculate", "--help"])
        assert result.exit_code == 0
        for flag in ("--air-racks", "--immersion-pue", "--discount-rate", "--auto-tanks"):
            assert flag in result.output

    def test_calculate_default(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--no-color", "calculate"])
        assert result.exit_code == 0
        assert "COOLING TCO" in result.output
        assert "Cost Breakdown" in result.output
        assert "TOTAL COST OF OWNERSHIP" in result.output
        assert "$2,203,355" in result.output

    def test_calculate_no_projection(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--no-color", "calculate", "--no-projection"])
        assert result.exit_code == 0
        assert "Cumulative Discounted Cost" not in result.output

    def test_calculate_json(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["calculate", "--json", "--air-racks", "20"])
        assert result.exit_code == 0
        body = json.loads(result.output)
        assert body["airCooling"]["equipment"]["count"] == 20
        assert body["airCooling"]["costs"]["capex"] == 1_000_000

    def test_invalid_field_exits_2(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--no-color", "calculate", "--air-pue", "0.9"])
        assert result.exit_code == 2
        assert "airPUE" in result.output

    def test_auto_tanks(self):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "calculate", "--json", "--auto-tanks",
            "--air-racks", "100", "--immersion-power-per-tank", "50",
        ])
        assert result.exit_code == 0
        body = json.loads(result.output)
        assert body["immersionCooling"]["equipment"]["count"] == 40

    def test_auto_tanks_conflicts_with_explicit_count(self):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "calculate", "--json", "--auto-tanks", "--immersion-tanks", "12",
        ])
        assert result.exit_code == 2
        assert "--auto-tanks" in result.output

    def test_auto_tanks_replaces_scenario_count(self):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "calculate", "--json", "--auto-tanks", "-c", str(FIXTURES / "scenario.yaml"),
            "--air-racks", "8",
        ])
        assert result.exit_code == 0
        # 8 racks x 15 kW over 20 kW tanks
        assert json.loads(result.output)["immersionCooling"]["equipment"]["count"] == 6

    def test_config_file(self):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "calculate", "--json", "-c", str(FIXTURES / "scenario.yaml"),
        ])
        assert result.exit_code == 0
        body = json.loads(result.output)
        assert body["airCooling"]["equipment"]["count"] == 4
        assert body["parameters"]["analysisYears"] == 3

    def test_flags_override_config(self):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "calculate", "--json", "-c", str(FIXTURES / "scenario.yaml"), "--air-racks", "6",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output)["airCooling"]["equipment"]["count"] == 6

    def test_invalid_config_file_exits_1(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("constants:\n  hours_per_year: -1\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--no-color", "calculate", "-c", str(path)])
        assert result.exit_code == 1
        assert "Invalid scenario file" in result.output

    def test_missing_config_file(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["calculate", "-c", "does-not-exist.yaml"])
        assert result.exit_code == 2

    def test_export_json(self, tmp_path):
        out = tmp_path / "result.json"
        runner = CliRunner()
        result = runner.invoke(cli, ["--no-color", "calculate", "--export-json", str(out)])
        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["calculation_id"].startswith("calc_")
        assert data["air"]["annual_opex_usd"] == pytest.approx(393_432.0)
        assert len(data["yearly_projection"]) == 6

    def test_size(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--no-color", "size"])
        assert result.exit_code == 0
        assert "9 immersion tanks" in result.output

    def test_size_custom(self):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--no-color", "size", "--air-racks", "100", "--immersion-power-per-tank", "50",
        ])
        assert result.exit_code == 0
        assert "40 immersion tanks" in result.output

    def test_size_invalid(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--no-color", "size", "--air-racks", "0"])
        assert result.exit_code == 2
        assert "airRacks" in result.output
