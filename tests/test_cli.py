import json

import pytest
from click.testing import CliRunner

from vendor_balance_recon.cli import main


@pytest.fixture
def runner():
    return CliRunner()


def _source_args(source_files):
    args = []
    for key, path in source_files.items():
        args.extend(["-s", f"{key}={path}"])
    return args


class TestReconcileCommand:
    def test_dry_run_prints_verdict(self, runner, source_files):
        result = runner.invoke(
            main, ["reconcile", "ACME Distribuidora", *_source_args(source_files), "--dry-run"]
        )

        assert result.exit_code == 0, result.output
        assert "balances_equal" in result.output
        assert "Dry run" in result.output

    def test_writes_report_and_json(self, runner, source_files, tmp_path):
        report = tmp_path / "report.xlsx"
        json_path = tmp_path / "result.json"

        result = runner.invoke(
            main,
            [
                "reconcile",
                "ACME Distribuidora",
                *_source_args(source_files),
                "-o",
                str(report),
                "--json-output",
                str(json_path),
            ],
        )

        assert result.exit_code == 0, result.output
        assert report.exists()
        data = json.loads(json_path.read_text(encoding="utf-8"))
        assert data["automatic_balance_assessment"]["status"] == "balances_equal"

    def test_tolerance_override(self, runner, source_files):
        result = runner.invoke(
            main,
            [
                "reconcile",
                "ACME Distribuidora",
                *_source_args(source_files),
                "--tolerance",
                "0",
                "--dry-run",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "balances_different" in result.output

    def test_analyze_without_api_key(self, runner, source_files, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        result = runner.invoke(
            main,
            ["reconcile", "ACME Distribuidora", *_source_args(source_files), "--analyze", "--dry-run"],
        )

        assert result.exit_code == 0, result.output
        assert "analysis_unavailable" in result.output

    def test_malformed_source_option(self, runner):
        result = runner.invoke(main, ["reconcile", "ACME", "-s", "ledger"])

        assert result.exit_code == 2
        assert "KEY=PATH" in result.output

    def test_invalid_config_exits_with_error(self, runner, source_files, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("matching:\n  extraction_threshold: 7\n", encoding="utf-8")

        result = runner.invoke(
            main,
            ["reconcile", "ACME", *_source_args(source_files), "-c", str(config), "--dry-run"],
        )

        assert result.exit_code == 1
        assert "Error" in result.output


class TestCheckVendorCommand:
    def test_found(self, runner, source_files):
        result = runner.invoke(main, ["check-vendor", "ACME Distribuidora", str(source_files["ledger"])])

        assert result.exit_code == 0
        assert "found" in result.output

    def test_not_found(self, runner, source_files):
        result = runner.invoke(main, ["check-vendor", "Zeta Transportes", str(source_files["ledger"])])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestExtractLinesCommand:
    def test_lists_vendor_lines(self, runner, source_files):
        result = runner.invoke(main, ["extract-lines", "ACME Distribuidora", str(source_files["payables"])])

        assert result.exit_code == 0, result.output
        assert "42.152,00" in result.output
        assert "Total lines: 1" in result.output


class TestInitConfigCommand:
    def test_writes_config(self, runner, tmp_path):
        output = tmp_path / "config.yaml"
        result = runner.invoke(main, ["init-config", "-o", str(output)])

        assert result.exit_code == 0
        assert output.exists()
