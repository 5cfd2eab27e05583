"""Tests for the command line interface."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from shotdiff.cli import cli
from shotdiff.errors import CaptureFailed
from shotdiff.models.config import ShotdiffConfig
from shotdiff.models.results import CaptureResult

GENERATE = "shotdiff.orchestrator.generate_images"


class TestInit:

    def test_creates_config(self, tmp_path: Path):
        config_path = tmp_path / "shotdiff.json"
        runner = CliRunner()

        result = runner.invoke(cli, ["init", "--target", "https://example.com", "--config", str(config_path)])

        assert result.exit_code == 0
        cfg = ShotdiffConfig.load(config_path)
        assert cfg.images[0].goto == "https://example.com"

    def test_keeps_existing_config_when_declined(self, temp_config_file: Path):
        before = temp_config_file.read_text()
        runner = CliRunner()

        result = runner.invoke(
            cli, ["init", "--target", "https://other.com", "--config", str(temp_config_file)],
            input="n\n",
        )

        assert result.exit_code == 0
        assert temp_config_file.read_text() == before


class TestCompare:

    def test_all_passed(self, screenshot_dirs, tmp_path: Path):
        baseline, new = screenshot_dirs
        runner = CliRunner()

        result = runner.invoke(cli, [
            "compare", "--config", str(tmp_path / "none.json"),
            "--baseline", str(baseline), "--new", str(new),
        ])

        assert result.exit_code == 0
        assert "1 passed" in result.output

    def test_failure_exit_code_and_report(self, changed_dirs, tmp_path: Path):
        baseline, new = changed_dirs
        report = tmp_path / "report.json"
        runner = CliRunner()

        result = runner.invoke(cli, [
            "compare", "--config", str(tmp_path / "none.json"),
            "--baseline", str(baseline), "--new", str(new),
            "--diff", str(tmp_path / "diffs"), "--report", str(report),
        ])

        assert result.exit_code == 1
        data = json.loads(report.read_text())
        assert data["summary"]["failed"] == 1
        assert data["failed"][0]["tested_image"] == "changed.png"
        assert (tmp_path / "diffs" / "changed.png").exists()

    def test_missing_directory(self, tmp_path: Path):
        runner = CliRunner()

        result = runner.invoke(cli, [
            "compare", "--config", str(tmp_path / "none.json"),
            "--baseline", str(tmp_path / "nope"), "--new", str(tmp_path),
        ])

        assert result.exit_code == 1
        assert "doesn't exist" in result.output


class TestGenerate:

    def test_missing_config(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--config", str(tmp_path / "none.json")])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_generate_success(self, temp_config_file: Path):
        runner = CliRunner()
        results = [CaptureResult(msg="Saved to: shots/home.png", name="home.png")]

        with patch(GENERATE, new_callable=AsyncMock, return_value=results) as mock_generate:
            result = runner.invoke(cli, [
                "generate", "--config", str(temp_config_file), "--parallel", "--path", "shots",
            ])

        assert result.exit_code == 0
        assert "Generated 1 screenshot" in result.output
        generate_config = mock_generate.await_args.args[0]
        assert generate_config.serial is False
        assert generate_config.path == "shots"

    def test_generate_failure(self, temp_config_file: Path):
        runner = CliRunner()
        error = CaptureFailed([RuntimeError("page crashed")])

        with patch(GENERATE, new_callable=AsyncMock, side_effect=error):
            result = runner.invoke(cli, ["generate", "--config", str(temp_config_file)])

        assert result.exit_code == 1
        assert "page crashed" in result.output
