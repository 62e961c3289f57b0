"""Tests for the ctrf-reporter command line interface."""

import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from ctrf_reporter import __version__
from ctrf_reporter.cli import main

RECORDED_RUN = str(Path(__file__).parent / "fixtures" / "recorded_run.json")


def test_version():
    result = CliRunner().invoke(main, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


@patch("ctrf_reporter.cli.setup_logger")
def test_replay_writes_report_and_prints_path(mock_setup_logger, tmp_path):
    output_dir = tmp_path / "reports"

    result = CliRunner().invoke(
        main,
        [
            "replay",
            RECORDED_RUN,
            "--output-dir",
            str(output_dir),
            "--output-file",
            "cart",
            "--minimal",
            "--build-number",
            "77",
            "--os-platform",
            "linux",
            "--os-release",
            "6.1.0",
            "--os-version",
            "Debian 12",
            "--repository-name",
            "shop",
            "--repository-url",
            "https://git.example.com/shop",
        ],
    )

    assert result.exit_code == 0, result.output
    report_path = output_dir / "cart.json"
    assert result.stdout.strip() == str(report_path)
    document = json.loads(report_path.read_text(encoding="utf-8"))
    assert document["results"]["environment"] == {
        "osPlatform": "linux",
        "osRelease": "6.1.0",
        "osVersion": "Debian 12",
        "buildNumber": "77",
        "repositoryName": "shop",
        "repositoryUrl": "https://git.example.com/shop",
    }
    assert document["results"]["tests"][0] == {"name": "Cart adds item", "status": "passed", "duration": 120}
    mock_setup_logger.assert_called_once()


@patch("ctrf_reporter.cli.setup_logger")
def test_replay_rejects_invalid_event_file(mock_setup_logger, tmp_path):
    events_file = tmp_path / "events.json"
    events_file.write_text("not json")

    result = CliRunner().invoke(main, ["replay", str(events_file), "--output-dir", str(tmp_path / "out")])

    assert result.exit_code != 0
    assert "Error" in result.output


def test_replay_requires_existing_file(tmp_path):
    result = CliRunner().invoke(main, ["replay", str(tmp_path / "missing.json")])

    assert result.exit_code == 2
