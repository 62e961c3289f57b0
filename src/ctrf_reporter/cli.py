"""Command Line Interface for ctrf-reporter."""

import sys
from typing import Optional

import click
from pydantic import ValidationError

from . import __version__ as CTRF_REPORTER_VERSION
from .event_log import load_events, replay_events
from .logger_config import VALID_LOG_LEVELS, setup_logger
from .reporter_config import DEFAULT_OUTPUT_DIR, DEFAULT_OUTPUT_FILE, DEFAULT_TEST_TYPE, RunConfiguration


@click.group(help="ctrf-reporter: build CTRF JSON reports from Cypress run events.")
@click.version_option(version=CTRF_REPORTER_VERSION, package_name="ctrf-reporter")
def main() -> None:
    pass


@main.command()
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--output-dir", default=DEFAULT_OUTPUT_DIR, show_default=True, help="Directory the report is written to")
@click.option("--output-file", default=DEFAULT_OUTPUT_FILE, show_default=True, help="Report file name (.json is appended if missing)")
@click.option("--minimal", is_flag=True, help="Only record name, status and duration per test")
@click.option("--screenshot", is_flag=True, help="Embed a base64 screenshot in each matching test")
@click.option("--test-type", default=DEFAULT_TEST_TYPE, show_default=True, help="Value of each test's 'type' field")
@click.option("--app-name", help="Application name for the environment block")
@click.option("--app-version", help="Application version for the environment block")
@click.option("--build-name", help="CI build name for the environment block")
@click.option("--build-number", help="CI build number for the environment block")
@click.option("--build-url", help="CI build URL for the environment block")
@click.option("--branch-name", help="Branch name for the environment block")
@click.option("--test-environment", help="Test environment label for the environment block")
@click.option("--os-platform", help="OS platform for the environment block")
@click.option("--os-release", help="OS release for the environment block")
@click.option("--os-version", help="OS version for the environment block")
@click.option("--repository-name", help="Repository name for the environment block")
@click.option("--repository-url", help="Repository URL for the environment block")
@click.option(
    "--log-level",
    type=click.Choice(VALID_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (defaults to CTRF_LOG_LEVEL or INFO)",
)
def replay(
    events_file: str,
    output_dir: str,
    output_file: str,
    minimal: bool,
    screenshot: bool,
    test_type: str,
    app_name: Optional[str],
    app_version: Optional[str],
    build_name: Optional[str],
    build_number: Optional[str],
    build_url: Optional[str],
    branch_name: Optional[str],
    test_environment: Optional[str],
    os_platform: Optional[str],
    os_release: Optional[str],
    os_version: Optional[str],
    repository_name: Optional[str],
    repository_url: Optional[str],
    log_level: Optional[str],
) -> None:
    """Replay a recorded Cypress run and write its CTRF report."""
    setup_logger(log_level=log_level, stream=sys.stderr)

    try:
        config = RunConfiguration(
            output_dir=output_dir,
            output_file=output_file,
            minimal=minimal,
            screenshot=screenshot,
            test_type=test_type,
            app_name=app_name,
            app_version=app_version,
            build_name=build_name,
            build_number=build_number,
            build_url=build_url,
            branch_name=branch_name,
            test_environment=test_environment,
            os_platform=os_platform,
            os_release=os_release,
            os_version=os_version,
            repository_name=repository_name,
            repository_url=repository_url,
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid reporter options: {e}")

    try:
        events = load_events(events_file)
    except ValueError as e:
        raise click.ClickException(str(e))

    reporter = replay_events(events, config)
    click.echo(str(reporter.output_path))


if __name__ == "__main__":
    main()
