"""CLI interface for Repository Metrics."""

import json
import sys
from typing import Optional

import click

from shared.cli import error, handle_errors, print_table
from shared.logger import get_logger, setup_logger

from .fetcher import DEFAULT_API_URL, DEFAULT_TIMEOUT, FetchError, MetricsFetcher
from .report import build_report_table, format_report, report_as_dict
from .snapshot import DEFAULT_METRICS_DIR, SnapshotStore

logger = get_logger(__name__)


@click.command()
@click.option("--owner", "-owner", default="octocat", show_default=True, help="The owner of the GitHub repository")
@click.option("--repo", "-repo", default="Hello-World", show_default=True, help="The name of the GitHub repository")
@click.option("--previous", "-previous", default="", help="Path to the previous metrics file")
@click.option(
    "--metrics-dir",
    envvar="REPO_METRICS_DIR",
    default=DEFAULT_METRICS_DIR,
    show_default=True,
    help="Directory for saved snapshots (or set REPO_METRICS_DIR)",
)
@click.option(
    "--api-url",
    envvar="REPO_METRICS_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="GitHub API root (or set REPO_METRICS_API_URL)",
)
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Request timeout in seconds (0 to wait indefinitely)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "table"], case_sensitive=False),
    default="text",
    help="Report format",
)
@click.option("--no-save", is_flag=True, help="Don't write a snapshot")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    owner: str,
    repo: str,
    previous: Optional[str],
    metrics_dir: str,
    api_url: str,
    timeout: float,
    output_format: str,
    no_save: bool,
    verbose: bool,
):
    """
    Repository Metrics - Compare GitHub repository stats against a snapshot.

    Examples:

        \b
        # Report for the default repository
        repo-metrics

        \b
        # Compare against last month's snapshot
        repo-metrics -owner acme -repo widget -previous metrics/widget_metrics_20240101_090000.json

        \b
        # JSON output, no snapshot written
        repo-metrics --repo widget --format json --no-save
    """
    # Setup logging
    log_level = "DEBUG" if verbose else "INFO"
    setup_logger("repo_metrics", level=log_level)

    store = SnapshotStore(metrics_dir)
    previous_record = store.load(previous)

    fetcher = MetricsFetcher(api_url=api_url, timeout=timeout or None)

    try:
        current = fetcher.fetch(owner, repo)
    except FetchError as e:
        error(f"Error fetching data from GitHub: {e}")
        sys.exit(1)

    output_format = output_format.lower()
    if output_format == "json":
        click.echo(json.dumps(report_as_dict(current, previous_record), indent=2))
    elif output_format == "table":
        print_table(build_report_table(current, previous_record))
    else:
        click.echo(format_report(current, previous_record))

    if not no_save:
        saved = store.save(current, repo)
        if saved:
            logger.info(f"Metrics saved to {saved}")

    sys.exit(0)


if __name__ == "__main__":
    main()
