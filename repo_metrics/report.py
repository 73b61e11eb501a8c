"""Delta report rendering."""

from typing import Any, Dict, List, Tuple

from rich.markup import escape
from rich.table import Table

from shared.cli import create_table

from .models import MetricsDelta, MetricsRecord

REPORT_TITLE = "GitHub Repository Monthly Report"
SEPARATOR = "=" * 35

# (label, field) in report order
REPORT_ROWS: List[Tuple[str, str]] = [
    ("Stars", "stars"),
    ("Forks", "forks"),
    ("Watchers", "watchers"),
    ("Open Issues", "open_issues"),
    ("Total Issues", "total_issues"),
    ("Total Release Downloads", "total_release_downloads"),
]


def format_delta(value: int) -> str:
    """Signed delta, e.g. ``+5``, ``+0``, ``-3``."""
    return f"{value:+d}"


def format_report(current: MetricsRecord, previous: MetricsRecord) -> str:
    """
    Render the fixed-layout text report.

    Args:
        current: Freshly fetched metrics
        previous: Metrics from the last snapshot (``MetricsRecord.empty()`` if none)

    Returns:
        Multi-line report ending with a newline
    """
    delta = MetricsDelta.between(current, previous)

    lines = [
        REPORT_TITLE,
        SEPARATOR,
        f"Repository: {current.repository_name}",
    ]
    for label, name in REPORT_ROWS:
        lines.append(f"{label}: {getattr(current, name)} (Delta: {format_delta(getattr(delta, name))})")
    lines.append(f"Last Updated: {current.last_updated}")
    lines.append(SEPARATOR)

    return "\n".join(lines) + "\n"


def report_as_dict(current: MetricsRecord, previous: MetricsRecord) -> Dict[str, Any]:
    """Report data for JSON output."""
    return {
        "current": current.to_dict(),
        "deltas": MetricsDelta.between(current, previous).to_dict(),
    }


def build_report_table(current: MetricsRecord, previous: MetricsRecord) -> Table:
    """Report as a rich table."""
    delta = MetricsDelta.between(current, previous)

    table = create_table(title=escape(f"{current.repository_name} (updated {current.last_updated})"))
    table.add_column("Metric", style="bold yellow")
    table.add_column("Current", justify="right", style="cyan")
    table.add_column("Delta", justify="right")

    for label, name in REPORT_ROWS:
        change = getattr(delta, name)
        color = "green" if change > 0 else "red" if change < 0 else "dim"
        table.add_row(
            label,
            f"{getattr(current, name):,}",
            f"[{color}]{format_delta(change)}[/{color}]",
        )

    return table
