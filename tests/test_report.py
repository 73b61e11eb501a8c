"""Tests for report rendering."""

from rich.console import Console

from repo_metrics.models import MetricsRecord
from repo_metrics.report import (
    SEPARATOR,
    build_report_table,
    format_delta,
    format_report,
    report_as_dict,
)

CURRENT = MetricsRecord(
    repository_name="acme/widget",
    stars=15,
    forks=3,
    open_issues=4,
    watchers=2,
    total_issues=12,
    total_release_downloads=8,
    last_updated="2024-02-01T09:00:00Z",
)


class TestFormatDelta:
    """Test signed delta formatting."""

    def test_signs(self):
        assert format_delta(5) == "+5"
        assert format_delta(0) == "+0"
        assert format_delta(-3) == "-3"


class TestFormatReport:
    """Test the fixed-layout text report."""

    def test_full_layout(self):
        """Test every line of the report."""
        previous = MetricsRecord(
            repository_name="acme/widget",
            stars=10,
            forks=3,
            open_issues=5,
            watchers=2,
            total_issues=10,
            total_release_downloads=0,
        )

        report = format_report(CURRENT, previous)

        assert report == (
            "GitHub Repository Monthly Report\n"
            "===================================\n"
            "Repository: acme/widget\n"
            "Stars: 15 (Delta: +5)\n"
            "Forks: 3 (Delta: +0)\n"
            "Watchers: 2 (Delta: +0)\n"
            "Open Issues: 4 (Delta: -1)\n"
            "Total Issues: 12 (Delta: +2)\n"
            "Total Release Downloads: 8 (Delta: +8)\n"
            "Last Updated: 2024-02-01T09:00:00Z\n"
            "===================================\n"
        )

    def test_separator_width(self):
        assert SEPARATOR == "=" * 35

    def test_empty_previous_deltas_equal_current(self):
        """Test that without a snapshot every delta equals the current value."""
        report = format_report(CURRENT, MetricsRecord.empty())

        assert "Stars: 15 (Delta: +15)" in report
        assert "Forks: 3 (Delta: +3)" in report
        assert "Watchers: 2 (Delta: +2)" in report
        assert "Open Issues: 4 (Delta: +4)" in report
        assert "Total Issues: 12 (Delta: +12)" in report
        assert "Total Release Downloads: 8 (Delta: +8)" in report

    def test_zero_current_shows_plus_zero(self):
        """Test the sign convention for zero deltas."""
        report = format_report(MetricsRecord.empty(), MetricsRecord.empty())

        assert report.count("(Delta: +0)") == 6
        assert "Repository: \n" in report


class TestOtherFormats:
    """Test JSON and table renderings."""

    def test_report_as_dict(self):
        """Test JSON report data."""
        data = report_as_dict(CURRENT, MetricsRecord(stars=20))

        assert data["current"]["stargazers_count"] == 15
        assert data["current"]["full_name"] == "acme/widget"
        assert data["deltas"]["stars"] == -5
        assert data["deltas"]["total_release_downloads"] == 8

    def test_build_report_table(self):
        """Test table rows."""
        table = build_report_table(CURRENT, MetricsRecord(stars=10))

        assert table.row_count == 6
        assert [c.header for c in table.columns] == ["Metric", "Current", "Delta"]

        console = Console(width=120, record=True)
        console.print(table)
        text = console.export_text()

        assert "Total Release Downloads" in text
        assert "+5" in text
        assert "acme/widget" in text
