"""Repository Metrics - Track GitHub repository stats between snapshots."""

from .fetcher import FetchError, MetricsFetcher, fetch_metrics
from .models import MetricsDelta, MetricsRecord
from .report import format_report
from .snapshot import SnapshotStore

__all__ = [
    "FetchError",
    "MetricsDelta",
    "MetricsFetcher",
    "MetricsRecord",
    "SnapshotStore",
    "fetch_metrics",
    "format_report",
]
