"""Repository metrics record and delta types."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

# Snapshot keys, compatible with snapshots written by earlier releases.
SNAPSHOT_KEYS = {
    "repository_name": "full_name",
    "stars": "stargazers_count",
    "forks": "forks_count",
    "open_issues": "open_issues_count",
    "watchers": "subscribers_count",
    "total_issues": "TotalIssues",
    "total_release_downloads": "TotalReleaseDownloads",
    "last_updated": "updated_at",
}

# Fields read from the repository detail resource; the rest are computed.
API_FIELDS = (
    "repository_name",
    "stars",
    "forks",
    "open_issues",
    "watchers",
    "last_updated",
)


def _read_int(data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected integer for '{key}', got {value!r}")
    return value


def _read_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Expected string for '{key}', got {value!r}")
    return value


@dataclass
class MetricsRecord:
    """Point-in-time snapshot of a repository's public statistics."""

    repository_name: str = ""
    stars: int = 0
    forks: int = 0
    open_issues: int = 0  # as reported by the platform, includes pull requests
    watchers: int = 0
    total_issues: int = 0  # pull requests excluded
    total_release_downloads: int = 0
    last_updated: str = ""

    @classmethod
    def empty(cls) -> "MetricsRecord":
        """Zero-valued record used when no previous snapshot is available."""
        return cls()

    @classmethod
    def from_api(cls, data: Any) -> "MetricsRecord":
        """
        Build a record from the repository detail resource.

        Args:
            data: Decoded JSON body of ``GET /repos/{owner}/{repo}``

        Returns:
            MetricsRecord with the computed fields left at zero

        Raises:
            ValueError: If the payload is not an object or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected repository object, got {type(data).__name__}")

        values = {}
        for name in API_FIELDS:
            key = SNAPSHOT_KEYS[name]
            if isinstance(getattr(cls, name), str):
                values[name] = _read_str(data, key)
            else:
                values[name] = _read_int(data, key)
        return cls(**values)

    @classmethod
    def from_dict(cls, data: Any) -> "MetricsRecord":
        """Create from a snapshot dictionary. Absent keys reset to zero."""
        if not isinstance(data, dict):
            raise ValueError(f"Expected snapshot object, got {type(data).__name__}")

        values = {}
        for f in fields(cls):
            key = SNAPSHOT_KEYS[f.name]
            if isinstance(f.default, str):
                values[f.name] = _read_str(data, key)
            else:
                values[f.name] = _read_int(data, key)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the snapshot dictionary."""
        return {key: getattr(self, name) for name, key in SNAPSHOT_KEYS.items()}


@dataclass
class MetricsDelta:
    """Signed field-wise difference between two records."""

    stars: int = 0
    forks: int = 0
    watchers: int = 0
    open_issues: int = 0
    total_issues: int = 0
    total_release_downloads: int = 0

    @classmethod
    def between(
        cls, current: MetricsRecord, previous: Optional[MetricsRecord] = None
    ) -> "MetricsDelta":
        """Subtract ``previous`` from ``current`` for every numeric field."""
        previous = previous or MetricsRecord.empty()
        return cls(
            **{
                f.name: getattr(current, f.name) - getattr(previous, f.name)
                for f in fields(cls)
            }
        )

    def to_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
