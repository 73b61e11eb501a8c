"""Snapshot persistence for metrics records."""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from shared.logger import get_logger

from .models import MetricsRecord

logger = get_logger(__name__)

DEFAULT_METRICS_DIR = "metrics"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class SnapshotStore:
    """
    Read and write metrics snapshots as JSON files.

    Loading never fails: anything unreadable yields an empty record.
    Saving never raises on filesystem errors.
    """

    def __init__(self, directory: Union[str, Path] = DEFAULT_METRICS_DIR):
        self.directory = Path(directory)

    def load(self, path: Optional[Union[str, Path]]) -> MetricsRecord:
        """
        Load a previous snapshot.

        Args:
            path: Snapshot file, or empty/None for no snapshot

        Returns:
            The stored record, or MetricsRecord.empty() if it cannot be read
        """
        if not path:
            return MetricsRecord.empty()

        try:
            with open(path) as f:
                data = json.load(f)
            return MetricsRecord.from_dict(data)
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring previous snapshot {path}: {e}")
            return MetricsRecord.empty()

    @staticmethod
    def timestamp_for(moment: datetime) -> str:
        return moment.strftime(TIMESTAMP_FORMAT)

    def path_for(self, repo: str, timestamp: str) -> Path:
        return self.directory / f"{repo}_metrics_{timestamp}.json"

    def save(
        self,
        record: MetricsRecord,
        repo: str,
        now: Optional[datetime] = None,
    ) -> Optional[Path]:
        """
        Write a snapshot named after the repository and current time.

        Args:
            record: Metrics to persist
            repo: Repository name used in the file name
            now: Timestamp override

        Returns:
            Path written, or None if the write failed
        """
        filepath = self.path_for(repo, self.timestamp_for(now or datetime.now()))

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w") as f:
                json.dump(record.to_dict(), f, indent=2)
        except OSError as e:
            logger.debug(f"Could not save snapshot to {filepath}: {e}")
            return None

        logger.debug(f"Saved snapshot to {filepath}")
        return filepath
