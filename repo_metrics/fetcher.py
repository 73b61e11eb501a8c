"""Fetch repository metrics from the GitHub REST API."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from shared.logger import get_logger

from .models import MetricsRecord

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
PAGE_SIZE = 100


class FetchError(Exception):
    """Raised when repository metrics cannot be fetched or decoded."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


@dataclass
class Asset:
    """Release asset; only the download counter matters here."""

    download_count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Asset"]:
        if not isinstance(data, dict):
            return None
        count = data.get("download_count")
        if isinstance(count, bool) or not isinstance(count, (int, float)):
            return cls()
        if isinstance(count, float) and not math.isfinite(count):
            return cls()
        return cls(download_count=int(count))


@dataclass
class Release:
    """Release record. ``assets`` is None when absent or not a list."""

    assets: Optional[List[Asset]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Release":
        raw_assets = data.get("assets")
        if not isinstance(raw_assets, list):
            return cls()

        assets = []
        for raw in raw_assets:
            asset = Asset.from_dict(raw)
            if asset is not None:
                assets.append(asset)
        return cls(assets=assets)


@dataclass
class IssueItem:
    """Issue-shaped record; pull requests carry a ``pull_request`` key."""

    is_pull_request: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IssueItem":
        return cls(is_pull_request="pull_request" in data)


class ListingKind(str, Enum):
    """How a releases response was interpreted."""

    SEQUENCE = "sequence"
    EMPTY_FALLBACK = "empty_fallback"


@dataclass
class ReleaseListing:
    """Result of decoding the releases resource."""

    kind: ListingKind
    releases: List[Release] = field(default_factory=list)


def _decode_objects(payload: Any, what: str) -> List[Dict[str, Any]]:
    """Validate a JSON array of objects; a ``null`` array or item counts as empty."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of {what}, got {type(payload).__name__}")

    items = []
    for item in payload:
        if item is None:
            item = {}
        elif not isinstance(item, dict):
            raise ValueError(f"Expected {what} object, got {type(item).__name__}")
        items.append(item)
    return items


def decode_releases(payload: Any) -> ReleaseListing:
    """
    Decode the releases resource.

    A single JSON object (typically an API error payload such as
    ``{"message": "Not Found"}``) is accepted and treated as no releases.

    Args:
        payload: Decoded JSON body of ``GET /repos/{owner}/{repo}/releases``

    Returns:
        ReleaseListing tagged with how the payload was read

    Raises:
        ValueError: If the payload is neither a list of objects nor an object
    """
    try:
        items = _decode_objects(payload, "releases")
    except ValueError:
        if isinstance(payload, dict):
            logger.debug(f"Releases response is an object, not a list: {payload.get('message')}")
            return ReleaseListing(kind=ListingKind.EMPTY_FALLBACK)
        raise

    return ReleaseListing(
        kind=ListingKind.SEQUENCE,
        releases=[Release.from_dict(item) for item in items],
    )


def sum_release_downloads(releases: List[Release]) -> int:
    """Total ``download_count`` over every asset of every release."""
    total = 0
    for release in releases:
        for asset in release.assets or []:
            if asset.download_count is not None:
                total += asset.download_count
    return total


def _get_json(
    client: httpx.Client,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    check_status: bool = True,
) -> Any:
    """GET a resource and decode its JSON body, wrapping failures in FetchError."""
    logger.debug(f"GET {url} {params or ''}".rstrip())

    try:
        response = client.get(url, params=params)
    except httpx.HTTPError as e:
        raise FetchError(f"Request to {url} failed: {e}", url=url) from e

    if check_status and not response.is_success:
        message = ""
        try:
            body = response.json()
            if isinstance(body, dict) and body.get("message"):
                message = f": {body['message']}"
        except ValueError:
            pass
        raise FetchError(f"GET {url} returned HTTP {response.status_code}{message}", url=url)

    try:
        return response.json()
    except ValueError as e:
        raise FetchError(f"Invalid JSON from {url}: {e}", url=url) from e


def count_issues(client: httpx.Client, base_url: str) -> int:
    """
    Count every issue of a repository, pull requests excluded.

    Pages through ``{base_url}/issues?state=all`` until a page comes back
    empty. Any failed page aborts the count.

    Args:
        client: HTTP client to issue requests with
        base_url: Repository resource URL

    Returns:
        Number of issues across all pages

    Raises:
        FetchError: If a page cannot be fetched or decoded
    """
    url = f"{base_url}/issues"
    total = 0
    page = 1

    while True:
        payload = _get_json(
            client,
            url,
            params={"state": "all", "per_page": PAGE_SIZE, "page": page},
        )
        try:
            items = _decode_objects(payload, "issues")
        except ValueError as e:
            raise FetchError(f"Invalid issues page {page} from {url}: {e}", url=url) from e

        if not items:
            break

        for item in items:
            if not IssueItem.from_dict(item).is_pull_request:
                total += 1

        page += 1

    logger.debug(f"Counted {total} issues over {page - 1} page(s)")
    return total


class MetricsFetcher:
    """
    Collect repository metrics.

    Performs the repository, releases and issues requests sequentially
    through a single HTTP client per fetch.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            api_url: API root URL
            timeout: Request timeout in seconds, None to wait indefinitely
            transport: Optional httpx transport (used by tests)
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "repo-metrics",
        }

    def base_url(self, owner: str, repo: str) -> str:
        return f"{self.api_url}/repos/{owner}/{repo}"

    def fetch(self, owner: str, repo: str) -> MetricsRecord:
        """
        Fetch current metrics for a repository.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            Fully populated MetricsRecord

        Raises:
            FetchError: On any transport or decode failure
        """
        logger.info(f"Fetching metrics for {owner}/{repo}")

        try:
            with httpx.Client(
                headers=self.headers,
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                return self._collect(client, self.base_url(owner, repo))
        except FetchError as e:
            logger.error(f"Fetch failed: {e}")
            raise

    def _collect(self, client: httpx.Client, base_url: str) -> MetricsRecord:
        # Repository details
        try:
            record = MetricsRecord.from_api(_get_json(client, base_url))
        except ValueError as e:
            raise FetchError(f"Invalid repository data from {base_url}: {e}", url=base_url) from e

        # Releases; error payloads are tolerated
        releases_url = f"{base_url}/releases"
        try:
            listing = decode_releases(_get_json(client, releases_url, check_status=False))
        except ValueError as e:
            raise FetchError(f"Invalid releases data from {releases_url}: {e}", url=releases_url) from e

        record.total_release_downloads = sum_release_downloads(listing.releases)

        record.total_issues = count_issues(client, base_url)

        return record


def fetch_metrics(owner: str, repo: str, **kwargs) -> MetricsRecord:
    """Fetch metrics with a one-off MetricsFetcher."""
    return MetricsFetcher(**kwargs).fetch(owner, repo)
