"""Shared fixtures: an in-memory GitHub API served through httpx.MockTransport."""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from repo_metrics.fetcher import MetricsFetcher

API_URL = "https://api.example.test"


def make_issues(count: int, pull_requests: int = 0) -> List[Dict[str, Any]]:
    """Build an issues page with ``pull_requests`` of the items marked as PRs."""
    items = []
    for i in range(count):
        item = {"number": i + 1, "title": f"Issue {i + 1}"}
        if i < pull_requests:
            item["pull_request"] = {"url": f"{API_URL}/pulls/{i + 1}"}
        items.append(item)
    return items


class FakeGitHub:
    """Routes repository, releases and issues requests to canned payloads."""

    def __init__(
        self,
        repo: Optional[Dict[str, Any]] = None,
        releases: Any = None,
        issue_pages: Optional[List[Any]] = None,
    ):
        self.repo = repo if repo is not None else {
            "full_name": "acme/widget",
            "stargazers_count": 15,
            "forks_count": 3,
            "open_issues_count": 4,
            "subscribers_count": 2,
            "updated_at": "2024-02-01T09:00:00Z",
        }
        self.releases = releases if releases is not None else []
        self.issue_pages = issue_pages if issue_pages is not None else []
        self.repo_status = 200
        self.releases_status = 200
        self.raw_bodies: Dict[str, str] = {}
        # old path prefix -> new path prefix, answered with 301
        self.moved: Dict[str, str] = {}
        self.requests: List[httpx.Request] = []

    def issue_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/issues")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        for old, new in self.moved.items():
            if path == old or path.startswith(old + "/"):
                location = request.url.copy_with(path=new + path[len(old):])
                return httpx.Response(
                    301,
                    headers={"Location": str(location)},
                    json={"message": "Moved Permanently"},
                )

        if path in self.raw_bodies:
            return httpx.Response(200, content=self.raw_bodies[path].encode())

        if path.endswith("/releases"):
            return httpx.Response(self.releases_status, json=self.releases)

        if path.endswith("/issues"):
            page = int(request.url.params["page"])
            payload = self.issue_pages[page - 1] if page <= len(self.issue_pages) else []
            return httpx.Response(200, json=payload)

        return httpx.Response(self.repo_status, json=self.repo)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def fetcher(self) -> MetricsFetcher:
        return MetricsFetcher(api_url=API_URL, transport=self.transport())


@pytest.fixture
def github():
    """Default fake API for acme/widget."""
    return FakeGitHub()


@pytest.fixture
def write_snapshot(tmp_path):
    """Write a snapshot dict to a file and return its path."""

    def _write(data: Any, name: str = "previous.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)

    return _write


@pytest.fixture
def fake_github():
    """Factory for FakeGitHub with custom payloads."""
    return FakeGitHub


@pytest.fixture
def issues():
    """Factory for issues pages."""
    return make_issues
