"""Test configuration and fixtures."""

from collections.abc import Callable
from typing import Any

import pytest

from giss.filters.config import ResourceKind
from giss.github_client.models import Issue


def make_issue(
    id: int,
    number: int | None = None,
    title: str = "Test issue",
    kind: ResourceKind = ResourceKind.ISSUE,
    updated_at: str = "2024-01-01T00:00:00Z",
    created_at: str = "2024-01-01T00:00:00Z",
    **overrides: Any,
) -> Issue:
    """Build an Issue with sensible defaults for anything not given."""
    fields: dict[str, Any] = {
        "url": f"https://github.com/acme/widgets/issues/{number or id}",
        "id": id,
        "number": number or id,
        "title": title,
        "created_at": created_at,
        "updated_at": updated_at,
        "state": "open",
        "repository": "acme/widgets",
        "kind": kind,
    }
    fields.update(overrides)
    return Issue(**fields)


@pytest.fixture
def issue_factory() -> Callable[..., Issue]:
    """Factory for Issue records."""
    return make_issue


@pytest.fixture
def search_node() -> dict[str, Any]:
    """A single pull request node as returned by the GraphQL search."""
    return {
        "url": "https://github.com/acme/widgets/pull/7",
        "databaseId": 1007,
        "number": 7,
        "title": "Add sprocket support",
        "bodyText": "Adds sprockets.",
        "createdAt": "2024-03-01T10:00:00Z",
        "updatedAt": "2024-03-02T12:30:00Z",
        "state": "OPEN",
        "comments": {"totalCount": 3},
        "reactions": {"totalCount": 1},
        "assignees": {"nodes": [{"login": "alice"}]},
        "reviewRequests": {
            "nodes": [
                {"requestedReviewer": {"login": "bob"}},
                {"requestedReviewer": {}},
            ]
        },
        "labels": {"nodes": [{"name": "enhancement"}]},
        "repository": {"nameWithOwner": "acme/widgets"},
    }
