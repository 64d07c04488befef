"""Pydantic models for GitHub search results.

These models map to the GraphQL v4 ``search`` response for ``Issue`` and
``PullRequest`` nodes. Connection wrappers (``{"nodes": [...]}``) and counters
(``{"totalCount": n}``) are unwrapped on validation so the records stay flat.
API Reference: https://docs.github.com/en/graphql/reference/objects#issue
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..filters.config import ResourceKind


def _unwrap_nodes(value: Any) -> Any:
    if isinstance(value, dict):
        return [node for node in value.get("nodes") or [] if node is not None]
    return value


def _unwrap_total_count(value: Any) -> Any:
    if isinstance(value, dict):
        return value.get("totalCount", 0)
    return value


class GitHubUser(BaseModel):
    """GitHub user account.

    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")
    id: int | None = Field(None, description="Unique user identifier (integer)")


class GitHubLabel(BaseModel):
    """Label attached to an issue or pull request."""

    name: str = Field(..., description="Name of the label (string)")


class ReviewRequest(BaseModel):
    """Pending review request on a pull request.

    The reviewer is a ``User`` or a ``Team``. Teams carry no login, so the
    reviewer login is optional.
    """

    model_config = ConfigDict(populate_by_name=True)

    reviewer_login: str | None = Field(
        None,
        alias="requestedReviewer",
        description="Login of the requested user, None for team reviews",
    )

    @field_validator("reviewer_login", mode="before")
    @classmethod
    def _reviewer_login(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value.get("login")
        return value


class Issue(BaseModel):
    """An issue or pull request returned by the search.

    Identity is the numeric database id: two records with the same id are
    equal even when they came from different resource-kind queries.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(..., description="Web URL of the issue or pull request")
    id: int = Field(..., alias="databaseId", description="Numeric database id")
    number: int = Field(..., description="Number within the repository")
    title: str = Field(..., description="Title (string)")
    body: str | None = Field(None, alias="bodyText", description="Plain text body")
    created_at: str = Field(..., alias="createdAt", description="ISO 8601 timestamp")
    updated_at: str = Field(..., alias="updatedAt", description="ISO 8601 timestamp")
    state: str = Field(..., description="'open' or 'closed'")
    comment_count: int = Field(0, alias="comments")
    reaction_count: int = Field(0, alias="reactions")
    assignees: list[GitHubUser] = Field(default_factory=list)
    review_requests: list[ReviewRequest] = Field(
        default_factory=list, alias="reviewRequests"
    )
    labels: list[GitHubLabel] = Field(default_factory=list)
    repository: str = Field(..., description="Owning repository as owner/name")
    kind: ResourceKind = ResourceKind.ISSUE

    @field_validator("assignees", "review_requests", "labels", mode="before")
    @classmethod
    def _nodes(cls, value: Any) -> Any:
        return _unwrap_nodes(value)

    @field_validator("comment_count", "reaction_count", mode="before")
    @classmethod
    def _total_count(cls, value: Any) -> Any:
        return _unwrap_total_count(value)

    @field_validator("state", mode="before")
    @classmethod
    def _state(cls, value: Any) -> Any:
        # Pull requests report MERGED, which counts as closed here
        if isinstance(value, str):
            value = value.lower()
            return "closed" if value == "merged" else value
        return value

    @field_validator("repository", mode="before")
    @classmethod
    def _repository(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value.get("nameWithOwner")
        return value

    @property
    def is_open(self) -> bool:
        return self.state == "open"

    def is_review_requested_for(self, user: str) -> bool:
        """Check whether ``user`` is among the requested reviewers."""
        return any(
            request.reviewer_login == user for request in self.review_requests
        )

    def with_kind(self, kind: ResourceKind) -> "Issue":
        return self.model_copy(update={"kind": kind})

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Issue):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)


class SearchEdge(BaseModel):
    node: Issue | None = None


class SearchResult(BaseModel):
    edges: list[SearchEdge] = Field(default_factory=list)


class SearchData(BaseModel):
    search: SearchResult


class SearchResponse(BaseModel):
    """Top level ``{"data": {"search": {"edges": [...]}}}`` payload."""

    data: SearchData

    def issues(self) -> list[Issue]:
        return [edge.node for edge in self.data.search.edges if edge.node]
