"""GitHub search query building."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..errors import MissingUserError
from ..filters.config import FilterConfig, ResourceKind, StateFilter
from ..filters.targets import Target

logger = logging.getLogger(__name__)

SEARCH_ISSUES_OPERATION = "SearchIssues"

SEARCH_ISSUES_QUERY = """
query SearchIssues($searchQuery: String!, $limit: Int!) {
  search(query: $searchQuery, type: ISSUE, first: $limit) {
    edges {
      node {
        ... on Issue {
          url
          databaseId
          number
          title
          bodyText
          createdAt
          updatedAt
          state
          comments { totalCount }
          reactions { totalCount }
          assignees(first: 10) { nodes { login } }
          labels(first: 10) { nodes { name } }
          repository { nameWithOwner }
        }
        ... on PullRequest {
          url
          databaseId
          number
          title
          bodyText
          createdAt
          updatedAt
          state
          comments { totalCount }
          reactions { totalCount }
          assignees(first: 10) { nodes { login } }
          reviewRequests(first: 10) {
            nodes { requestedReviewer { ... on User { login } } }
          }
          labels(first: 10) { nodes { name } }
          repository { nameWithOwner }
        }
      }
    }
  }
}
"""


class GraphQLQuery(BaseModel):
    """Request envelope POSTed to the GraphQL endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    query: str
    variables: dict[str, Any]
    operation_name: str = Field(..., serialization_alias="operationName")

    @property
    def search_query(self) -> str:
        return self.variables["searchQuery"]

    def payload(self) -> dict[str, Any]:
        """JSON body, with ``operationName`` spelled the way GitHub expects."""
        return self.model_dump(by_alias=True)


def _kind_clause(kind: ResourceKind, user: str | None) -> str:
    if kind is ResourceKind.ISSUE:
        return "type:issue"
    if kind is ResourceKind.PULL_REQUEST:
        return "type:pr"
    if not user:
        raise MissingUserError("Listing review requests requires a username")
    return f"type:pr review-requested:{user}"


def _state_clause(state: StateFilter) -> str | None:
    if state is StateFilter.ALL:
        return None
    return f"state:{state.value}"


def _assignee_clause(
    config: FilterConfig, kind: ResourceKind, user: str | None
) -> str | None:
    # Review requests are matched on review-requested:, never on assignee:
    if not config.assigned_only or kind is ResourceKind.REVIEW_REQUEST:
        return None
    if not user:
        raise MissingUserError("Filtering on assignee requires a username")
    return f"assignee:{user}"


def _label_clause(label: str) -> str:
    if any(char.isspace() for char in label):
        return f'label:"{label}"'
    return f"label:{label}"


def build_search_query(
    config: FilterConfig,
    kind: ResourceKind,
    user: str | None,
    targets: list[Target],
) -> str:
    """Build a GitHub search query string.

    Clauses always appear in the same order: kind, state, assignee, archived,
    targets, labels, project, sort. A clause with nothing to say is left out.

    Args:
        config: Filters for this invocation
        kind: Resource kind the query is for
        user: Acting username, needed for review requests and assigned-only
        targets: Organizations and repositories to search in

    Returns:
        GitHub search query string

    Raises:
        MissingUserError: If the kind or filters need a user and none was given

    Example:
        >>> build_search_query(
        ...     FilterConfig(assigned_only=True),
        ...     ResourceKind.ISSUE,
        ...     "alice",
        ...     [Repository(owner="acme", name="widgets")],
        ... )
        "type:issue state:open assignee:alice archived:false " \\
        "repo:acme/widgets sort:updated-desc"
    """
    query_parts = [_kind_clause(kind, user)]

    state = _state_clause(config.state)
    if state:
        query_parts.append(state)

    assignee = _assignee_clause(config, kind, user)
    if assignee:
        query_parts.append(assignee)

    query_parts.append("archived:false")

    for target in targets:
        query_parts.append(str(target))

    for label in config.labels:
        # An empty label would leave a bare "label:" qualifier
        if label.strip():
            query_parts.append(_label_clause(label.strip()))

    if config.project:
        query_parts.append(f"project:{config.project}")

    query_parts.append(f"sort:{config.sorting}")

    return " ".join(query_parts)


def build_graphql_query(
    config: FilterConfig,
    kind: ResourceKind,
    user: str | None,
    targets: list[Target],
) -> GraphQLQuery:
    """Wrap the compiled search string in a ``SearchIssues`` request envelope."""
    search_query = build_search_query(config, kind, user, targets)
    logger.debug("Search query for %s: '%s'", kind.value, search_query)
    return GraphQLQuery(
        query=SEARCH_ISSUES_QUERY,
        variables={"searchQuery": search_query, "limit": config.limit},
        operation_name=SEARCH_ISSUES_OPERATION,
    )
