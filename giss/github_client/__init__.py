"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import GitHubLabel, GitHubUser, Issue, ReviewRequest
from .search import GraphQLQuery, build_graphql_query, build_search_query

__all__ = [
    "GitHubClient",
    "GitHubUser",
    "GitHubLabel",
    "GraphQLQuery",
    "Issue",
    "ReviewRequest",
    "build_graphql_query",
    "build_search_query",
]
