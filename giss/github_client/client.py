"""GitHub API client: GraphQL search over httpx, REST user lookup via PyGitHub."""

import asyncio
import logging
import os
from typing import Any

import httpx
import requests
from github import Auth, Github
from github.GithubException import GithubException, RateLimitExceededException
from pydantic import ValidationError

from ..errors import (
    ApiError,
    GraphQLError,
    MissingTokenError,
    NoResponseError,
    RateLimitedError,
    ResponseError,
)
from ..filters.config import ResourceKind
from .models import GitHubUser, Issue, SearchResponse
from .search import GraphQLQuery

logger = logging.getLogger(__name__)

GITHUB_API_V3_URL = "https://api.github.com"
GITHUB_API_V4_URL = "https://api.github.com/graphql"
USER_AGENT = "giss"
CONNECT_TIMEOUT = 10.0
REQUEST_TIMEOUT = 15.0


def _is_rate_limited(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    return (
        response.status_code == 403
        and response.headers.get("x-ratelimit-remaining") == "0"
    )


class GitHubClient:
    """GitHub API client shared by every request made during a run.

    One instance is created at start-up and passed to whatever needs the API.
    Its configuration never changes afterwards, so the concurrent search
    requests can share the underlying connection pool.
    """

    def __init__(
        self,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rest_base_url: str = GITHUB_API_V3_URL,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            transport: Optional httpx transport, mainly for tests
            rest_base_url: Base URL of the REST API used for the viewer lookup
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise MissingTokenError()

        self.http = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self.token}",
                "User-Agent": USER_AGENT,
            },
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT),
            transport=transport,
        )
        # PyGithub retries 5xx and sleeps through rate limits unless told not to
        self.github = Github(
            auth=Auth.Token(self.token),
            base_url=rest_base_url,
            user_agent=USER_AGENT,
            timeout=int(REQUEST_TIMEOUT),
            retry=None,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()
        self.github.close()

    async def request(self, query: GraphQLQuery) -> dict[str, Any]:
        """POST a GraphQL query and return the decoded JSON body.

        Args:
            query: Request envelope to send

        Returns:
            Decoded JSON response

        Raises:
            NoResponseError: If no response was received at all, or not within
                REQUEST_TIMEOUT seconds overall
            RateLimitedError: If GitHub reports the rate limit as exceeded
            ResponseError: For any other non-200 status
            GraphQLError: If the payload carries errors and no data
        """
        logger.debug("GraphQL variables: %s", query.variables)
        try:
            response = await asyncio.wait_for(
                self.http.post(GITHUB_API_V4_URL, json=query.payload()),
                REQUEST_TIMEOUT,
            )
        except asyncio.TimeoutError as e:
            raise NoResponseError(
                f"request took longer than {REQUEST_TIMEOUT:g}s"
            ) from e
        except httpx.TransportError as e:
            raise NoResponseError(str(e) or type(e).__name__) from e

        if response.status_code != 200:
            logger.error("GitHub API: %s - %s", response.status_code, response.text)
            if _is_rate_limited(response):
                raise RateLimitedError(response.status_code)
            raise ResponseError(response.status_code)

        logger.debug("GitHub API: %s", response.status_code)
        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError("GitHub API returned a body that is not JSON") from e

        errors = payload.get("errors")
        if errors and not payload.get("data"):
            messages = [error.get("message", str(error)) for error in errors]
            logger.error("GraphQL errors: %s", messages)
            raise GraphQLError(messages)
        return payload

    async def search_issues(
        self, query: GraphQLQuery, kind: ResourceKind
    ) -> list[Issue]:
        """Run a search query and return its results tagged with ``kind``."""
        payload = await self.request(query)
        try:
            response = SearchResponse.model_validate(payload)
        except ValidationError as e:
            raise ApiError(f"Unexpected search response from GitHub: {e}") from e

        issues = [issue.with_kind(kind) for issue in response.issues()]
        logger.info("Found %d results for %s", len(issues), kind.value)
        return issues

    def get_viewer(self) -> GitHubUser:
        """Look up the user the token belongs to (REST ``GET /user``)."""
        try:
            user = self.github.get_user()
            return GitHubUser(login=user.login, id=user.id)
        except RateLimitExceededException as e:
            raise RateLimitedError(e.status) from e
        except GithubException as e:
            logger.error("GitHub API: %s - %s", e.status, e.data)
            raise ResponseError(e.status) from e
        except requests.RequestException as e:
            raise NoResponseError(str(e)) from e
