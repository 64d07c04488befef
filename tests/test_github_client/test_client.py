"""Tests for GitHub client."""

import asyncio
import json
import os
import threading
from collections.abc import Callable, Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import Mock, patch

import httpx
import pytest
import requests
from github.GithubException import GithubException, RateLimitExceededException

from giss.errors import (
    ApiError,
    GraphQLError,
    MissingTokenError,
    NoResponseError,
    RateLimitedError,
    ResponseError,
)
from giss.filters.config import FilterConfig, ResourceKind
from giss.filters.targets import Repository
from giss.github_client.client import GITHUB_API_V4_URL, USER_AGENT, GitHubClient
from giss.github_client.search import build_graphql_query

QUERY = build_graphql_query(
    FilterConfig(),
    ResourceKind.PULL_REQUEST,
    None,
    [Repository(owner="acme", name="widgets")],
)


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> GitHubClient:
    return GitHubClient(token="test_token", transport=httpx.MockTransport(handler))


@patch("giss.github_client.client.Github")
class TestGitHubClientInit:
    """Test GitHubClient construction."""

    @patch.dict(os.environ, {"GITHUB_TOKEN": "env_token"})
    def test_init_with_env_token(self, mock_github: Mock) -> None:
        """Test initialization with environment token."""
        client = GitHubClient()
        assert client.token == "env_token"
        assert client.http.headers["Authorization"] == "Bearer env_token"
        assert client.http.headers["User-Agent"] == USER_AGENT
        mock_github.assert_called_once()

    @patch.dict(os.environ, {"GITHUB_TOKEN": "env_token"})
    def test_explicit_token_wins(self, mock_github: Mock) -> None:
        """Test an explicit token takes precedence over the environment."""
        client = GitHubClient(token="explicit_token")
        assert client.token == "explicit_token"

    @patch.dict(os.environ, {}, clear=True)
    def test_init_without_token(self, mock_github: Mock) -> None:
        """Test initialization without token raises error."""
        with pytest.raises(MissingTokenError, match="GitHub token is required"):
            GitHubClient()
        mock_github.assert_not_called()

    def test_timeouts(self, mock_github: Mock) -> None:
        """Test connect and request timeouts."""
        client = GitHubClient(token="test_token")
        assert client.http.timeout.connect == 10.0
        assert client.http.timeout.read == 15.0


@patch("giss.github_client.client.Github")
class TestGitHubClientRequest:
    """Test GraphQL requests."""

    @pytest.mark.asyncio
    async def test_posts_query(self, mock_github: Mock, search_node) -> None:
        """Test the query is POSTed as JSON and results are tagged."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200, json={"data": {"search": {"edges": [{"node": search_node}]}}}
            )

        async with make_client(handler) as client:
            issues = await client.search_issues(QUERY, ResourceKind.PULL_REQUEST)

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == GITHUB_API_V4_URL
        assert request.headers["Authorization"] == "Bearer test_token"
        body = json.loads(request.content)
        assert body["operationName"] == "SearchIssues"
        assert body["variables"]["searchQuery"] == QUERY.search_query

        assert [issue.number for issue in issues] == [7]
        assert issues[0].kind is ResourceKind.PULL_REQUEST

    @pytest.mark.asyncio
    async def test_error_status(self, mock_github: Mock) -> None:
        """Test non-200 responses map to ResponseError with the status."""
        client = make_client(lambda request: httpx.Response(502, text="Bad gateway"))

        with pytest.raises(ResponseError) as exc_info:
            await client.request(QUERY)
        await client.aclose()

        assert exc_info.value.status_code == 502
        assert not isinstance(exc_info.value, RateLimitedError)

    @pytest.mark.asyncio
    async def test_too_many_requests(self, mock_github: Mock) -> None:
        """Test 429 maps to RateLimitedError."""
        client = make_client(lambda request: httpx.Response(429))

        with pytest.raises(RateLimitedError) as exc_info:
            await client.request(QUERY)
        await client.aclose()

        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_forbidden_with_exhausted_rate_limit(self, mock_github: Mock) -> None:
        """Test 403 with no remaining quota maps to RateLimitedError."""
        client = make_client(
            lambda request: httpx.Response(
                403, headers={"x-ratelimit-remaining": "0"}
            )
        )

        with pytest.raises(RateLimitedError):
            await client.request(QUERY)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_plain_forbidden(self, mock_github: Mock) -> None:
        """Test 403 with quota left is an ordinary ResponseError."""
        client = make_client(lambda request: httpx.Response(403))

        with pytest.raises(ResponseError) as exc_info:
            await client.request(QUERY)
        await client.aclose()

        assert not isinstance(exc_info.value, RateLimitedError)

    @pytest.mark.asyncio
    async def test_transport_error(self, mock_github: Mock) -> None:
        """Test connection failures map to NoResponseError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(NoResponseError, match="connection refused"):
            await client.request(QUERY)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_overall_deadline(self, mock_github: Mock) -> None:
        """Test a response slower than the request deadline is NoResponseError."""

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, json={"data": {}})

        client = make_client(handler)

        with patch("giss.github_client.client.REQUEST_TIMEOUT", 0.01):
            with pytest.raises(NoResponseError, match="longer than"):
                await client.request(QUERY)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_graphql_errors_without_data(self, mock_github: Mock) -> None:
        """Test a payload of errors only raises GraphQLError."""
        client = make_client(
            lambda request: httpx.Response(
                200, json={"errors": [{"message": "Bad query"}]}
            )
        )

        with pytest.raises(GraphQLError, match="Bad query"):
            await client.request(QUERY)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_invalid_json(self, mock_github: Mock) -> None:
        """Test a non-JSON body raises ApiError."""
        client = make_client(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ApiError, match="not JSON"):
            await client.request(QUERY)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, mock_github: Mock) -> None:
        """Test a payload that does not match the search schema."""
        client = make_client(lambda request: httpx.Response(200, json={"data": {}}))

        with pytest.raises(ApiError, match="Unexpected search response"):
            await client.search_issues(QUERY, ResourceKind.ISSUE)
        await client.aclose()


@patch("giss.github_client.client.Github")
class TestGetViewer:
    """Test the REST viewer lookup."""

    def test_get_viewer(self, mock_github_class: Mock) -> None:
        """Test the login of the token owner is returned."""
        mock_user = Mock()
        mock_user.login = "alice"
        mock_user.id = 42
        mock_github_class.return_value.get_user.return_value = mock_user

        user = GitHubClient(token="test_token").get_viewer()

        assert user.login == "alice"
        assert user.id == 42

    def test_get_viewer_rate_limited(self, mock_github_class: Mock) -> None:
        """Test rate limit exceptions map to RateLimitedError."""
        mock_github_class.return_value.get_user.side_effect = (
            RateLimitExceededException(
                403, {"message": "API rate limit exceeded"}, None
            )
        )

        with pytest.raises(RateLimitedError):
            GitHubClient(token="test_token").get_viewer()

    def test_get_viewer_unauthorized(self, mock_github_class: Mock) -> None:
        """Test other GitHub errors map to ResponseError with the status."""
        mock_github_class.return_value.get_user.side_effect = GithubException(
            401, {"message": "Bad credentials"}, None
        )

        with pytest.raises(ResponseError) as exc_info:
            GitHubClient(token="test_token").get_viewer()

        assert exc_info.value.status_code == 401

    def test_get_viewer_connection_error(self, mock_github_class: Mock) -> None:
        """Test network failures map to NoResponseError."""
        mock_github_class.return_value.get_user.side_effect = (
            requests.ConnectionError("unreachable")
        )

        with pytest.raises(NoResponseError, match="unreachable"):
            GitHubClient(token="test_token").get_viewer()


class FakeRestApi:
    """Local REST endpoint answering every request with a fixed response."""

    def __init__(self, status: int, body: dict, headers: dict | None = None):
        self.status = status
        self.body = json.dumps(body).encode("utf-8")
        self.headers = headers or {}
        self.paths: list[str] = []

        api = self

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                api.paths.append(self.path)
                self.send_response(api.status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(api.body)))
                for name, value in api.headers.items():
                    self.send_header(name, value)
                self.end_headers()
                self.wfile.write(api.body)

            def log_message(self, format: str, *args: object) -> None:
                pass

        self.server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
        self.url = f"http://127.0.0.1:{self.server.server_address[1]}"

    def __enter__(self) -> "FakeRestApi":
        threading.Thread(target=self.server.serve_forever, daemon=True).start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.server.shutdown()
        self.server.server_close()


class TestGetViewerOverHttp:
    """Test the viewer lookup through PyGithub's real requester."""

    @pytest.fixture(autouse=True)
    def no_proxy(self, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
        """Keep requests to the local server off any configured proxy."""
        for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY"):
            monkeypatch.delenv(name, raising=False)
            monkeypatch.delenv(name.lower(), raising=False)
        yield

    def test_viewer_login(self) -> None:
        """Test a successful GET /user."""
        with FakeRestApi(200, {"login": "alice", "id": 7}) as api:
            client = GitHubClient(token="test_token", rest_base_url=api.url)
            user = client.get_viewer()

        assert user.login == "alice"
        assert user.id == 7
        assert api.paths == ["/user"]

    def test_server_error_is_not_retried(self) -> None:
        """Test a 5xx is reported once, with its status code."""
        with FakeRestApi(502, {"message": "Bad gateway"}) as api:
            client = GitHubClient(token="test_token", rest_base_url=api.url)
            with pytest.raises(ResponseError) as exc_info:
                client.get_viewer()

        assert exc_info.value.status_code == 502
        assert len(api.paths) == 1

    def test_rate_limit_fails_fast(self) -> None:
        """Test an exhausted rate limit raises instead of waiting for the reset."""
        headers = {"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "9999999999"}
        with FakeRestApi(
            403, {"message": "API rate limit exceeded for user"}, headers
        ) as api:
            client = GitHubClient(token="test_token", rest_base_url=api.url)
            with pytest.raises(RateLimitedError):
                client.get_viewer()

        assert len(api.paths) == 1
