"""Exceptions raised by giss.

Every error here ends the current invocation. The CLI catches ``GissError``,
prints the message and exits non-zero.
"""


class GissError(Exception):
    """Base class for all giss errors."""


class MissingTokenError(GissError):
    """No GitHub token was supplied."""

    def __init__(self) -> None:
        super().__init__(
            "GitHub token is required. Set GITHUB_TOKEN environment variable "
            "or pass --token."
        )


class NoTargetError(GissError):
    """No target was given and none could be read from the current repository."""

    def __init__(self) -> None:
        super().__init__(
            "No target given and no GitHub repository found in the current directory"
        )


class InvalidTargetError(GissError, ValueError):
    """A target string did not resolve to an organization or repository."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"Could not resolve a valid target from '{target}'")


class InvalidProjectError(GissError, ValueError):
    """A project reference was not of the form owner/id or owner/repo/id."""

    def __init__(self, project: str, reason: str | None = None) -> None:
        self.project = project
        message = (
            f"Invalid argument for project '{project}', "
            "must have format org/repo/number or org/number"
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MissingUserError(GissError):
    """A query needed a username but none was available."""


class ApiError(GissError):
    """The GitHub API call failed."""


class NoResponseError(ApiError):
    """The request never got a response (connection error, timeout, ...)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"No response from GitHub API: {message}")


class ResponseError(ApiError):
    """GitHub answered with a non-success status code."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"GitHub API responded with status {status_code}")


class RateLimitedError(ResponseError):
    """GitHub rejected the request because the rate limit was exceeded."""

    def __init__(self, status_code: int = 429) -> None:
        super().__init__(status_code, "GitHub API rate limit exceeded")


class GraphQLError(ApiError):
    """The GraphQL endpoint returned errors instead of data."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__("GraphQL query failed: " + "; ".join(messages))


class ChannelError(GissError):
    """A result could not be handed over because the receiving side is gone."""


class ReceiveTimeoutError(GissError):
    """Timed out waiting for results from GitHub."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout:g}s waiting for results")


class TokenWriteError(GissError):
    """The resolved username could not be written to the cache."""
