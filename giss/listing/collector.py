"""Concurrent search requests, one per resource kind, feeding a channel."""

import asyncio
import logging

from ..errors import MissingUserError
from ..filters.config import FilterConfig, ResourceKind
from ..filters.targets import Target
from ..github_client.client import GitHubClient
from ..github_client.search import build_graphql_query
from .channel import IssueChannel

logger = logging.getLogger(__name__)


async def _collect_kind(
    channel: IssueChannel,
    kind: ResourceKind,
    user: str | None,
    targets: list[Target],
    client: GitHubClient,
    config: FilterConfig,
) -> int:
    query = build_graphql_query(config, kind, user, targets)
    issues = await client.search_issues(query, kind)
    for issue in issues:
        await channel.send(issue)
    return len(issues)


async def collect(
    channel: IssueChannel,
    user: str | None,
    targets: list[Target],
    client: GitHubClient,
    config: FilterConfig,
) -> None:
    """Search every enabled resource kind concurrently and send the results.

    Each kind runs to completion on its own; one failing does not cancel the
    others. Once all have finished the sending side of the channel is closed,
    and the first failure (in kind order) is raised.

    Args:
        channel: Channel the display pipeline reads from
        user: Acting username, needed for review requests and assigned-only
        targets: Organizations and repositories to search in
        client: Shared GitHub client
        config: Filters for this invocation

    Raises:
        MissingUserError: If a username is needed but missing
        ApiError: If a search request failed
        ChannelError: If the display stopped listening before all results were sent
    """
    kinds = config.enabled_kinds()
    try:
        if not user and (
            config.assigned_only or ResourceKind.REVIEW_REQUEST in kinds
        ):
            raise MissingUserError(
                "A username is required to list review requests or assigned items"
            )

        results = await asyncio.gather(
            *(
                _collect_kind(channel, kind, user, targets, client, config)
                for kind in kinds
            ),
            return_exceptions=True,
        )
    finally:
        await channel.close_sender()

    errors: list[BaseException] = []
    for kind, result in zip(kinds, results):
        if isinstance(result, BaseException):
            logger.error("Failed to collect %s: %s", kind.value, result)
            errors.append(result)
        else:
            logger.debug("Collected %d results for %s", result, kind.value)

    if errors:
        raise errors[0]
