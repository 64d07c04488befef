"""Run the collector and the display pipeline side by side."""

import asyncio
import logging

from rich.console import Console

from ..filters.config import FilterConfig
from ..filters.targets import Target
from ..github_client.client import GitHubClient
from ..github_client.models import Issue
from .channel import IssueChannel
from .collector import collect
from .display import RECEIVE_TIMEOUT, DisplayConfig, display

logger = logging.getLogger(__name__)


async def run_listing(
    client: GitHubClient,
    user: str | None,
    targets: list[Target],
    filter_config: FilterConfig,
    display_config: DisplayConfig,
    console: Console | None = None,
    timeout: float = RECEIVE_TIMEOUT,
) -> list[Issue]:
    """Collect results for every enabled kind and print them.

    If the display side fails (typically a receive timeout) the collector is
    cancelled rather than left running against a closed channel. Otherwise the
    collector is awaited after printing, so a failed kind still fails the run.

    Returns:
        The records that were printed
    """
    channel = IssueChannel(capacity=filter_config.limit * 2)
    producer = asyncio.create_task(
        collect(channel, user, targets, client, filter_config)
    )

    try:
        issues = await display(channel, display_config, console, timeout)
    except BaseException:
        logger.debug("Display stopped early, cancelling collector")
        producer.cancel()
        await asyncio.gather(producer, return_exceptions=True)
        raise

    await producer
    return issues
