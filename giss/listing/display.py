"""Drain the result channel, then sort, dedupe, truncate and print."""

import asyncio
import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console
from rich.text import Text

from ..errors import ReceiveTimeoutError
from ..filters.config import FilterConfig, ResourceKind, Sorting
from ..filters.targets import Target, is_single_repository
from ..github_client.models import Issue
from .channel import ChannelClosed, IssueChannel

logger = logging.getLogger(__name__)

RECEIVE_TIMEOUT = 20.0
TITLE_MAX_LENGTH = 50
DELIMITER = " | "

KIND_STYLE = {
    ResourceKind.ISSUE: "blue",
    ResourceKind.PULL_REQUEST: "magenta",
}
DELIMITER_STYLE = "green"
ASSIGNEES_STYLE = "cyan"
LABELS_STYLE = "magenta"
LINK_STYLE = "blue"
REVIEW_STYLE = "yellow"


class ColorMode(str, Enum):
    AUTO = "auto"
    ON = "on"
    OFF = "off"

    @classmethod
    def parse(cls, value: str) -> "ColorMode":
        normalized = value.lower()
        if normalized in ("on", "true"):
            return cls.ON
        if normalized in ("off", "false"):
            return cls.OFF
        if normalized == "auto":
            return cls.AUTO
        raise ValueError(f"Unrecognized option {value}")

    def console(self, stderr: bool = False) -> Console:
        """Console honouring this mode; auto leaves detection to rich."""
        if self is ColorMode.ON:
            return Console(stderr=stderr, force_terminal=True, highlight=False)
        if self is ColorMode.OFF:
            return Console(stderr=stderr, no_color=True, highlight=False)
        return Console(stderr=stderr, highlight=False)


class DisplayConfig(BaseModel):
    """How results are picked and printed."""

    model_config = ConfigDict(frozen=True)

    colors: ColorMode = ColorMode.AUTO
    sorting: Sorting = Field(default_factory=Sorting)
    user: str | None = None
    limit: int = Field(10, gt=0)
    links: bool = False
    show_repository: bool = True
    show_kind: bool = True

    @classmethod
    def for_listing(
        cls,
        filter_config: FilterConfig,
        targets: list[Target],
        user: str | None = None,
        colors: ColorMode = ColorMode.AUTO,
        links: bool = False,
        show_kind: bool = True,
    ) -> "DisplayConfig":
        """Derive display settings from the filters and targets of a run."""
        return cls(
            colors=colors,
            sorting=filter_config.sorting,
            user=user,
            limit=filter_config.limit,
            links=links,
            show_repository=not is_single_repository(targets),
            show_kind=show_kind,
        )


def truncate(text: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    return text[:max_length]


def select_issues(issues: list[Issue], sorting: Sorting, limit: int) -> list[Issue]:
    """Sort, drop duplicate ids (first one wins) and keep the top ``limit``."""
    seen: set[int] = set()
    selected: list[Issue] = []
    for issue in sorting.sort(issues):
        if issue.id in seen:
            continue
        seen.add(issue.id)
        selected.append(issue)
        if len(selected) == limit:
            break
    return selected


def display_kind(issue: Issue, user: str | None) -> ResourceKind:
    """Kind to show for ``issue``.

    A pull request is shown as a review request only when the display user is
    one of its requested reviewers.
    """
    if issue.kind is ResourceKind.ISSUE:
        return ResourceKind.ISSUE
    if user and issue.is_review_requested_for(user):
        return ResourceKind.REVIEW_REQUEST
    return ResourceKind.PULL_REQUEST


def _kind_tag(kind: ResourceKind) -> Text:
    if kind is ResourceKind.REVIEW_REQUEST:
        return Text.assemble(
            ("P", KIND_STYLE[ResourceKind.PULL_REQUEST]), ("R", REVIEW_STYLE)
        )
    letter = "I" if kind is ResourceKind.ISSUE else "P"
    return Text(letter, style=KIND_STYLE[kind])


def render_issue(issue: Issue, config: DisplayConfig) -> Text:
    """Render one record as a single line.

    Layout: ``I | #12 acme/widgets | title | @alice, @bob | #bug | url``, with
    the kind tag, repository, assignees, labels and link present only when
    there is something to show.
    """
    line = Text()

    if config.show_kind:
        line.append_text(_kind_tag(display_kind(issue, config.user)))
        line.append(DELIMITER, style=DELIMITER_STYLE)

    target = f"#{issue.number}"
    if config.show_repository:
        target = f"{target} {issue.repository}"
    line.append(target)

    line.append(DELIMITER, style=DELIMITER_STYLE)
    line.append(truncate(issue.title))

    assignees = ", ".join(f"@{assignee.login}" for assignee in issue.assignees)
    if assignees:
        line.append(DELIMITER, style=DELIMITER_STYLE)
        line.append(assignees, style=ASSIGNEES_STYLE)

    labels = ", ".join(f"#{label.name}" for label in issue.labels)
    if labels:
        line.append(DELIMITER, style=DELIMITER_STYLE)
        line.append(labels, style=LABELS_STYLE)

    if config.links:
        line.append(DELIMITER, style=DELIMITER_STYLE)
        line.append(issue.url, style=LINK_STYLE)

    return line


async def receive_issues(
    channel: IssueChannel, max_count: int, timeout: float = RECEIVE_TIMEOUT
) -> list[Issue]:
    """Receive up to ``max_count`` records, stopping early at end of stream.

    The receiving side is closed on the way out, whatever happened.

    Raises:
        ReceiveTimeoutError: If a single receive waited longer than ``timeout``
    """
    received: list[Issue] = []
    try:
        while len(received) < max_count:
            try:
                received.append(await channel.receive(timeout))
            except ChannelClosed:
                break
            except asyncio.TimeoutError:
                raise ReceiveTimeoutError(timeout) from None
    finally:
        channel.close_receiver()
    logger.debug("Received %d results", len(received))
    return received


async def display(
    channel: IssueChannel,
    config: DisplayConfig,
    console: Console | None = None,
    timeout: float = RECEIVE_TIMEOUT,
) -> list[Issue]:
    """Drain ``channel`` and print the selected records.

    Up to three times ``config.limit`` records are buffered, leaving room for
    duplicates between kinds before sorting and truncating.

    Returns:
        The records that were printed, in output order
    """
    console = console or config.colors.console()
    received = await receive_issues(channel, config.limit * 3, timeout)
    issues = select_issues(received, config.sorting, config.limit)
    for issue in issues:
        console.print(render_issue(issue, config), soft_wrap=True)
    return issues
