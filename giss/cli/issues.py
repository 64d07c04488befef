"""CLI command for listing issues, pull requests and review requests."""

import asyncio
import logging

import typer
from rich.console import Console
from rich.table import Table

from ..errors import GissError, NoTargetError
from ..filters.config import (
    FilterConfig,
    Order,
    Project,
    Property,
    ResourceKind,
    Sorting,
    StateFilter,
)
from ..filters.targets import Target, parse_target, parse_targets
from ..github_client.client import GitHubClient
from ..github_client.models import Issue
from ..listing.display import ColorMode, DisplayConfig
from ..listing.pipeline import run_listing
from ..storage.usernames import UsernameResolver
from ..utils.debug import debug_info
from ..utils.git_config import read_repo_from_git_config
from ..utils.log_setup import setup_logging
from .options import (
    ASSIGNED_OPTION,
    CLOSED_OPTION,
    COLORS_OPTION,
    DEBUG_OPTION,
    ISSUES_OPTION,
    KIND_OPTION,
    LABELS_OPTION,
    LIMIT_OPTION,
    LINKS_OPTION,
    OPEN_OPTION,
    ORDER_OPTION,
    PROJECT_OPTION,
    PULL_REQUESTS_OPTION,
    REVIEW_REQUESTS_OPTION,
    SORT_OPTION,
    TARGETS_ARGUMENT,
    TOKEN_OPTION,
    USER_OPTION,
    VERBOSITY_OPTION,
)

logger = logging.getLogger(__name__)
console = Console()
err_console = Console(stderr=True)


def resolve_targets(targets: list[str] | None) -> list[Target]:
    """Parse CLI targets, falling back to the repository in ./.git/config.

    Raises:
        NoTargetError: If no target was given and none could be found
        InvalidTargetError: If a target cannot be parsed
    """
    if targets:
        return parse_targets(targets)

    repo = read_repo_from_git_config()
    if repo is None:
        raise NoTargetError()
    logger.info("Using repository %s from git config", repo)
    return [parse_target(repo)]


def build_filter_config(
    assigned: bool,
    limit: int,
    open_: bool,
    closed: bool,
    issues: bool,
    pull_requests: bool,
    review_requests: bool,
    labels: list[str] | None,
    project: str | None,
    sort: str,
    order: str,
) -> FilterConfig:
    """Turn raw option values into a FilterConfig.

    Raises:
        ValueError: If the sort property, order or project is invalid
    """
    kinds = {
        kind
        for kind, requested in (
            (ResourceKind.ISSUE, issues),
            (ResourceKind.PULL_REQUEST, pull_requests),
            (ResourceKind.REVIEW_REQUEST, review_requests),
        )
        if requested
    }
    return FilterConfig(
        assigned_only=assigned,
        kinds=frozenset(kinds),
        labels=tuple(labels or ()),
        project=Project.parse(project) if project else None,
        sorting=Sorting(by=Property.parse(sort), order=Order.parse(order)),
        state=StateFilter.from_flags(open_, closed),
        limit=limit,
    )


def needs_username(config: FilterConfig) -> bool:
    """True if the run cannot do without knowing the user's login.

    Assigned-only filtering and review requests need it to build the query,
    pull requests need it to tell review requests apart when printing.
    """
    return config.assigned_only or any(
        config.is_enabled(kind)
        for kind in (ResourceKind.PULL_REQUEST, ResourceKind.REVIEW_REQUEST)
    )


def _parameters_table(
    targets: list[Target], config: FilterConfig, user: str | None
) -> Table:
    params_table = Table(title="Search Parameters")
    params_table.add_column("Parameter", style="cyan")
    params_table.add_column("Value", style="green")

    params_table.add_row("Targets", " ".join(str(target) for target in targets))
    params_table.add_row(
        "Kinds", ", ".join(kind.value for kind in config.enabled_kinds())
    )
    params_table.add_row("State", config.state.value)
    params_table.add_row("Assigned Only", str(config.assigned_only))
    params_table.add_row("Labels", ", ".join(config.labels) if config.labels else "All")
    if config.project:
        params_table.add_row("Project", str(config.project))
    params_table.add_row("Sort", str(config.sorting))
    params_table.add_row("Limit", str(config.limit))
    if user:
        params_table.add_row("User", user)
    return params_table


async def _list(
    client: GitHubClient,
    user: str | None,
    targets: list[Target],
    filter_config: FilterConfig,
    colors: ColorMode,
    links: bool,
    show_kind: bool = True,
) -> list[Issue]:
    async with client:
        if user is None and needs_username(filter_config):
            resolver = UsernameResolver(client)
            user = await asyncio.to_thread(resolver.resolve, client.token)

        display_config = DisplayConfig.for_listing(
            filter_config,
            targets,
            user=user,
            colors=colors,
            links=links,
            show_kind=show_kind,
        )
        if logger.isEnabledFor(logging.INFO):
            err_console.print(_parameters_table(targets, filter_config, user))
        return await run_listing(client, user, targets, filter_config, display_config)


def list_issues(
    targets: list[str] | None = TARGETS_ARGUMENT,
    token: str | None = TOKEN_OPTION,
    user: str | None = USER_OPTION,
    assigned: bool = ASSIGNED_OPTION,
    limit: int = LIMIT_OPTION,
    open_: bool = OPEN_OPTION,
    closed: bool = CLOSED_OPTION,
    issues: bool = ISSUES_OPTION,
    pull_requests: bool = PULL_REQUESTS_OPTION,
    review_requests: bool = REVIEW_REQUESTS_OPTION,
    labels: list[str] | None = LABELS_OPTION,
    project: str | None = PROJECT_OPTION,
    sort: str = SORT_OPTION,
    order: str = ORDER_OPTION,
    links: bool = LINKS_OPTION,
    kind: bool = KIND_OPTION,
    colors: str = COLORS_OPTION,
    verbosity: int = VERBOSITY_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """List issues, pull requests and review requests.

    When none of --issues, --pull-requests or --review-requests is given, all
    three are listed.

    Examples:
        # Open issues and pull requests in the current repository
        giss list

        # Closed issues assigned to you across an organization
        giss list my-org --issues --closed --assigned

        # Everything waiting for your review, oldest first, with links
        giss list my-org other-org/repo -r --sort created --order asc --links
    """
    if debug:
        console.print(debug_info())
        return

    setup_logging(verbosity)

    try:
        filter_config = build_filter_config(
            assigned=assigned,
            limit=limit,
            open_=open_,
            closed=closed,
            issues=issues,
            pull_requests=pull_requests,
            review_requests=review_requests,
            labels=labels,
            project=project,
            sort=sort,
            order=order,
        )
        color_mode = ColorMode.parse(colors)
    except ValueError as e:
        err_console.print(f"❌ Invalid option: {e}")
        raise typer.Exit(1)

    try:
        resolved_targets = resolve_targets(targets)
        client = GitHubClient(token=token)
        found = asyncio.run(
            _list(
                client,
                user,
                resolved_targets,
                filter_config,
                color_mode,
                links,
                show_kind=kind,
            )
        )
    except GissError as e:
        logger.debug("Listing failed", exc_info=True)
        err_console.print(f"❌ {e}")
        raise typer.Exit(1)

    if not found:
        logger.info("No matching issues or pull requests found")
