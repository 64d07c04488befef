"""Standardized CLI option definitions for consistent shorthand mappings.

This module provides centralized option definitions to ensure consistent
shorthand options across all commands and prevent future drift.
"""

import typer

TARGETS_ARGUMENT = typer.Argument(
    None,
    help=(
        "Organizations, users or owner-qualified repositories to search, "
        "e.g. 'org/repo0 org/repo1 other-org'. Defaults to the GitHub "
        "repository of the current directory."
    ),
    show_default=False,
)

# Authentication options
TOKEN_OPTION = typer.Option(
    None,
    "--token",
    "-t",
    envvar="GITHUB_TOKEN",
    show_envvar=True,
    help="GitHub API token (defaults to GITHUB_TOKEN env var)",
)

USER_OPTION = typer.Option(
    None,
    "--user",
    "-u",
    help="Username to query for. Defaults to the user the token belongs to",
)

# Filter options - used for filtering operations
ASSIGNED_OPTION = typer.Option(
    False, "--assigned", "-a", help="Only include items assigned to the user"
)

LIMIT_OPTION = typer.Option(
    10,
    "--limit",
    "-n",
    min=1,
    max=100,
    help="Maximum number of issues or pull requests to list",
)

OPEN_OPTION = typer.Option(
    False,
    "--open",
    "-o",
    help="Show open items (default). Combine with --closed to show all",
)

CLOSED_OPTION = typer.Option(
    False, "--closed", "-c", help="Show closed or merged items"
)

ISSUES_OPTION = typer.Option(False, "--issues", "-i", help="List issues")

PULL_REQUESTS_OPTION = typer.Option(
    False, "--pull-requests", "-p", help="List pull requests"
)

REVIEW_REQUESTS_OPTION = typer.Option(
    False, "--review-requests", "-r", help="List requests for review"
)

LABELS_OPTION = typer.Option(
    None, "--label", "-l", help="Filter by label (can be used multiple times)"
)

PROJECT_OPTION = typer.Option(
    None,
    "--project",
    "-P",
    help="Filter by project, as owner/number or owner/repo/number",
)

# Sorting options
SORT_OPTION = typer.Option(
    "updated",
    "--sort",
    "-s",
    help="Sort by: created, updated, comments or reactions",
)

ORDER_OPTION = typer.Option(
    "desc", "--order", help="Sort order: asc or desc"
)

# Output options
LINKS_OPTION = typer.Option(
    False, "--links", "-L", help="Show a link to each issue or pull request"
)

KIND_OPTION = typer.Option(
    True,
    "--kind/--no-kind",
    help="Prefix each line with I (issue), P (pull request) or PR (review request)",
)

COLORS_OPTION = typer.Option(
    "auto",
    "--colors",
    help="Use colors: on, off or auto (also accepts true/false)",
)

VERBOSITY_OPTION = typer.Option(
    1,
    "--verbosity",
    "-v",
    min=0,
    max=5,
    help="Verbosity from 0 (silent) to 5 (most verbose). GISS_LOG overrides it",
)

DEBUG_OPTION = typer.Option(
    False,
    "--debug",
    "-D",
    help="Print debug information about this build and exit",
)
