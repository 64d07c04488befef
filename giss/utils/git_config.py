"""Find the GitHub repository of the working directory from its git config."""

import re
from pathlib import Path

GITHUB_REMOTE_PATTERN = re.compile(
    r"github\.com[:/](?P<repo>[\w\-.]+/[\w\-.]+?)(?:\.git)?/?$"
)


def parse_remote_url(url: str) -> str | None:
    """Extract ``owner/repo`` from a GitHub remote URL.

    Example:
        >>> parse_remote_url("git@github.com:acme/widgets.git")
        'acme/widgets'
        >>> parse_remote_url("https://github.com/acme/widgets")
        'acme/widgets'
    """
    match = GITHUB_REMOTE_PATTERN.search(url.strip())
    return match.group("repo") if match else None


def read_repo_from_git_config(path: Path | str = Path(".git") / "config") -> str | None:
    """Return ``owner/repo`` for the first GitHub remote in a git config file.

    Args:
        path: Git config to read, ``.git/config`` of the current directory by default

    Returns:
        Repository in ``owner/repo`` form, or None if the file is missing or
        has no GitHub remote
    """
    config_path = Path(path)
    if not config_path.is_file():
        return None

    for line in config_path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        if not sep or key.strip() != "url" or "github.com" not in value:
            continue
        repo = parse_remote_url(value)
        if repo:
            return repo
    return None
