"""Disk cache of the login that belongs to a token."""

import hashlib
import logging
from pathlib import Path

from ..errors import TokenWriteError
from ..github_client.client import GitHubClient

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path.home() / ".config" / "giss" / "usernames"


def hash_token(token: str) -> str:
    """Hex SHA-256 of the token, used as the cache file name."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class UsernameResolver:
    """Resolves the authenticated user's login, caching it per token.

    Cache files are named after a hash of the token so the token itself never
    touches the disk. Entries are never refreshed: if the account behind a
    token is renamed, delete the file to pick up the new login.
    """

    def __init__(self, client: GitHubClient, cache_dir: Path | None = None):
        """Initialize resolver.

        Args:
            client: Client used for the one-off viewer lookup
            cache_dir: Directory holding one file per token hash
        """
        self.client = client
        self.cache_dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR

    def _get_file_path(self, token: str) -> Path:
        return self.cache_dir / hash_token(token)

    def load(self, token: str) -> str | None:
        """Return the cached login for ``token``, if any."""
        path = self._get_file_path(token)
        if not path.exists():
            return None
        username = path.read_text(encoding="utf-8").strip()
        return username or None

    def save(self, token: str, username: str) -> Path:
        """Write ``username`` to the cache file for ``token``.

        Raises:
            TokenWriteError: If the directory or file cannot be written
        """
        path = self._get_file_path(token)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(username, encoding="utf-8")
        except OSError as e:
            raise TokenWriteError(f"Unable to save username to {path}: {e}") from e
        logger.debug("Saved username to %s", path)
        return path

    def resolve(self, token: str) -> str:
        """Return the login for ``token``, from cache or from the API.

        Raises:
            ApiError: If the lookup fails
            TokenWriteError: If the login cannot be cached
        """
        cached = self.load(token)
        if cached:
            logger.debug("Using cached username %s", cached)
            return cached

        username = self.client.get_viewer().login
        logger.info("Resolved username %s from GitHub API", username)
        self.save(token, username)
        return username
