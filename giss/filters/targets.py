"""Targets: the organizations, users and repositories a search is scoped to."""

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from ..errors import InvalidTargetError

TARGET_TOKEN_PATTERN = re.compile(r"[\w\-.]+")


class Organization(BaseModel):
    """An organization or user login."""

    model_config = ConfigDict(frozen=True)

    name: str

    def __str__(self) -> str:
        return f"org:{self.name}"


class Repository(BaseModel):
    """A repository qualified with its owner."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return f"repo:{self.full_name}"


Target = Organization | Repository


def parse_target(text: str) -> Target:
    """Parse a target such as ``acme`` or ``acme/widgets``.

    Word-like tokens (letters, digits, ``-``, ``_`` and ``.``) are extracted
    from the text, so separators other than ``/`` are tolerated too.

    Args:
        text: Target string supplied by the user or read from git config

    Returns:
        Organization for one token, Repository for two

    Raises:
        InvalidTargetError: If the text does not contain exactly one or two tokens

    Example:
        >>> parse_target("acme/widgets")
        Repository(owner='acme', name='widgets')
    """
    parts = TARGET_TOKEN_PATTERN.findall(text)
    if len(parts) == 1:
        return Organization(name=parts[0])
    if len(parts) == 2:
        return Repository(owner=parts[0], name=parts[1])
    raise InvalidTargetError(text)


def parse_targets(texts: Iterable[str]) -> list[Target]:
    """Parse several targets, dropping duplicates but keeping order."""
    targets: list[Target] = []
    for text in texts:
        target = parse_target(text)
        if target not in targets:
            targets.append(target)
    return targets


def is_single_repository(targets: list[Target]) -> bool:
    """True when the search is scoped to exactly one repository."""
    return len(targets) == 1 and isinstance(targets[0], Repository)
