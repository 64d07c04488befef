"""Filter configuration shared by the query compiler and the display pipeline."""

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ..errors import InvalidProjectError

if TYPE_CHECKING:
    from ..github_client.models import Issue


class ResourceKind(str, Enum):
    """The three independently selectable kinds of result."""

    ISSUE = "issue"
    PULL_REQUEST = "pull_request"
    REVIEW_REQUEST = "review_request"


ALL_KINDS = (
    ResourceKind.ISSUE,
    ResourceKind.PULL_REQUEST,
    ResourceKind.REVIEW_REQUEST,
)


class StateFilter(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"

    @classmethod
    def from_flags(cls, open_: bool, closed: bool) -> "StateFilter":
        """Combine --open/--closed: both means all, neither means open."""
        if open_ and closed:
            return cls.ALL
        if closed:
            return cls.CLOSED
        return cls.OPEN


class Property(str, Enum):
    """Issue property results can be sorted on."""

    CREATED = "created"
    UPDATED = "updated"
    COMMENTS = "comments"
    REACTIONS = "reactions"

    @classmethod
    def parse(cls, value: str) -> "Property":
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Invalid sort property '{value}'") from None

    def value_of(self, issue: "Issue") -> str | int:
        if self is Property.CREATED:
            return issue.created_at
        if self is Property.UPDATED:
            return issue.updated_at
        if self is Property.COMMENTS:
            return issue.comment_count
        return issue.reaction_count


class Order(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value: str) -> "Order":
        normalized = value.lower()
        if normalized in ("asc", "ascending"):
            return cls.ASCENDING
        if normalized in ("desc", "descending"):
            return cls.DESCENDING
        raise ValueError(f"Invalid sort order '{value}'")


class Sorting(BaseModel):
    """Sort property and direction, rendered as ``updated-desc`` and so on."""

    model_config = ConfigDict(frozen=True)

    by: Property = Property.UPDATED
    order: Order = Order.DESCENDING

    def sort(self, issues: list["Issue"]) -> list["Issue"]:
        """Return issues sorted by this key.

        ``sorted`` is stable in both directions, so records with equal keys
        keep their arrival order.
        """
        return sorted(
            issues,
            key=self.by.value_of,
            reverse=self.order is Order.DESCENDING,
        )

    def __str__(self) -> str:
        return f"{self.by.value}-{self.order.value}"


class Project(BaseModel):
    """A GitHub project, owned by a user/organization or by a repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str | None = None
    id: int

    @classmethod
    def parse(cls, text: str) -> "Project":
        """Parse ``owner/id`` or ``owner/repo/id``.

        Raises:
            InvalidProjectError: If the shape is wrong or the id is not a number
        """
        parts = text.split("/")
        if len(parts) not in (2, 3) or not all(parts):
            raise InvalidProjectError(text)
        try:
            project_id = int(parts[-1])
        except ValueError:
            raise InvalidProjectError(text, "id must be a number") from None
        if project_id < 0:
            raise InvalidProjectError(text, "id must not be negative")

        repo = parts[1] if len(parts) == 3 else None
        return cls(owner=parts[0], repo=repo, id=project_id)

    def __str__(self) -> str:
        if self.repo:
            return f"{self.owner}/{self.repo}/{self.id}"
        return f"{self.owner}/{self.id}"


class FilterConfig(BaseModel):
    """What to search for. Built once per invocation from the CLI options."""

    model_config = ConfigDict(frozen=True)

    assigned_only: bool = False
    kinds: frozenset[ResourceKind] = Field(
        default_factory=frozenset,
        description="Explicitly requested kinds; empty means all of them",
    )
    labels: tuple[str, ...] = ()
    project: Project | None = None
    sorting: Sorting = Field(default_factory=Sorting)
    state: StateFilter = StateFilter.OPEN
    limit: int = Field(10, gt=0)

    def enabled_kinds(self) -> list[ResourceKind]:
        """Kinds to query, in a fixed order."""
        if not self.kinds:
            return list(ALL_KINDS)
        return [kind for kind in ALL_KINDS if kind in self.kinds]

    def is_enabled(self, kind: ResourceKind) -> bool:
        return kind in self.enabled_kinds()
