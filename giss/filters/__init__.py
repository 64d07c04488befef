"""Search filters: targets, projects, state, kinds and sorting."""

from .config import (
    FilterConfig,
    Order,
    Project,
    Property,
    ResourceKind,
    Sorting,
    StateFilter,
)
from .targets import Organization, Repository, Target, parse_target, parse_targets

__all__ = [
    "FilterConfig",
    "Order",
    "Organization",
    "Project",
    "Property",
    "Repository",
    "ResourceKind",
    "Sorting",
    "StateFilter",
    "Target",
    "parse_target",
    "parse_targets",
]
