"""Fan-out collection of search results and their display."""

from .channel import ChannelClosed, IssueChannel
from .collector import collect
from .display import ColorMode, DisplayConfig, display
from .pipeline import run_listing

__all__ = [
    "ChannelClosed",
    "ColorMode",
    "DisplayConfig",
    "IssueChannel",
    "collect",
    "display",
    "run_listing",
]
