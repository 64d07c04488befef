"""giss: list GitHub issues, pull requests and review requests from the terminal."""

__version__ = "0.1.0"
