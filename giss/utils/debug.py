"""Build and environment details to attach to bug reports."""

import platform
import sys
from importlib.metadata import PackageNotFoundError, version

from .. import __version__

REPORTED_PACKAGES = ("httpx", "pydantic", "PyGithub", "rich", "typer")


def _package_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "not installed"


def debug_info() -> str:
    lines = [
        f"giss version {__version__}",
        f"Python {sys.version.split()[0]} ({platform.python_implementation()})",
        f"Platform {platform.platform()}",
    ]
    lines.extend(f"{name} {_package_version(name)}" for name in REPORTED_PACKAGES)
    return "\n".join(lines)
