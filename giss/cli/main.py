"""Main CLI entry point."""

import typer
from rich.console import Console

from .issues import list_issues

app = typer.Typer(
    name="giss",
    help="List GitHub issues, pull requests and review requests",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="list", context_settings={"help_option_names": ["-h", "--help"]})(
    list_issues
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from giss import __version__

    console.print(f"giss v{__version__}")


if __name__ == "__main__":
    app()
