"""CLI entry point for alidnshook."""

import typer
from rich.console import Console

from alidnshook import __version__
from alidnshook.commands import challenge

app = typer.Typer(
    name="alidnshook",
    help="Manage Aliyun DNS TXT records for ACME DNS-01 challenges.",
    no_args_is_help=True,
    # ACME clients may pass the operation as "CREATE" or "Delete"
    context_settings={"token_normalize_func": str.lower},
)
console = Console()

app.command(name="create")(challenge.create)
app.command(name="delete")(challenge.delete)


@app.command()
def version() -> None:
    """Show the alidnshook version."""
    console.print(f"alidnshook v{__version__}")


@app.callback()
def main() -> None:
    """alidnshook - Aliyun DNS challenge hook."""
    pass


if __name__ == "__main__":
    app()
