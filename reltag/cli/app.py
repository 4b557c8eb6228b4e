from __future__ import annotations

import typer

from reltag import __version__
from reltag.cli.commands.publish import publish
from reltag.cli.commands.tags import current, tags

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="CI helpers for build tags and package@version releases.",
)


# Commands
app.command()(tags)
app.command()(current)
app.command()(publish)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    del version


def main() -> None:
    app()
