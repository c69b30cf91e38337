"""Command-line front end for the Contour engine."""

import typer

from contour_engine.cli.cache import app as cache_app
from contour_engine.cli.panel import analyze, commands, timer

main_app = typer.Typer(
    name="contour",
    help="Contour intent detection engine CLI",
    no_args_is_help=True,
)
main_app.command("analyze")(analyze)
main_app.command("commands")(commands)
main_app.command("timer")(timer)
main_app.add_typer(cache_app, name="cache")


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
