"""main.py: CLI entry point for cpr.

Dispatches ``cpr flags PKG...`` and ``cpr libs PKG...`` to the package
resolver.  The mode token is taken as a plain argument and looked up in
:data:`cpr.resolver.MODES` rather than registered as Typer subcommands, so a
missing or unknown mode is reported as ``Error: ...`` with exit code 1 like
every other failure.  Parser errors (unknown options) get the same treatment
through :class:`_ResolveCommand`.
"""

from __future__ import annotations

import click
import typer
from typer.core import TyperCommand

from cpr import __version__
from cpr.cli import error_exit, make_trace_printer, write_flags
from cpr.config import load_config
from cpr.resolver import MODES, PackageNotFoundError, resolve_packages

_EPILOG = """\
[bold]Examples:[/bold]

cpr flags glib-2.0 zlib           Compile flags, e.g. for CFLAGS

cpr libs glib-2.0 zlib            Link flags, e.g. for LDFLAGS

CPRPATH=$HOME/pkgs cpr flags foo  Fall back to $HOME/pkgs/foo/include

[dim]Each package is queried with pkg-config (or $PKG_CONFIG) first.  When that
fails and CPRPATH is set, <CPRPATH>/<pkg>/include (flags) or
<CPRPATH>/<pkg>/lib (libs) is used if the directory exists.[/dim]"""

app = typer.Typer(
    help="Resolve compiler and linker flags for packages.",
    rich_markup_mode="rich",
    epilog=_EPILOG,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cpr {__version__}")
        raise typer.Exit()


class _ResolveCommand(TyperCommand):
    """Report argument parsing failures as ``Error: ...`` with exit code 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            error_exit(e.format_message(), usage=True)


@app.command(cls=_ResolveCommand, epilog=_EPILOG)
def resolve(
    command: str | None = typer.Argument(
        None, metavar="<flags|libs>", help="flags: compile flags, libs: link flags"
    ),
    packages: list[str] | None = typer.Argument(None, metavar="[...PKGS]", help="Package names"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Report how each package was resolved on stderr"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Print the flags for PKGS as one space-separated line.

    Packages are resolved left to right.  If any package cannot be resolved
    nothing is printed and the exit code is 1.
    """
    if command is None:
        error_exit("command not found", usage=True)

    mode = MODES.get(command)
    if mode is None:
        error_exit(f"invalid command '{command}'", usage=True)

    try:
        line = resolve_packages(
            packages or [],
            mode,
            load_config(),
            trace=make_trace_printer(verbose),
        )
    except PackageNotFoundError as e:
        error_exit(str(e), note=e.hint)

    write_flags(line)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
