"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from appblock import __version__
from appblock.cli.commands import block, config, history, rules
from appblock.core.config import ConfigError, load_config
from appblock.core.logs import setup_logging
from appblock.utils.formatting import err_console, print_error

# Create main Typer app
app = typer.Typer(
    name="appblock",
    help="Block network access for applications with Windows Firewall rules.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"appblock version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to the config file.",
        ),
    ] = None,
) -> None:
    """appblock - Block network access for applications.

    Creates inbound and outbound Windows Firewall rules for every
    executable of an application, and lists or removes them later.
    """
    setup_logging(verbose=verbose, quiet=quiet, console=err_console)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path

    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigError as e:
        # `config init --force` must still be able to replace a broken file
        if ctx.invoked_subcommand == "config":
            ctx.obj["config"] = None
            return
        print_error(str(e))
        raise typer.Exit(code=1) from e


# Register commands
app.command(name="block")(block.block)
app.add_typer(rules.app, name="rules")
app.add_typer(history.app, name="history")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
