"""Configuration commands.

Provides commands to show the effective configuration, write a default
config file and print its location.
"""

import json
from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from appblock.cli.types import OutputFormat, get_config
from appblock.core.config import AppBlockConfig, ConfigError, config_to_dict, save_config
from appblock.core.paths import get_config_path
from appblock.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize the appblock configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the effective configuration."""
    data = config_to_dict(get_config(ctx))

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(data))
        return

    console.print(f"[dim]# {_config_path(ctx)}[/dim]")
    console.print(tomli_w.dumps(data), markup=False, highlight=False)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    config_path = _config_path(ctx)
    if config_path.exists() and not force:
        print_info(f"Config already exists: {config_path} (use --force to overwrite)")
        return

    try:
        saved = save_config(AppBlockConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default config to {saved}")


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the config file location."""
    typer.echo(str(_config_path(ctx)))


def _config_path(ctx: typer.Context) -> Path:
    """Config file selected with --config, or the default location."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    selected = obj.get("config_path")
    return selected if isinstance(selected, Path) else get_config_path()
