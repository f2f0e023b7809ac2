"""Thin CLI wrapper for pigen_action.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

from pigen_action import __version__
from pigen_action.config import get_settings, print_settings_json

if TYPE_CHECKING:
    from pigen_action.buildconfig.schema import PiGenConfig

app = typer.Typer(
    name="pigen",
    help="pi-gen action - build custom Raspberry Pi images with pi-gen",
    no_args_is_help=True,
)
console = Console()

ConfigFileArg = Annotated[
    Path | None,
    typer.Argument(help="YAML/JSON file with build options (defaults if omitted)"),
]
OverrideOption = Annotated[
    list[str] | None,
    typer.Option("--set", "-s", help="Override an option as field=value"),
]
PigenDirOption = Annotated[
    Path | None,
    typer.Option("--pigen-dir", "-d", help="pi-gen checkout (default: settings)"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"pigen-action version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """pi-gen action - build custom Raspberry Pi images with pi-gen."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(
    config_file: Path | None, overrides: list[str] | None
) -> "PiGenConfig":
    """Load options from a file and apply overrides, exiting on bad input."""
    from pigen_action.buildconfig.io import apply_overrides, load_config
    from pigen_action.buildconfig.schema import DEFAULT_CONFIG

    try:
        if config_file is None:
            config = DEFAULT_CONFIG
        else:
            if not config_file.exists():
                console.print(f"[red]File not found: {config_file}[/red]")
                raise typer.Exit(code=1)
            config = load_config(config_file)
        return apply_overrides(config, overrides)
    except ValidationError as e:
        console.print("[red]Invalid options:[/red]")
        console.print(str(e))
        raise typer.Exit(code=1) from None
    except yaml.YAMLError as e:
        console.print("[red]Invalid options file:[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(code=1) from None
    except ValueError as e:
        console.print(f"[red]Invalid options: {e}[/red]")
        raise typer.Exit(code=1) from None


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(print_settings_json(settings))
    else:
        log_file_display = str(settings.log_file) if settings.log_file else "(none)"
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Paths:[/bold]")
        console.print(f"  pi-gen directory:    {settings.pigen_dir}")
        console.print(f"  Build log file:      {log_file_display}")
        console.print()
        console.print("[bold]Operational:[/bold]")
        console.print(f"  Verbose output:      {settings.verbose}")
        console.print(f"  Log level:           {settings.log_level}")


@app.command()
def validate(
    config_file: ConfigFileArg = None,
    overrides: OverrideOption = None,
) -> None:
    """Validate build options against this host."""
    from pigen_action.buildconfig.environment import HostEnvironment
    from pigen_action.buildconfig.errors import ConfigValidationError
    from pigen_action.buildconfig.validation import validate_config

    pigen_config = _load(config_file, overrides)
    try:
        validate_config(pigen_config, HostEnvironment())
    except ConfigValidationError as e:
        console.print(f"[red]Validation failed: {e}[/red]")
        raise typer.Exit(code=1) from None

    console.print(f"[green]✓ Valid build options: {pigen_config.img_name}[/green]")
    console.print(f"  Release: {pigen_config.release}")
    console.print(f"  Stages: {pigen_config.stage_list}")


@app.command()
def render(
    config_file: ConfigFileArg = None,
    pigen_dir: PigenDirOption = None,
    overrides: OverrideOption = None,
) -> None:
    """Print the pi-gen config file for the given options."""
    from pigen_action.buildconfig.schema import to_config_text
    from pigen_action.buildconfig.validation import absolutize_stages

    pigen_config = _load(config_file, overrides)
    base_dir = pigen_dir or get_settings().pigen_dir
    try:
        pigen_config = absolutize_stages(pigen_config, base_dir)
    except OSError as e:
        console.print(
            f"[red]Cannot resolve stage directory {e.filename}: {e.strerror}[/red]"
        )
        raise typer.Exit(code=1) from None

    typer.echo(to_config_text(pigen_config))


@app.command()
def build(
    config_file: ConfigFileArg = None,
    pigen_dir: PigenDirOption = None,
    overrides: OverrideOption = None,
    verbose: Annotated[
        bool | None,
        typer.Option("--verbose/--quiet", "-v", help="Show all build output"),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write unfiltered build output to a file"),
    ] = None,
) -> None:
    """Build an image with pi-gen."""
    from pigen_action.buildconfig.environment import HostEnvironment
    from pigen_action.buildconfig.errors import ConfigValidationError
    from pigen_action.buildconfig.validation import validate_config
    from pigen_action.builds.runner import BuildDirectoryError, PiGen

    settings = get_settings()
    base_dir = pigen_dir or settings.pigen_dir
    pigen_config = _load(config_file, overrides)

    try:
        pigen = PiGen(base_dir, pigen_config)
    except BuildDirectoryError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from None

    try:
        validate_config(pigen_config, HostEnvironment())
    except ConfigValidationError as e:
        console.print(f"[red]Validation failed: {e}[/red]")
        raise typer.Exit(code=1) from None

    console.print(f"[blue]Building {pigen_config.img_name} with {base_dir}...[/blue]")
    result = pigen.build(
        verbose=settings.verbose if verbose is None else verbose,
        log_path=log_file or settings.log_file,
    )

    if result.success:
        console.print(f"[green]✓ Build finished: {pigen_config.img_name}[/green]")
        console.print(f"  Images: {pigen.pigen_dir / 'deploy'}")
        return

    console.print(f"[red]Build failed with exit code {result.exit_code}[/red]")
    raise typer.Exit(code=result.exit_code)


if __name__ == "__main__":
    app()
