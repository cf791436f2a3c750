"""Main CLI entry point and application setup."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from tmplsearch import __version__
from tmplsearch.exceptions import ConfigError
from tmplsearch.settings import EnvironmentSettings

from .commands.new import NewCommand
from .config import load_config
from .context import Context


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create Rich console with appropriate settings."""
    return Console(
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


@click.group(cls=NewCommand, name="new")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--settings-dir",
    type=click.Path(path_type=Path),
    help="Override the settings directory location",
)
@click.version_option(
    version=__version__, prog_name="tmplsearch", message="tmplsearch version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
    settings_dir: Path | None,
    **legacy_params,
) -> None:
    """Template search.

    Search for templates with 'search [NAME]'. The legacy form
    '[SHORT_NAME] --search' accepts the same filters.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)

    try:
        config_data = load_config(config)
    except ConfigError as e:
        if debug:
            raise
        click.echo(f"Error loading config file: {e}", err=True)
        ctx.exit(1)

    if settings_dir:
        config_data["settings_dir"] = str(settings_dir)

    console = create_console(no_color=no_color)
    ctx.obj = Context(
        settings=EnvironmentSettings.from_config(config_data, console=console),
        console=console,
        config=config_data,
        debug=debug,
    )


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        if "--debug" in sys.argv:
            raise
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
