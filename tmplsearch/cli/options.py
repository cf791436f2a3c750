"""Shared options for commands with tabular output and filters.

Option providers are the one place where the modern and legacy search
commands differ: the modern command owns its options, the legacy command
reuses the option objects already registered on its parent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import click

from .filters import FilterOptionDefinition
from .parsing import ParseResult

if TYPE_CHECKING:
    from .commands.new import NewCommand


def _split_columns(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...] | None
) -> tuple[str, ...] | None:
    """Split ``--columns a,b --columns c`` into ``("a", "b", "c")``."""
    if not value:
        return None
    columns = tuple(
        column.strip()
        for item in value
        for column in item.split(",")
        if column.strip()
    )
    return columns or None


def create_columns_all_option() -> click.Option:
    """Create the option that shows all table columns."""
    return click.Option(
        ["--columns-all"],
        is_flag=True,
        default=False,
        help="Displays all columns in the output.",
    )


def create_columns_option() -> click.Option:
    """Create the option that selects table columns."""
    return click.Option(
        ["--columns"],
        multiple=True,
        callback=_split_columns,
        metavar="COLUMNS",
        help="Comma separated list of columns to display in the output. "
        "Supported columns: author, language, type, tags, package.",
    )


class OptionProvider(Protocol):
    """Supplies the option instances a command registers."""

    columns_all_option: click.Option
    columns_option: click.Option

    def filter_option(self, definition: FilterOptionDefinition) -> click.Option: ...


class OwnOptions:
    """Creates new option instances owned by a single command."""

    def __init__(self):
        self.columns_all_option = create_columns_all_option()
        self.columns_option = create_columns_option()

    def filter_option(self, definition: FilterOptionDefinition) -> click.Option:
        return definition.create_option()


class ParentOptions:
    """Returns the option instances registered on the parent command."""

    def __init__(self, parent: NewCommand):
        self.parent = parent

    @property
    def columns_all_option(self) -> click.Option:
        return self.parent.columns_all_option

    @property
    def columns_option(self) -> click.Option:
        return self.parent.columns_option

    def filter_option(self, definition: FilterOptionDefinition) -> click.Option:
        return self.parent.legacy_filters[definition]


class TabularOutputCommand(Protocol):
    """A command that exposes the column selection options."""

    columns_all_option: click.Option
    columns_option: click.Option


def parse_tabular_output_settings(
    command: TabularOutputCommand, parse_result: ParseResult
) -> tuple[bool, tuple[str, ...] | None]:
    """Read column settings bound to the command's column options.

    Args:
        command: Command whose column options are read
        parse_result: Parse tree of the invocation

    Returns:
        Tuple of (display all columns, columns to display)
    """
    display_all = bool(parse_result.get_value(command.columns_all_option))
    columns = parse_result.get_value(command.columns_option)
    return display_all, tuple(columns) if columns else None
