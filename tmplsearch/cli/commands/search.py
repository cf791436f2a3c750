"""Template search commands.

Search can be invoked as the ``search`` subcommand or with the legacy
``--search`` form nested under the parent command. Both accept the same
filters and column options. The legacy form registers the parent's option
objects so that a token such as ``--author foo`` binds to the same option
whichever form is used.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

import click
import msgspec

from tmplsearch.models import NewCommandStatus
from tmplsearch.packages import TemplatePackageManager
from tmplsearch.settings import EnvironmentSettings

from ..args import parse_filters
from ..filters import FilterOptionDefinition
from ..options import (
    OptionProvider,
    OwnOptions,
    ParentOptions,
    parse_tabular_output_settings,
)
from ..parsing import ParseResult
from ..validators import (
    validate_argument_usage_in_parent,
    validate_option_usage_in_parent,
    validate_parent_argument_not_used,
)
from .base import BaseCommand, NewCommandCallbacks

if TYPE_CHECKING:
    from .new import NewCommand

logger = logging.getLogger(__name__)

SEARCH_HELP = "Search the installed template cache by name and filters."

SUPPORTED_FILTERS: tuple[FilterOptionDefinition, ...] = (
    FilterOptionDefinition.AUTHOR,
    FilterOptionDefinition.BASELINE,
    FilterOptionDefinition.LANGUAGE,
    FilterOptionDefinition.TYPE,
    FilterOptionDefinition.TAG,
    FilterOptionDefinition.PACKAGE,
)


class BaseSearchCommand(BaseCommand):
    """Command shape shared by the modern and legacy search commands."""

    supported_filters = SUPPORTED_FILTERS

    def __init__(
        self,
        parent_command: NewCommand,
        name: str,
        options: OptionProvider,
        callbacks: NewCommandCallbacks | None = None,
        hidden: bool = False,
    ):
        super().__init__(name, help=SEARCH_HELP, callbacks=callbacks, hidden=hidden)
        self.parent_command = parent_command
        self.options = options

        self.name_argument = click.Argument(["name"], required=False)
        self.params.append(self.name_argument)

        self.filters = self.setup_filter_options(self.supported_filters)
        self.params.append(self.columns_all_option)
        self.params.append(self.columns_option)

    @property
    def columns_all_option(self) -> click.Option:
        return self.options.columns_all_option

    @property
    def columns_option(self) -> click.Option:
        return self.options.columns_option

    def setup_filter_options(
        self, supported: tuple[FilterOptionDefinition, ...]
    ) -> dict[FilterOptionDefinition, click.Option]:
        """Register one option per supported filter.

        Args:
            supported: Filter definitions to register

        Returns:
            Dictionary mapping each definition to its option instance
        """
        filters = {}
        for definition in supported:
            option = self.options.filter_option(definition)
            self.params.append(option)
            filters[definition] = option
        return filters

    def parse_context(self, parse_result: ParseResult) -> SearchCommandArgs:
        return SearchCommandArgs.from_parse_result(self, parse_result)

    async def execute_async(
        self, args: SearchCommandArgs, settings: EnvironmentSettings
    ) -> NewCommandStatus:
        """Run the search coordinator with a package manager for this run."""
        # The coordinator must be awaited inside the block; the manager
        # is closed as soon as the block exits.
        with TemplatePackageManager(settings) as package_manager:
            return await self.callbacks.search(
                settings,
                package_manager,
                args,
                settings.get_default_language(),
            )


class SearchCommand(BaseSearchCommand):
    """The ``search`` subcommand."""

    def __init__(
        self,
        parent_command: NewCommand,
        callbacks: NewCommandCallbacks | None = None,
    ):
        super().__init__(parent_command, "search", OwnOptions(), callbacks)

        for definition, option in parent_command.legacy_filters.items():
            if definition in self.supported_filters:
                self.add_validator(
                    partial(validate_option_usage_in_parent, option=option)
                )
        self.add_validator(
            partial(
                validate_option_usage_in_parent,
                option=parent_command.columns_all_option,
            )
        )
        self.add_validator(
            partial(
                validate_option_usage_in_parent,
                option=parent_command.columns_option,
            )
        )
        self.add_validator(
            partial(
                validate_argument_usage_in_parent,
                argument=parent_command.short_name_argument,
            )
        )


class LegacySearchCommand(BaseSearchCommand):
    """The hidden ``--search`` form of the search command."""

    def __init__(
        self,
        parent_command: NewCommand,
        callbacks: NewCommandCallbacks | None = None,
    ):
        super().__init__(
            parent_command,
            "--search",
            ParentOptions(parent_command),
            callbacks,
            hidden=True,
        )
        self.add_validator(
            partial(
                validate_parent_argument_not_used,
                name_argument=self.name_argument,
                parent_argument=parent_command.short_name_argument,
            )
        )


class SearchCommandArgs(msgspec.Struct, frozen=True, kw_only=True):
    """Resolved arguments of one search invocation."""

    search_name_criteria: str | None = None
    language: str | None = None
    display_all_columns: bool = False
    columns_to_display: tuple[str, ...] | None = None
    applied_filters: dict[FilterOptionDefinition, str] = msgspec.field(
        default_factory=dict
    )

    @classmethod
    def from_parse_result(
        cls, command: BaseSearchCommand, parse_result: ParseResult
    ) -> SearchCommandArgs:
        """Resolve arguments from the parse tree of ``command``.

        The command's own name argument takes precedence. For the legacy
        command the parent's short name is accepted as well, so both
        ``new --search foo`` and ``new foo --search`` search for ``foo``.
        """
        search_name_criteria = None
        name_criteria = parse_result.get_value(command.name_argument)
        if name_criteria and name_criteria.strip():
            search_name_criteria = name_criteria
        elif isinstance(command, LegacySearchCommand):
            short_name = parse_result.get_value(
                command.parent_command.short_name_argument
            )
            if short_name and short_name.strip():
                search_name_criteria = short_name

        display_all_columns, columns_to_display = parse_tabular_output_settings(
            command, parse_result
        )

        applied_filters = parse_filters(command, parse_result)

        return cls(
            search_name_criteria=search_name_criteria,
            language=applied_filters.get(FilterOptionDefinition.LANGUAGE),
            display_all_columns=display_all_columns,
            columns_to_display=columns_to_display,
            applied_filters=applied_filters,
        )

    def get_filter_value(self, definition: FilterOptionDefinition) -> str | None:
        return self.applied_filters.get(definition)
