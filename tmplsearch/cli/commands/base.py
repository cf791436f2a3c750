"""Base class for commands with validators and typed arguments."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import click

from tmplsearch.models import NewCommandStatus
from tmplsearch.settings import EnvironmentSettings

from ..context import get_settings
from ..parsing import CommandResult, ParseResult

if TYPE_CHECKING:
    from tmplsearch.packages import TemplatePackageManager

logger = logging.getLogger(__name__)

Validator = Callable[[CommandResult], "str | None"]
SearchCoordinator = Callable[
    ["EnvironmentSettings", "TemplatePackageManager", Any, "str | None"],
    Awaitable[NewCommandStatus],
]


def _default_search_coordinator() -> SearchCoordinator:
    from tmplsearch.coordinator import search_for_template_matches

    return search_for_template_matches


@dataclass
class NewCommandCallbacks:
    """Collaborators that commands delegate their work to."""

    search: SearchCoordinator = field(default_factory=_default_search_coordinator)


class BaseCommand(click.Command):
    """A command that validates its parse tree before it runs.

    Subclasses register validators with ``add_validator``, turn the parse
    tree into an arguments object in ``parse_context`` and do their work in
    ``execute_async``.
    """

    def __init__(
        self,
        name: str,
        help: str | None = None,
        callbacks: NewCommandCallbacks | None = None,
        hidden: bool = False,
    ):
        super().__init__(name, help=help, hidden=hidden)
        self.callbacks = callbacks or NewCommandCallbacks()
        self.validators: list[Validator] = []

    def add_validator(self, validator: Validator) -> None:
        self.validators.append(validator)

    def validate(self, command_result: CommandResult) -> list[str]:
        """Run every validator and collect their diagnostics."""
        diagnostics = []
        for validator in self.validators:
            message = validator(command_result)
            if message:
                diagnostics.append(message)
        return diagnostics

    def parse_context(self, parse_result: ParseResult) -> Any:
        raise NotImplementedError

    async def execute_async(
        self, args: Any, settings: EnvironmentSettings
    ) -> NewCommandStatus:
        raise NotImplementedError

    def invoke(self, ctx: click.Context) -> Any:
        parse_result = ParseResult.from_context(ctx)

        diagnostics = self.validate(parse_result.command_result)
        if diagnostics:
            logger.debug(f"Validation failed for '{ctx.info_name}': {diagnostics}")
            raise click.UsageError("\n".join(diagnostics), ctx=ctx)

        args = self.parse_context(parse_result)
        logger.debug(f"Resolved arguments for '{ctx.info_name}': {args!r}")

        status = asyncio.run(self.execute_async(args, get_settings(ctx)))
        logger.debug(f"Command '{ctx.info_name}' finished with {status!r}")
        ctx.exit(int(status))
