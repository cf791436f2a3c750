"""The parent command and its subcommand routing."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import click
from click.exceptions import Exit

from ..filters import FilterOptionDefinition
from ..options import create_columns_all_option, create_columns_option
from ..parsing import ParseResult
from .base import NewCommandCallbacks
from .search import SUPPORTED_FILTERS, LegacySearchCommand, SearchCommand

logger = logging.getLogger(__name__)


class NewCommand(click.Group):
    """Parent command that accepts both ``search`` and ``--search``.

    The token stream is split at the first subcommand token. Tokens before
    it belong to this command, tokens after it to the subcommand. This lets
    a subcommand be spelled like an option (``--search``) and lets the
    optional short name argument precede it.
    """

    allow_extra_args = False
    allow_interspersed_args = True

    def __init__(
        self,
        name: str | None = "new",
        callbacks: NewCommandCallbacks | None = None,
        **attrs: Any,
    ):
        attrs.setdefault("invoke_without_command", True)
        super().__init__(name, **attrs)
        self.callbacks = callbacks or NewCommandCallbacks()

        self.short_name_argument = click.Argument(["short_name"], required=False)
        self.legacy_filters: dict[FilterOptionDefinition, click.Option] = {
            definition: definition.create_option(hidden=True)
            for definition in SUPPORTED_FILTERS
        }
        self.columns_all_option = create_columns_all_option()
        self.columns_option = create_columns_option()
        self.columns_all_option.hidden = True
        self.columns_option.hidden = True

        self.params.append(self.short_name_argument)
        self.params.extend(self.legacy_filters.values())
        self.params.append(self.columns_all_option)
        self.params.append(self.columns_option)

        self.add_command(SearchCommand(self, self.callbacks))
        self.add_command(LegacySearchCommand(self, self.callbacks))

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        index = self._find_subcommand(ctx, args)
        if index is None:
            parent_args, cmd_name, sub_args = args, None, []
        else:
            parent_args, cmd_name, sub_args = args[:index], args[index], args[index + 1 :]

        click.Command.parse_args(self, ctx, parent_args)
        ctx.invoked_subcommand = cmd_name
        ctx.args = sub_args
        return ctx.args

    def _find_subcommand(self, ctx: click.Context, args: list[str]) -> int | None:
        """Find the index of the first token naming a subcommand."""
        value_opts = {
            opt
            for param in self.get_params(ctx)
            if isinstance(param, click.Option) and not param.is_flag and not param.count
            for opt in (*param.opts, *param.secondary_opts)
        }

        skip_next = False
        for index, token in enumerate(args):
            if skip_next:
                skip_next = False
                continue
            if token == "--":
                return None
            if token in self.commands:
                return index
            if token in value_opts:
                skip_next = True
        return None

    def make_subcommand_context(self, ctx: click.Context) -> click.Context | None:
        """Parse the subcommand tokens left on ``ctx``."""
        cmd_name = ctx.invoked_subcommand
        if cmd_name is None:
            return None
        cmd = self.get_command(ctx, cmd_name)
        if cmd is None:
            ctx.fail(f"No such command '{cmd_name}'.")
        return cmd.make_context(cmd_name, list(ctx.args), parent=ctx)

    def parse(self, args: Sequence[str], prog_name: str | None = None) -> ParseResult:
        """Parse ``args`` without running anything.

        Args:
            args: Command line tokens after the program name
            prog_name: Name the parent command is invoked as

        Returns:
            Parse tree rooted at the innermost command
        """
        ctx = self.make_context(prog_name or self.name or "new", list(args))
        sub_ctx = self.make_subcommand_context(ctx)
        return ParseResult.from_context(sub_ctx or ctx)

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return self._invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            logger.debug(f"Command failed: {e!r}")
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {e}")
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    def _invoke(self, ctx: click.Context) -> Any:
        # Run our own callback first, it sets up the shared context object
        click.Command.invoke(self, ctx)

        sub_ctx = self.make_subcommand_context(ctx)
        if sub_ctx is None:
            short_name = ctx.params.get("short_name")
            if short_name:
                raise click.UsageError(
                    f"Nothing to do for '{short_name}'. "
                    f"Use '{ctx.info_name} search {short_name}' to search for templates.",
                    ctx=ctx,
                )
            click.echo(ctx.get_help(), color=ctx.color)
            return None

        with sub_ctx:
            return sub_ctx.command.invoke(sub_ctx)
