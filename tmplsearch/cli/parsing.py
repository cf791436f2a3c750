"""Read-only parse tree of a single invocation.

Click keeps parsed values per context. This module exposes the chain of
contexts of one invocation as a tree of command nodes, where each node
lists the parameters that received tokens from the command line. Parameters
are matched by identity, never by name, because the same ``click.Option``
instance may be registered on more than one command.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import click
from click.core import ParameterSource


@dataclass(frozen=True)
class SymbolResult:
    """A parameter that was bound from the command line."""

    symbol: click.Parameter
    tokens: tuple[str, ...]
    value: Any = None


@dataclass(frozen=True)
class CommandResult:
    """A command node of the parse tree."""

    command: click.Command
    name: str
    children: tuple[SymbolResult, ...]
    parent: CommandResult | None = None
    params: dict[str, Any] | None = None

    def find(self, symbol: click.Parameter) -> SymbolResult | None:
        """Get the result for ``symbol`` if it was used on this node."""
        for child in self.children:
            if child.symbol is symbol:
                return child
        return None

    def declares(self, symbol: click.Parameter) -> bool:
        """Check whether ``symbol`` is registered on this node's command."""
        return any(param is symbol for param in self.command.params)

    @classmethod
    def from_context(cls, ctx: click.Context) -> CommandResult:
        """Build the node for ``ctx`` and its ancestors."""
        parent = cls.from_context(ctx.parent) if ctx.parent is not None else None
        children = []
        for param in ctx.command.params:
            if param.name is None:
                continue
            if ctx.get_parameter_source(param.name) is not ParameterSource.COMMANDLINE:
                continue
            value = ctx.params.get(param.name)
            children.append(SymbolResult(param, _tokens(value), value))

        return cls(
            command=ctx.command,
            name=ctx.info_name or ctx.command.name or "",
            children=tuple(children),
            parent=parent,
            params=dict(ctx.params),
        )


@dataclass(frozen=True)
class ParseResult:
    """The parse tree of one invocation, rooted at the innermost command."""

    command_result: CommandResult

    @classmethod
    def from_context(cls, ctx: click.Context) -> ParseResult:
        return cls(CommandResult.from_context(ctx))

    def nodes(self) -> Iterator[CommandResult]:
        """Iterate command nodes from the innermost command to the root."""
        node: CommandResult | None = self.command_result
        while node is not None:
            yield node
            node = node.parent

    def find_result(self, symbol: click.Parameter) -> SymbolResult | None:
        """Find where ``symbol`` was used anywhere in the tree."""
        for node in self.nodes():
            result = node.find(symbol)
            if result is not None:
                return result
        return None

    def get_value(self, symbol: click.Parameter) -> Any:
        """Get the value bound to ``symbol``.

        The value given on the command line wins. Otherwise the value
        (usually the default) of the nearest command that declares the
        symbol is returned, or None if no command declares it.
        """
        result = self.find_result(symbol)
        if result is not None:
            return result.value

        for node in self.nodes():
            if node.declares(symbol) and node.params is not None:
                return node.params.get(symbol.name)
        return None


def _tokens(value: Any) -> tuple[str, ...]:
    if value is None or isinstance(value, bool):
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    return (str(value),)
