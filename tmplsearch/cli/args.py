"""Helpers shared by resolved command arguments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

import click

from .filters import FilterOptionDefinition
from .parsing import ParseResult


class FilterableCommand(Protocol):
    """A command that exposes filter options."""

    filters: Mapping[FilterOptionDefinition, click.Option]


def parse_filters(
    command: FilterableCommand, parse_result: ParseResult
) -> dict[FilterOptionDefinition, str]:
    """Collect the filter values supplied for a command.

    Args:
        command: Command whose filter option instances are read
        parse_result: Parse tree of the invocation

    Returns:
        Dictionary of applied filters; blank values are left out
    """
    applied = {}
    for definition, option in command.filters.items():
        value = parse_result.get_value(option)
        if value is None:
            continue
        value = str(value)
        if value.strip():
            applied[definition] = value
    return applied
