"""Filter option definitions for template search.

Each filter kind knows how to create its own ``click.Option``. Commands
decide whether to create a fresh option or reuse an existing one.
"""

from __future__ import annotations

from enum import Enum

import click


class FilterOptionDefinition(Enum):
    """Filters supported by template listing and search."""

    AUTHOR = "author"
    BASELINE = "baseline"
    LANGUAGE = "language"
    TYPE = "type"
    TAG = "tag"
    PACKAGE = "package"

    @property
    def option_decls(self) -> tuple[str, ...]:
        """Option names as passed to ``click.Option``."""
        return _FILTER_OPTIONS[self][0]

    @property
    def help(self) -> str:
        return _FILTER_OPTIONS[self][1]

    @property
    def hidden(self) -> bool:
        return self is FilterOptionDefinition.BASELINE

    def create_option(self, hidden: bool | None = None) -> click.Option:
        """Create a new option instance for this filter."""
        return click.Option(
            list(self.option_decls),
            help=self.help,
            hidden=self.hidden if hidden is None else hidden,
            metavar=self.value.upper(),
        )


_FILTER_OPTIONS: dict[FilterOptionDefinition, tuple[tuple[str, ...], str]] = {
    FilterOptionDefinition.AUTHOR: (
        ("--author",),
        "Filters the templates based on the template author.",
    ),
    FilterOptionDefinition.BASELINE: (
        ("--baseline",),
        "Filters the templates based on baseline defined in the template.",
    ),
    FilterOptionDefinition.LANGUAGE: (
        ("--language", "-lang"),
        "Filters templates based on language.",
    ),
    FilterOptionDefinition.TYPE: (
        ("--type",),
        "Filters templates based on available types. "
        "Predefined values are 'project' and 'item'.",
    ),
    FilterOptionDefinition.TAG: (
        ("--tag",),
        "Filters the templates based on the tag.",
    ),
    FilterOptionDefinition.PACKAGE: (
        ("--package",),
        "Filters the templates based on NuGet package ID.",
    ),
}
