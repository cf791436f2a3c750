"""Search coordinator that matches templates from the local template cache.

The command layer only resolves arguments. Matching, filtering and output
of search results happen here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.box import ROUNDED
from rich.table import Table

from .cli.filters import FilterOptionDefinition
from .models import NewCommandStatus, TemplateInfo, TemplatePackage
from .packages import TemplatePackageManager
from .settings import EnvironmentSettings

if TYPE_CHECKING:
    from .cli.commands.search import SearchCommandArgs

logger = logging.getLogger(__name__)

OPTIONAL_COLUMNS = ("author", "language", "type", "tags", "package")
DEFAULT_COLUMNS = ("author", "language", "package")

_COLUMN_HEADERS = {
    "author": "Author",
    "language": "Language",
    "type": "Type",
    "tags": "Tags",
    "package": "Package",
}

Match = tuple[TemplatePackage, TemplateInfo]


async def search_for_template_matches(
    settings: EnvironmentSettings,
    package_manager: TemplatePackageManager,
    args: SearchCommandArgs,
    default_language: str | None,
) -> NewCommandStatus:
    """Search the template cache and print matching templates.

    Args:
        settings: Environment settings (provides the console)
        package_manager: Open package manager for this run
        args: Resolved search arguments
        default_language: Language shown as the default one

    Returns:
        SUCCESS if templates matched, NOT_FOUND if none did,
        INVALID_PARAMS if no search criteria were given
    """
    console = settings.console

    if not args.search_name_criteria and not args.applied_filters:
        console.print(
            "[red]Search failed:[/red] no criteria were specified. "
            "Specify a template name or at least one filter."
        )
        return NewCommandStatus.INVALID_PARAMS

    templates = await package_manager.get_templates_async()
    matches = [
        (package, template)
        for package, template in templates
        if matches_name(template, args.search_name_criteria)
        and matches_filters(package, template, args.applied_filters)
    ]
    logger.debug(f"{len(matches)} of {len(templates)} templates matched")

    if not matches:
        console.print(
            f"[yellow]No templates found matching: {describe_criteria(args)}.[/yellow]"
        )
        return NewCommandStatus.NOT_FOUND

    columns = select_columns(args.display_all_columns, args.columns_to_display)
    console.print(format_matches_table(matches, columns, default_language))
    return NewCommandStatus.SUCCESS


def matches_name(template: TemplateInfo, criteria: str | None) -> bool:
    """Case-insensitive substring match on name and short names."""
    if not criteria:
        return True
    needle = criteria.lower()
    if needle in template.name.lower():
        return True
    return any(needle in short_name.lower() for short_name in template.short_names)


def matches_filters(
    package: TemplatePackage,
    template: TemplateInfo,
    filters: dict[FilterOptionDefinition, str],
) -> bool:
    """Check a template against every applied filter."""
    for definition, value in filters.items():
        needle = value.lower()

        if definition is FilterOptionDefinition.AUTHOR:
            if not template.author or needle not in template.author.lower():
                return False
        elif definition is FilterOptionDefinition.BASELINE:
            if needle not in (b.lower() for b in template.baselines):
                return False
        elif definition is FilterOptionDefinition.LANGUAGE:
            if needle not in (lang.lower() for lang in template.languages):
                return False
        elif definition is FilterOptionDefinition.TYPE:
            if not template.type or template.type.lower() != needle:
                return False
        elif definition is FilterOptionDefinition.TAG:
            if needle not in (tag.lower() for tag in template.tags):
                return False
        elif definition is FilterOptionDefinition.PACKAGE:
            if needle not in package.id.lower():
                return False

    return True


def select_columns(
    display_all: bool, columns_to_display: tuple[str, ...] | None
) -> list[str]:
    """Get the optional columns to show, in display order."""
    if display_all:
        return list(OPTIONAL_COLUMNS)
    if not columns_to_display:
        return list(DEFAULT_COLUMNS)

    requested = {column.lower() for column in columns_to_display}
    unknown = requested - set(OPTIONAL_COLUMNS)
    if unknown:
        logger.warning(f"Ignoring unknown columns: {', '.join(sorted(unknown))}")
    return [column for column in OPTIONAL_COLUMNS if column in requested]


def format_matches_table(
    matches: list[Match], columns: list[str], default_language: str | None
) -> Table:
    """Format matching templates as a Rich table.

    Args:
        matches: Matching (package, template) pairs
        columns: Optional columns to include
        default_language: Language to show in brackets

    Returns:
        Rich Table object
    """
    table = Table(
        box=ROUNDED,
        show_header=True,
        header_style="bold cyan",
        row_styles=["none", "dim"],
    )
    table.add_column("Template Name")
    table.add_column("Short Name", style="cyan")
    for column in columns:
        table.add_column(_COLUMN_HEADERS[column])

    for package, template in matches:
        row = [template.name, template.short_name_text]
        for column in columns:
            if column == "author":
                row.append(template.author or "")
            elif column == "language":
                row.append(_format_languages(template.languages, default_language))
            elif column == "type":
                row.append(template.type or "")
            elif column == "tags":
                row.append("/".join(template.tags))
            elif column == "package":
                row.append(package.display_name)
        table.add_row(*row)

    return table


def describe_criteria(args: SearchCommandArgs) -> str:
    """Describe the criteria of a search for messages."""
    parts = []
    if args.search_name_criteria:
        parts.append(f"'{args.search_name_criteria}'")
    for definition, value in args.applied_filters.items():
        parts.append(f"{definition.value}='{value}'")
    return ", ".join(parts)


def _format_languages(languages: tuple[str, ...], default_language: str | None) -> str:
    # Rich markup would swallow "[C#]", so brackets are escaped
    return ",".join(
        f"\\[{language}]" if language == default_language else language
        for language in languages
    )
