"""CLI commands module."""

from .base import BaseCommand, NewCommandCallbacks
from .new import NewCommand
from .search import (
    SUPPORTED_FILTERS,
    BaseSearchCommand,
    LegacySearchCommand,
    SearchCommand,
    SearchCommandArgs,
)

__all__ = [
    "BaseCommand",
    "NewCommandCallbacks",
    "NewCommand",
    "SUPPORTED_FILTERS",
    "BaseSearchCommand",
    "LegacySearchCommand",
    "SearchCommand",
    "SearchCommandArgs",
]
