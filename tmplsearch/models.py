"""Data models for template packages and command status.

Template records use msgspec.Struct so that cache files can be converted
into typed, immutable values in one step.
"""

from __future__ import annotations

from enum import IntEnum

import msgspec


class NewCommandStatus(IntEnum):
    """Exit status of a command run, used as the process exit code."""

    SUCCESS = 0
    UNEXPECTED = 70
    NOT_FOUND = 103
    CANCELLED = 104
    INVALID_PARAMS = 127


class TemplateInfo(msgspec.Struct, frozen=True, kw_only=True):
    """A single template as listed in the template cache."""

    name: str
    short_names: tuple[str, ...] = ()
    author: str | None = None
    languages: tuple[str, ...] = ()
    type: str | None = None
    tags: tuple[str, ...] = ()
    baselines: tuple[str, ...] = ()

    @property
    def short_name_text(self) -> str:
        """Short names joined for display."""
        return ",".join(self.short_names)


class TemplatePackage(msgspec.Struct, frozen=True, kw_only=True):
    """A template package and the templates it contains."""

    id: str
    version: str | None = None
    templates: tuple[TemplateInfo, ...] = ()

    @property
    def display_name(self) -> str:
        """Package identity in ``id::version`` form."""
        if self.version:
            return f"{self.id}::{self.version}"
        return self.id
