"""Environment settings shared by every command run."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console

CACHE_FILE_NAME = "templatecache.yaml"


def default_settings_dir() -> Path:
    """Get the default settings directory (XDG data home)."""
    xdg_data_home = Path(
        os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
    )
    return xdg_data_home / "tmplsearch"


@dataclass(frozen=True)
class EnvironmentSettings:
    """Read-only settings of the environment a command runs in."""

    settings_dir: Path
    default_language: str | None = None
    template_cache: Path | None = None
    console: Console = field(default_factory=Console, compare=False)

    @classmethod
    def from_config(
        cls, config: dict[str, Any], console: Console | None = None
    ) -> EnvironmentSettings:
        """Build settings from a merged configuration mapping.

        Args:
            config: Configuration mapping (see ``load_config``)
            console: Console used for command output

        Returns:
            EnvironmentSettings instance
        """
        settings_dir = config.get("settings_dir")
        template_cache = config.get("template_cache")
        default_language = config.get("default_language")

        return cls(
            settings_dir=Path(settings_dir).expanduser()
            if settings_dir
            else default_settings_dir(),
            default_language=str(default_language) if default_language else None,
            template_cache=Path(template_cache).expanduser()
            if template_cache
            else None,
            console=console or Console(),
        )

    @property
    def template_cache_path(self) -> Path:
        """Location of the template cache file."""
        return self.template_cache or self.settings_dir / CACHE_FILE_NAME

    def get_default_language(self) -> str | None:
        """Get the language used when a template supports several."""
        return self.default_language
