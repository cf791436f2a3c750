"""CLI context management utilities.

Holds the resources created once by the parent command and shared with the
subcommand that runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import click
from rich.console import Console

from tmplsearch.settings import EnvironmentSettings

from .config import load_config


@dataclass
class Context:
    """CLI context that holds shared resources."""

    settings: EnvironmentSettings
    console: Console
    config: dict[str, Any] = field(default_factory=dict)
    debug: bool = False


def get_settings(ctx: click.Context) -> EnvironmentSettings:
    """Get environment settings for a command run.

    Falls back to the default configuration when the command was invoked
    without the parent command setting up a context.

    Args:
        ctx: Click context of the running command

    Returns:
        Environment settings
    """
    obj = ctx.find_object(Context)
    if obj is not None:
        return obj.settings
    return EnvironmentSettings.from_config(load_config())
