"""Template package manager.

The package manager is a scoped resource: a command run opens one, uses it
for the duration of a single search and closes it on every exit path.
"""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

import msgspec
import yaml

from .exceptions import TemplateCacheError
from .models import TemplateInfo, TemplatePackage
from .settings import EnvironmentSettings

logger = logging.getLogger(__name__)


class TemplatePackageManager:
    """Provides access to the template packages known to an environment."""

    def __init__(self, settings: EnvironmentSettings):
        """Initialize package manager.

        Args:
            settings: Environment settings that locate the template cache
        """
        self.settings = settings
        self._packages: list[TemplatePackage] | None = None
        self._closed = False
        logger.debug(f"Opened package manager for {settings.template_cache_path}")

    def __enter__(self) -> TemplatePackageManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        """Whether the manager has been released."""
        return self._closed

    def close(self) -> None:
        """Release cached package data."""
        if self._closed:
            return
        self._packages = None
        self._closed = True
        logger.debug("Closed package manager")

    def get_packages(self) -> list[TemplatePackage]:
        """Get all template packages from the cache.

        Returns:
            List of packages, empty if no cache file exists

        Raises:
            TemplateCacheError: If the cache file is invalid
        """
        if self._closed:
            raise RuntimeError("Package manager is closed")

        if self._packages is None:
            self._packages = self._load_packages()
        return self._packages

    def get_templates(self) -> list[tuple[TemplatePackage, TemplateInfo]]:
        """Get every template paired with the package that provides it."""
        return [
            (package, template)
            for package in self.get_packages()
            for template in package.templates
        ]

    async def get_templates_async(self) -> list[tuple[TemplatePackage, TemplateInfo]]:
        """Get templates without blocking the event loop."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.get_templates)

    def _load_packages(self) -> list[TemplatePackage]:
        path = self.settings.template_cache_path
        if not path.exists():
            logger.debug(f"No template cache at {path}")
            return []

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise TemplateCacheError(str(path), f"invalid YAML: {e}")
        except OSError as e:
            raise TemplateCacheError(str(path), str(e))

        if not isinstance(data, dict):
            raise TemplateCacheError(str(path), "expected a mapping at top level")

        try:
            packages = msgspec.convert(
                data.get("packages") or [], type=list[TemplatePackage]
            )
        except msgspec.ValidationError as e:
            raise TemplateCacheError(str(path), str(e))

        logger.debug(f"Loaded {len(packages)} template packages from {path}")
        return packages
