"""Pytest configuration and fixtures."""

import io
import os

import pytest
import yaml
from rich.console import Console

from tmplsearch.settings import EnvironmentSettings


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables for each test.

    Configuration is looked up under a temporary XDG config home so a
    developer's own config file never leaks into tests.
    """
    original_env = os.environ.copy()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("TMPLSEARCH_SETTINGS_DIR", raising=False)
    monkeypatch.delenv("TMPLSEARCH_DEFAULT_LANGUAGE", raising=False)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def sample_cache_data():
    """Template cache content for testing."""
    return {
        "packages": [
            {
                "id": "Contoso.Web.Templates",
                "version": "2.1.0",
                "templates": [
                    {
                        "name": "Contoso Web App",
                        "short_names": ["contosoweb"],
                        "author": "Contoso",
                        "languages": ["C#", "F#"],
                        "type": "project",
                        "tags": ["Web", "Cloud"],
                        "baselines": ["app"],
                    },
                    {
                        "name": "Contoso Razor Page",
                        "short_names": ["razorpage", "page"],
                        "author": "Contoso",
                        "languages": ["C#"],
                        "type": "item",
                        "tags": ["Web"],
                    },
                ],
            },
            {
                "id": "Fabrikam.Console",
                "templates": [
                    {
                        "name": "Fabrikam Console Application",
                        "short_names": ["fconsole"],
                        "author": "Fabrikam Team",
                        "languages": ["VB"],
                        "type": "project",
                        "tags": ["Console"],
                    },
                ],
            },
        ]
    }


@pytest.fixture
def settings_dir(tmp_path, sample_cache_data):
    """Settings directory holding a template cache."""
    path = tmp_path / "settings"
    path.mkdir()
    with open(path / "templatecache.yaml", "w") as f:
        yaml.safe_dump(sample_cache_data, f)
    return path


@pytest.fixture
def settings(settings_dir):
    """Environment settings with a console that records output."""
    return EnvironmentSettings(
        settings_dir=settings_dir,
        default_language="C#",
        console=Console(file=io.StringIO(), width=200, no_color=True),
    )


def console_output(settings: EnvironmentSettings) -> str:
    """Text printed to the settings console so far."""
    return settings.console.file.getvalue()


pytest.console_output = console_output  # type: ignore[attr-defined]
