"""Pytest configuration and fixtures for CLI tests.

Provides a parent command wired to a recording search coordinator, a CLI
runner for the application entry point and assertion helpers.
"""

import pytest
from click.testing import CliRunner

from tmplsearch.cli.commands import NewCommand, NewCommandCallbacks
from tmplsearch.models import NewCommandStatus


class RecordingCoordinator:
    """Search coordinator that records its calls."""

    def __init__(self, status=NewCommandStatus.SUCCESS, error=None):
        self.status = status
        self.error = error
        self.calls = []

    async def __call__(self, settings, package_manager, args, default_language):
        self.calls.append(
            {
                "settings": settings,
                "package_manager": package_manager,
                "args": args,
                "default_language": default_language,
                "closed_during_call": package_manager.closed,
            }
        )
        if self.error is not None:
            raise self.error
        return self.status

    @property
    def last_args(self):
        return self.calls[-1]["args"]


@pytest.fixture
def coordinator():
    """Recording search coordinator."""
    return RecordingCoordinator()


@pytest.fixture
def new_command(coordinator):
    """Parent command with both search commands registered."""
    return NewCommand(callbacks=NewCommandCallbacks(search=coordinator))


@pytest.fixture
def parse(new_command):
    """Parse command line tokens with the parent command."""

    def _parse(*args):
        return new_command.parse(list(args))

    return _parse


@pytest.fixture
def cli_runner(monkeypatch, coordinator, settings_dir):
    """Click CLI runner invoking the application with a recording coordinator."""
    from tmplsearch.cli.main import cli

    monkeypatch.setattr(cli.callbacks, "search", coordinator)
    monkeypatch.setenv("TMPLSEARCH_SETTINGS_DIR", str(settings_dir))

    class TemplateSearchCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            """Invoke the application with a list of arguments."""
            return super().invoke(cli, args, **kwargs)

    return TemplateSearchCliRunner()


def assert_exit_success(result):
    """Assert CLI command exited successfully."""
    assert result.exit_code == 0, f"Command failed: {result.output}"


def assert_exit_failure(result, expected_code=1):
    """Assert CLI command failed with expected code."""
    assert result.exit_code == expected_code, (
        f"Expected exit code {expected_code}, got {result.exit_code}: {result.output}"
    )


def assert_output_contains(result, *expected):
    """Assert CLI output contains expected strings."""
    for text in expected:
        assert text in result.output, f"Expected '{text}' in output:\n{result.output}"


pytest.assert_exit_success = assert_exit_success  # type: ignore[attr-defined]
pytest.assert_exit_failure = assert_exit_failure  # type: ignore[attr-defined]
pytest.assert_output_contains = assert_output_contains  # type: ignore[attr-defined]
