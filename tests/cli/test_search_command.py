"""Tests for running the search commands end to end.

Covers routing through the application entry point, usage errors raised by
validators, exit status pass-through and the package manager lifecycle.
"""

import asyncio

import pytest

from tmplsearch.cli.commands import SearchCommandArgs
from tmplsearch.models import NewCommandStatus


class TestSearchInvocation:
    """Test 'tmplsearch search' and 'tmplsearch --search'."""

    def test_modern_search(self, cli_runner, coordinator):
        """The coordinator receives the resolved arguments."""
        result = cli_runner.invoke(["search", "web", "--author", "Contoso"])

        pytest.assert_exit_success(result)
        assert len(coordinator.calls) == 1
        args = coordinator.last_args
        assert args.search_name_criteria == "web"
        assert args.language is None

    def test_legacy_search(self, cli_runner, coordinator):
        """The legacy form reaches the same coordinator."""
        result = cli_runner.invoke(["web", "--search", "--language", "C#"])

        pytest.assert_exit_success(result)
        args = coordinator.last_args
        assert args.search_name_criteria == "web"
        assert args.language == "C#"

    def test_default_language_from_environment(
        self, cli_runner, coordinator, monkeypatch
    ):
        """The default language comes from the environment settings."""
        monkeypatch.setenv("TMPLSEARCH_DEFAULT_LANGUAGE", "F#")

        result = cli_runner.invoke(["search", "web"])

        pytest.assert_exit_success(result)
        assert coordinator.calls[0]["default_language"] == "F#"

    def test_settings_dir_option(self, cli_runner, coordinator, tmp_path):
        """--settings-dir overrides the configured settings directory."""
        override = tmp_path / "other"

        result = cli_runner.invoke(["--settings-dir", str(override), "search", "web"])

        pytest.assert_exit_success(result)
        assert coordinator.calls[0]["settings"].settings_dir == override

    def test_global_options_before_search(self, cli_runner, coordinator):
        """Global flags do not conflict with the search validators."""
        result = cli_runner.invoke(["--quiet", "--no-color", "search", "web"])

        pytest.assert_exit_success(result)
        assert len(coordinator.calls) == 1

    @pytest.mark.parametrize(
        "status", [NewCommandStatus.NOT_FOUND, NewCommandStatus.INVALID_PARAMS]
    )
    def test_status_passed_through(self, cli_runner, coordinator, status):
        """The coordinator's status becomes the exit code."""
        coordinator.status = status

        result = cli_runner.invoke(["search", "web"])

        pytest.assert_exit_failure(result, int(status))


class TestUsageErrors:
    """Test invocations rejected before the coordinator runs."""

    def test_parent_option_with_modern_search(self, cli_runner, coordinator):
        """A legacy filter before 'search' is rejected."""
        result = cli_runner.invoke(["--author", "Contoso", "search", "web"])

        pytest.assert_exit_failure(result, 2)
        pytest.assert_output_contains(result, "'--author'", "'search'")
        assert coordinator.calls == []

    def test_short_name_with_modern_search(self, cli_runner, coordinator):
        """A short name before 'search' is rejected."""
        result = cli_runner.invoke(["console", "search"])

        pytest.assert_exit_failure(result, 2)
        pytest.assert_output_contains(result, "argument 'console'")
        assert coordinator.calls == []

    def test_both_names_with_legacy_search(self, cli_runner, coordinator):
        """A name in both legacy positions is rejected."""
        result = cli_runner.invoke(["bar", "--search", "foo"])

        pytest.assert_exit_failure(result, 2)
        pytest.assert_output_contains(
            result, "argument 'bar' should be used after '--search'"
        )
        assert coordinator.calls == []

    def test_all_diagnostics_reported(self, cli_runner, coordinator):
        """Every failing validator is reported."""
        result = cli_runner.invoke(["--author", "a", "--tag", "b", "search"])

        pytest.assert_exit_failure(result, 2)
        pytest.assert_output_contains(result, "'--author'", "'--tag'")

    def test_short_name_without_subcommand(self, cli_runner, coordinator):
        """A short name alone has nothing to run."""
        result = cli_runner.invoke(["console"])

        pytest.assert_exit_failure(result, 2)
        pytest.assert_output_contains(result, "search console")
        assert coordinator.calls == []

    def test_no_arguments_shows_help(self, cli_runner, coordinator):
        """Running without arguments prints help."""
        result = cli_runner.invoke([])

        pytest.assert_exit_success(result)
        pytest.assert_output_contains(result, "Usage:", "search")
        assert coordinator.calls == []


class TestExecutionErrors:
    """Test errors raised while searching."""

    def test_coordinator_error(self, cli_runner, coordinator):
        """Unexpected errors are reported with exit code 1."""
        coordinator.error = RuntimeError("index unavailable")

        result = cli_runner.invoke(["search", "web"])

        pytest.assert_exit_failure(result, 1)
        pytest.assert_output_contains(result, "index unavailable")

    def test_coordinator_error_with_debug(self, cli_runner, coordinator):
        """--debug lets the original exception through."""
        coordinator.error = RuntimeError("index unavailable")

        result = cli_runner.invoke(["--debug", "search", "web"])

        assert isinstance(result.exception, RuntimeError)

    def test_keyboard_interrupt(self, cli_runner, coordinator):
        """Interrupts exit with code 130."""
        coordinator.error = KeyboardInterrupt()

        result = cli_runner.invoke(["search", "web"])

        pytest.assert_exit_failure(result, 130)


class RecordingPackageManager:
    """Package manager stand-in that counts releases."""

    instances = []

    def __init__(self, settings):
        self.settings = settings
        self.close_count = 0
        RecordingPackageManager.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def closed(self):
        return self.close_count > 0

    def close(self):
        self.close_count += 1


class TestPackageManagerLifecycle:
    """Test that each run acquires and releases one package manager."""

    @pytest.fixture(autouse=True)
    def recording_manager(self, monkeypatch):
        RecordingPackageManager.instances = []
        monkeypatch.setattr(
            "tmplsearch.cli.commands.search.TemplatePackageManager",
            RecordingPackageManager,
        )
        return RecordingPackageManager

    @pytest.fixture
    def search(self, new_command):
        return new_command.commands["search"]

    @pytest.mark.asyncio
    async def test_released_after_success(self, search, settings, coordinator):
        """The manager is released once after a successful search."""
        status = await search.execute_async(
            SearchCommandArgs(search_name_criteria="web"), settings
        )

        assert status is NewCommandStatus.SUCCESS
        (manager,) = RecordingPackageManager.instances
        assert manager.close_count == 1
        assert coordinator.calls[0]["package_manager"] is manager
        assert coordinator.calls[0]["closed_during_call"] is False
        assert coordinator.calls[0]["default_language"] == "C#"

    @pytest.mark.asyncio
    async def test_released_after_failure(self, search, settings, coordinator):
        """The manager is released once when the coordinator fails."""
        coordinator.error = RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await search.execute_async(SearchCommandArgs(), settings)

        (manager,) = RecordingPackageManager.instances
        assert manager.close_count == 1

    @pytest.mark.asyncio
    async def test_released_after_cancellation(self, search, settings, coordinator):
        """Cancellation propagates and still releases the manager."""
        coordinator.error = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await search.execute_async(SearchCommandArgs(), settings)

        (manager,) = RecordingPackageManager.instances
        assert manager.close_count == 1

    def test_one_manager_per_run(self, cli_runner):
        """Each command run creates its own manager."""
        cli_runner.invoke(["search", "web"])
        cli_runner.invoke(["--search", "web"])

        assert len(RecordingPackageManager.instances) == 2
        assert all(m.close_count == 1 for m in RecordingPackageManager.instances)
