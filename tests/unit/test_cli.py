"""Unit tests for the wikisniffer CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from wikisniffer.cli.app import app
from wikisniffer.exceptions import BrowserStartupError, RunInterrupted, TermsFileError
from wikisniffer.models.results import BatchSummary, CaptureResult

runner = CliRunner()


@pytest.fixture()
def mock_job():
    """Patch ``WikiSnifferJob`` and logging setup; yields the job class mock."""
    with patch("wikisniffer.runner.jobs.WikiSnifferJob") as job_cls, patch(
        "wikisniffer.runner.jobs.configure_logging"
    ):
        job_cls.return_value.execute.return_value = BatchSummary(
            results=(CaptureResult.success("Boxing", Path("/s/boxing_2026-10-19.png")),)
        )
        yield job_cls


class TestUsage:
    def test_run_without_target_prints_usage(self, mock_job) -> None:
        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert "Usage:" in result.stdout
        assert "wikisniffer run <terms-file>" in result.stdout
        mock_job.assert_not_called()

    def test_no_subcommand_shows_help(self) -> None:
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "run" in result.stdout

    def test_help_lists_every_config_layer(self) -> None:
        from wikisniffer.cli import app as app_module

        layers = "settings.default.toml -> settings.<env>.toml -> settings.local.toml"
        assert layers in app_module.APP_HELP
        assert layers in app_module.__doc__

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.stdout.startswith("wikisniffer ")


class TestRunCommand:
    def test_success_exits_zero(self, mock_job) -> None:
        result = runner.invoke(app, ["run", "Boxing"])

        assert result.exit_code == 0
        mock_job.return_value.execute.assert_called_once_with("Boxing")

    def test_any_failed_term_exits_one(self, mock_job) -> None:
        mock_job.return_value.execute.return_value = BatchSummary(
            results=(CaptureResult.failure("Zzqx", "Timeout"),)
        )

        result = runner.invoke(app, ["run", "Zzqx"])

        assert result.exit_code == 1

    def test_startup_failure_exits_two(self, mock_job) -> None:
        mock_job.return_value.execute.side_effect = BrowserStartupError("no chromium")

        result = runner.invoke(app, ["run", "Boxing"])

        assert result.exit_code == 2

    def test_terms_file_error_exits_one(self, mock_job) -> None:
        mock_job.return_value.execute.side_effect = TermsFileError("terms.txt", "invalid utf-8")

        result = runner.invoke(app, ["run", "terms.txt"])

        assert result.exit_code == 1

    def test_interrupt_exits_130(self, mock_job) -> None:
        mock_job.return_value.execute.side_effect = RunInterrupted(2)

        result = runner.invoke(app, ["run", "Boxing"])

        assert result.exit_code == 130

    def test_flags_override_settings(self, mock_job, tmp_path: Path) -> None:
        out = tmp_path / "shots"

        result = runner.invoke(app, ["run", "Boxing", "--headless", "--pause-ms", "0", "-o", str(out), "--json"])

        assert result.exit_code == 0
        settings = mock_job.call_args.args[0]
        assert settings.browser.headless is True
        assert settings.batch.pause_ms == 0
        assert settings.output_dir == out.resolve()
        assert mock_job.call_args.kwargs["as_json"] is True

    def test_flags_do_not_leak_into_cached_settings(self, mock_job) -> None:
        from wikisniffer.settings import get_settings

        runner.invoke(app, ["run", "Boxing", "--headless"])

        assert get_settings().browser.headless is False


class TestSettingsCommand:
    def test_show_dumps_json(self) -> None:
        result = runner.invoke(app, ["settings", "show"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["search"]["base_url"] == "https://www.wikipedia.org"
        assert data["batch"]["pause_ms"] == 2000
