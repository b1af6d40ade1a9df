"""Unit tests for wikisniffer.browser.navigation — goto and load-state fallbacks."""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest
from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeout

from wikisniffer.browser.navigation import _build_fallback_chain, resilient_goto, wait_until_settled
from wikisniffer.exceptions import NavigationError


class TestBuildFallbackChain:
    def test_networkidle_produces_full_chain(self) -> None:
        assert _build_fallback_chain("networkidle") == ["networkidle", "load", "domcontentloaded"]

    def test_load_skips_networkidle(self) -> None:
        assert _build_fallback_chain("load") == ["load", "domcontentloaded"]

    def test_unknown_strategy_prepends_to_chain(self) -> None:
        assert _build_fallback_chain("commit") == ["commit", "networkidle", "load", "domcontentloaded"]


class TestResilientGoto:
    """Tests for resilient_goto."""

    def test_success_on_first_try(self) -> None:
        page = MagicMock()
        sentinel = MagicMock(name="response")
        page.goto.return_value = sentinel

        assert resilient_goto(page, "https://www.wikipedia.org", timeout_ms=5000) is sentinel
        page.goto.assert_called_once_with("https://www.wikipedia.org", wait_until="networkidle", timeout=5000)

    def test_relaxes_strategy_on_timeout(self) -> None:
        page = MagicMock()
        sentinel = MagicMock(name="response")
        page.goto.side_effect = [PlaywrightTimeout("t1"), PlaywrightTimeout("t2"), sentinel]

        assert resilient_goto(page, "https://www.wikipedia.org", timeout_ms=5000) is sentinel
        assert [c.kwargs["wait_until"] for c in page.goto.call_args_list] == [
            "networkidle",
            "load",
            "domcontentloaded",
        ]

    def test_raises_when_all_strategies_time_out(self) -> None:
        page = MagicMock()
        page.goto.side_effect = PlaywrightTimeout("all failed")

        with pytest.raises(PlaywrightTimeout):
            resilient_goto(page, "https://www.wikipedia.org")

        assert page.goto.call_count == 3

    def test_unreachable_host_raises_navigation_error_without_retry(self) -> None:
        page = MagicMock()
        page.goto.side_effect = PlaywrightError("net::ERR_CONNECTION_REFUSED at https://www.wikipedia.org/")

        with pytest.raises(NavigationError) as exc_info:
            resilient_goto(page, "https://www.wikipedia.org")

        assert exc_info.value.reason == "connection refused"
        assert exc_info.value.url == "https://www.wikipedia.org"
        page.goto.assert_called_once()

    def test_other_playwright_errors_reraised(self) -> None:
        page = MagicMock()
        page.goto.side_effect = PlaywrightError("Target closed")

        with pytest.raises(PlaywrightError, match="Target closed"):
            resilient_goto(page, "https://www.wikipedia.org")

        page.goto.assert_called_once()


class TestWaitUntilSettled:
    """Tests for wait_until_settled."""

    def test_returns_first_satisfied_state(self) -> None:
        page = MagicMock()

        assert wait_until_settled(page, timeout_ms=1000) == "networkidle"
        page.wait_for_load_state.assert_called_once_with("networkidle", timeout=1000)

    def test_falls_back_to_load(self) -> None:
        page = MagicMock()
        page.wait_for_load_state.side_effect = [PlaywrightTimeout("idle"), None]

        assert wait_until_settled(page, timeout_ms=1000) == "load"
        assert page.wait_for_load_state.call_args_list == [
            call("networkidle", timeout=1000),
            call("load", timeout=1000),
        ]

    def test_raises_when_nothing_settles(self) -> None:
        page = MagicMock()
        page.wait_for_load_state.side_effect = PlaywrightTimeout("never")

        with pytest.raises(PlaywrightTimeout):
            wait_until_settled(page)

        assert page.wait_for_load_state.call_count == 3

    def test_commit_is_skipped(self) -> None:
        page = MagicMock()

        assert wait_until_settled(page, state="commit") == "networkidle"
