"""Search Wikipedia for a term and screenshot the first result.

``search_and_capture`` always returns a ``CaptureResult``; per-term
failures are logged, recorded, and followed by a best-effort viewport
screenshot named ``error_<term>.png`` for debugging.
"""

from __future__ import annotations

import logging
import re
import time
from datetime import date, datetime, timezone
from pathlib import Path

from playwright.sync_api import Page

from wikisniffer.browser.navigation import resilient_goto, wait_until_settled
from wikisniffer.models.results import CaptureResult
from wikisniffer.settings.config import ScrollStep, SearchSettings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


def sanitize_term(term: str) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with ``_`` and lower-case."""
    return _UNSAFE_CHARS.sub("_", term).lower()


def screenshot_filename(term: str, today: date | None = None) -> str:
    """``<sanitized>_<YYYY-MM-DD>.png`` using the UTC date unless *today* is given."""
    stamp = (today or datetime.now(timezone.utc).date()).isoformat()
    return f"{sanitize_term(term)}_{stamp}.png"


def error_screenshot_filename(term: str) -> str:
    return f"error_{sanitize_term(term)}.png"


def scroll_page(page: Page, steps: list[ScrollStep]) -> None:
    """Wheel down the page in *steps* so lazily loaded content renders."""
    for step in steps:
        page.mouse.wheel(0, step.delta_y)
        page.wait_for_timeout(step.pause_ms)


def search_and_capture(
    page: Page,
    term: str,
    *,
    output_dir: Path,
    search: SearchSettings,
    navigation_timeout_ms: int = 30_000,
    today: date | None = None,
) -> CaptureResult:
    """Search for *term*, open the first result, scroll, and take a full-page screenshot.

    Args:
        page: The session's shared Playwright page.
        term: Search term, already trimmed.
        output_dir: Existing directory to write screenshots into.
        search: Site URL, selectors, timeouts, and scroll gestures.
        navigation_timeout_ms: Per-attempt timeout for page loads.
        today: Date stamp override for the filename.

    Returns:
        A successful ``CaptureResult`` holding the screenshot path, or a
        failed one holding the error message.
    """
    logger.info('Searching for: "%s"', term)
    start = time.monotonic()

    try:
        resilient_goto(page, search.base_url, timeout_ms=navigation_timeout_ms)

        page.fill(search.search_selector, term)
        page.keyboard.press(search.submit_key)

        page.wait_for_selector(search.result_selector, timeout=search.result_timeout_ms)
        page.click(search.result_selector)

        wait_until_settled(page, state=search.load_state, timeout_ms=navigation_timeout_ms)
        logger.info("Loaded page: %s", page.url)

        logger.debug("Scrolling %d steps", len(search.scroll_steps))
        scroll_page(page, search.scroll_steps)

        output_path = Path(output_dir) / screenshot_filename(term, today)
        page.screenshot(path=str(output_path), full_page=True)
        logger.info("Screenshot saved: %s", output_path.name)

        return CaptureResult.success(term, output_path, duration_s=time.monotonic() - start)

    except Exception as e:
        logger.error('Error processing "%s": %s', term, e)
        error_path = _capture_error_screenshot(page, term, Path(output_dir))
        return CaptureResult.failure(
            term,
            str(e),
            error_screenshot=error_path,
            duration_s=time.monotonic() - start,
        )


def _capture_error_screenshot(page: Page, term: str, output_dir: Path) -> Path | None:
    """Save the current viewport for debugging; never raises."""
    error_path = output_dir / error_screenshot_filename(term)
    try:
        page.screenshot(path=str(error_path), full_page=False)
    except Exception as e:
        logger.warning("Could not take error screenshot for %r: %s", term, e)
        return None
    logger.info("Error screenshot saved: %s", error_path.name)
    return error_path
