"""Browser lifecycle: one Playwright driver, one browser, one context, one page.

Use ``BrowserSession`` as a context manager so the browser is closed on
every exit path::

    with BrowserSession(settings.browser, settings.output_dir) as session:
        search_and_capture(session.page, "Boxing", ...)
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from playwright.sync_api import Browser, BrowserContext, Error as PlaywrightError, Page, Playwright, sync_playwright

from wikisniffer.exceptions import BrowserStartupError
from wikisniffer.settings.config import BrowserSettings

logger = logging.getLogger(__name__)


class BrowserSession:
    """Owns the Chromium process and the single page every capture shares."""

    def __init__(self, browser_settings: BrowserSettings, output_dir: Path) -> None:
        self.browser_settings = browser_settings
        self.output_dir = Path(output_dir)
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("BrowserSession.initialize() has not been called")
        return self._page

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    def initialize(self) -> None:
        """Launch Chromium, open a context and page, and ensure the output dir exists.

        Raises:
            BrowserStartupError: Playwright could not start or launch the browser.
        """
        cfg = self.browser_settings
        logger.info("Launching browser (headless=%s, slow_mo=%dms)", cfg.headless, cfg.slow_mo_ms)
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=cfg.headless, slow_mo=cfg.slow_mo_ms)
            self._context = self._browser.new_context(
                viewport={"width": cfg.viewport_width, "height": cfg.viewport_height},
            )
            self._context.set_default_timeout(cfg.timeout_ms)
            self._page = self._context.new_page()
        except PlaywrightError as exc:
            raise BrowserStartupError(f"Browser failed to launch: {exc}") from exc

        if not self.output_dir.is_dir():
            logger.info("Creating snapshots directory: %s", self.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def close(self) -> None:
        """Close the browser and stop the driver if they were started.

        Safe to call more than once and after a partial ``initialize``.
        """
        browser, playwright = self._browser, self._playwright
        self._browser = self._context = self._page = None
        self._playwright = None
        try:
            if browser is not None:
                logger.info("Closing browser")
                browser.close()
        finally:
            if playwright is not None:
                playwright.stop()

    def __enter__(self) -> "BrowserSession":
        try:
            self.initialize()
        except BaseException:
            self.close()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
