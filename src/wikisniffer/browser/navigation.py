"""Page loads with a wait-strategy fallback.

Wikipedia article pages occasionally keep a beacon or lazy image request
open long enough that ``networkidle`` never fires inside the timeout.
Both helpers here try the strict strategy first and step down to ``load``
and then ``domcontentloaded`` on timeout. Errors that no wait strategy can
fix (DNS failure, refused connection, TLS) surface as ``NavigationError``
immediately.
"""

from __future__ import annotations

import logging
from typing import Literal

from playwright.sync_api import Error as PlaywrightError, Page, Response, TimeoutError as PlaywrightTimeout

from wikisniffer.exceptions import NavigationError

logger = logging.getLogger(__name__)

# Playwright error substrings that indicate the target is unreachable.
_NON_RETRYABLE_ERRORS: tuple[str, ...] = (
    "ERR_NAME_NOT_RESOLVED",
    "ERR_INTERNET_DISCONNECTED",
    "ERR_CONNECTION_REFUSED",
    "ERR_CONNECTION_RESET",
    "ERR_ADDRESS_UNREACHABLE",
    "ERR_SSL_PROTOCOL_ERROR",
    "ERR_CERT_AUTHORITY_INVALID",
)

WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]

_FALLBACK_STRATEGY: list[WaitUntil] = ["networkidle", "load", "domcontentloaded"]


def resilient_goto(
    page: Page,
    url: str,
    *,
    timeout_ms: int = 30_000,
    wait_until: WaitUntil = "networkidle",
) -> Response | None:
    """Navigate to *url*, relaxing *wait_until* each time a strategy times out.

    Args:
        page: Playwright page instance.
        url: Target URL.
        timeout_ms: Timeout per attempt in milliseconds.
        wait_until: Preferred initial wait strategy.

    Returns:
        The main-frame ``Response``, or ``None`` for same-document navigations.

    Raises:
        NavigationError: The target is unreachable.
        PlaywrightTimeout: Every strategy in the chain timed out.
    """
    last_error: PlaywrightTimeout | None = None
    for strategy in _build_fallback_chain(wait_until):
        try:
            logger.debug("goto %s (wait_until=%s, timeout=%dms)", url, strategy, timeout_ms)
            return page.goto(url, wait_until=strategy, timeout=timeout_ms)
        except PlaywrightError as exc:
            _raise_if_unreachable(exc, url)
            if not isinstance(exc, PlaywrightTimeout):
                raise
            logger.warning("goto %s timed out with wait_until=%s, relaxing", url, strategy)
            last_error = exc

    raise last_error  # type: ignore[misc]


def wait_until_settled(
    page: Page,
    *,
    state: WaitUntil = "networkidle",
    timeout_ms: int = 30_000,
) -> WaitUntil:
    """Block until the current page reaches *state* or a weaker load state.

    Returns:
        The strategy that was satisfied.

    Raises:
        PlaywrightTimeout: No strategy in the chain was reached.
    """
    last_error: PlaywrightTimeout | None = None
    for strategy in _build_fallback_chain(state):
        if strategy == "commit":
            # wait_for_load_state has no commit state; the click already committed.
            continue
        try:
            page.wait_for_load_state(strategy, timeout=timeout_ms)
            return strategy
        except PlaywrightTimeout as exc:
            logger.warning("Page %s did not reach %s, relaxing", page.url, strategy)
            last_error = exc

    raise last_error  # type: ignore[misc]


def _raise_if_unreachable(exc: PlaywrightError, url: str) -> None:
    message = str(exc)
    for pattern in _NON_RETRYABLE_ERRORS:
        if pattern in message:
            reason = pattern.replace("ERR_", "").replace("_", " ").lower()
            logger.warning("Navigation to %s failed (non-retryable): %s", url, pattern)
            raise NavigationError(url, reason) from exc


def _build_fallback_chain(preferred: WaitUntil) -> list[WaitUntil]:
    """Return the fallback chain starting from *preferred*.

    A strategy outside the default chain is tried first, then the whole chain.
    """
    if preferred in _FALLBACK_STRATEGY:
        return _FALLBACK_STRATEGY[_FALLBACK_STRATEGY.index(preferred):]
    return [preferred, *_FALLBACK_STRATEGY]
