"""Sequential multi-term processing.

Terms come from a UTF-8 text file (one per line) or, when the argument is
not a readable file, from the argument itself. Each term is captured in
order with a fixed pause between items to keep the load on Wikipedia low.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Callable

from wikisniffer.exceptions import TermsFileError
from wikisniffer.models.results import BatchSummary, CaptureResult

logger = logging.getLogger(__name__)

CaptureFn = Callable[[str], CaptureResult]
WaitFn = Callable[[int], None]
ProgressFn = Callable[[int, int, str], None]


# ---------------------------------------------------------------------------
# Term loading
# ---------------------------------------------------------------------------


def is_terms_file(target: str | Path) -> bool:
    """True when *target* names an existing regular file this process can read."""
    path = Path(target)
    try:
        return path.is_file() and os.access(path, os.R_OK)
    except (OSError, ValueError):
        # Over-long names or embedded NULs: treat as a literal term.
        return False


def load_terms(path: str | Path) -> list[str]:
    """Read one term per line, trimmed, skipping blank lines.

    Order and duplicates are preserved.

    Raises:
        TermsFileError: The file cannot be read or is not valid UTF-8.
    """
    logger.info("Reading terms from: %s", path)
    try:
        content = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise TermsFileError(str(path), str(e)) from e

    terms = [line.strip() for line in content.split("\n")]
    terms = [t for t in terms if t]
    logger.info("Found %d terms to process", len(terms))
    return terms


def resolve_terms(target: str) -> list[str]:
    """Terms from *target* if it is a readable file, otherwise *target* itself."""
    if is_terms_file(target):
        return load_terms(target)
    term = target.strip()
    return [term] if term else []


# ---------------------------------------------------------------------------
# Batch execution
# ---------------------------------------------------------------------------


def _sleep_ms(ms: int) -> None:
    time.sleep(ms / 1000)


def run_batch(
    terms: list[str],
    capture: CaptureFn,
    *,
    pause_ms: int = 2_000,
    wait: WaitFn | None = None,
    on_progress: ProgressFn | None = None,
) -> BatchSummary:
    """Capture every term in order, pausing *pause_ms* between items.

    Args:
        terms: Terms to process, in order.
        capture: Called once per term; must not raise for per-term failures.
        pause_ms: Delay inserted between consecutive captures (not after the last).
        wait: Performs the pause; defaults to ``time.sleep``.
        on_progress: Called as ``(index, total, term)`` before each capture.

    Returns:
        ``BatchSummary`` with one result per term.
    """
    wait = wait or _sleep_ms
    total = len(terms)
    results: list[CaptureResult] = []

    if total:
        logger.info("Batch starting: %d terms, pause=%dms", total, pause_ms)

    for i, term in enumerate(terms, 1):
        if on_progress:
            on_progress(i, total, term)
        logger.debug("[%d/%d] Processing: %s", i, total, term)

        result = capture(term)
        results.append(result)

        if result.succeeded:
            logger.info("[%d/%d] Success: %s (%.1fs)", i, total, term, result.duration_s)
        else:
            logger.error("[%d/%d] Failed: %s — %s", i, total, term, result.error)

        if i < total:
            logger.debug("Waiting %dms before next search", pause_ms)
            wait(pause_ms)

    summary = BatchSummary(results=tuple(results))
    if total:
        logger.info(
            "Batch complete: %d total, %d succeeded, %d failed",
            summary.total, summary.succeeded, summary.failed,
        )
    return summary
