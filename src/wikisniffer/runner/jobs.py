"""End-to-end run: open the browser, process the terms, summarize, close.

The run walks ``IDLE → INITIALIZING → RUNNING → SUMMARIZING → CLOSING →
TERMINATED``. A startup failure jumps from ``INITIALIZING`` to ``CLOSING``.
Every path, including SIGINT/SIGTERM, passes through ``CLOSING`` so the
browser process is never leaked.
"""

from __future__ import annotations

import json as _json
import logging
import signal
import sys
import threading
from contextlib import ExitStack, contextmanager
from enum import Enum
from functools import partial
from typing import Callable, Iterator

from rich.console import Console

from wikisniffer.browser.capture import search_and_capture
from wikisniffer.browser.session import BrowserSession
from wikisniffer.exceptions import RunInterrupted
from wikisniffer.models.results import BatchSummary
from wikisniffer.runner.batch import resolve_terms, run_batch
from wikisniffer.runner.report import print_progress, render_summary
from wikisniffer.settings.config import Settings

logger = logging.getLogger(__name__)


class RunPhase(str, Enum):
    """Lifecycle phase of a ``WikiSnifferJob``."""

    IDLE = "idle"
    INITIALIZING = "initializing"
    RUNNING = "running"
    SUMMARIZING = "summarizing"
    CLOSING = "closing"
    TERMINATED = "terminated"


@contextmanager
def interrupts_as_exceptions(signals: tuple[int, ...] = (signal.SIGINT, signal.SIGTERM)) -> Iterator[None]:
    """Turn *signals* into ``RunInterrupted`` for the duration of the block.

    Previous handlers are restored on exit. Outside the main thread, where
    handlers cannot be installed, this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _raise(signum: int, _frame: object) -> None:
        logger.warning("Received signal %d, shutting down", signum)
        raise RunInterrupted(signum)

    previous = {sig: signal.signal(sig, _raise) for sig in signals}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


class WikiSnifferJob:
    """Drives one run over a file of terms or a single term."""

    def __init__(
        self,
        settings: Settings,
        console: Console | None = None,
        *,
        as_json: bool = False,
        session_factory: Callable[..., BrowserSession] = BrowserSession,
    ) -> None:
        self.settings = settings
        self.console = console or Console()
        self.as_json = as_json
        self._session_factory = session_factory
        self.phase = RunPhase.IDLE
        self.history: list[RunPhase] = [RunPhase.IDLE]

    def _transition(self, phase: RunPhase) -> None:
        logger.debug("Run phase: %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        self.history.append(phase)

    def execute(self, target: str) -> BatchSummary:
        """Run every term resolved from *target* and return the summary.

        Raises:
            BrowserStartupError: The browser could not be launched.
            TermsFileError: *target* is a file that could not be read.
            RunInterrupted: SIGINT/SIGTERM arrived mid-run.
        """
        if self.phase is not RunPhase.IDLE:
            raise RuntimeError("WikiSnifferJob instances run once")

        self._transition(RunPhase.INITIALIZING)
        try:
            with ExitStack() as stack:
                stack.enter_context(interrupts_as_exceptions())
                try:
                    session = stack.enter_context(
                        self._session_factory(self.settings.browser, self.settings.output_dir)
                    )
                except BaseException:
                    logger.error("Browser startup failed")
                    self._transition(RunPhase.CLOSING)
                    raise
                # LIFO: recorded before the session's own close runs.
                stack.callback(self._transition, RunPhase.CLOSING)

                self._transition(RunPhase.RUNNING)
                summary = self._run(session, target)

                self._transition(RunPhase.SUMMARIZING)
                if self.as_json:
                    self.console.print_json(summary.to_json())
                else:
                    render_summary(self.console, summary)
                return summary
        finally:
            self._transition(RunPhase.TERMINATED)

    def _run(self, session: BrowserSession, target: str) -> BatchSummary:
        terms = resolve_terms(target)
        capture = partial(
            search_and_capture,
            session.page,
            output_dir=session.output_dir,
            search=self.settings.search,
            navigation_timeout_ms=self.settings.browser.timeout_ms,
        )
        return run_batch(
            terms,
            capture,
            pause_ms=self.settings.batch.pause_ms,
            wait=session.page.wait_for_timeout,
            on_progress=partial(print_progress, self.console),
        )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class _JsonFormatter(logging.Formatter):
    """One JSON object per record, for log collectors outside local runs."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return _json.dumps(entry, default=str)


def configure_logging(settings: Settings) -> None:
    """Send logs to stderr: plain text locally, JSON lines elsewhere."""
    level_name = "DEBUG" if settings.debug else settings.log_level.upper()
    level = getattr(logging, level_name, logging.INFO)

    if settings.env != "local":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_JsonFormatter())
        logging.root.handlers.clear()
        logging.root.addHandler(handler)
        logging.root.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            stream=sys.stderr,
        )

    logging.getLogger("asyncio").setLevel(logging.WARNING)
