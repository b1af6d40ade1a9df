"""WikiSniffer exception hierarchy."""

from __future__ import annotations


class WikiSnifferError(Exception):
    """Base exception for all WikiSniffer errors."""


class BrowserStartupError(WikiSnifferError):
    """Raised when the browser process, context, or page cannot be created."""


class NavigationError(WikiSnifferError):
    """Raised when a navigation fails for a reason retrying cannot fix.

    Attributes:
        url: The URL that failed to load.
        reason: Short human-readable cause (e.g. ``name not resolved``).
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class TermsFileError(WikiSnifferError):
    """Raised when a terms file exists but cannot be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read terms file {path}: {reason}")


class RunInterrupted(BaseException):
    """Raised from a signal handler to unwind a run through browser teardown.

    Derives from ``BaseException`` so per-term ``except Exception`` blocks
    do not contain it.
    """

    def __init__(self, signum: int) -> None:
        self.signum = signum
        super().__init__(f"Interrupted by signal {signum}")
