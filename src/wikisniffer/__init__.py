"""WikiSniffer — Wikipedia search and full-page screenshot capture."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("wikisniffer")
except Exception:
    __version__ = "0.0.0"
