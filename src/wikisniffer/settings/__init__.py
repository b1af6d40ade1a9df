"""Settings package — re-exports the cached settings accessor."""

from wikisniffer.settings.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
