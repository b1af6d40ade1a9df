"""Data models shared by the browser and runner layers."""

from wikisniffer.models.results import BatchSummary, CaptureResult

__all__ = ["BatchSummary", "CaptureResult"]
