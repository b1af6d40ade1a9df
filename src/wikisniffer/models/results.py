"""Result models for search-and-capture runs.

``CaptureResult`` records the outcome of one term; ``BatchSummary`` is the
ordered collection a run produces. Both are immutable once built.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class CaptureResult:
    """Outcome of a single search-and-screenshot attempt."""

    term: str
    succeeded: bool
    output_path: Path | None = None
    error: str = ""
    error_screenshot: Path | None = None
    duration_s: float = 0.0

    @classmethod
    def success(cls, term: str, output_path: Path, *, duration_s: float = 0.0) -> "CaptureResult":
        return cls(term=term, succeeded=True, output_path=output_path, duration_s=duration_s)

    @classmethod
    def failure(
        cls,
        term: str,
        error: str,
        *,
        error_screenshot: Path | None = None,
        duration_s: float = 0.0,
    ) -> "CaptureResult":
        return cls(
            term=term,
            succeeded=False,
            error=error,
            error_screenshot=error_screenshot,
            duration_s=duration_s,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict suitable for JSON output."""
        return {
            "term": self.term,
            "succeeded": self.succeeded,
            "output_path": str(self.output_path) if self.output_path else None,
            "error": self.error,
            "error_screenshot": str(self.error_screenshot) if self.error_screenshot else None,
            "duration_s": round(self.duration_s, 1),
        }


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate of every ``CaptureResult`` from one run, in processing order."""

    results: tuple[CaptureResult, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def screenshots(self) -> list[str]:
        """Basenames of the screenshots written by successful captures."""
        return [r.output_path.name for r in self.results if r.succeeded and r.output_path]

    @property
    def failed_terms(self) -> list[str]:
        return [r.term for r in self.results if not r.succeeded]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict suitable for JSON output."""
        return {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "screenshots": self.screenshots,
            "failed_terms": self.failed_terms,
            "results": [r.to_dict() for r in self.results],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)
