"""Configuration loader for WikiSniffer using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (WIKISNIFFER_* with __ for nesting)
  3. settings.local.toml
  4. settings.<env>.toml
  5. settings.default.toml
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("WIKISNIFFER_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "WIKISNIFFER_ENV"
DEFAULT_ENV = "local"


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class ScrollStep(BaseModel):
    """One mouse-wheel gesture followed by a pause."""

    delta_y: int
    pause_ms: int


class BrowserSettings(BaseSettings):
    """Playwright browser settings."""

    model_config = SettingsConfigDict(env_prefix="WIKISNIFFER_BROWSER__")

    headless: bool = False
    slow_mo_ms: int = 300
    timeout_ms: int = 30_000
    viewport_width: int = 1280
    viewport_height: int = 800


class SearchSettings(BaseSettings):
    """Where to search and how to walk from the results to an article."""

    model_config = SettingsConfigDict(env_prefix="WIKISNIFFER_SEARCH__")

    base_url: str = "https://www.wikipedia.org"
    search_selector: str = "input[name=search]"
    submit_key: str = "Enter"
    result_selector: str = "#mw-content-text a"
    result_timeout_ms: int = 10_000
    load_state: Literal["load", "domcontentloaded", "networkidle"] = "networkidle"
    scroll_steps: list[ScrollStep] = Field(
        default_factory=lambda: [
            ScrollStep(delta_y=1500, pause_ms=800),
            ScrollStep(delta_y=1500, pause_ms=800),
            ScrollStep(delta_y=1000, pause_ms=500),
        ]
    )


class OutputSettings(BaseSettings):
    """Screenshot output configuration."""

    model_config = SettingsConfigDict(env_prefix="WIKISNIFFER_OUTPUT__")

    dir: str = "snapshots"


class BatchSettings(BaseSettings):
    """Pacing for multi-term runs."""

    model_config = SettingsConfigDict(env_prefix="WIKISNIFFER_BATCH__")

    pause_ms: int = 2_000


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root WikiSniffer settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="WIKISNIFFER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    debug: bool = False
    log_level: str = "INFO"

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    batch: BatchSettings = Field(default_factory=BatchSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Anchor a relative output directory to the working directory."""
        if not Path(self.output.dir).is_absolute():
            self.output.dir = str(Path.cwd() / self.output.dir)
        return self

    @property
    def output_dir(self) -> Path:
        return Path(self.output.dir)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
