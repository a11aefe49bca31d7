"""Runtime settings read from the environment (and an optional .env file)."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = "./data/sources-cache.sqlite"
DEFAULT_USER_AGENT = "FamilyTreeResearch/1.0"


def _f(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _s(name: str, default: str) -> str:
    return os.getenv(name) or default


@dataclass(frozen=True)
class Settings:
    db_path: Path = field(default_factory=lambda: Path(_s("RESEARCH_SOURCES_DB_PATH", DEFAULT_DB_PATH)))
    http_timeout: float = field(default_factory=lambda: _f("RESEARCH_SOURCES_HTTP_TIMEOUT", 30.0))
    # None disables the orchestrator-level per-source timeout
    source_timeout: float | None = field(default_factory=lambda: _f("RESEARCH_SOURCES_SOURCE_TIMEOUT", None))
    user_agent: str = field(default_factory=lambda: _s("RESEARCH_SOURCES_USER_AGENT", DEFAULT_USER_AGENT))
    log_level: str = field(default_factory=lambda: _s("RESEARCH_SOURCES_LOG_LEVEL", "INFO").upper())


def load_settings() -> Settings:
    """Load settings, letting a local .env file fill in unset variables."""
    load_dotenv()
    return Settings()
