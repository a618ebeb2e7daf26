"""
Central configuration loader.
Reads from environment variables (via .env); validates numeric values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# ---------------------------------------------------------------------------
# Load .env from repo root (if present)
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")


def _get(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    val = os.getenv(key, default)
    if required and not val:
        raise EnvironmentError(f"Missing required environment variable: {key}")
    return val


def _get_int(key: str, default: int) -> int:
    raw = _get(key, default=str(default))
    try:
        return int(raw)  # type: ignore[arg-type]
    except ValueError:
        raise EnvironmentError(f"Environment variable {key} must be an integer, got {raw!r}")


# ---------------------------------------------------------------------------
# Database config
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DatabaseConfig:
    path: Path
    max_retries: int
    base_delay: float  # seconds

    @property
    def is_memory(self) -> bool:
        return str(self.path) == ":memory:"


def get_database_config() -> DatabaseConfig:
    raw_path = _get("COURSELOAD_DB_PATH")
    return DatabaseConfig(
        path=Path(raw_path) if raw_path else get_db_path(),
        max_retries=_get_int("COURSELOAD_DB_MAX_RETRIES", 5),
        base_delay=_get_int("COURSELOAD_DB_RETRY_DELAY_MS", 100) / 1000.0,
    )


def get_log_level() -> str:
    return (_get("COURSELOAD_LOG_LEVEL", default="INFO") or "INFO").upper()


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
def get_db_path() -> Path:
    return _REPO_ROOT / "data" / "hacknh.db"
