"""
shapecheck Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Immutable library settings."""

    # --- Versioning ---
    CORE_VERSION: str = "1.0.0"

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("SHAPECHECK_LOG_LEVEL", "WARNING").upper()
    LOG_FORMAT: str = os.getenv("SHAPECHECK_LOG_FORMAT", "text")  # "json" or "text"

    # When set, every mismatch raised by check() is logged at DEBUG
    LOG_MISMATCHES: bool = _env_flag("SHAPECHECK_LOG_MISMATCHES")


settings = Settings()
