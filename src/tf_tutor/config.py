"""Application configuration settings.

All settings can be overridden via environment variables.

Environment Variables:
    TF_TUTOR_DB_PATH: SQLite file holding progress and the cached bank
        Default: ~/.tf_tutor/tutor.db

    TF_TUTOR_BANK_PATH: Question bank file (.json, .yaml or .yml)
        Default: the sample bank shipped in tf_tutor/content/questions.json

    TF_TUTOR_BOOST_FACTOR: How strongly missed questions are favoured
        Default: 1.5
        Values below 1.1 are raised to 1.1 at selection time.

    ENVIRONMENT: Deployment environment name
        Default: development
        Affects: logging format (JSON lines in production)

    LOG_LEVEL: Logging verbosity level
        Default: WARNING, so log output does not interleave with the quiz
        Options: DEBUG, INFO, WARNING, ERROR, CRITICAL

Usage:
    >>> from tf_tutor.config import settings
    >>> print(settings.DB_PATH)
"""
import math
import os
from pathlib import Path

CONTENT_DIR = Path(__file__).parent / "content"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    try:
        value = float(raw) if raw else default
    except ValueError:
        return default
    return value if math.isfinite(value) else default


class Settings:
    """Settings loaded from environment variables."""

    DB_PATH: str = os.getenv("TF_TUTOR_DB_PATH", str(Path.home() / ".tf_tutor" / "tutor.db"))
    """Location of the SQLite key/value store."""

    BANK_PATH: str = os.getenv("TF_TUTOR_BANK_PATH", str(CONTENT_DIR / "questions.json"))
    """Question bank read when no cached copy exists."""

    BOOST_FACTOR: float = _float_env("TF_TUTOR_BOOST_FACTOR", 1.5)
    """Bias toward previously missed questions."""

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "")
    """Logging level. Empty string means WARNING."""

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
