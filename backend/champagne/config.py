from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)

VERSION = "0.3.0"
RELEASES_URL = "https://github.com/yertto/champagne/releases/tag/"

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:4321",
    "http://127.0.0.1:4321",
)

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class AppSettings:
    random_seed: int | None
    cors_origins: tuple[str, ...]
    log_level: str
    log_file: str | None


def load_settings() -> AppSettings:
    seed_raw = os.environ.get("CHAMPAGNE_RANDOM_SEED", "").strip()
    random_seed: int | None = None
    if seed_raw:
        try:
            random_seed = int(seed_raw)
        except ValueError:
            logger.warning("Invalid CHAMPAGNE_RANDOM_SEED value: %s. Ignoring it.", seed_raw)

    origins_raw = os.environ.get("CHAMPAGNE_CORS_ORIGINS", "").strip()
    cors_origins = DEFAULT_CORS_ORIGINS
    if origins_raw:
        cors_origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip())

    log_level = os.environ.get("CHAMPAGNE_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        logger.warning("Invalid CHAMPAGNE_LOG_LEVEL value: %s. Falling back to 'INFO'.", log_level)
        log_level = "INFO"

    log_file = os.environ.get("CHAMPAGNE_LOG_FILE", "").strip() or None

    return AppSettings(
        random_seed=random_seed,
        cors_origins=cors_origins,
        log_level=log_level,
        log_file=log_file,
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Settings loaded once per process; FastAPI dependency (override in tests)."""
    return load_settings()
