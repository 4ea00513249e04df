"""Global configuration with environment variable overrides"""

import logging
import os
from typing import List, Optional

DEFAULT_STONES_PER_PIT = int(os.getenv("MANCALA_STONES_PER_PIT", "7"))
DEFAULT_MAX_DEPTH = int(os.getenv("MANCALA_MAX_DEPTH", "8"))

LOG_LEVEL = os.getenv("MANCALA_LOG_LEVEL", "INFO")

HOST = os.getenv("MANCALA_HOST", "0.0.0.0")
PORT = int(os.getenv("MANCALA_PORT", "8000"))

_DEFAULT_ORIGINS = ",".join([
    "http://localhost:5173",   # dev UI
    "http://127.0.0.1:5173",
    "http://localhost:8080",
    "http://127.0.0.1:8080",
])


def cors_origins() -> List[str]:
    raw = os.getenv("MANCALA_CORS_ORIGINS", _DEFAULT_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


def setup_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
