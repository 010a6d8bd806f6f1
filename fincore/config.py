"""Configuration for the finance engine.

Paths and defaults live here as module-level constants, each one
overridable through an environment variable.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("FINCORE_DATA_DIR", _PROJECT_ROOT / "data"))

# Seed transactions and budgets for the dashboard
SEED_PATH = Path(os.getenv("FINCORE_SEED_PATH", DATA_DIR / "seed.json"))

LOG_LEVEL = os.getenv("FINCORE_LOG_LEVEL", "WARNING")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_categories_file() -> Optional[Path]:
    """Return the custom category file, or None to use the built-in catalog.

    Read at call time so the registry picks up the value present when it is
    first built.
    """
    value = os.getenv("FINCORE_CATEGORIES_FILE")
    return Path(value) if value else None


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and the dashboard."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
