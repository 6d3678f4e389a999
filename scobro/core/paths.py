#!/usr/bin/env python3
"""
paths.py
-------------------
Path defaults for the ScoBro logbook.

All locations hang off a single data directory:

    DATA_DIR/              $SCOBRO_HOME, or ~/.scobro
    ├── logbook.db         The store
    ├── logs/              Rotating log files
    └── exports/           Default destination for CSV/Markdown exports

Every value here is only a default; the CLI exposes options to override it.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_data_dir() -> Path:
    """Resolve the data directory from the environment or the home folder."""
    env_home = os.environ.get("SCOBRO_HOME")
    if env_home:
        return Path(env_home).expanduser()
    return Path.home() / ".scobro"


# ----- Data directory -----
DATA_DIR: Path = _get_data_dir()

# --- Database ---
DB_PATH = DATA_DIR / "logbook.db"

# ---- Logs & Exports ----
LOG_DIR = DATA_DIR / "logs"
EXPORT_DIR = DATA_DIR / "exports"
