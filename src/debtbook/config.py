"""Configuration: paths, environment variables and tunables."""

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Database location. --db-path on the CLI overrides DEBTBOOK_DB_PATH.
# ---------------------------------------------------------------------------
DB_PATH_ENV = "DEBTBOOK_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".debtbook"
DEFAULT_DB_NAME = "debtbook.db"

# ---------------------------------------------------------------------------
# Autosave debounce interval in seconds
# ---------------------------------------------------------------------------
AUTOSAVE_DELAY = float(os.environ.get("DEBTBOOK_AUTOSAVE_DELAY", "0.35"))

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("DEBTBOOK_LOG_LEVEL", "WARNING").upper()
