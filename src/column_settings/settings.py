"""Global configuration and constants for column settings."""

from __future__ import annotations

import os
from typing import Final

MIN_COLUMN_WIDTH: Final = 50
MAX_COLUMN_WIDTH: Final = 400
DEFAULT_COLUMN_WIDTH: Final = 150  # used when a column carries no explicit width

HISTORY_CAPACITY: Final = 10  # undo snapshots kept per editing session

DEFAULT_NAMESPACE: Final = "columnSettings"
DATA_DIR: Final = os.environ.get("COLUMN_SETTINGS_DATA_DIR", "data")
