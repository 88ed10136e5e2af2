"""Core constants used across Keeplog modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".keeplog")
DEFAULT_JSON_INDENT = 2
LOG_FILE_SUFFIX = ".json"
TEMP_FILE_SUFFIX = ".tmp"
FILE_ENCODING = "utf-8"
SAVE_OPERATION = "save"
LOAD_OPERATION = "load"
