"""
Project-wide configuration and directory structure.

Module Contents:
    APP_NAME: Application name for display purposes
    DATA_DIR: Main data directory (``$CODELINGUA_HOME``, default ~/.codelingua)
    DICTIONARY_DIR: Directory holding dictionary JSON files
    DEFAULT_SOURCE_LANG / DEFAULT_TARGET_LANG: Language pair used by the CLI
    DEFAULT_SCOPE_PRESET: Translation scope preset used when none is given
    INITIAL_DICTIONARY_VERSION: Version of a freshly created dictionary

Directories are created on demand by ``ensure_data_dirs()``.

Example:
    >>> from codelingua.config import dictionary_path
    >>> dictionary_path("github.com:acme/app", "ja").name
    'github_com_acme_app_ja.json'
"""

import logging
import os
import re
from pathlib import Path

# Application name for display and identification
APP_NAME = "codelingua"

# Main data directory
DATA_DIR = Path(os.environ.get("CODELINGUA_HOME", Path.home() / ".codelingua")).expanduser()

# Dictionary JSON files, one per origin and language
DICTIONARY_DIR = DATA_DIR / "dictionaries"

# English is the pivot language of every dictionary
PIVOT_LANG = "en"

DEFAULT_SOURCE_LANG = "en"
DEFAULT_TARGET_LANG = os.environ.get("CODELINGUA_TARGET_LANG", "ja")

DEFAULT_SCOPE_PRESET = "default"

INITIAL_DICTIONARY_VERSION = "1.0.0"


def ensure_data_dirs() -> None:
    for d in (DATA_DIR, DICTIONARY_DIR):
        d.mkdir(parents=True, exist_ok=True)


def dictionary_path(origin: str, language: str) -> Path:
    """File path for an origin's dictionary in one language."""
    sanitized = re.sub(r"_+", "_", re.sub(r"[^a-zA-Z0-9]", "_", origin)).lower()
    return DICTIONARY_DIR / f"{sanitized}_{language}.json"


def log_level() -> int:
    """Log level from ``CODELINGUA_LOG_LEVEL`` (name or number), default WARNING."""
    value = os.environ.get("CODELINGUA_LOG_LEVEL", "WARNING").strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.WARNING
