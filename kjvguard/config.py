"""
Project configuration and versioning for KJV Guard.

Settings resolve in order: explicit argument, environment variable,
built-in default.

Environment variables:
- KJVGUARD_CORPUS        : corpus file or directory
- KJVGUARD_CORPUS_SHA256 : expected SHA-256 of the corpus bytes
- KJVGUARD_JOURNAL       : journal JSON file
- KJVGUARD_HOST / PORT   : HTTP server bind address
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .paths import DEFAULT_CORPUS_PATH, JOURNAL_PATH

APP_NAME = "KJV Guard"
__version__ = "0.3.0"

TRANSLATION = "KJV"

# Optional integrity lock: run `guard.py digest` and paste the value here.
KNOWN_HASH = ""

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def resolve_corpus_path(arg: Optional[str] = None) -> Path:
    if arg:
        return Path(arg)
    env = os.getenv("KJVGUARD_CORPUS", "")
    if env:
        return Path(env)
    return DEFAULT_CORPUS_PATH


def resolve_expected_digest(arg: Optional[str] = None) -> Optional[str]:
    """
    Return the expected corpus digest, or None when no check is configured.
    """
    value = arg or os.getenv("KJVGUARD_CORPUS_SHA256", "") or KNOWN_HASH
    value = value.strip()
    return value or None


def resolve_journal_path(arg: Optional[str] = None) -> Path:
    if arg:
        return Path(arg)
    env = os.getenv("KJVGUARD_JOURNAL", "")
    if env:
        return Path(env)
    return JOURNAL_PATH


def server_host() -> str:
    return os.getenv("KJVGUARD_HOST", DEFAULT_HOST)


def server_port() -> int:
    try:
        return int(os.getenv("PORT", str(DEFAULT_PORT)))
    except ValueError:
        return DEFAULT_PORT
