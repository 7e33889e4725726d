"""
Path configuration for KJV Guard.
"""

from pathlib import Path

# Project root is one level up from kjvguard/
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
REPORTS_DIR = PROJECT_ROOT / "reports"
DEFAULT_CORPUS_PATH = DATA_DIR / "scripture-kjv.json"
JOURNAL_PATH = DATA_DIR / "journal.json"


def ensure_basic_dirs() -> None:
    """
    Ensure essential directories exist:
    - data/
    - reports/
    """
    DATA_DIR.mkdir(exist_ok=True)
    REPORTS_DIR.mkdir(exist_ok=True)
