"""
Status and health-report helpers for KJV Guard.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from .config import APP_NAME, TRANSLATION, __version__, resolve_expected_digest
from .context import ScriptureContext
from .loader import compute_digest, corpus_stats
from .util import info, ok, warn


def get_corpus_digest(path: Path) -> Optional[str]:
    """
    SHA-256 of the corpus at `path`, or None if it cannot be read.
    """
    try:
        return compute_digest(path)
    except OSError:
        return None


def status_summary(ctx: ScriptureContext) -> Dict[str, object]:
    books, chapters, verses = corpus_stats(ctx.corpus)
    return {
        "app": APP_NAME,
        "version": __version__,
        "translation": TRANSLATION,
        "source": ctx.source,
        "books": books,
        "chapters": chapters,
        "verses": verses,
        "aliases": len(ctx.index),
    }


def print_status(ctx: ScriptureContext) -> None:
    """
    Print a human-readable status report:

    - corpus source and SHA-256 (checked against the configured lock)
    - book / chapter / verse counts
    - number of book aliases
    """
    summary = status_summary(ctx)
    info(f"{APP_NAME} v{__version__} ({TRANSLATION})")
    info(f"Corpus: {ctx.source}")

    source = Path(ctx.source)
    digest = get_corpus_digest(source) if source.exists() else None
    expected = resolve_expected_digest()
    if digest is None:
        warn("Corpus digest: unavailable (in-memory or unreadable source).")
    elif expected is None:
        info(f"Corpus digest: {digest} (no integrity lock configured)")
    elif digest == expected.lower():
        ok(f"Corpus digest: {digest} (matches lock)")
    else:
        warn(f"Corpus digest: {digest} (lock expects {expected})")

    info(
        f"Contents: {summary['books']} book(s), {summary['chapters']} chapter(s), "
        f"{summary['verses']} verse(s)"
    )
    info(f"Book aliases: {summary['aliases']}")
