"""
Process-wide scripture context for KJV Guard.

The corpus and its book index are built once, then shared read-only by
every lookup. Public API:

- get_context()      -> ScriptureContext (built lazily on first call)
- prewarm()          -> build now, e.g. at server startup
- configure(...)     -> choose corpus path / digest for the lazy build
- reload_context(...) -> build a new context and swap it in
- set_context(ctx)   -> install a prebuilt context

Only the one-time build takes the lock. A reload builds the new context
first and then replaces the reference, so readers holding the old one
keep a consistent snapshot.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .config import resolve_corpus_path, resolve_expected_digest
from .index import BookIndex, build_book_index
from .loader import load_corpus, normalize_corpus
from .model import Corpus
from .util import info


@dataclass(frozen=True)
class ScriptureContext:
    corpus: Corpus
    index: BookIndex
    source: str

    @classmethod
    def from_corpus(cls, corpus: Corpus, source: str = "(memory)") -> "ScriptureContext":
        return cls(corpus=corpus, index=build_book_index(corpus), source=source)

    @classmethod
    def from_data(cls, data: Any, source: str = "(memory)") -> "ScriptureContext":
        """Build from decoded corpus data in any supported shape."""
        return cls.from_corpus(normalize_corpus(data, source), source)


def build_context(
    corpus_path: Optional[Path] = None,
    expected_digest: Optional[str] = None,
) -> ScriptureContext:
    """
    Load the corpus and build its book index.

    Missing arguments fall back to configuration (environment, defaults).
    """
    path = resolve_corpus_path(str(corpus_path) if corpus_path else None)
    digest = resolve_expected_digest(expected_digest)
    corpus = load_corpus(path, digest)
    ctx = ScriptureContext(corpus=corpus, index=build_book_index(corpus), source=str(path))
    info(f"Scripture context ready: {len(ctx.corpus)} books, {len(ctx.index)} aliases.")
    return ctx


_LOCK = threading.Lock()
_CONTEXT: Optional[ScriptureContext] = None
_CORPUS_PATH: Optional[Path] = None
_EXPECTED_DIGEST: Optional[str] = None


def configure(corpus_path: Optional[Path] = None, expected_digest: Optional[str] = None) -> None:
    """
    Set the corpus source for the lazy build and drop any built context.
    """
    global _CONTEXT, _CORPUS_PATH, _EXPECTED_DIGEST
    with _LOCK:
        _CORPUS_PATH = Path(corpus_path) if corpus_path else None
        _EXPECTED_DIGEST = expected_digest
        _CONTEXT = None


def get_context() -> ScriptureContext:
    global _CONTEXT
    ctx = _CONTEXT
    if ctx is not None:
        return ctx
    with _LOCK:
        if _CONTEXT is None:
            _CONTEXT = build_context(_CORPUS_PATH, _EXPECTED_DIGEST)
        return _CONTEXT


def prewarm() -> ScriptureContext:
    return get_context()


def reload_context(
    corpus_path: Optional[Path] = None,
    expected_digest: Optional[str] = None,
) -> ScriptureContext:
    global _CONTEXT
    new_ctx = build_context(corpus_path or _CORPUS_PATH, expected_digest or _EXPECTED_DIGEST)
    with _LOCK:
        _CONTEXT = new_ctx
    info(f"Scripture context reloaded from: {new_ctx.source}")
    return new_ctx


def set_context(ctx: Optional[ScriptureContext]) -> None:
    global _CONTEXT
    with _LOCK:
        _CONTEXT = ctx


def is_ready() -> bool:
    return _CONTEXT is not None
