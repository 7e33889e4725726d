"""
kjvguard - KJV Guard core package

This package contains the core functionality for KJV Guard:
- config: Project configuration and versioning
- paths: Path management and directory setup
- util: Utility functions for console output
- loader: Corpus loading, integrity check and shape normalization
- index: Book alias index
- reference: Reference parsing ('1 John 4:2', 'Ps 23')
- resolver: Exact-text lookup
- policy: Christ Test classifiers
- journal / pdfgen: Journal file and weekly printables
"""

from . import config
from .paths import PROJECT_ROOT, DATA_DIR, ensure_basic_dirs
from .util import info, warn, ok
from .errors import GuardError, CorpusLoadError, ResolutionError, PolicyError
from .loader import load_corpus, normalize_corpus, compute_digest
from .index import build_book_index
from .reference import parse_reference
from .context import ScriptureContext, get_context, prewarm
from .resolver import Resolver, resolve, quote, list_books
from .policy import christ_test, is_rewrite_request, enforce

__version__ = config.__version__
__all__ = [
    "config",
    "PROJECT_ROOT",
    "DATA_DIR",
    "ensure_basic_dirs",
    "info",
    "warn",
    "ok",
    "GuardError",
    "CorpusLoadError",
    "ResolutionError",
    "PolicyError",
    "load_corpus",
    "normalize_corpus",
    "compute_digest",
    "build_book_index",
    "parse_reference",
    "ScriptureContext",
    "get_context",
    "prewarm",
    "Resolver",
    "resolve",
    "quote",
    "list_books",
    "christ_test",
    "is_rewrite_request",
    "enforce",
]
