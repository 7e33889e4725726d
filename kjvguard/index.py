"""
Book index for KJV Guard.

Maps every known spelling of a book to its canonical name:

1. each canonical name in the corpus, normalized
2. names with a standalone 'of', without it ('song solomon')
3. numbered names, without the space ('1john')
4. every entry of the static abbreviation table (plus its unspaced
   numeral form, as in 3)

Aliases owned by the corpus (1-3) win over the table: a table entry that
would rebind one is skipped with a warning. Two table entries disagreeing
about an alias is a build error.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .books import ABBREVIATIONS
from .errors import AliasConflictError
from .util import warn


_PUNCT_RE = re.compile(r"[^\w\s]")
_NUMERALS = {"1", "2", "3"}

CORPUS = "corpus"
TABLE = "table"


def normalize_alias(text: str) -> str:
    """
    Lowercase, turn punctuation into spaces, collapse whitespace, trim.

    'Gen.' -> 'gen', '1  Cor.' -> '1 cor', 'JOHN' -> 'john'
    """
    return " ".join(_PUNCT_RE.sub(" ", text.lower()).split())


def without_of(alias: str) -> Optional[str]:
    tokens = alias.split(" ")
    if len(tokens) > 1 and "of" in tokens:
        return " ".join(t for t in tokens if t != "of")
    return None


def joined_numeral(alias: str) -> Optional[str]:
    tokens = alias.split(" ")
    if len(tokens) > 1 and tokens[0] in _NUMERALS:
        return tokens[0] + " ".join(tokens[1:])
    return None


class BookIndex:
    """
    Read-only alias -> canonical name lookup.
    """

    def __init__(self, aliases: Mapping[str, str], books: Sequence[str]) -> None:
        self._aliases = MappingProxyType(dict(aliases))
        self._books = tuple(books)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    @property
    def books(self) -> Tuple[str, ...]:
        """Canonical names present in the corpus, in corpus order."""
        return self._books

    def lookup(self, text: str) -> Optional[str]:
        return self._aliases.get(normalize_alias(text))

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and self.lookup(text) is not None

    def __len__(self) -> int:
        return len(self._aliases)

    def __repr__(self) -> str:
        return f"BookIndex(books={len(self._books)}, aliases={len(self._aliases)})"


class _AliasRegistry:
    def __init__(self) -> None:
        self.aliases: Dict[str, str] = {}
        self.origin: Dict[str, str] = {}

    def add(self, alias: Optional[str], canonical: str, origin: str) -> None:
        if not alias:
            return
        existing = self.aliases.get(alias)
        if existing is None:
            self.aliases[alias] = canonical
            self.origin[alias] = origin
            return
        if existing == canonical:
            return
        if origin == TABLE and self.origin[alias] == TABLE:
            raise AliasConflictError(alias, existing, canonical)
        warn(f"Alias {alias!r} already maps to {existing!r}; not rebinding to {canonical!r}.")


def build_book_index(
    books: Iterable[str],
    abbreviations: Mapping[str, Iterable[str]] = ABBREVIATIONS,
) -> BookIndex:
    """
    Build the alias table for the given canonical book names.

    Parameters
    ----------
    books:
        Canonical names, normally the corpus's top-level keys (a corpus
        mapping works as-is).
    abbreviations:
        canonical name -> abbreviations. Defaults to the shipped table.

    Raises
    ------
    AliasConflictError
        If two table entries map one alias to different books.
    """
    names = list(books)
    reg = _AliasRegistry()

    # Identity aliases go first so no variant can shadow a real book name.
    for name in names:
        reg.add(normalize_alias(name), name, CORPUS)

    for name in names:
        norm = normalize_alias(name)
        reg.add(without_of(norm), name, CORPUS)
        reg.add(joined_numeral(norm), name, CORPUS)

    for canonical, abbrevs in abbreviations.items():
        for abbrev in (canonical, *abbrevs):
            norm = normalize_alias(abbrev)
            reg.add(norm, canonical, TABLE)
            reg.add(joined_numeral(norm), canonical, TABLE)

    return BookIndex(reg.aliases, names)
