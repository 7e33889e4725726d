"""
Data model definitions for KJV Guard.

For now we define:
- Corpus        : book -> chapter -> verse -> text (read-only mappings)
- ParsedReference: a resolved reference (book, chapter?, verse?)
- SingleVerse   : lookup result for 'John 3:16'
- ChapterResult : lookup result for 'John 3'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple, Union


Corpus = Mapping[str, Mapping[int, Mapping[int, str]]]


@dataclass(frozen=True)
class ParsedReference:
    """
    A reference whose book has been resolved to its canonical name.

    book   : canonical book name (e.g. '1 John')
    chapter: 1..N, or None for a bare book name
    verse  : 1..N, or None for a whole chapter
    """
    book: str
    chapter: Optional[int] = None
    verse: Optional[int] = None

    @property
    def is_chapter(self) -> bool:
        return self.chapter is not None and self.verse is None

    def label(self) -> str:
        """
        Canonical display form, e.g. '1 John 4:2' or 'Psalms 23'.
        """
        if self.chapter is None:
            return self.book
        if self.verse is None:
            return f"{self.book} {self.chapter}"
        return f"{self.book} {self.chapter}:{self.verse}"


@dataclass(frozen=True)
class SingleVerse:
    reference: ParsedReference
    text: str


@dataclass(frozen=True)
class ChapterResult:
    """
    A whole chapter, as (verse number, text) pairs in ascending verse order.
    """
    reference: ParsedReference
    verses: Tuple[Tuple[int, str], ...]

    def as_dict(self) -> Dict[int, str]:
        return dict(self.verses)


LookupResult = Union[SingleVerse, ChapterResult]
