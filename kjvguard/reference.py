"""
Reference parsing for KJV Guard.

Grammar:

    <book-name> [<chapter>[:<verse>]]

`<book-name>` is one or more words, optionally preceded by a numeral
1–3 with or without a space ('1 John', '1John'). Chapter and verse are
digit runs. Ranges ('John 3:16-18') are not part of the grammar.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from .errors import BookNotFoundError, ReferenceMalformedError
from .index import BookIndex
from .model import ParsedReference


REFERENCE_RE = re.compile(
    r"""
    ^
    (?P<book>(?:[1-3]\s*)?[A-Za-z][A-Za-z.'\s]*?)
    \s*
    (?:
        (?P<chapter>\d+)
        (?:\s*:\s*(?P<verse>\d+))?
    )?
    $
    """,
    re.VERBOSE,
)


def split_reference(text: str) -> Tuple[str, Optional[int], Optional[int]]:
    """
    Split a reference string into (book_text, chapter, verse) without
    resolving the book.

    Raises
    ------
    ReferenceMalformedError
        If the trimmed input does not match the reference grammar.
    """
    s = (text or "").strip()
    if not s:
        raise ReferenceMalformedError("Empty reference string.", ref=text)

    m = REFERENCE_RE.match(s)
    if m is None:
        raise ReferenceMalformedError(f"Malformed reference: {s!r}", ref=text)

    chapter = int(m.group("chapter"), 10) if m.group("chapter") else None
    verse = int(m.group("verse"), 10) if m.group("verse") else None
    return m.group("book").strip(), chapter, verse


def parse_reference(text: str, index: BookIndex) -> ParsedReference:
    """
    Parse 'John 3:16', '1John 4', 'gen. 1:1' ... into a ParsedReference.

    Malformed input and unknown books raise different errors so callers
    can tell the user which part was wrong.
    """
    book_text, chapter, verse = split_reference(text)

    book = index.lookup(book_text)
    if book is None:
        raise BookNotFoundError(f"Book not found: {book_text!r}", ref=text)

    return ParsedReference(book=book, chapter=chapter, verse=verse)
