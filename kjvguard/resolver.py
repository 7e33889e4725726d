"""
Reference resolution for KJV Guard.

Public API:

- resolve(ref)    -> SingleVerse | ChapterResult
- quote(ref)      -> verse text, or {verse: text} for a whole chapter
- list_books()    -> canonical book names in corpus order
- print_result(result)

All lookups are pure reads of the shared ScriptureContext. Failures
raise a ResolutionError subclass:

    'Frodo 1:1'  -> BookNotFoundError
    'John'       -> ReferenceIncompleteError
    'John 99:1'  -> VerseNotFoundError
    'John 3:'    -> ReferenceMalformedError
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

from .config import TRANSLATION
from .context import ScriptureContext, get_context
from .errors import ReferenceIncompleteError, VerseNotFoundError
from .model import ChapterResult, LookupResult, ParsedReference, SingleVerse
from .reference import parse_reference


class Resolver:
    def __init__(self, context: ScriptureContext) -> None:
        self.context = context

    def parse(self, ref: str) -> ParsedReference:
        return parse_reference(ref, self.context.index)

    def resolve(self, ref: str) -> LookupResult:
        return self.resolve_parsed(self.parse(ref), ref)

    def resolve_parsed(self, parsed: ParsedReference, ref: Optional[str] = None) -> LookupResult:
        """
        Look up a parsed reference.

        Returns a SingleVerse when a verse is given, otherwise the whole
        chapter in ascending verse order. The stored text is returned
        untouched.
        """
        label = parsed.label()
        if parsed.chapter is None:
            raise ReferenceIncompleteError(
                f"Reference needs at least a chapter: {label!r}", ref=ref
            )

        chapters = self.context.corpus.get(parsed.book)
        if chapters is None:
            raise VerseNotFoundError(f"Book not in corpus: {parsed.book}", ref=ref)

        verses = chapters.get(parsed.chapter)
        if verses is None:
            raise VerseNotFoundError(f"Chapter not found: {label}", ref=ref)

        if parsed.is_chapter:
            return ChapterResult(reference=parsed, verses=tuple(sorted(verses.items())))

        text = verses.get(parsed.verse)
        if text is None:
            raise VerseNotFoundError(f"Verse not found: {label}", ref=ref)
        return SingleVerse(reference=parsed, text=text)

    def quote(self, ref: str) -> Union[str, Dict[int, str]]:
        result = self.resolve(ref)
        if isinstance(result, SingleVerse):
            return result.text
        return result.as_dict()

    def list_books(self) -> Tuple[str, ...]:
        return tuple(self.context.corpus.keys())


def get_resolver() -> Resolver:
    return Resolver(get_context())


def resolve(ref: str) -> LookupResult:
    return get_resolver().resolve(ref)


def quote(ref: str) -> Union[str, Dict[int, str]]:
    return get_resolver().quote(ref)


def list_books() -> Tuple[str, ...]:
    return get_resolver().list_books()


def format_result(result: LookupResult) -> str:
    """
    Human-readable block, e.g.:

        [KJV] John 3:16
            For God so loved the world...
    """
    lines: List[str] = [f"[{TRANSLATION}] {result.reference.label()}"]
    if isinstance(result, SingleVerse):
        lines.append(f"    {result.text}")
    else:
        for verse, text in result.verses:
            lines.append(f"    {verse} {text}")
    return "\n".join(lines)


def print_result(result: LookupResult) -> None:
    print(format_result(result))
    print()
