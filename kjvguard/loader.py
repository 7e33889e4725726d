"""
Corpus loading for KJV Guard.

This module:
- Reads the raw corpus bytes (one document, or a directory of per-book files).
- Verifies the optional SHA-256 integrity lock before parsing anything.
- Classifies the decoded data into one of the supported shapes.
- Normalizes every shape into the same read-only structure:

      book -> chapter -> verse -> text

Supported shapes:

  NestedShape          {"Genesis": {"1": {"1": "In the beginning..."}}}
  RecordShape          [{"book": "Genesis", "chapter": 1, "verse": 1, "text": "..."}]
                       (also .csv / .xlsx files with the same columns)
  BookListShape        [{"abbrev": "gn", "chapters": [["In the beginning...", ...]]}]
  ReferenceKeyedShape  {"verses": {"Genesis 1:1": "In the beginning..."}}
  BookFilesShape       a directory of per-book .json files, in filename order
"""

from __future__ import annotations

import hashlib
import json
import re
import zipfile
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from openpyxl.utils.exceptions import InvalidFileException

from .books import canonical_case, translate_source_abbrev
from .errors import CorpusFormatError, CorpusLoadError, IntegrityError, ReferenceMalformedError
from .excel_import import (
    VerseRecord,
    detect_column_mapping,
    iter_records_from_csv_text,
    iter_records_from_xlsx_bytes,
)
from .model import Corpus
from .reference import split_reference
from .util import info, warn


# ---------- Shapes ----------


@dataclass(frozen=True)
class NestedShape:
    books: Mapping[Any, Any]


@dataclass(frozen=True)
class RecordShape:
    records: Sequence[Mapping[str, Any]]
    fields: Mapping[str, str]  # logical name -> key used by the records


@dataclass(frozen=True)
class BookListShape:
    entries: Sequence[Mapping[str, Any]]


@dataclass(frozen=True)
class ReferenceKeyedShape:
    verses: Mapping[str, Any]


@dataclass(frozen=True)
class BookFilesShape:
    fragments: Sequence[Tuple[str, Any]]  # (file name, decoded JSON)


CorpusShape = Union[NestedShape, RecordShape, BookListShape, ReferenceKeyedShape, BookFilesShape]

CORPUS_SUFFIXES = (".json", ".csv", ".xlsx", ".xlsm")

_ORDER_PREFIX_RE = re.compile(r"^\d{2,}[\s_.\-]+")


# ---------- Integrity ----------


def _sha256(chunks: Iterable[bytes]) -> str:
    h = hashlib.sha256()
    for chunk in chunks:
        h.update(chunk)
    return h.hexdigest()


def _book_files(directory: Path) -> List[Path]:
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".json"),
        key=lambda p: p.name,
    )


def compute_digest(path: Path) -> str:
    """
    SHA-256 hex digest of the corpus bytes.

    For a directory, the digest covers every per-book .json file,
    concatenated in lexical filename order (the order they are merged in).
    """
    path = Path(path)
    if path.is_dir():
        return _sha256(p.read_bytes() for p in _book_files(path))
    return _sha256([path.read_bytes()])


def verify_digest(raw: Union[bytes, Sequence[bytes]], expected: Optional[str]) -> None:
    """
    Compare the digest of `raw` with `expected`. No-op when nothing is expected.
    """
    if not expected:
        return
    chunks = [raw] if isinstance(raw, bytes) else list(raw)
    actual = _sha256(chunks)
    if actual.lower() != expected.strip().lower():
        raise IntegrityError(expected.strip(), actual)
    info("Corpus integrity verified (SHA-256).")


# ---------- Classification ----------


def _is_number_key(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return True
    return isinstance(key, str) and key.strip().isdigit()


def _looks_nested(data: Mapping[Any, Any]) -> bool:
    return all(
        isinstance(chapters, Mapping)
        and all(
            _is_number_key(ch) and isinstance(verses, Mapping)
            for ch, verses in chapters.items()
        )
        for chapters in data.values()
    )


def detect_record_fields(keys: Iterable[str]) -> Optional[Dict[str, str]]:
    """
    Map book/chapter/verse/text to the keys a record uses, or None.
    """
    key_list = list(keys)
    mapping = detect_column_mapping(key_list, quiet=True)
    if mapping is None:
        return None
    return {name: key_list[idx] for name, idx in mapping.items()}


def classify_shape(data: Any) -> CorpusShape:
    """
    Decide which supported shape `data` (decoded JSON) is in.

    Raises
    ------
    CorpusFormatError
        If the data matches none of the shapes.
    """
    if isinstance(data, Mapping):
        if not data:
            raise CorpusFormatError("Corpus document is empty.")
        if "verses" in data and isinstance(data["verses"], (Mapping, list)) and not _looks_nested(data):
            return classify_shape(data["verses"])
        if all(isinstance(v, str) for v in data.values()):
            return ReferenceKeyedShape(data)
        if _looks_nested(data):
            return NestedShape(data)
        raise CorpusFormatError(
            "Mapping is neither book -> chapter -> verse -> text nor keyed by reference."
        )

    if isinstance(data, list):
        if not data:
            raise CorpusFormatError("Corpus document is an empty list.")
        if not all(isinstance(e, Mapping) for e in data):
            raise CorpusFormatError("Corpus list must contain objects only.")
        if all("chapters" in e for e in data):
            return BookListShape(data)
        fields = detect_record_fields(data[0].keys())
        if fields is not None and all(all(k in e for k in fields.values()) for e in data):
            return RecordShape(data, fields)
        raise CorpusFormatError(
            "List entries are neither per-verse records (book/chapter/verse/text) "
            "nor per-book entries with 'chapters'."
        )

    raise CorpusFormatError(f"Unsupported corpus document type: {type(data).__name__}")


# ---------- Normalization ----------


class _CorpusBuilder:
    """
    Mutable staging area; freeze() hands out the read-only corpus.
    """

    def __init__(self) -> None:
        self.books: Dict[str, Dict[int, Dict[int, str]]] = {}
        self.skipped = 0

    def put(self, book: str, chapter: Any, verse: Any, text: Any, where: str) -> None:
        if not isinstance(book, str) or not book.strip():
            raise CorpusFormatError(f"{where}: book name must be a non-empty string, got {book!r}")
        # every shape shares one naming path
        book = canonical_case(book)
        ch = _as_number(chapter, "chapter", where)
        vs = _as_number(verse, "verse", where)
        if not isinstance(text, str):
            raise CorpusFormatError(f"{where}: verse text must be a string, got {type(text).__name__}")
        if not text.strip():
            warn(f"{where}: empty verse text; skipping.")
            self.skipped += 1
            return
        self.books.setdefault(book, {}).setdefault(ch, {})[vs] = text

    def freeze(self) -> Corpus:
        if not self.books:
            raise CorpusFormatError("Corpus contains no verses.")
        out: Dict[str, Mapping[int, Mapping[int, str]]] = {}
        for book, chapters in self.books.items():
            out[book] = MappingProxyType({
                ch: MappingProxyType({v: chapters[ch][v] for v in sorted(chapters[ch])})
                for ch in sorted(chapters)
            })
        return MappingProxyType(out)


def _as_number(value: Any, what: str, where: str) -> int:
    if not _is_number_key(value):
        raise CorpusFormatError(f"{where}: {what} must be a positive integer, got {value!r}")
    n = int(value)
    if n < 1:
        raise CorpusFormatError(f"{where}: {what} must be a positive integer, got {value!r}")
    return n


def _entry_book_name(entry: Mapping[str, Any], fallback: Optional[str], where: str) -> str:
    for key in ("name", "book"):
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            return canonical_case(value)
    abbrev = entry.get("abbrev")
    if isinstance(abbrev, str) and abbrev.strip():
        name = translate_source_abbrev(abbrev)
        if name is None:
            raise CorpusFormatError(f"{where}: unknown book abbreviation {abbrev!r}")
        return name
    if fallback:
        return fallback
    raise CorpusFormatError(f"{where}: entry has no 'name', 'book' or 'abbrev'")


def _book_from_filename(name: str) -> str:
    """
    '01_Genesis.json' -> 'Genesis', '1_John.json' -> '1 John', 'gn.json' -> 'Genesis'
    """
    stem = _ORDER_PREFIX_RE.sub("", Path(name).stem)
    words = " ".join(re.sub(r"[_\-]+", " ", stem).split())
    return translate_source_abbrev(words) or canonical_case(words)


def _add_nested(builder: _CorpusBuilder, books: Mapping[Any, Any], where: str) -> None:
    for book, chapters in books.items():
        if not isinstance(chapters, Mapping):
            raise CorpusFormatError(f"{where}: book {book!r} is not a chapter mapping")
        _add_chapters(builder, book, chapters, where)


def _add_chapters(builder: _CorpusBuilder, book: Any, chapters: Mapping[Any, Any], where: str) -> None:
    for chapter, verses in chapters.items():
        if not isinstance(verses, Mapping):
            raise CorpusFormatError(f"{where}: {book} {chapter} is not a verse mapping")
        for verse, text in verses.items():
            builder.put(book, chapter, verse, text, f"{where} {book} {chapter}:{verse}")


def _add_chapter_lists(builder: _CorpusBuilder, book: str, chapters: Any, where: str) -> None:
    if not isinstance(chapters, list):
        raise CorpusFormatError(f"{where}: 'chapters' of {book!r} must be a list")
    for ci, verses in enumerate(chapters, start=1):
        if not isinstance(verses, list):
            raise CorpusFormatError(f"{where}: {book} chapter {ci} must be a list of verse texts")
        for vi, text in enumerate(verses, start=1):
            builder.put(book, ci, vi, text, f"{where} {book} {ci}:{vi}")


def _add_records(builder: _CorpusBuilder, shape: RecordShape, where: str) -> None:
    f = shape.fields
    for i, rec in enumerate(shape.records, start=1):
        book = rec[f["book"]]
        if not isinstance(book, str):
            raise CorpusFormatError(f"{where} record {i}: book must be a string, got {book!r}")
        builder.put(book, rec[f["chapter"]], rec[f["verse"]], rec[f["text"]], f"{where} record {i}")


def _add_reference_keyed(builder: _CorpusBuilder, verses: Mapping[str, Any], where: str) -> None:
    for key, text in verses.items():
        try:
            book_text, chapter, verse = split_reference(str(key))
        except ReferenceMalformedError:
            raise CorpusFormatError(f"{where}: {key!r} is not a 'Book C:V' reference") from None
        if chapter is None or verse is None:
            raise CorpusFormatError(f"{where}: {key!r} is not a 'Book C:V' reference")
        builder.put(book_text, chapter, verse, text, f"{where} {key}")


def _add_book_file(builder: _CorpusBuilder, name: str, content: Any) -> None:
    """
    One per-book file: a chapter mapping, a single book-list entry, or a
    nested mapping for one book.
    """
    if isinstance(content, list) and len(content) == 1 and isinstance(content[0], Mapping):
        content = content[0]

    if isinstance(content, Mapping) and "chapters" in content:
        book = _entry_book_name(content, _book_from_filename(name), name)
        _add_chapter_lists(builder, book, content["chapters"], name)
    elif isinstance(content, Mapping) and content and all(_is_number_key(k) for k in content):
        _add_chapters(builder, _book_from_filename(name), content, name)
    elif isinstance(content, Mapping) and content and _looks_nested(content):
        _add_nested(builder, content, name)
    else:
        raise CorpusFormatError(f"{name}: not a single-book document")


def _add_shape(builder: _CorpusBuilder, shape: CorpusShape, where: str) -> None:
    if isinstance(shape, NestedShape):
        _add_nested(builder, shape.books, where)
    elif isinstance(shape, RecordShape):
        _add_records(builder, shape, where)
    elif isinstance(shape, BookListShape):
        for i, entry in enumerate(shape.entries, start=1):
            book = _entry_book_name(entry, None, f"{where} entry {i}")
            _add_chapter_lists(builder, book, entry["chapters"], where)
    elif isinstance(shape, ReferenceKeyedShape):
        _add_reference_keyed(builder, shape.verses, where)
    elif isinstance(shape, BookFilesShape):
        for name, content in shape.fragments:
            _add_book_file(builder, name, content)
    else:
        raise CorpusFormatError(f"Unhandled corpus shape: {type(shape).__name__}")


def normalize_shape(shape: CorpusShape, where: str = "corpus") -> Corpus:
    info(f"Corpus shape: {type(shape).__name__}")
    builder = _CorpusBuilder()
    _add_shape(builder, shape, where)
    corpus = builder.freeze()
    books, chapters, verses = corpus_stats(corpus)
    info(f"Normalized {verses} verses in {chapters} chapters across {books} books.")
    if builder.skipped:
        warn(f"Skipped {builder.skipped} empty verse(s).")
    return corpus


def normalize_corpus(data: Any, where: str = "corpus") -> Corpus:
    """
    Normalize decoded corpus data (any in-memory shape) into a Corpus.
    """
    return normalize_shape(classify_shape(data), where)


def records_to_shape(records: Iterable[VerseRecord]) -> RecordShape:
    rows = [
        {"book": r.book, "chapter": r.chapter, "verse": r.verse, "text": r.text}
        for r in records
    ]
    if not rows:
        raise CorpusFormatError("No usable verse rows found.")
    return RecordShape(rows, {"book": "book", "chapter": "chapter", "verse": "verse", "text": "text"})


def corpus_stats(corpus: Corpus) -> Tuple[int, int, int]:
    """(books, chapters, verses) counts."""
    chapters = sum(len(c) for c in corpus.values())
    verses = sum(len(v) for c in corpus.values() for v in c.values())
    return len(corpus), chapters, verses


# ---------- Entry points ----------


def _decode_json(raw: bytes, where: str) -> Any:
    try:
        return json.loads(raw.decode("utf-8-sig"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorpusFormatError(f"{where}: invalid JSON ({e})") from e


def load_corpus_bytes(
    raw: bytes,
    expected_digest: Optional[str] = None,
    fmt: str = "json",
    where: str = "corpus",
) -> Corpus:
    """
    Load a corpus from an in-memory document.

    Parameters
    ----------
    raw:
        Document bytes.
    expected_digest:
        Optional SHA-256 hex digest the bytes must match.
    fmt:
        'json', 'csv' or 'xlsx'.
    """
    verify_digest(raw, expected_digest)

    fmt = fmt.lower().lstrip(".")
    if fmt == "json":
        return normalize_corpus(_decode_json(raw, where), where)
    if fmt == "csv":
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise CorpusFormatError(f"{where}: CSV is not UTF-8 ({e})") from e
        return normalize_shape(records_to_shape(iter_records_from_csv_text(text)), where)
    if fmt in ("xlsx", "xlsm"):
        try:
            records = list(iter_records_from_xlsx_bytes(raw))
        except (zipfile.BadZipFile, InvalidFileException, KeyError) as e:
            raise CorpusFormatError(f"{where}: not a readable workbook ({e})") from e
        return normalize_shape(records_to_shape(records), where)
    raise CorpusFormatError(f"Unsupported corpus format: {fmt!r}")


def load_corpus(path: Path, expected_digest: Optional[str] = None) -> Corpus:
    """
    Load the corpus from a document or a directory of per-book .json files.

    Raises
    ------
    CorpusLoadError
        If the path does not exist.
    IntegrityError
        If `expected_digest` is set and does not match.
    CorpusFormatError
        If the data matches none of the supported shapes.
    """
    path = Path(path)
    if not path.exists():
        raise CorpusLoadError(f"Corpus not found: {path}")

    info(f"Loading corpus from: {path}")

    if path.is_dir():
        files = _book_files(path)
        if not files:
            raise CorpusFormatError(f"No .json book files in {path}")
        raws = [(p.name, p.read_bytes()) for p in files]
        verify_digest([raw for _, raw in raws], expected_digest)
        fragments = [(name, _decode_json(raw, name)) for name, raw in raws]
        info(f"Merging {len(fragments)} book file(s).")
        return normalize_shape(BookFilesShape(fragments), str(path))

    suffix = path.suffix.lower()
    if suffix not in CORPUS_SUFFIXES:
        raise CorpusFormatError(f"Unsupported corpus file type: {suffix or '(none)'}")
    return load_corpus_bytes(path.read_bytes(), expected_digest, fmt=suffix, where=path.name)
