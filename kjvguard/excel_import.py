"""
Excel and CSV row readers for KJV Guard.

This module:
- Reads .xlsx workbooks via openpyxl or CSV text via the csv module.
- Detects the header row and column mapping.
- Yields per-verse records: (book, chapter, verse, text).

The same header detection is reused by the loader for JSON record lists.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from openpyxl import load_workbook

from .util import info, warn


@dataclass
class VerseRecord:
    book: str          # Book name as written in the source
    chapter: int
    verse: int
    text: str
    raw_row_index: int  # for diagnostics


HEADER_CANDIDATES: Dict[str, List[str]] = {
    "book": ["book", "bookname", "bk", "booktitle"],
    "chapter": ["chapter", "chap", "ch", "chapternumber"],
    "verse": ["verse", "versenum", "vs", "v", "versenumber"],
    "text": ["text", "versetext", "content", "body"],
}


def _normalize_header(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip().lower().replace(" ", "").replace("-", "").replace("_", "")


def detect_column_mapping(headers: Sequence[object], quiet: bool = False) -> Optional[Dict[str, int]]:
    """
    Try to find which column index corresponds to book/chapter/verse/text.
    Returns a mapping { 'book': idx, 'chapter': idx, 'verse': idx, 'text': idx }
    or None if detection fails.
    """
    norm_headers = [_normalize_header(h) for h in headers]
    mapping: Dict[str, int] = {}

    for logical_name, candidates in HEADER_CANDIDATES.items():
        idx_found: Optional[int] = None
        for i, norm in enumerate(norm_headers):
            if norm in candidates:
                idx_found = i
                break
        if idx_found is None:
            if not quiet:
                warn(f"Could not detect column for '{logical_name}'. Headers were: {list(headers)}")
            return None
        mapping[logical_name] = idx_found

    return mapping


def iter_records_from_csv_text(text: str) -> Iterator[VerseRecord]:
    """
    Yield VerseRecord objects from CSV text (header row first).

    Rows with missing fields, empty text or non-integer chapter/verse are
    skipped with a warning.
    """
    yield from _iter_rows(csv.reader(io.StringIO(text)))


def iter_records_from_xlsx_bytes(raw: bytes) -> Iterator[VerseRecord]:
    """
    Yield VerseRecord objects from the active sheet of an in-memory .xlsx.

    openpyxl errors for unreadable workbooks propagate to the caller.
    """
    info("Opening in-memory Excel workbook")
    wb = load_workbook(filename=io.BytesIO(raw), read_only=True, data_only=True)
    try:
        ws = wb.active
        info(f"Using active sheet: {ws.title!r}")
        yield from _iter_rows(ws.iter_rows(values_only=True))
    finally:
        wb.close()


def _iter_rows(rows: Iterable[Sequence[object]]) -> Iterator[VerseRecord]:
    rows = iter(rows)
    try:
        headers = list(next(rows))
    except StopIteration:
        warn("File is empty.")
        return

    info(f"Detected header row: {headers}")
    mapping = detect_column_mapping(headers)
    if mapping is None:
        warn("Failed to detect required columns; no rows read.")
        return

    for row_idx, row in enumerate(rows, start=2):  # 1-based, +1 for header
        row_list = list(row)
        if len(row_list) < max(mapping.values()) + 1:
            warn(f"Row {row_idx}: not enough columns; skipping.")
            continue

        book_raw = row_list[mapping["book"]]
        chapter_raw = row_list[mapping["chapter"]]
        verse_raw = row_list[mapping["verse"]]
        text_raw = row_list[mapping["text"]]

        if book_raw in (None, "") or chapter_raw in (None, "") or verse_raw in (None, ""):
            warn(f"Row {row_idx}: missing book/chapter/verse; skipping.")
            continue

        text_str = "" if text_raw is None else str(text_raw).strip()
        if not text_str:
            warn(f"Row {row_idx}: empty verse text; skipping.")
            continue

        try:
            chapter_int = int(chapter_raw)
            verse_int = int(verse_raw)
        except (TypeError, ValueError):
            warn(f"Row {row_idx}: non-integer chapter/verse; skipping. "
                 f"chapter={chapter_raw!r}, verse={verse_raw!r}")
            continue

        book_str = str(book_raw).strip()
        if not book_str:
            warn(f"Row {row_idx}: empty book value; skipping.")
            continue

        yield VerseRecord(
            book=book_str,
            chapter=chapter_int,
            verse=verse_int,
            text=text_str,
            raw_row_index=row_idx,
        )
