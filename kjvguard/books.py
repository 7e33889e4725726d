"""
Static book tables for KJV Guard.

This module defines:
- CANON: the 66-book Protestant canon (book_num, code, name, testament)
- ABBREVIATIONS: canonical name -> known abbreviations / spellings
- SOURCE_ABBREVIATIONS: the short `abbrev` codes used by per-book JSON
  corpora (e.g. 'gn', '1jo') -> canonical name

The alias table is consumed by the book index; the source table is only
used while normalizing corpus data, since its codes ('jn' = Jonah,
'jud' = Judges) disagree with the scholarly ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class BookInfo:
    """
    One entry of the canon.

    book_num : 1–66 (Protestant canon order)
    code     : 3-character USFM code (e.g. 'GEN', '1JN')
    name     : canonical name, used as the corpus key
    testament: 'OT' or 'NT'
    """
    book_num: int
    code: str
    name: str
    testament: str


_CANON_ROWS: List[Tuple[str, str]] = [
    ("GEN", "Genesis"),
    ("EXO", "Exodus"),
    ("LEV", "Leviticus"),
    ("NUM", "Numbers"),
    ("DEU", "Deuteronomy"),
    ("JOS", "Joshua"),
    ("JDG", "Judges"),
    ("RUT", "Ruth"),
    ("1SA", "1 Samuel"),
    ("2SA", "2 Samuel"),
    ("1KI", "1 Kings"),
    ("2KI", "2 Kings"),
    ("1CH", "1 Chronicles"),
    ("2CH", "2 Chronicles"),
    ("EZR", "Ezra"),
    ("NEH", "Nehemiah"),
    ("EST", "Esther"),
    ("JOB", "Job"),
    ("PSA", "Psalms"),
    ("PRO", "Proverbs"),
    ("ECC", "Ecclesiastes"),
    ("SNG", "Song of Solomon"),
    ("ISA", "Isaiah"),
    ("JER", "Jeremiah"),
    ("LAM", "Lamentations"),
    ("EZK", "Ezekiel"),
    ("DAN", "Daniel"),
    ("HOS", "Hosea"),
    ("JOL", "Joel"),
    ("AMO", "Amos"),
    ("OBA", "Obadiah"),
    ("JON", "Jonah"),
    ("MIC", "Micah"),
    ("NAM", "Nahum"),
    ("HAB", "Habakkuk"),
    ("ZEP", "Zephaniah"),
    ("HAG", "Haggai"),
    ("ZEC", "Zechariah"),
    ("MAL", "Malachi"),
    ("MAT", "Matthew"),
    ("MRK", "Mark"),
    ("LUK", "Luke"),
    ("JHN", "John"),
    ("ACT", "Acts"),
    ("ROM", "Romans"),
    ("1CO", "1 Corinthians"),
    ("2CO", "2 Corinthians"),
    ("GAL", "Galatians"),
    ("EPH", "Ephesians"),
    ("PHP", "Philippians"),
    ("COL", "Colossians"),
    ("1TH", "1 Thessalonians"),
    ("2TH", "2 Thessalonians"),
    ("1TI", "1 Timothy"),
    ("2TI", "2 Timothy"),
    ("TIT", "Titus"),
    ("PHM", "Philemon"),
    ("HEB", "Hebrews"),
    ("JAS", "James"),
    ("1PE", "1 Peter"),
    ("2PE", "2 Peter"),
    ("1JN", "1 John"),
    ("2JN", "2 John"),
    ("3JN", "3 John"),
    ("JUD", "Jude"),
    ("REV", "Revelation"),
]

CANON: Tuple[BookInfo, ...] = tuple(
    BookInfo(
        book_num=i,
        code=code,
        name=name,
        testament="OT" if i <= 39 else "NT",
    )
    for i, (code, name) in enumerate(_CANON_ROWS, start=1)
)

CANONICAL_NAMES: Tuple[str, ...] = tuple(b.name for b in CANON)


# Books without a numeral prefix.
_SINGLE: Dict[str, List[str]] = {
    "Genesis": ["Gen", "Ge", "Gn"],
    "Exodus": ["Exod", "Exo", "Ex"],
    "Leviticus": ["Lev", "Le", "Lv"],
    "Numbers": ["Num", "Nu", "Nm", "Nb"],
    "Deuteronomy": ["Deut", "Dt", "De"],
    "Joshua": ["Josh", "Jos", "Jsh"],
    "Judges": ["Judg", "Jdg", "Jg", "Jdgs"],
    "Ruth": ["Rth", "Ru"],
    "Ezra": ["Ezr"],
    "Nehemiah": ["Neh", "Ne"],
    "Esther": ["Esth", "Est", "Es"],
    "Job": ["Jb"],
    "Psalms": ["Ps", "Psa", "Psalm", "Pss", "Psm"],
    "Proverbs": ["Prov", "Pro", "Prv", "Pr"],
    "Ecclesiastes": ["Eccl", "Eccles", "Ecc", "Ec", "Qoh"],
    "Song of Solomon": [
        "Song", "Song of Songs", "Song of Sol", "Song Sol", "SOS", "So",
        "Cant", "Canticles",
    ],
    "Isaiah": ["Isa", "Is"],
    "Jeremiah": ["Jer", "Je", "Jr"],
    "Lamentations": ["Lam", "La"],
    "Ezekiel": ["Ezek", "Eze", "Ezk"],
    "Daniel": ["Dan", "Da", "Dn"],
    "Hosea": ["Hos", "Ho"],
    "Joel": ["Jl"],
    "Amos": ["Am"],
    "Obadiah": ["Obad", "Ob"],
    "Jonah": ["Jon", "Jnh"],
    "Micah": ["Mic", "Mc"],
    "Nahum": ["Nah", "Na"],
    "Habakkuk": ["Hab"],
    "Zephaniah": ["Zeph", "Zep", "Zp"],
    "Haggai": ["Hag", "Hg"],
    "Zechariah": ["Zech", "Zec", "Zc"],
    "Malachi": ["Mal", "Ml"],
    "Matthew": ["Matt", "Mt"],
    "Mark": ["Mrk", "Mk", "Mr"],
    "Luke": ["Luk", "Lk"],
    "John": ["Jn", "Jhn"],
    "Acts": ["Act", "Ac"],
    "Romans": ["Rom", "Ro", "Rm"],
    "Galatians": ["Gal", "Ga"],
    "Ephesians": ["Eph", "Ephes"],
    "Philippians": ["Phil", "Php", "Pp"],
    "Colossians": ["Col"],
    "Titus": ["Tit"],
    "Philemon": ["Philem", "Phm", "Phlm"],
    "Hebrews": ["Heb"],
    "James": ["Jas", "Jm"],
    "Jude": ["Jud", "Jd"],
    "Revelation": ["Rev", "Re", "Rv", "Revelations", "Apocalypse"],
}

# Numbered books: stem name -> abbreviation stems (numeral added below).
_NUMBERED: Dict[str, Tuple[Tuple[int, ...], List[str]]] = {
    "Samuel": ((1, 2), ["Sam", "Sa", "Sm"]),
    "Kings": ((1, 2), ["Kgs", "Ki", "Kin"]),
    "Chronicles": ((1, 2), ["Chron", "Chr", "Ch"]),
    "Corinthians": ((1, 2), ["Cor", "Co"]),
    "Thessalonians": ((1, 2), ["Thess", "Thes", "Th"]),
    "Timothy": ((1, 2), ["Tim", "Ti"]),
    "Peter": ((1, 2), ["Pet", "Pe", "Pt"]),
    "John": ((1, 2, 3), ["Jn", "Jo", "Jhn", "Joh"]),
}

_ROMAN = {1: "I", 2: "II", 3: "III"}
_ORDINAL = {1: "First", 2: "Second", 3: "Third"}
_ORDINAL_SHORT = {1: "1st", 2: "2nd", 3: "3rd"}


def _numbered_aliases(n: int, stem: str, abbrevs: List[str]) -> List[str]:
    """
    Expand one numbered book into its prefixed spellings.

    Arabic prefixes are written spaced only; the index adds the
    unspaced form ('1 Cor' -> '1cor') itself.
    """
    words = [stem] + abbrevs
    out: List[str] = []
    for prefix in (str(n), _ROMAN[n], _ORDINAL[n], _ORDINAL_SHORT[n]):
        for word in words:
            out.append(f"{prefix} {word}")
    return out


def _build_abbreviations() -> Dict[str, Tuple[str, ...]]:
    table: Dict[str, List[str]] = {name: list(v) for name, v in _SINGLE.items()}

    for stem, (numbers, abbrevs) in _NUMBERED.items():
        for n in numbers:
            canonical = f"{n} {stem}"
            table[canonical] = _numbered_aliases(n, stem, abbrevs)

    for book in CANON:
        table[book.name].append(book.code)

    # Keep canon order so iteration is stable.
    return {name: tuple(table[name]) for name in CANONICAL_NAMES}


ABBREVIATIONS: Dict[str, Tuple[str, ...]] = _build_abbreviations()


# `abbrev` codes of the widely shared per-book JSON layout
# ([{"abbrev": "gn", "chapters": [[...], ...]}, ...]), in canon order.
_SOURCE_CODES: Tuple[str, ...] = (
    "gn", "ex", "lv", "nm", "dt", "js", "jud", "rt", "1sm", "2sm",
    "1kgs", "2kgs", "1ch", "2ch", "ezr", "ne", "et", "job", "ps", "prv",
    "ec", "so", "is", "jr", "lm", "ez", "dn", "ho", "jl", "am",
    "ob", "jn", "mi", "na", "hk", "zp", "hg", "zc", "ml",
    "mt", "mk", "lk", "jo", "act", "rm", "1co", "2co", "gl", "eph",
    "ph", "cl", "1ts", "2ts", "1tm", "2tm", "tt", "phm", "hb", "jm",
    "1pe", "2pe", "1jo", "2jo", "3jo", "jd", "re",
)

SOURCE_ABBREVIATIONS: Dict[str, str] = dict(zip(_SOURCE_CODES, CANONICAL_NAMES))

_NAME_BY_LOWER: Dict[str, str] = {name.lower(): name for name in CANONICAL_NAMES}


def canonical_case(name: str) -> str:
    """
    Return the canon spelling of `name` if it matches one case-insensitively,
    otherwise `name` stripped.
    """
    s = " ".join(name.split())
    return _NAME_BY_LOWER.get(s.lower(), s)


def translate_source_abbrev(abbrev: str) -> Optional[str]:
    """
    Map a per-book JSON `abbrev` code to its canonical name, or None.
    """
    return SOURCE_ABBREVIATIONS.get(abbrev.strip().lower())
