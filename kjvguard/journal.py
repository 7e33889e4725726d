"""
Journal persistence for KJV Guard.

A single JSON array on disk, newest entry first. One writer at a time.
"""

from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .config import resolve_journal_path
from .util import info


def utc_now_iso() -> str:
    """RFC-3339-like UTC timestamp, millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class JournalEntry:
    id: int          # milliseconds since the epoch
    text: str
    at: str          # UTC ISO timestamp

    @classmethod
    def from_dict(cls, d: dict) -> "JournalEntry":
        return cls(id=int(d["id"]), text=str(d.get("text", "")), at=str(d.get("at", "")))

    def to_dict(self) -> dict:
        return asdict(self)


class Journal:
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = resolve_journal_path(str(path) if path else None)

    def ensure(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
            info(f"Created journal file: {self.path}")

    def entries(self) -> List[JournalEntry]:
        self.ensure()
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return [JournalEntry.from_dict(d) for d in data]

    def add(self, text: str) -> JournalEntry:
        entry = JournalEntry(id=int(time.time() * 1000), text=text, at=utc_now_iso())
        entries = self.entries()
        entries.insert(0, entry)
        self.path.write_text(
            json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        return entry
