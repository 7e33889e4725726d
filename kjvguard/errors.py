"""
Error taxonomy for KJV Guard.

Every error carries a symbolic `kind` (stable, for callers to branch on)
and a human-readable `reason`.

- CorpusLoadError subclasses are fatal: the corpus never becomes ready.
- ResolutionError subclasses are per-lookup and recoverable by the caller.
- PolicyError subclasses come from the Christ Test pipeline.
"""

from __future__ import annotations

from typing import Optional


class GuardError(Exception):
    """Base class for all KJV Guard errors."""

    kind = "error"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def to_dict(self) -> dict:
        return {"error": self.reason, "kind": self.kind}


# ---------- Startup (fatal) ----------


class CorpusLoadError(GuardError):
    kind = "corpus_load"


class CorpusFormatError(CorpusLoadError):
    """Raw corpus data matches none of the supported shapes."""

    kind = "corpus_format"


class IntegrityError(CorpusLoadError):
    """Configured SHA-256 digest does not match the corpus bytes."""

    kind = "integrity"

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            f"Scripture store integrity failed (expected {expected[:12]}..., got {actual[:12]}...)."
        )
        self.expected = expected
        self.actual = actual


class AliasConflictError(CorpusLoadError):
    """Two abbreviation table entries claim the same alias for different books."""

    kind = "alias_conflict"

    def __init__(self, alias: str, existing: str, incoming: str) -> None:
        super().__init__(
            f"Alias {alias!r} maps to both {existing!r} and {incoming!r}."
        )
        self.alias = alias
        self.existing = existing
        self.incoming = incoming


# ---------- Lookup (recoverable) ----------


class ResolutionError(GuardError):
    kind = "resolution"

    def __init__(self, reason: str, ref: Optional[str] = None) -> None:
        super().__init__(reason)
        self.ref = ref


class ReferenceMalformedError(ResolutionError):
    kind = "reference_malformed"


class BookNotFoundError(ResolutionError):
    kind = "book_not_found"


class ReferenceIncompleteError(ResolutionError):
    kind = "reference_incomplete"


class VerseNotFoundError(ResolutionError):
    kind = "verse_not_found"


# ---------- Policy gate ----------


class PolicyError(GuardError):
    kind = "policy"


class RewriteRefusedError(PolicyError):
    kind = "rewrite_refused"


class PolicyBlockedError(PolicyError):
    kind = "policy_blocked"

    def __init__(self, reason: str, direction: str) -> None:
        super().__init__(f"Blocked {direction}: {reason}")
        self.direction = direction
