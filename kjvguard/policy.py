"""
Policy gate ("Christ Test") for KJV Guard.

Stateless text classifiers, applied around quoting and generation:

- is_rewrite_request(text): the user asks to paraphrase / reword Scripture
- christ_test(text)       : checks the doctrinal rules in DOCTRINAL_RULES
- enforce(user_text, generate): the full input -> generate -> output pipeline

Isaiah 8:20 is covered by the resolver itself: every quote comes from
the corpus, verbatim.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .errors import PolicyBlockedError, RewriteRefusedError


REWRITE_PATTERN = re.compile(
    r"(paraphrase|reword|rewrite|moderni[sz]e|simplif(y|ied)|put.*(own|other).*words|make.*easier|retell)",
    re.IGNORECASE,
)

REWRITE_REFUSAL = (
    "This assistant will not paraphrase or rewrite Scripture. It only quotes exact KJV text."
)


@dataclass(frozen=True)
class PolicyRule:
    name: str
    pattern: "re.Pattern[str]"
    reason: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


# Checked in order; the first match decides the verdict.
DOCTRINAL_RULES: Tuple[PolicyRule, ...] = (
    PolicyRule(
        name="denies_incarnation",
        pattern=re.compile(
            r"(jesus\s+did\s+not\s+come\s+in\s+the\s+flesh|christ\s+was\s+not\s+incarnate|no\s+incarnation)",
            re.IGNORECASE,
        ),
        reason="Fails 1 John 4:2-3 (denies Christ come in the flesh)",
    ),
    PolicyRule(
        name="another_gospel",
        pattern=re.compile(
            r"(new\s+gospel|updated\s+gospel|different\s+salvation|extra\s+revelation\s+for\s+salvation)",
            re.IGNORECASE,
        ),
        reason="Fails Galatians 1:8 (another gospel)",
    ),
)


@dataclass(frozen=True)
class PolicyVerdict:
    ok: bool
    reason: str
    rule: Optional[str] = None

    def to_dict(self) -> dict:
        return {"ok": self.ok, "reason": self.reason}


PASS = PolicyVerdict(ok=True, reason="Pass")


def is_rewrite_request(text: Optional[str]) -> bool:
    return REWRITE_PATTERN.search(text or "") is not None


def christ_test(text: Optional[str]) -> PolicyVerdict:
    t = text or ""
    for rule in DOCTRINAL_RULES:
        if rule.matches(t):
            return PolicyVerdict(ok=False, reason=rule.reason, rule=rule.name)
    return PASS


def enforce(user_text: str, generate: Callable[[], str]) -> str:
    """
    Run the Christ Test pipeline around a generation step.

    1. refuse rewrite/paraphrase requests
    2. check the user's text
    3. call `generate()`
    4. check the generated text

    Returns the generated text when every check passes.

    Raises
    ------
    RewriteRefusedError
        If the user asks for Scripture to be reworded.
    PolicyBlockedError
        If the input or output fails the Christ Test.
    """
    if is_rewrite_request(user_text):
        raise RewriteRefusedError(REWRITE_REFUSAL)

    verdict = christ_test(user_text)
    if not verdict.ok:
        raise PolicyBlockedError(verdict.reason, direction="input")

    raw = generate()

    verdict = christ_test(raw)
    if not verdict.ok:
        raise PolicyBlockedError(verdict.reason, direction="output")
    return raw
