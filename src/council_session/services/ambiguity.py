"""Ambiguity detection for incoming requests.

A static heuristic, not a learned classifier: the same text always yields
the same result. Checks accumulate; one failing check is enough to make a
request ambiguous.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


MIN_REQUEST_LENGTH = 20

REASON_TOO_SHORT = "Request is very short and likely lacks context"
REASON_NO_QUESTION = "Request lacks explicit question intent"
REASON_VAGUE = "Request contains vague language"

_QUESTION_WORDS = re.compile(r"\b(how|what|why|which|who)\b", re.IGNORECASE)
_VAGUE_HINTS = re.compile(r"something|somehow|stuff|maybe|not sure", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class AmbiguityResult:
    ambiguous: bool
    reasons: list[str] = field(default_factory=list)


def detect_ambiguity(request_text: str) -> AmbiguityResult:
    """Classify request text as ambiguous or not.

    Args:
        request_text: Raw caller text.

    Returns:
        AmbiguityResult with every reason that applied.
    """
    trimmed = request_text.strip()
    reasons: list[str] = []

    if len(trimmed) < MIN_REQUEST_LENGTH:
        reasons.append(REASON_TOO_SHORT)

    if not _QUESTION_WORDS.search(trimmed):
        reasons.append(REASON_NO_QUESTION)

    if _VAGUE_HINTS.search(trimmed):
        reasons.append(REASON_VAGUE)

    return AmbiguityResult(ambiguous=bool(reasons), reasons=reasons)
