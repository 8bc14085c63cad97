"""Persona selection from request text.

Keyword rules are checked in order and every matching rule contributes its
personas. An explicit caller list bypasses matching entirely and is returned
verbatim; validating those names is the draft generator's job.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from council_session.personas.contracts import PERSONA_NAMES
from council_session.session.models import PersonaSelection


REASON_USER_OVERRIDE = "User requested specific personas by name"
REASON_DEFAULTS = "Using defaults"
REASON_MATCHED = "Matched personas to request keywords"

CLASSIFICATION_USER_OVERRIDE = "user_override"
CLASSIFICATION_DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class KeywordRule:
    domain: str
    pattern: re.Pattern[str]
    personas: tuple[str, ...]


KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "security",
        re.compile(r"security|compliance|threat|vulnerability", re.IGNORECASE),
        ("Security Expert",),
    ),
    KeywordRule(
        "devops",
        re.compile(
            r"devops|deployment|kubernetes|docker|ci/cd|pipeline|observability",
            re.IGNORECASE,
        ),
        ("DevOps Engineer",),
    ),
    KeywordRule(
        "architecture",
        re.compile(r"architecture|design|system|scalability", re.IGNORECASE),
        ("Senior Architect",),
    ),
    KeywordRule(
        "performance",
        re.compile(r"performance|latency|throughput|optimization", re.IGNORECASE),
        ("Senior Developer",),
    ),
    KeywordRule(
        "product",
        re.compile(r"product|roadmap|stakeholder|business value", re.IGNORECASE),
        ("Product Owner",),
    ),
    KeywordRule(
        "testing",
        re.compile(r"testing|qa|quality|regression", re.IGNORECASE),
        ("QA Engineer",),
    ),
)

DEFAULT_PERSONAS: tuple[str, ...] = ("Senior Developer", "Senior Architect", "Product Owner")


@dataclass(frozen=True, slots=True)
class PersonaSelectionResult:
    """Outcome of persona selection.

    Attributes:
        selected: Persona names, in first-match order
        reason: Human-readable explanation
        user_override: True when the caller named the personas
        matched_domains: Keyword domains that matched (empty for overrides)
    """

    selected: list[str]
    reason: str
    user_override: bool
    matched_domains: list[str] = field(default_factory=list)

    @property
    def used_defaults(self) -> bool:
        return not self.user_override and not self.matched_domains

    @property
    def classification(self) -> str:
        if self.user_override:
            return CLASSIFICATION_USER_OVERRIDE
        if not self.matched_domains:
            return CLASSIFICATION_DEFAULT
        return "+".join(self.matched_domains)


def _match_keywords(request_text: str) -> tuple[list[str], list[str]]:
    # dict keys keep first-seen order while de-duplicating
    selected: dict[str, None] = {}
    domains: list[str] = []
    for rule in KEYWORD_RULES:
        if rule.pattern.search(request_text):
            domains.append(rule.domain)
            for persona in rule.personas:
                selected[persona] = None
    return list(selected), domains


def select_personas_for_request(
    request_text: str,
    personas_requested: list[str] | None = None,
) -> PersonaSelectionResult:
    """Choose the personas that take part in a debate step.

    Args:
        request_text: The session's original request.
        personas_requested: Optional explicit caller choice.

    Returns:
        PersonaSelectionResult describing the choice.
    """
    if personas_requested:
        return PersonaSelectionResult(
            selected=list(personas_requested),
            reason=REASON_USER_OVERRIDE,
            user_override=True,
        )

    selected, domains = _match_keywords(request_text)
    used_defaults = not selected
    if used_defaults:
        selected = list(DEFAULT_PERSONAS)

    filtered = [persona for persona in selected if persona in PERSONA_NAMES]

    return PersonaSelectionResult(
        selected=filtered,
        reason=REASON_DEFAULTS if used_defaults else REASON_MATCHED,
        user_override=False,
        matched_domains=domains,
    )


def build_persona_selection(
    session_id: str,
    request_text: str,
    result: PersonaSelectionResult,
) -> PersonaSelection:
    """Build the PersonaSelection record for a session.

    For a caller override, the personas the heuristic would have chosen but
    the caller replaced are listed in ``overridden_personas``.
    """
    overridden: list[str] | None = None
    if result.user_override:
        heuristic = select_personas_for_request(request_text)
        overridden = [p for p in heuristic.selected if p not in result.selected]

    return PersonaSelection(
        session_id=session_id,
        request_classification=result.classification,
        selected_personas=list(result.selected),
        reason=result.reason,
        user_override=result.user_override,
        overridden_personas=overridden,
    )
