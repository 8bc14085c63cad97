"""Consultation responses and council synthesis.

Formats persona drafts for callers (bulleted advice, depth clipping and a
confidence rating) and merges several persona responses into one synthesis
of agreements, conflicts, risks and next steps.
"""

from __future__ import annotations

from enum import Enum

from council_session.personas.contracts import DEVILS_ADVOCATE
from council_session.personas.generators import ConsultInput, Depth, PersonaDraft, clip_by_depth
from council_session.session.models import CouncilModel


class ConfidenceLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


_CONFIDENCE: dict[Depth, tuple[ConfidenceLevel, str]] = {
    Depth.DEEP: (ConfidenceLevel.HIGH, "Depth set to deep; more evidence provided."),
    Depth.STANDARD: (ConfidenceLevel.MEDIUM, "Standard depth with balanced evidence."),
    Depth.BRIEF: (ConfidenceLevel.LOW, "Brief depth; limited evidence included."),
}


def compute_confidence(depth: Depth) -> tuple[ConfidenceLevel, str]:
    """Return the confidence level and its rationale for a depth."""
    return _CONFIDENCE[depth]


class PersonaResponse(CouncilModel):
    """One persona's consultation answer as returned to callers.

    ``advice`` is a markdown bullet list; the other sections stay lists.
    """

    persona: str
    summary: str
    advice: str
    assumptions: list[str]
    questions: list[str]
    next_steps: list[str]
    confidence: ConfidenceLevel
    confidence_rationale: str


class Synthesis(CouncilModel):
    """Council-level view merged from several persona responses."""

    agreements: list[str]
    conflicts: list[str]
    risks_tradeoffs: list[str]
    next_steps: list[str]
    notes: list[str]


def _bulletize(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def _unique(items: list[str]) -> list[str]:
    # first occurrence wins; blank entries are dropped
    seen: dict[str, None] = {}
    for item in items:
        text = item.strip()
        if text:
            seen.setdefault(text, None)
    return list(seen)


def format_persona_draft(draft: PersonaDraft) -> PersonaResponse:
    """Clip a draft to its depth and attach the confidence rating."""
    level, rationale = compute_confidence(draft.depth)
    return PersonaResponse(
        persona=draft.persona,
        summary=draft.summary,
        advice=_bulletize(clip_by_depth(draft.advice, draft.depth)),
        assumptions=clip_by_depth(draft.assumptions, draft.depth),
        questions=clip_by_depth(draft.questions, draft.depth),
        next_steps=clip_by_depth(draft.next_steps, draft.depth),
        confidence=level,
        confidence_rationale=rationale,
    )


def build_synthesis(
    responses: list[PersonaResponse],
    consult_input: ConsultInput,
) -> Synthesis:
    """Merge persona responses into agreements, conflicts, risks and steps.

    Risks come from the Devil's Advocate advice only. Next steps are the
    de-duplicated union of every persona's steps, clipped to the
    consultation depth.
    """
    depth = consult_input.depth
    agreements = _unique([
        f"Shared goal: {consult_input.user_problem}",
        f"Target outcome: {consult_input.desired_outcome}"
        if consult_input.desired_outcome
        else "Align on explicit outcome",
    ])
    conflicts = _unique([
        "Balance speed vs quality",
        *(f"Constraint tension: {c}" for c in consult_input.constraints),
    ])
    risks = _unique([
        line.removeprefix("- ")
        for response in responses
        if response.persona == DEVILS_ADVOCATE
        for line in response.advice.split("\n")
    ])
    merged_steps = _unique([step for response in responses for step in response.next_steps])

    return Synthesis(
        agreements=agreements,
        conflicts=conflicts,
        risks_tradeoffs=risks,
        next_steps=clip_by_depth(merged_steps or ["Align on next steps"], depth),
        notes=[f"Depth: {depth.value}"],
    )


def _section(title: str, items: list[str]) -> list[str]:
    if not items:
        return []
    return [title, *(f"- {item}" for item in items), ""]


def render_consultation_markdown(
    responses: list[PersonaResponse],
    synthesis: Synthesis,
    problem: str,
) -> str:
    """Render a council consultation as a markdown document."""
    lines = [
        "# Council Consultation",
        "",
        f"**Problem:** {problem}",
        "",
        "---",
        "",
        "## Persona Perspectives",
        "",
    ]
    for response in responses:
        lines += [
            f"### {response.persona}",
            f"**Confidence:** {response.confidence.value} - {response.confidence_rationale}",
            "",
            f"**Summary:** {response.summary}",
            "",
            "**Advice:**",
            *(line for line in response.advice.split("\n") if line.strip()),
            "",
            *_section("**Assumptions:**", response.assumptions),
            *_section("**Key Questions:**", response.questions),
            *_section("**Next Steps:**", response.next_steps),
            "---",
            "",
        ]

    lines += ["## Council Synthesis", ""]
    lines += _section("### Agreements", synthesis.agreements)
    lines += _section("### Conflicts & Tensions", synthesis.conflicts)
    lines += _section("### Risks & Tradeoffs", synthesis.risks_tradeoffs)
    lines += _section("### Council-Recommended Next Steps", synthesis.next_steps)
    lines += _section("### Notes", synthesis.notes)
    return "\n".join(lines)
