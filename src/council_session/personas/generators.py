"""Persona draft generation.

Turns a persona contract plus the caller's consultation input into a
structured draft: advice, assumptions, questions and next steps, each clipped
to the requested depth.

Generation is deterministic: identical inputs always produce identical drafts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from council_session.core.exceptions import UnknownPersonaError
from council_session.personas.contracts import DEVILS_ADVOCATE, PersonaContract, get_persona


T = TypeVar("T")


class Depth(str, Enum):
    """Response detail level."""

    BRIEF = "brief"        # 2-3 items per section
    STANDARD = "standard"  # 5-7 items per section
    DEEP = "deep"          # 10+ items per section


_DEPTH_LIMITS: dict[Depth, tuple[int, int]] = {
    Depth.BRIEF: (2, 3),
    Depth.STANDARD: (5, 7),
    Depth.DEEP: (10, 999),
}


def depth_limits(depth: Depth) -> tuple[int, int]:
    """Return the (min, max) item counts for a depth level."""
    return _DEPTH_LIMITS[depth]


def clip_by_depth(items: list[T], depth: Depth) -> list[T]:
    """Keep the first N items, N clamped between the depth's min and max.

    When the list is shorter than the minimum the whole list is returned.
    """
    minimum, maximum = depth_limits(depth)
    size = max(minimum, min(len(items), maximum))
    return items[:size]


@dataclass(frozen=True, slots=True)
class ConsultInput:
    """Consultation input handed to a draft generator.

    Attributes:
        user_problem: The core problem or decision to address
        context: Optional background information
        desired_outcome: Optional success criteria
        constraints: Optional constraints affecting the problem
        depth: Response detail level
    """

    user_problem: str
    context: str | None = None
    desired_outcome: str | None = None
    constraints: tuple[str, ...] = ()
    depth: Depth = Depth.STANDARD


@dataclass(frozen=True, slots=True)
class PersonaDraft:
    """Structured consultation response from one persona."""

    persona: str
    summary: str
    advice: list[str] = field(default_factory=list)
    assumptions: list[str] = field(default_factory=list)
    questions: list[str] = field(default_factory=list)
    next_steps: list[str] = field(default_factory=list)
    depth: Depth = Depth.STANDARD

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "persona": self.persona,
            "summary": self.summary,
            "advice": list(self.advice),
            "assumptions": list(self.assumptions),
            "questions": list(self.questions),
            "next_steps": list(self.next_steps),
            "depth": self.depth.value,
        }


_BASELINE_QUESTIONS = [
    "What is the current baseline?",
    "What is the budget and timeline?",
    "Who is accountable and informed?",
]


def generate_persona_draft(persona: PersonaContract, consult_input: ConsultInput) -> PersonaDraft:
    """Generate a draft from a persona contract.

    Advice opens with the persona's soul statement, then one line per focus
    area, the outcome and context lines, and one line per constraint.
    """
    advice = [
        persona.soul,
        *(f"{persona.name} focus: {f}" for f in persona.focus),
        f"Aim: {consult_input.desired_outcome}"
        if consult_input.desired_outcome
        else "Clarify desired outcome",
        f"Context: {consult_input.context}"
        if consult_input.context
        else "Gather context and baselines",
        *(f"Respect constraint: {c}" for c in persona.constraints),
    ]

    assumptions = [
        f"Problem: {consult_input.user_problem}",
        f"Outcome: {consult_input.desired_outcome}"
        if consult_input.desired_outcome
        else "Outcome: unspecified",
        f"Constraints: {', '.join(consult_input.constraints)}"
        if consult_input.constraints
        else "Constraints: none provided",
    ]

    next_steps = [
        f"Restate success metric for {persona.name}",
        "Draft a 3-step plan with milestones",
        "Assign owners and timelines",
        "Identify risks and mitigations",
        "Set instrumentation for tracking",
        "Schedule a review after first milestone",
    ]

    depth = consult_input.depth
    return PersonaDraft(
        persona=persona.name,
        summary=f"{persona.name}: {consult_input.user_problem}",
        advice=clip_by_depth(advice, depth),
        assumptions=clip_by_depth(assumptions, depth),
        questions=clip_by_depth(list(_BASELINE_QUESTIONS), depth),
        next_steps=clip_by_depth(next_steps, depth),
        depth=depth,
    )


def generate_devils_advocate_draft(consult_input: ConsultInput) -> PersonaDraft:
    """Generate the risk-focused draft used for the Devil's Advocate."""
    risk_bullets = [
        "Assumption risk: unvalidated demand",
        "Execution risk: timeline too tight",
        "Financial risk: budget overrun",
        "People risk: team capacity",
        "Operational risk: tooling gaps",
    ]
    conflicts = [
        "Challenge optimistic assumptions",
        "Highlight tradeoffs versus constraints",
        "Ask for fallback plan",
    ]
    next_steps = [
        "List top 3 risks and mitigations",
        "Define a fallback if primary plan fails",
        "Timebox a spike to validate assumptions",
        "Add leading indicators for risk detection",
        "Quantify impact range for worst case",
        "Set an explicit stop/go checkpoint",
    ]
    questions = [
        "What if budget is cut by 30%?",
        "What if adoption lags?",
        "What if key dependency slips?",
    ]

    depth = consult_input.depth
    return PersonaDraft(
        persona=DEVILS_ADVOCATE,
        summary=f"{DEVILS_ADVOCATE}: Stress-test assumptions for {consult_input.user_problem}",
        advice=clip_by_depth(risk_bullets + conflicts, depth),
        assumptions=["Assumptions need explicit validation"],
        questions=clip_by_depth(questions, depth),
        next_steps=clip_by_depth(next_steps, depth),
        depth=depth,
    )


class ContractDraftGenerator:
    """Default DraftGenerator backed by the static persona catalogue.

    Every persona, the Devil's Advocate included, speaks from its contract
    during debate; the risk draft belongs to consultations.
    """

    async def generate(
        self,
        persona: PersonaContract,
        consult_input: ConsultInput,
    ) -> PersonaDraft:
        return generate_persona_draft(persona, consult_input)

    def resolve(self, persona_name: str) -> PersonaContract:
        """Resolve a persona name to its contract.

        Raises:
            UnknownPersonaError: If the name is not in the catalogue.
        """
        contract = get_persona(persona_name)
        if contract is None:
            raise UnknownPersonaError(persona_name)
        return contract
