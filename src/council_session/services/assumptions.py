"""Assumptions derived from skipped clarification questions."""

from __future__ import annotations

from council_session.session.models import Assumption, ClarificationQuestion


DEFAULT_SKIP_RATIONALE = "User skipped clarification question"


def describe_skip_assumption(question: ClarificationQuestion) -> str:
    return f"Assuming {question.target_ambiguity or 'details'} are acceptable as default"


def create_assumption(
    session_id: str,
    question: ClarificationQuestion,
    rationale: str | None = None,
) -> Assumption:
    """Create the assumption that stands in for a skipped question's answer."""
    return Assumption(
        session_id=session_id,
        related_question_id=question.question_id,
        assumption=describe_skip_assumption(question),
        rationale=rationale or DEFAULT_SKIP_RATIONALE,
    )
