"""Clarification sub-protocol.

All state lives on the Session; these functions take a session value and
return new values without mutating their input.

Question ordering is (round_number, sequence_in_round) ascending.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from council_session.session.models import (
    ClarificationQuestion,
    CycleType,
    MessageType,
    Participant,
    ParticipantType,
    QuestionStatus,
    RelatedCycle,
    Session,
    SessionStatus,
    create_clarification_answer,
    create_clarification_question,
    create_message_turn,
    new_id,
    utc_now,
)
from council_session.session.state_machine import transition


# (question, target ambiguity)
DEFAULT_QUESTIONS: tuple[tuple[str, str], ...] = (
    ("What is your primary goal or outcome?", "goal"),
    ("What constraints or deadlines should we consider?", "constraints"),
    ("Who is the intended audience or user?", "audience"),
)

_SKIP_COMMAND = re.compile(r"^\s*(skip|defer)(\s+question)?\s*$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class ClarificationResponse:
    updated_session: Session
    next_question: ClarificationQuestion | None = None


def create_system_participant() -> Participant:
    return Participant(participant_id=new_id(), type=ParticipantType.SYSTEM, name="System")


def initialize_clarifications(
    session: Session,
    asked_by: Participant,
) -> list[ClarificationQuestion]:
    """Return the session's questions, creating the default round if none exist.

    Idempotent: a session that already has questions gets them back as-is.
    """
    if session.clarification_questions:
        return session.clarification_questions
    return [
        create_clarification_question(
            session_id=session.session_id,
            round_number=1,
            sequence_in_round=index,
            question=question,
            asked_by=asked_by,
            target_ambiguity=target,
        )
        for index, (question, target) in enumerate(DEFAULT_QUESTIONS, start=1)
    ]


def get_next_clarification_question(session: Session) -> ClarificationQuestion | None:
    """Return the pending question with the smallest (round, sequence), if any."""
    pending = [q for q in session.clarification_questions if q.status == QuestionStatus.PENDING]
    if not pending:
        return None
    return min(pending, key=lambda q: q.order_key)


def get_skipped_questions(session: Session) -> list[ClarificationQuestion]:
    return [q for q in session.clarification_questions if q.status == QuestionStatus.SKIPPED]


def is_skip_command(answer_text: str) -> bool:
    """True for "skip", "skip question", "defer" (any case, padded)."""
    return bool(_SKIP_COMMAND.match(answer_text))


def record_clarification_answer(
    session: Session,
    question: ClarificationQuestion,
    answer_text: str,
    skip_command: bool,
    user_participant: Participant,
) -> ClarificationResponse:
    """Record an answer (or skip) for ``question``.

    The question becomes ``skipped`` or ``answered`` with the answer
    attached, and one ``answer`` turn from the user is appended.

    Returns:
        ClarificationResponse with the new session and the next pending
        question, if any.
    """
    answer = create_clarification_answer(
        session_id=session.session_id,
        question_id=question.question_id,
        answer=answer_text,
        skip_command=skip_command,
    )
    new_status = QuestionStatus.SKIPPED if skip_command else QuestionStatus.ANSWERED
    answered_at = utc_now()

    updated_questions = [
        q.model_copy(update={
            "status": new_status,
            "user_answer": answer,
            "answered_at": answered_at,
        })
        if q.question_id == question.question_id
        else q
        for q in session.clarification_questions
    ]

    turn = create_message_turn(
        session_id=session.session_id,
        sender=user_participant,
        message_type=MessageType.ANSWER,
        content=answer_text,
        sequence_number=session.next_sequence_number,
        related_cycle_or_round=RelatedCycle(
            cycle_type=CycleType.CLARIFICATION,
            number=question.round_number,
        ),
    )

    updated_session = session.evolve(
        clarification_questions=updated_questions,
        message_turns=[*session.message_turns, turn],
    )
    return ClarificationResponse(
        updated_session=updated_session,
        next_question=get_next_clarification_question(updated_session),
    )


def revisit_skipped_questions(session: Session) -> Session:
    """Reopen skipped questions for answering.

    Skipped questions go back to pending with their answers cleared, the
    assumptions they produced are removed and the session returns to
    ``clarifying`` (a terminal session raises InvalidTransitionError).
    With nothing skipped the same session object is returned.
    """
    skipped_ids = {q.question_id for q in get_skipped_questions(session)}
    if not skipped_ids:
        return session

    updated_questions = [
        q.model_copy(update={
            "status": QuestionStatus.PENDING,
            "user_answer": None,
            "answered_at": None,
        })
        if q.question_id in skipped_ids
        else q
        for q in session.clarification_questions
    ]
    updated_assumptions = [
        a for a in session.assumptions
        if a.related_question_id is None or a.related_question_id not in skipped_ids
    ]

    return transition(
        session,
        SessionStatus.CLARIFYING,
        clarification_questions=updated_questions,
        assumptions=updated_assumptions,
    )
