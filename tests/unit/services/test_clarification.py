"""Unit tests for the clarification protocol."""

from __future__ import annotations

import pytest

from council_session.core.exceptions import InvalidTransitionError
from council_session.services.assumptions import create_assumption
from council_session.services.clarification import (
    DEFAULT_QUESTIONS,
    create_system_participant,
    get_next_clarification_question,
    get_skipped_questions,
    initialize_clarifications,
    is_skip_command,
    record_clarification_answer,
    revisit_skipped_questions,
)
from council_session.session.models import (
    CycleType,
    MessageType,
    Participant,
    ParticipantType,
    QuestionStatus,
    Session,
    SessionStatus,
    create_clarification_question,
)


@pytest.fixture
def clarifying_session(system_participant: Participant, user_participant: Participant) -> Session:
    session = Session(request_text="help with stuff", participants=[user_participant, system_participant])
    questions = initialize_clarifications(session, system_participant)
    return session.evolve(
        status=SessionStatus.CLARIFYING,
        clarification_questions=questions,
        clarification_rounds=1,
    )


class TestInitializeClarifications:
    def test_creates_default_round(self, sample_session: Session, system_participant: Participant) -> None:
        questions = initialize_clarifications(sample_session, system_participant)

        assert [q.question for q in questions] == [q for q, _ in DEFAULT_QUESTIONS]
        assert [q.target_ambiguity for q in questions] == ["goal", "constraints", "audience"]
        assert [q.order_key for q in questions] == [(1, 1), (1, 2), (1, 3)]
        assert all(q.status == QuestionStatus.PENDING for q in questions)
        assert all(q.asked_by == system_participant for q in questions)

    def test_is_idempotent(self, clarifying_session: Session, system_participant: Participant) -> None:
        questions = initialize_clarifications(clarifying_session, system_participant)

        assert questions == clarifying_session.clarification_questions


class TestGetNextClarificationQuestion:
    def test_orders_by_round_then_sequence(self, system_participant: Participant) -> None:
        session = Session(request_text="x")
        later = create_clarification_question(
            session_id=session.session_id, round_number=2, sequence_in_round=1,
            question="later", asked_by=system_participant,
        )
        earlier = create_clarification_question(
            session_id=session.session_id, round_number=1, sequence_in_round=2,
            question="earlier", asked_by=system_participant,
        )

        session = session.evolve(clarification_questions=[later, earlier])

        assert get_next_clarification_question(session).question == "earlier"

    def test_none_when_nothing_pending(self, sample_session: Session) -> None:
        assert get_next_clarification_question(sample_session) is None


class TestIsSkipCommand:
    @pytest.mark.parametrize("text", ["skip", "SKIP", "  skip question  ", "defer", "Defer Question"])
    def test_accepts(self, text: str) -> None:
        assert is_skip_command(text)

    @pytest.mark.parametrize("text", ["skipping", "please skip", "skip this", "", "deferred"])
    def test_rejects(self, text: str) -> None:
        assert not is_skip_command(text)


class TestRecordClarificationAnswer:
    def test_records_answer(self, clarifying_session: Session, user_participant: Participant) -> None:
        question = get_next_clarification_question(clarifying_session)

        response = record_clarification_answer(
            clarifying_session, question, "Cut costs by 20%", False, user_participant
        )

        updated = response.updated_session
        answered = updated.clarification_questions[0]
        assert answered.status == QuestionStatus.ANSWERED
        assert answered.user_answer.answer == "Cut costs by 20%"
        assert answered.answered_at is not None
        assert response.next_question.sequence_in_round == 2

    def test_appends_one_answer_turn(self, clarifying_session: Session, user_participant: Participant) -> None:
        question = get_next_clarification_question(clarifying_session)

        updated = record_clarification_answer(
            clarifying_session, question, "Cut costs", False, user_participant
        ).updated_session

        assert len(updated.message_turns) == 1
        turn = updated.message_turns[0]
        assert turn.message_type == MessageType.ANSWER
        assert turn.sender == user_participant
        assert turn.sequence_number == 1
        assert turn.related_cycle_or_round.cycle_type == CycleType.CLARIFICATION
        assert turn.related_cycle_or_round.number == 1

    def test_skip_marks_question_skipped(self, clarifying_session: Session, user_participant: Participant) -> None:
        question = get_next_clarification_question(clarifying_session)

        updated = record_clarification_answer(
            clarifying_session, question, "skip", True, user_participant
        ).updated_session

        assert updated.clarification_questions[0].status == QuestionStatus.SKIPPED
        assert updated.clarification_questions[0].user_answer.skip_command is True
        assert get_skipped_questions(updated) == [updated.clarification_questions[0]]

    def test_input_session_untouched(self, clarifying_session: Session, user_participant: Participant) -> None:
        question = get_next_clarification_question(clarifying_session)

        record_clarification_answer(clarifying_session, question, "answer", False, user_participant)

        assert clarifying_session.clarification_questions[0].status == QuestionStatus.PENDING
        assert clarifying_session.message_turns == []

    def test_last_answer_has_no_next_question(
        self,
        clarifying_session: Session,
        user_participant: Participant,
    ) -> None:
        session = clarifying_session
        response = None
        for text in ("a", "b", "c"):
            question = get_next_clarification_question(session)
            response = record_clarification_answer(session, question, text, False, user_participant)
            session = response.updated_session

        assert response.next_question is None
        assert [t.sequence_number for t in session.message_turns] == [1, 2, 3]


class TestRevisitSkippedQuestions:
    def _skip_first(self, session: Session, user: Participant) -> Session:
        question = get_next_clarification_question(session)
        session = record_clarification_answer(session, question, "skip", True, user).updated_session
        return session.evolve(assumptions=[create_assumption(session.session_id, question)])

    def test_nothing_skipped_returns_same_object(self, clarifying_session: Session) -> None:
        assert revisit_skipped_questions(clarifying_session) is clarifying_session

    def test_reopens_skipped_and_drops_assumptions(
        self,
        clarifying_session: Session,
        user_participant: Participant,
    ) -> None:
        session = self._skip_first(clarifying_session, user_participant).evolve(status=SessionStatus.DEBATING)

        revisited = revisit_skipped_questions(session)

        reopened = revisited.clarification_questions[0]
        assert reopened.status == QuestionStatus.PENDING
        assert reopened.user_answer is None
        assert reopened.answered_at is None
        assert revisited.assumptions == []
        assert revisited.status == SessionStatus.CLARIFYING
        assert get_next_clarification_question(revisited).question_id == reopened.question_id

    def test_keeps_unrelated_assumptions(self, clarifying_session: Session, user_participant: Participant) -> None:
        session = self._skip_first(clarifying_session, user_participant)
        other = create_assumption(session.session_id, session.clarification_questions[2])
        session = session.evolve(assumptions=[*session.assumptions, other])

        revisited = revisit_skipped_questions(session)

        assert revisited.assumptions == [other]

    def test_terminal_session_raises(self, clarifying_session: Session, user_participant: Participant) -> None:
        session = self._skip_first(clarifying_session, user_participant).evolve(status=SessionStatus.CANCELLED)

        with pytest.raises(InvalidTransitionError):
            revisit_skipped_questions(session)


def test_system_participant() -> None:
    participant = create_system_participant()

    assert participant.type == ParticipantType.SYSTEM
    assert participant.name == "System"
