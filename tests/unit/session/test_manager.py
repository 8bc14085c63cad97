"""Unit tests for SessionManager."""

from __future__ import annotations

import pytest

from council_session.core.exceptions import SessionNotFoundError
from council_session.session.manager import SessionManager, SessionManagerConfig
from council_session.session.models import (
    Assumption,
    MessageType,
    Participant,
    ParticipantType,
    PersonaSelection,
    SessionStatus,
    create_clarification_question,
)
from council_session.session.store import InMemorySessionStore


class TestLifecycle:
    def test_create_session_stores_config_snapshot(self, manager: SessionManager) -> None:
        session = manager.create_session("How do we scale?", extended_debate_requested=True)

        assert session.status == SessionStatus.CREATED
        assert session.extended_debate_requested is True
        assert session.metadata == {
            "interactive_mode_enabled": True,
            "debate_cycle_limit": 10,
            "extended_debate_cycle_limit": 20,
        }
        assert manager.get_session(session.session_id) == session

    def test_require_session_raises_for_unknown(self, manager: SessionManager) -> None:
        with pytest.raises(SessionNotFoundError):
            manager.require_session("missing")

    def test_commit_replaces_stored_value(self, manager: SessionManager) -> None:
        session = manager.create_session("How do we scale?", False)

        manager.commit(session.evolve(debate_cycles=1))

        assert manager.require_session(session.session_id).debate_cycles == 1

    def test_commit_after_delete_raises(self, manager: SessionManager) -> None:
        session = manager.create_session("How do we scale?", False)
        manager.delete_session(session.session_id)

        with pytest.raises(SessionNotFoundError):
            manager.commit(session)

    def test_delete_and_list(self, manager: SessionManager) -> None:
        first = manager.create_session("a", False)
        manager.create_session("b", False)

        assert manager.delete_session(first.session_id) is True
        assert manager.delete_session(first.session_id) is False
        assert [s.request_text for s in manager.list_sessions()] == ["b"]

    def test_config_from_settings(self, short_limit_settings) -> None:
        config = SessionManagerConfig.from_settings(short_limit_settings)

        assert config.debate_cycle_limit == 2
        assert config.extended_debate_cycle_limit == 3


class TestSetSessionStatus:
    def test_legal_transition(self, manager: SessionManager) -> None:
        session = manager.create_session("a", False)

        updated = manager.set_session_status(session.session_id, "debating")

        assert updated.status == SessionStatus.DEBATING

    def test_unknown_status_leaves_session_unchanged(self, manager: SessionManager) -> None:
        session = manager.create_session("a", False)

        result = manager.set_session_status(session.session_id, "paused")

        assert result == session
        assert manager.require_session(session.session_id).status == SessionStatus.CREATED

    def test_forbidden_transition_leaves_session_unchanged(self, manager: SessionManager) -> None:
        session = manager.create_session("a", False)

        result = manager.set_session_status(session.session_id, SessionStatus.FINAL)

        assert result.status == SessionStatus.CREATED

    def test_unknown_session(self, manager: SessionManager) -> None:
        assert manager.set_session_status("missing", "debating") is None


class TestFieldMutations:
    @pytest.fixture
    def session_id(self, manager: SessionManager) -> str:
        return manager.create_session("How do we scale?", False).session_id

    def test_add_participant(self, manager: SessionManager, session_id: str, user_participant: Participant) -> None:
        updated = manager.add_participant(session_id, user_participant)

        assert updated.participants == [user_participant]

    def test_add_message_assigns_sequence_numbers(
        self,
        manager: SessionManager,
        session_id: str,
        user_participant: Participant,
    ) -> None:
        manager.add_message(session_id, user_participant, "first")
        updated = manager.add_message(session_id, user_participant, "second", MessageType.DISCUSSION)

        assert [t.sequence_number for t in updated.message_turns] == [1, 2]
        assert updated.message_turns[1].message_type == MessageType.DISCUSSION

    def test_append_system_message(self, manager: SessionManager, session_id: str) -> None:
        updated = manager.append_system_message(session_id, "Noted", MessageType.ASSUMPTION_STATEMENT)

        turn = updated.message_turns[-1]
        assert turn.sender.type == ParticipantType.SYSTEM
        assert turn.content == "Noted"

    def test_add_clarification_question_and_assumption(
        self,
        manager: SessionManager,
        session_id: str,
        system_participant: Participant,
    ) -> None:
        question = create_clarification_question(
            session_id=session_id,
            round_number=1,
            sequence_in_round=1,
            question="What is your goal?",
            asked_by=system_participant,
        )
        manager.add_clarification_question(session_id, question)
        updated = manager.add_assumption(
            session_id,
            Assumption(session_id=session_id, assumption="Assume defaults", rationale="skipped"),
        )

        assert updated.clarification_questions == [question]
        assert updated.assumptions[0].assumption == "Assume defaults"

    def test_set_persona_selection(self, manager: SessionManager, session_id: str) -> None:
        selection = PersonaSelection(
            session_id=session_id,
            request_classification="default",
            selected_personas=["Senior Developer"],
            reason="Using defaults",
            user_override=False,
        )

        updated = manager.set_persona_selection(session_id, selection)

        assert updated.persona_selection == selection

    def test_mutations_on_unknown_session_return_none(
        self,
        manager: SessionManager,
        user_participant: Participant,
    ) -> None:
        assert manager.add_participant("missing", user_participant) is None
        assert manager.add_message("missing", user_participant, "hi") is None


def test_manager_works_with_any_repository(test_settings) -> None:
    manager = SessionManager(InMemorySessionStore(), SessionManagerConfig.from_settings(test_settings))

    assert manager.config.interactive_mode_enabled is True
