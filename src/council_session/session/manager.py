"""SessionManager - copy-on-write mutations over a SessionRepository.

The manager is the only component that talks to storage. Every mutation is
expressed as an updater function producing a new Session value, so the
repository only ever swaps whole values.
"""

from __future__ import annotations

from dataclasses import dataclass

from council_session.core.config import Settings
from council_session.core.exceptions import SessionNotFoundError
from council_session.core.logging import get_logger
from council_session.session.models import (
    Assumption,
    ClarificationQuestion,
    MessageType,
    Participant,
    ParticipantType,
    PersonaSelection,
    Session,
    SessionStatus,
    create_message_turn,
    new_id,
)
from council_session.session.state_machine import can_transition, coerce_status
from council_session.session.store import SessionRepository, SessionUpdater


logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SessionManagerConfig:
    """Configuration snapshot recorded on every new session."""

    interactive_mode_enabled: bool = True
    debate_cycle_limit: int = 10
    extended_debate_cycle_limit: int = 20

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionManagerConfig:
        return cls(
            interactive_mode_enabled=settings.interactive_mode_enabled,
            debate_cycle_limit=settings.debate_cycle_limit,
            extended_debate_cycle_limit=settings.extended_debate_cycle_limit,
        )


class SessionManager:
    """CRUD and copy-on-write mutation of session aggregates.

    Methods that target a session by id return the updated Session, or None
    when the id is unknown.
    """

    def __init__(self, store: SessionRepository, config: SessionManagerConfig) -> None:
        self._store = store
        self._config = config

    @property
    def config(self) -> SessionManagerConfig:
        return self._config

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def create_session(self, request_text: str, extended_debate_requested: bool) -> Session:
        """Create and store a new session in ``created`` status."""
        session = Session(
            request_text=request_text,
            extended_debate_requested=extended_debate_requested,
            metadata={
                "interactive_mode_enabled": self._config.interactive_mode_enabled,
                "debate_cycle_limit": self._config.debate_cycle_limit,
                "extended_debate_cycle_limit": self._config.extended_debate_cycle_limit,
            },
        )
        stored = self._store.create_session(session)
        logger.info(
            "session.created",
            session_id=stored.session_id,
            extended_debate=extended_debate_requested,
        )
        return stored

    def get_session(self, session_id: str) -> Session | None:
        return self._store.get_session(session_id)

    def require_session(self, session_id: str) -> Session:
        """Get a session or raise.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        session = self._store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def update_session(self, session_id: str, updater: SessionUpdater) -> Session | None:
        return self._store.update_session(session_id, updater)

    def commit(self, session: Session) -> Session:
        """Replace the stored value of ``session`` with this one.

        Raises:
            SessionNotFoundError: If the session was deleted in the meantime.
        """
        stored = self._store.update_session(session.session_id, lambda _current: session)
        if stored is None:
            raise SessionNotFoundError(session.session_id)
        return stored

    def delete_session(self, session_id: str) -> bool:
        deleted = self._store.delete_session(session_id)
        if deleted:
            logger.info("session.deleted", session_id=session_id)
        return deleted

    def list_sessions(self) -> list[Session]:
        return self._store.list_sessions()

    # -------------------------------------------------------------------------
    # Field mutations
    # -------------------------------------------------------------------------

    def set_session_status(
        self,
        session_id: str,
        status: SessionStatus | str,
    ) -> Session | None:
        """Set the status if it is a known value and a legal transition.

        An unknown status or a transition the table forbids leaves the
        session unchanged; callers compare the returned status to detect it.
        """
        session = self._store.get_session(session_id)
        if session is None:
            return None
        target = coerce_status(status)
        if target is None or not can_transition(session.status, target):
            logger.warning(
                "session.status_rejected",
                session_id=session_id,
                current=session.status.value,
                requested=str(getattr(status, "value", status)),
            )
            return session
        return self._store.update_session(
            session_id,
            lambda current: current.evolve(status=target),
        )

    def add_participant(self, session_id: str, participant: Participant) -> Session | None:
        return self._store.update_session(
            session_id,
            lambda current: current.evolve(participants=[*current.participants, participant]),
        )

    def add_message(
        self,
        session_id: str,
        sender: Participant,
        content: str,
        message_type: MessageType = MessageType.ANSWER,
    ) -> Session | None:
        """Append a turn built from sender and content.

        The sequence number is assigned inside the updater so it always
        follows the stored transcript.
        """

        def _append(current: Session) -> Session:
            turn = create_message_turn(
                session_id=session_id,
                sender=sender,
                message_type=message_type,
                content=content,
                sequence_number=current.next_sequence_number,
            )
            return current.evolve(message_turns=[*current.message_turns, turn])

        return self._store.update_session(session_id, _append)

    def append_system_message(
        self,
        session_id: str,
        content: str,
        message_type: MessageType,
    ) -> Session | None:
        system = Participant(participant_id=new_id(), type=ParticipantType.SYSTEM, name="System")
        return self.add_message(session_id, system, content, message_type)

    def add_clarification_question(
        self,
        session_id: str,
        question: ClarificationQuestion,
    ) -> Session | None:
        return self._store.update_session(
            session_id,
            lambda current: current.evolve(
                clarification_questions=[*current.clarification_questions, question]
            ),
        )

    def add_assumption(self, session_id: str, assumption: Assumption) -> Session | None:
        return self._store.update_session(
            session_id,
            lambda current: current.evolve(assumptions=[*current.assumptions, assumption]),
        )

    def set_persona_selection(
        self,
        session_id: str,
        selection: PersonaSelection,
    ) -> Session | None:
        return self._store.update_session(
            session_id,
            lambda current: current.evolve(persona_selection=selection),
        )
