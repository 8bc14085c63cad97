"""
Session Module - consultation session state and storage

- models: immutable session aggregate and its nested entities
- state_machine: status transition table
- store: SessionRepository protocol and in-memory implementation
- manager: copy-on-write mutations over a repository
- locks: per-session serialization
"""

from council_session.session.locks import SessionLockRegistry
from council_session.session.manager import SessionManager, SessionManagerConfig
from council_session.session.models import (
    Assumption,
    ClarificationAnswer,
    ClarificationQuestion,
    CouncilDiscussion,
    DebateStatus,
    MessageTurn,
    MessageType,
    Participant,
    ParticipantType,
    PersonaSelection,
    QuestionStatus,
    Session,
    SessionStatus,
)
from council_session.session.state_machine import TRANSITIONS, can_transition, transition
from council_session.session.store import InMemorySessionStore, SessionRepository

__all__ = [
    "TRANSITIONS",
    "Assumption",
    "ClarificationAnswer",
    "ClarificationQuestion",
    "CouncilDiscussion",
    "DebateStatus",
    "InMemorySessionStore",
    "MessageTurn",
    "MessageType",
    "Participant",
    "ParticipantType",
    "PersonaSelection",
    "QuestionStatus",
    "Session",
    "SessionLockRegistry",
    "SessionManager",
    "SessionManagerConfig",
    "SessionRepository",
    "SessionStatus",
    "can_transition",
    "transition",
]
