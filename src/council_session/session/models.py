"""Session Models - data structures for council consultation sessions.

Every model is an immutable pydantic model. Changes are made by building a
new value (``Session.evolve``), never by mutating in place, so a stored
session can be shared with concurrent readers safely.

Field names are snake_case in Python and camelCase on the wire
(``session_id`` <-> ``sessionId``).
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# Enums
# =============================================================================


class SessionStatus(str, Enum):
    """Lifecycle status of a session.

    CANCELLED and ERROR are terminal states that normal flow never produces.
    """

    CREATED = "created"
    CLARIFYING = "clarifying"
    DEBATING = "debating"
    FINAL = "final"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ERROR = "error"


class ParticipantType(str, Enum):
    """Type of participant in a session."""

    USER = "user"
    PERSONA = "persona"
    SYSTEM = "system"


class MessageType(str, Enum):
    """Kind of message turn."""

    QUESTION = "question"
    ANSWER = "answer"
    DISCUSSION = "discussion"
    CONCLUSION = "conclusion"
    ASSUMPTION_STATEMENT = "assumption_statement"


class QuestionStatus(str, Enum):
    """Status of a clarification question."""

    PENDING = "pending"
    ANSWERED = "answered"
    SKIPPED = "skipped"
    DEFERRED = "deferred"


class DebateStatus(str, Enum):
    """Status of a council discussion."""

    IN_PROGRESS = "in_progress"
    CONCLUDED = "concluded"
    LIMIT_REACHED = "limit_reached"


class CycleType(str, Enum):
    CLARIFICATION = "clarification"
    DEBATE = "debate"


# =============================================================================
# Base model
# =============================================================================


class CouncilModel(BaseModel):
    """Frozen base model with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Entities
# =============================================================================


class Participant(CouncilModel):
    """An actor in a session: the user, a persona, or the system."""

    participant_id: str
    type: ParticipantType
    name: str
    role: str | None = None


class RelatedCycle(CouncilModel):
    """Correlates a message turn with a clarification round or debate cycle."""

    cycle_type: CycleType
    number: int


class MessageTurn(CouncilModel):
    """Single message in a session transcript.

    Attributes:
        sequence_number: Session-scoped, strictly increasing position.
        related_cycle_or_round: Optional round/cycle correlation tag.
    """

    turn_id: str = Field(default_factory=new_id)
    session_id: str
    sender: Participant
    recipient: Participant | None = None
    message_type: MessageType
    content: str
    timestamp: datetime = Field(default_factory=utc_now)
    sequence_number: int
    related_cycle_or_round: RelatedCycle | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ClarificationAnswer(CouncilModel):
    """The caller's answer (or skip) for one clarification question."""

    answer_id: str = Field(default_factory=new_id)
    question_id: str
    session_id: str
    answer: str
    skip_command: bool = False
    confidence: str | None = None
    created_at: datetime = Field(default_factory=utc_now)


class ClarificationQuestion(CouncilModel):
    """A clarification question, ordered by (round_number, sequence_in_round)."""

    question_id: str = Field(default_factory=new_id)
    session_id: str
    round_number: int
    sequence_in_round: int
    question: str
    target_ambiguity: str | None = None
    asked_by: Participant
    user_answer: ClarificationAnswer | None = None
    status: QuestionStatus = QuestionStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    answered_at: datetime | None = None

    @property
    def order_key(self) -> tuple[int, int]:
        return (self.round_number, self.sequence_in_round)


class Assumption(CouncilModel):
    """An assumption the council works with in place of a skipped answer."""

    assumption_id: str = Field(default_factory=new_id)
    session_id: str
    related_question_id: str | None = None
    assumption: str
    rationale: str
    added_at: datetime = Field(default_factory=utc_now)


class CouncilDiscussion(CouncilModel):
    """One debate cycle: a turn per participating persona plus a resolution."""

    discussion_id: str = Field(default_factory=new_id)
    session_id: str
    cycle_number: int
    participating_personas: list[str]
    exchange_starts: datetime = Field(default_factory=utc_now)
    exchange_ends: datetime | None = None
    topic: str | None = None
    message_turns: list[MessageTurn] = Field(default_factory=list)
    resolution_summary: str | None = None
    status: DebateStatus = DebateStatus.IN_PROGRESS


class PersonaSelection(CouncilModel):
    """Record of which personas were chosen for a debate step and why."""

    selection_id: str = Field(default_factory=new_id)
    session_id: str
    request_classification: str
    selected_personas: list[str]
    reason: str
    user_override: bool
    overridden_personas: list[str] | None = None
    created_at: datetime = Field(default_factory=utc_now)


class Session(CouncilModel):
    """Root aggregate of a consultation.

    Invariant: ``debate_cycles == len(discussions)``.
    """

    session_id: str = Field(default_factory=new_id)
    status: SessionStatus = SessionStatus.CREATED
    request_text: str
    clarification_rounds: int = 0
    debate_cycles: int = 0
    extended_debate_requested: bool = False
    participants: list[Participant] = Field(default_factory=list)
    message_turns: list[MessageTurn] = Field(default_factory=list)
    clarification_questions: list[ClarificationQuestion] = Field(default_factory=list)
    assumptions: list[Assumption] = Field(default_factory=list)
    discussions: list[CouncilDiscussion] = Field(default_factory=list)
    persona_selection: PersonaSelection | None = None
    final_answer: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def evolve(self, **changes: Any) -> Session:
        """Return a copy with ``changes`` applied and ``updated_at`` refreshed."""
        changes.setdefault("updated_at", utc_now())
        return self.model_copy(update=changes)

    def find_participant(self, participant_type: ParticipantType) -> Participant | None:
        for participant in self.participants:
            if participant.type == participant_type:
                return participant
        return None

    @property
    def next_sequence_number(self) -> int:
        return len(self.message_turns) + 1


# =============================================================================
# Factories
# =============================================================================


def create_message_turn(
    *,
    session_id: str,
    sender: Participant,
    message_type: MessageType,
    content: str,
    sequence_number: int,
    related_cycle_or_round: RelatedCycle | None = None,
) -> MessageTurn:
    now = utc_now()
    return MessageTurn(
        session_id=session_id,
        sender=sender,
        message_type=message_type,
        content=content,
        timestamp=now,
        sequence_number=sequence_number,
        related_cycle_or_round=related_cycle_or_round,
        metadata={"created_at": now.isoformat()},
    )


def create_clarification_question(
    *,
    session_id: str,
    round_number: int,
    sequence_in_round: int,
    question: str,
    asked_by: Participant,
    target_ambiguity: str | None = None,
) -> ClarificationQuestion:
    return ClarificationQuestion(
        session_id=session_id,
        round_number=round_number,
        sequence_in_round=sequence_in_round,
        question=question,
        target_ambiguity=target_ambiguity,
        asked_by=asked_by,
    )


def create_clarification_answer(
    *,
    session_id: str,
    question_id: str,
    answer: str,
    skip_command: bool,
) -> ClarificationAnswer:
    return ClarificationAnswer(
        session_id=session_id,
        question_id=question_id,
        answer=answer,
        skip_command=skip_command,
    )


def create_council_discussion(
    *,
    session_id: str,
    cycle_number: int,
    participating_personas: list[str],
    topic: str | None = None,
) -> CouncilDiscussion:
    return CouncilDiscussion(
        session_id=session_id,
        cycle_number=cycle_number,
        participating_personas=list(participating_personas),
        topic=topic,
    )
