"""Request and response models for the council discuss and consult operations.

Wire names are camelCase (``sessionId``, ``requestText``...). Python code
uses the snake_case field names.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from council_session.personas.contracts import is_known_persona
from council_session.personas.generators import ConsultInput, Depth
from council_session.services.synthesis import PersonaResponse, Synthesis
from council_session.session.models import Session, SessionStatus


class ActionType(str, Enum):
    """What the caller is expected to do next."""

    ANSWER_QUESTION = "answer_question"
    REVIEW_FINAL_ANSWER = "review_final_answer"
    NONE = "none"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DiscussRequest(_WireModel):
    """Input of one discuss call.

    All fields are optional except ``request_text`` when no existing
    session is referenced; that rule is enforced by the controller.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
    )

    session_id: str | None = Field(default=None, description="Existing session to continue")
    request_text: str | None = Field(
        default=None,
        min_length=1,
        description="Problem statement; required to start a session",
    )
    answer: str | None = Field(default=None, description="Answer to the pending clarification question")
    personas_requested: list[str] | None = Field(
        default=None,
        description="Explicit persona names for the debate",
    )
    extended_debate: bool = Field(
        default=False,
        description="Use the extended cycle limit; only read at session creation",
    )
    revisit_skipped: bool = Field(default=False, description="Reopen skipped questions")
    interactive_mode: bool | None = Field(
        default=None,
        description="Defaults to the configured interactive mode",
    )

    @field_validator("personas_requested")
    @classmethod
    def _known_personas(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return value
        unknown = [name for name in value if not is_known_persona(name)]
        if unknown:
            raise ValueError(f"Unknown persona(s): {', '.join(unknown)}")
        return value


class NextAction(_WireModel):
    action_type: ActionType
    prompt: str | None = None


class NextQuestionSummary(_WireModel):
    question_id: str
    question: str
    round: int
    asked_by: str


class DiscussResponse(_WireModel):
    """View of the session returned after every discuss call."""

    session_id: str
    status: SessionStatus
    message: str
    next_action: NextAction | None = None
    next_question: NextQuestionSummary | None = None
    debate_exchanges: str | None = None
    current_state: Session


# =============================================================================
# Consultation
# =============================================================================


class ConsultRequest(_WireModel):
    """Problem statement shared by the council and persona consultations."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
    )

    user_problem: str = Field(..., min_length=1, description="The problem or decision to address")
    context: str | None = Field(default=None, description="Background information")
    desired_outcome: str | None = Field(default=None, description="Success criteria")
    constraints: list[str] = Field(default_factory=list, description="Constraints on the solution")
    depth: Depth = Field(default=Depth.STANDARD, description="Response detail level")

    def to_consult_input(self) -> ConsultInput:
        return ConsultInput(
            user_problem=self.user_problem,
            context=self.context,
            desired_outcome=self.desired_outcome,
            constraints=tuple(self.constraints),
            depth=self.depth,
        )


class CouncilConsultRequest(ConsultRequest):
    """Input of a council consultation; every persona answers when none are selected."""

    selected_personas: list[str] | None = Field(default=None, description="Persona names to consult")

    @field_validator("selected_personas")
    @classmethod
    def _known_personas(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return value
        unknown = [name for name in value if not is_known_persona(name)]
        if unknown:
            raise ValueError(f"Unknown persona(s): {', '.join(unknown)}")
        return value


class PersonaConsultRequest(ConsultRequest):
    """Input of a single-persona consultation.

    The name is checked against the catalogue by the controller so an
    unknown persona gets its own error message.
    """

    persona_name: str = Field(..., min_length=1, description="Persona to consult")


class CouncilConsultResponse(_WireModel):
    responses: list[PersonaResponse]
    synthesis: Synthesis
    formatted: str
