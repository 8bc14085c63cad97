"""Council discuss and consult controllers with their wire schemas."""

from council_session.council.consult import CouncilConsultController
from council_session.council.discuss import CouncilDiscussController
from council_session.council.schemas import (
    ActionType,
    CouncilConsultRequest,
    CouncilConsultResponse,
    DiscussRequest,
    DiscussResponse,
    NextAction,
    NextQuestionSummary,
    PersonaConsultRequest,
)

__all__ = [
    "ActionType",
    "CouncilConsultController",
    "CouncilConsultRequest",
    "CouncilConsultResponse",
    "CouncilDiscussController",
    "DiscussRequest",
    "DiscussResponse",
    "NextAction",
    "NextQuestionSummary",
    "PersonaConsultRequest",
]
