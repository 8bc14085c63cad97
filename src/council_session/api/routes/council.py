"""Council API routes.

Service Endpoints:
- POST /v1/council/discuss - Advance a consultation session by one step
- GET /v1/council/sessions/{session_id} - Read a session
- DELETE /v1/council/sessions/{session_id} - Delete a session
- POST /v1/council/consult - Consult several personas and synthesize
- POST /v1/council/personas/consult - Consult a single persona
- GET /v1/council/personas - List the persona catalogue
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from council_session.core.exceptions import SessionNotFoundError
from council_session.council.consult import CouncilConsultController
from council_session.council.discuss import CouncilDiscussController
from council_session.council.schemas import (
    CouncilConsultRequest,
    DiscussRequest,
    PersonaConsultRequest,
)
from council_session.personas.contracts import PERSONA_CONTRACTS


# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/v1/council",
    tags=["Council"],
)


def get_controller(request: Request) -> CouncilDiscussController:
    """Return the controller created by the app factory."""
    return request.app.state.council_controller


Controller = Annotated[CouncilDiscussController, Depends(get_controller)]


def get_consult_controller(request: Request) -> CouncilConsultController:
    return request.app.state.consult_controller


ConsultController = Annotated[CouncilConsultController, Depends(get_consult_controller)]


# =============================================================================
# API Endpoints
# =============================================================================

@router.post(
    "/discuss",
    summary="Advance a council session",
    description=(
        "Starts a session from requestText or continues the session named by "
        "sessionId: answers clarification questions, runs one debate cycle or "
        "completes the final answer."
    ),
)
async def discuss(body: DiscussRequest, controller: Controller) -> dict[str, Any]:
    response = await controller.discuss(body)
    return response.to_dict()


@router.get(
    "/sessions/{session_id}",
    summary="Get a council session",
)
async def get_session(session_id: str, controller: Controller) -> dict[str, Any]:
    """Return the full stored session.

    Raises:
        SessionNotFoundError: If the id is unknown (404)
    """
    return controller.manager.require_session(session_id).to_dict()


@router.delete(
    "/sessions/{session_id}",
    summary="Delete a council session",
)
async def delete_session(session_id: str, controller: Controller) -> dict[str, Any]:
    if not controller.delete_session(session_id):
        raise SessionNotFoundError(session_id)
    return {"sessionId": session_id, "deleted": True}


@router.post(
    "/consult",
    summary="Consult the council",
    description=(
        "Consults the selected personas (every persona when selectedPersonas is "
        "omitted) and returns their responses with a synthesis of agreements, "
        "conflicts, risks and next steps."
    ),
)
async def consult_council(body: CouncilConsultRequest, controller: ConsultController) -> dict[str, Any]:
    return controller.consult_council(body).to_dict()


@router.post(
    "/personas/consult",
    summary="Consult a single persona",
)
async def consult_persona(body: PersonaConsultRequest, controller: ConsultController) -> dict[str, Any]:
    """Return one persona's advice, assumptions, questions and next steps.

    Raises:
        CouncilValidationError: If personaName is not in the catalogue (400)
    """
    return controller.consult_persona(body).to_dict()


@router.get(
    "/personas",
    summary="List personas",
)
async def list_personas() -> dict[str, Any]:
    return {"personas": [contract.to_dict() for contract in PERSONA_CONTRACTS]}


__all__ = ["get_consult_controller", "get_controller", "router"]
