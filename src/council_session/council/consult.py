"""council.consult and persona.consult - one-shot consultations.

Unlike discuss, a consultation keeps no session: each call turns the
problem statement into persona drafts and returns them at once. The
council variant also merges the drafts into a synthesis and a markdown
rendering.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from council_session.core.exceptions import CouncilValidationError, ErrorCode, to_error
from council_session.core.logging import (
    get_logger,
    log_tool_error,
    log_tool_start,
    log_tool_success,
)
from council_session.council.schemas import (
    CouncilConsultRequest,
    CouncilConsultResponse,
    PersonaConsultRequest,
)
from council_session.personas.contracts import (
    DEVILS_ADVOCATE,
    PersonaContract,
    get_persona,
    select_persona_contracts,
)
from council_session.personas.generators import (
    ConsultInput,
    PersonaDraft,
    generate_devils_advocate_draft,
    generate_persona_draft,
)
from council_session.services.synthesis import (
    PersonaResponse,
    build_synthesis,
    format_persona_draft,
    render_consultation_markdown,
)


COUNCIL_TOOL_NAME = "council.consult"
PERSONA_TOOL_NAME = "persona.consult"

RequestT = TypeVar("RequestT", bound=BaseModel)

logger = get_logger(__name__)


def draft_for(persona: PersonaContract, consult_input: ConsultInput) -> PersonaDraft:
    """Consultation draft for one persona; the Devil's Advocate gives its risk view."""
    if persona.name == DEVILS_ADVOCATE:
        return generate_devils_advocate_draft(consult_input)
    return generate_persona_draft(persona, consult_input)


class CouncilConsultController:
    """Runs council and single-persona consultations."""

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def handle_council(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Run a council consultation from a raw camelCase payload.

        Never raises; failures come back as ``{"error": {...}}``.
        """
        return self._handle(payload, CouncilConsultRequest, self.consult_council)

    def handle_persona(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Run a single-persona consultation from a raw camelCase payload."""
        return self._handle(payload, PersonaConsultRequest, self.consult_persona)

    def consult_council(self, request: CouncilConsultRequest) -> CouncilConsultResponse:
        """Consult the selected personas (all of them when none are named)."""
        ctx = log_tool_start(COUNCIL_TOOL_NAME, request.model_dump(by_alias=True, exclude_none=True))
        try:
            consult_input = request.to_consult_input()
            personas = select_persona_contracts(request.selected_personas)
            logger.debug(
                "council.personas_selected",
                count=len(personas),
                personas=[p.name for p in personas],
            )

            responses = [format_persona_draft(draft_for(p, consult_input)) for p in personas]
            synthesis = build_synthesis(responses, consult_input)
            response = CouncilConsultResponse(
                responses=responses,
                synthesis=synthesis,
                formatted=render_consultation_markdown(responses, synthesis, request.user_problem),
            )
        except Exception as e:
            log_tool_error(ctx, "internal", e)
            raise

        log_tool_success(ctx, {"responses": len(response.responses)})
        return response

    def consult_persona(self, request: PersonaConsultRequest) -> PersonaResponse:
        """Consult one persona.

        Raises:
            CouncilValidationError: If the persona name is not in the catalogue.
        """
        ctx = log_tool_start(PERSONA_TOOL_NAME, request.model_dump(by_alias=True, exclude_none=True))
        persona = get_persona(request.persona_name)
        if persona is None:
            error = CouncilValidationError(
                f"Unknown persona: {request.persona_name}",
                field="personaName",
            )
            log_tool_error(ctx, "validation", error)
            raise error

        try:
            response = format_persona_draft(draft_for(persona, request.to_consult_input()))
        except Exception as e:
            log_tool_error(ctx, "internal", e)
            raise

        log_tool_success(ctx, {"persona": response.persona})
        return response

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _handle(
        self,
        payload: Mapping[str, Any],
        model: type[RequestT],
        run: Callable[[RequestT], BaseModel],
    ) -> dict[str, Any]:
        try:
            request = model.model_validate(payload)
        except ValidationError as e:
            return to_error(
                ErrorCode.VALIDATION,
                "Invalid input",
                e.errors(include_url=False, include_context=False),
            )

        try:
            response = run(request)
        except CouncilValidationError as e:
            return to_error(ErrorCode.VALIDATION, str(e), {"field": e.field, "errors": e.errors})
        except Exception as e:
            return to_error(ErrorCode.INTERNAL, "Unexpected error", str(e))
        return response.to_dict()
