"""council.discuss - the consultation session controller.

One call advances a session by at most one phase step:

    created -> clarifying (ambiguous request) or debating
    clarifying -> one answer recorded per call, debating once none pending
    debating -> one discussion cycle per call, final at the cycle limit
    final -> completed

Each call loads the session, computes the next value in memory and commits
it once at the end. Calls on the same session are serialized by a
per-session lock, so a failing call leaves the last committed value in
place.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from council_session.core.config import Settings
from council_session.core.exceptions import (
    CouncilValidationError,
    ErrorCode,
    to_error,
)
from council_session.core.logging import (
    get_logger,
    log_tool_error,
    log_tool_start,
    log_tool_success,
)
from council_session.council.schemas import (
    ActionType,
    DiscussRequest,
    DiscussResponse,
    NextAction,
    NextQuestionSummary,
)
from council_session.personas.generators import ContractDraftGenerator
from council_session.personas.protocols import DraftGenerator
from council_session.services.ambiguity import detect_ambiguity
from council_session.services.assumptions import create_assumption
from council_session.services.clarification import (
    create_system_participant,
    get_next_clarification_question,
    get_skipped_questions,
    initialize_clarifications,
    is_skip_command,
    record_clarification_answer,
    revisit_skipped_questions,
)
from council_session.services.debate_limiter import (
    DebateLimitConfig,
    has_reached_debate_limit,
    resolve_debate_limit,
)
from council_session.services.discussion import start_discussion
from council_session.services.persona_selector import (
    build_persona_selection,
    select_personas_for_request,
)
from council_session.session.locks import SessionLockRegistry
from council_session.session.manager import SessionManager
from council_session.session.models import (
    Participant,
    ParticipantType,
    Session,
    SessionStatus,
)
from council_session.session.state_machine import transition
from council_session.session.transcript import compose_final_answer, render_debate_exchanges


TOOL_NAME = "council.discuss"

LIMIT_REACHED_ANSWER = "Debate cycle limit reached. Proceeding to final answer."
NO_PERSONAS_ANSWER = "No personas available for debate. Proceeding to final answer."

MSG_REQUEST_TEXT_REQUIRED = "requestText is required when starting a new session"
MSG_CLARIFICATION_REQUIRED = "Clarification required"
MSG_AWAITING_CLARIFICATION = "Awaiting clarification response"
MSG_INTERACTIVE_DISABLED = "Interactive mode disabled; returned direct response"
MSG_LIMIT_REACHED = "Debate cycle limit reached; final answer ready for review"
MSG_NO_PERSONAS = "No personas available for debate; final answer ready for review"
MSG_FINAL_READY = "Final answer ready"
MSG_NO_CHANGE = "Session is closed; no further steps"

PROMPT_NEXT_CYCLE = "Call council.discuss again with this sessionId to run the next debate cycle"
PROMPT_REVIEW = "Review the final answer"

logger = get_logger(__name__)


class CouncilDiscussController:
    """Drives sessions through clarification, debate and final answer.

    Args:
        manager: Session persistence.
        settings: Live configuration; cycle limits and the interactive
            default are read on every call.
        draft_generator: Source of persona drafts. Defaults to the
            deterministic contract-based generator.
        locks: Per-session lock registry, shared by every caller of this
            controller.
    """

    def __init__(
        self,
        manager: SessionManager,
        settings: Settings,
        draft_generator: DraftGenerator | None = None,
        locks: SessionLockRegistry | None = None,
    ) -> None:
        self._manager = manager
        self._settings = settings
        self._draft_generator = draft_generator or ContractDraftGenerator()
        self._locks = locks if locks is not None else SessionLockRegistry()

    @property
    def manager(self) -> SessionManager:
        return self._manager

    def delete_session(self, session_id: str) -> bool:
        """Delete a session and release its lock entry."""
        deleted = self._manager.delete_session(session_id)
        self._locks.discard(session_id)
        return deleted

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    async def handle(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Run one discuss call from a raw camelCase payload.

        Never raises: failures come back as ``{"error": {...}}`` payloads
        with code ``validation`` or ``internal``.
        """
        try:
            request = DiscussRequest.model_validate(payload)
        except ValidationError as e:
            return to_error(
                ErrorCode.VALIDATION,
                "Invalid input",
                e.errors(include_url=False, include_context=False),
            )

        try:
            response = await self.discuss(request)
        except CouncilValidationError as e:
            return to_error(
                ErrorCode.VALIDATION,
                str(e),
                {"field": e.field, "errors": e.errors},
            )
        except Exception as e:
            return to_error(ErrorCode.INTERNAL, "Unexpected error", str(e))
        return response.to_dict()

    async def discuss(self, request: DiscussRequest) -> DiscussResponse:
        """Advance the referenced (or a new) session by one step.

        Raises:
            CouncilValidationError: For input rejected before any write.
            CouncilError: For failures while advancing the session.
        """
        ctx = log_tool_start(TOOL_NAME, request.model_dump(by_alias=True, exclude_none=True))
        try:
            async with self._locks.hold(request.session_id):
                response = await self._advance(request)
        except CouncilValidationError as e:
            log_tool_error(ctx, "validation", e)
            raise
        except Exception as e:
            log_tool_error(ctx, "internal", e)
            raise
        finally:
            self._release_unknown_lock(request.session_id)

        log_tool_success(ctx, {"sessionId": response.session_id, "status": response.status.value})
        return response

    def _release_unknown_lock(self, session_id: str | None) -> None:
        # Ids that never resolved to a stored session keep no lock entry.
        if session_id is not None and self._manager.get_session(session_id) is None:
            self._locks.discard(session_id)

    # -------------------------------------------------------------------------
    # Phase steps
    # -------------------------------------------------------------------------

    async def _advance(self, request: DiscussRequest) -> DiscussResponse:
        session = self._load_or_create(request)
        session = _ensure_user_participant(session)

        if request.revisit_skipped and session.status != SessionStatus.CREATED:
            skipped = get_skipped_questions(session)
            if skipped:
                session = revisit_skipped_questions(session)
                logger.info("clarification.revisit", session_id=session.session_id, count=len(skipped))
                return self._respond_with_question(
                    session,
                    f"Revisiting {len(skipped)} skipped question(s)",
                )

        interactive = request.interactive_mode
        if interactive is None:
            interactive = self._settings.interactive_mode_enabled
        if not interactive:
            session = transition(
                session,
                SessionStatus.COMPLETED,
                final_answer=f"Interactive mode disabled. Request received: {session.request_text}",
            )
            return self._respond(session, MSG_INTERACTIVE_DISABLED, NextAction(action_type=ActionType.NONE))

        if request.answer is not None and session.status == SessionStatus.CLARIFYING:
            session = self._apply_answer(session, request.answer)

        if session.status == SessionStatus.CREATED:
            ambiguity = detect_ambiguity(session.request_text)
            if ambiguity.ambiguous:
                session = self._open_clarification(session)
                logger.info(
                    "clarification.required",
                    session_id=session.session_id,
                    reasons=ambiguity.reasons,
                )
                return self._respond_with_question(session, MSG_CLARIFICATION_REQUIRED)
            session = transition(session, SessionStatus.DEBATING)

        if session.status == SessionStatus.CLARIFYING:
            if get_next_clarification_question(session) is not None:
                return self._respond_with_question(session, MSG_AWAITING_CLARIFICATION)
            session = transition(session, SessionStatus.DEBATING)

        if session.status == SessionStatus.DEBATING:
            return await self._debate_step(session, request.personas_requested)

        if session.status in (SessionStatus.FINAL, SessionStatus.COMPLETED):
            session = transition(
                session,
                SessionStatus.COMPLETED,
                final_answer=session.final_answer or compose_final_answer(
                    session, f"Final answer for: {session.request_text}"
                ),
            )
            return self._respond(
                session,
                MSG_FINAL_READY,
                NextAction(action_type=ActionType.REVIEW_FINAL_ANSWER, prompt=PROMPT_REVIEW),
            )

        # cancelled / error
        return self._respond(session, MSG_NO_CHANGE, NextAction(action_type=ActionType.NONE))

    def _load_or_create(self, request: DiscussRequest) -> Session:
        if request.session_id:
            session = self._manager.get_session(request.session_id)
            if session is not None:
                return session
            if request.request_text:
                logger.info("session.unknown_id", session_id=request.session_id)

        if not request.request_text:
            raise CouncilValidationError(
                MSG_REQUEST_TEXT_REQUIRED,
                field="requestText",
                session_id=request.session_id,
            )
        return self._manager.create_session(request.request_text, request.extended_debate)

    def _apply_answer(self, session: Session, answer_text: str) -> Session:
        question = get_next_clarification_question(session)
        if question is None:
            return transition(session, SessionStatus.DEBATING)

        skip = is_skip_command(answer_text)
        user = session.find_participant(ParticipantType.USER)
        session = record_clarification_answer(session, question, answer_text, skip, user).updated_session
        if skip:
            assumption = create_assumption(session.session_id, question)
            session = session.evolve(assumptions=[*session.assumptions, assumption])
        logger.debug(
            "clarification.answered",
            session_id=session.session_id,
            question_id=question.question_id,
            skipped=skip,
        )
        return session

    def _open_clarification(self, session: Session) -> Session:
        system = session.find_participant(ParticipantType.SYSTEM) or create_system_participant()
        if system not in session.participants:
            session = session.evolve(participants=[*session.participants, system])
        questions = initialize_clarifications(session, system)
        return transition(
            session,
            SessionStatus.CLARIFYING,
            clarification_questions=questions,
            clarification_rounds=max(q.round_number for q in questions),
        )

    async def _debate_step(
        self,
        session: Session,
        personas_requested: list[str] | None,
    ) -> DiscussResponse:
        selection = select_personas_for_request(session.request_text, personas_requested)
        session = session.evolve(
            persona_selection=build_persona_selection(session.session_id, session.request_text, selection),
        )
        session = _ensure_persona_participants(session, selection.selected)
        personas = [p for name in selection.selected for p in session.participants if p.participant_id == name]

        limit = resolve_debate_limit(
            DebateLimitConfig(
                default_limit=self._settings.debate_cycle_limit,
                extended_limit=self._settings.extended_debate_cycle_limit,
            ),
            session.extended_debate_requested,
        )

        if not personas:
            return self._finalize(session, NO_PERSONAS_ANSWER, MSG_NO_PERSONAS)
        if has_reached_debate_limit(session.debate_cycles, limit):
            return self._finalize(session, LIMIT_REACHED_ANSWER, MSG_LIMIT_REACHED)

        result = await start_discussion(
            session,
            personas,
            session.request_text,
            session.debate_cycles + 1,
            self._draft_generator,
        )
        session = result.updated_session

        if has_reached_debate_limit(session.debate_cycles, limit):
            return self._finalize(session, LIMIT_REACHED_ANSWER, MSG_LIMIT_REACHED)

        return self._respond(
            session,
            f"Debate cycle {session.debate_cycles} of {limit} complete",
            NextAction(action_type=ActionType.NONE, prompt=PROMPT_NEXT_CYCLE),
        )

    def _finalize(self, session: Session, headline: str, message: str) -> DiscussResponse:
        session = transition(
            session,
            SessionStatus.FINAL,
            final_answer=compose_final_answer(session, headline),
        )
        logger.info("debate.finalized", session_id=session.session_id, cycles=session.debate_cycles)
        return self._respond(
            session,
            message,
            NextAction(action_type=ActionType.REVIEW_FINAL_ANSWER, prompt=PROMPT_REVIEW),
        )

    # -------------------------------------------------------------------------
    # Responses
    # -------------------------------------------------------------------------

    def _respond_with_question(self, session: Session, message: str) -> DiscussResponse:
        question = get_next_clarification_question(session)
        summary = None
        if question is not None:
            summary = NextQuestionSummary(
                question_id=question.question_id,
                question=question.question,
                round=question.round_number,
                asked_by=question.asked_by.name,
            )
        return self._respond(
            session,
            message,
            NextAction(
                action_type=ActionType.ANSWER_QUESTION,
                prompt=question.question if question else None,
            ),
            next_question=summary,
        )

    def _respond(
        self,
        session: Session,
        message: str,
        next_action: NextAction,
        next_question: NextQuestionSummary | None = None,
    ) -> DiscussResponse:
        stored = self._manager.commit(session)
        return DiscussResponse(
            session_id=stored.session_id,
            status=stored.status,
            message=message,
            next_action=next_action,
            next_question=next_question,
            debate_exchanges=render_debate_exchanges(stored),
            current_state=stored,
        )


def _ensure_user_participant(session: Session) -> Session:
    if session.find_participant(ParticipantType.USER) is not None:
        return session
    user = Participant(participant_id="user", type=ParticipantType.USER, name="User")
    return session.evolve(participants=[*session.participants, user])


def _ensure_persona_participants(session: Session, names: list[str]) -> Session:
    known = {p.participant_id for p in session.participants}
    added = [
        Participant(participant_id=name, type=ParticipantType.PERSONA, name=name, role="persona")
        for name in names
        if name not in known
    ]
    if not added:
        return session
    return session.evolve(participants=[*session.participants, *added])
