"""Session services - the stateless building blocks of the discuss flow.

- ambiguity: request ambiguity heuristic
- persona_selector: keyword-based persona selection
- debate_limiter: cycle cap policy
- clarification: question/answer protocol
- assumptions: assumptions for skipped questions
- discussion: one debate cycle
- synthesis: consultation responses and council synthesis
"""

from council_session.services.ambiguity import AmbiguityResult, detect_ambiguity
from council_session.services.assumptions import create_assumption
from council_session.services.clarification import (
    ClarificationResponse,
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
from council_session.services.discussion import DiscussionResult, start_discussion
from council_session.services.persona_selector import (
    PersonaSelectionResult,
    build_persona_selection,
    select_personas_for_request,
)
from council_session.services.synthesis import (
    PersonaResponse,
    Synthesis,
    build_synthesis,
    compute_confidence,
    format_persona_draft,
    render_consultation_markdown,
)

__all__ = [
    "AmbiguityResult",
    "ClarificationResponse",
    "DebateLimitConfig",
    "DiscussionResult",
    "PersonaResponse",
    "PersonaSelectionResult",
    "Synthesis",
    "build_persona_selection",
    "build_synthesis",
    "compute_confidence",
    "create_assumption",
    "create_system_participant",
    "detect_ambiguity",
    "format_persona_draft",
    "get_next_clarification_question",
    "get_skipped_questions",
    "has_reached_debate_limit",
    "initialize_clarifications",
    "is_skip_command",
    "record_clarification_answer",
    "render_consultation_markdown",
    "resolve_debate_limit",
    "revisit_skipped_questions",
    "select_personas_for_request",
    "start_discussion",
]
