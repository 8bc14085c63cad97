"""Council discussion orchestrator - runs one debate cycle.

Each participating persona contributes exactly one turn, in the order
given. Drafts come from a DraftGenerator; this module only shapes them into
turns and the concluded discussion record.

A cycle always runs to completion once started, and advances the session's
``debate_cycles`` by exactly one regardless of participant count.
"""

from __future__ import annotations

from dataclasses import dataclass

from council_session.core.exceptions import CouncilError, DraftGenerationError
from council_session.core.logging import get_logger
from council_session.personas.generators import ConsultInput, Depth, PersonaDraft
from council_session.personas.protocols import DraftGenerator
from council_session.session.models import (
    CouncilDiscussion,
    CycleType,
    DebateStatus,
    MessageTurn,
    MessageType,
    Participant,
    RelatedCycle,
    Session,
    create_council_discussion,
    create_message_turn,
    utc_now,
)


logger = get_logger(__name__)

# advice[0] is the generic soul statement; turns quote the next 2-3 lines
_ADVICE_SLICE = slice(1, 4)


@dataclass(frozen=True, slots=True)
class DiscussionResult:
    discussion: CouncilDiscussion
    updated_session: Session
    summary: str


def compose_turn_content(persona_name: str, draft: PersonaDraft) -> str:
    """Shape a persona draft into debate turn text."""
    content = f"{persona_name}: "

    advice_points = draft.advice[_ADVICE_SLICE]
    if advice_points:
        content += "\n".join(advice_points) + "\n\n"

    if draft.questions:
        content += f"**Key Question:** {draft.questions[0]}\n\n"

    if draft.next_steps:
        content += f"**Recommends:** {draft.next_steps[0]}"

    return content.strip()


def summarize_discussion(topic: str, personas: list[Participant]) -> str:
    names = ", ".join(p.name for p in personas)
    return (
        f"Council discussed {topic}. Participating personas: {names}. "
        "Consensus on approach established."
    )


async def _draft_for(
    generator: DraftGenerator,
    persona: Participant,
    consult_input: ConsultInput,
) -> PersonaDraft:
    contract = generator.resolve(persona.name)
    try:
        return await generator.generate(contract, consult_input)
    except CouncilError:
        raise
    except Exception as e:
        raise DraftGenerationError(
            f"Draft generation failed for {persona.name}: {e}",
            persona_name=persona.name,
            cause=e,
        ) from e


async def start_discussion(
    session: Session,
    personas: list[Participant],
    topic: str,
    cycle_number: int,
    draft_generator: DraftGenerator,
) -> DiscussionResult:
    """Run one debate cycle.

    Args:
        session: Current session value (not modified).
        personas: Participating personas, in speaking order.
        topic: What is being debated.
        cycle_number: 1-indexed cycle number.
        draft_generator: Source of persona drafts.

    Returns:
        DiscussionResult with the concluded discussion, the updated session
        and the resolution summary.

    Raises:
        UnknownPersonaError: If the generator does not know a persona.
        DraftGenerationError: If the generator fails for a persona.
    """
    discussion = create_council_discussion(
        session_id=session.session_id,
        cycle_number=cycle_number,
        participating_personas=[p.name for p in personas],
        topic=topic,
    )
    consult_input = ConsultInput(
        user_problem=topic,
        context=session.request_text,
        depth=Depth.STANDARD,
    )
    related = RelatedCycle(cycle_type=CycleType.DEBATE, number=cycle_number)

    turns: list[MessageTurn] = []
    for index, persona in enumerate(personas):
        draft = await _draft_for(draft_generator, persona, consult_input)
        turns.append(
            create_message_turn(
                session_id=session.session_id,
                sender=persona,
                message_type=MessageType.DISCUSSION,
                content=compose_turn_content(persona.name, draft),
                sequence_number=session.next_sequence_number + index,
                related_cycle_or_round=related,
            )
        )

    summary = summarize_discussion(topic, personas)
    concluded = discussion.model_copy(update={
        "message_turns": turns,
        "exchange_ends": utc_now(),
        "status": DebateStatus.CONCLUDED,
        "resolution_summary": summary,
    })

    updated_session = session.evolve(
        discussions=[*session.discussions, concluded],
        message_turns=[*session.message_turns, *turns],
        debate_cycles=session.debate_cycles + 1,
    )

    logger.debug(
        "discussion.concluded",
        session_id=session.session_id,
        cycle=cycle_number,
        personas=len(personas),
    )
    return DiscussionResult(discussion=concluded, updated_session=updated_session, summary=summary)
