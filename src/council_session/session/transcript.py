"""Rendering of debate exchanges and final answers for caller responses."""

from __future__ import annotations

from council_session.session.models import Session


def render_debate_exchanges(session: Session) -> str | None:
    """Render every discussion as markdown, grouped by cycle.

    Returns:
        The transcript, or None if the session has no discussions yet.
    """
    if not session.discussions:
        return None

    exchanges: list[str] = []
    for discussion in session.discussions:
        exchanges.append(f"\n### Cycle {discussion.cycle_number}: {discussion.topic or 'Discussion'}\n")
        for turn in discussion.message_turns:
            exchanges.append(f"**{turn.sender.name}**: {turn.content}\n")
        if discussion.resolution_summary:
            exchanges.append(f"\n*Resolution*: {discussion.resolution_summary}\n")
    return "\n".join(exchanges)


def compose_final_answer(session: Session, headline: str) -> str:
    """Build the consolidated final answer text.

    The headline comes first, followed by the latest debate resolution and
    any assumptions the council worked under.
    """
    parts = [headline]
    if session.discussions:
        latest = session.discussions[-1]
        if latest.resolution_summary:
            parts.append(
                f"Resolution after {len(session.discussions)} cycle(s): {latest.resolution_summary}"
            )
    if session.assumptions:
        parts.append("Assumptions:\n" + "\n".join(f"- {a.assumption}" for a in session.assumptions))
    return "\n\n".join(parts)
