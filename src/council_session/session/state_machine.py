"""Session status transition table.

The table is the single source of truth for which status changes are legal.
The only backwards edge is the revisit of skipped clarification questions,
which may reopen ``clarifying`` from any later non-terminal phase.
"""

from __future__ import annotations

from types import MappingProxyType

from council_session.core.exceptions import InvalidTransitionError
from council_session.session.models import Session, SessionStatus


_S = SessionStatus

TRANSITIONS: MappingProxyType[SessionStatus, frozenset[SessionStatus]] = MappingProxyType({
    _S.CREATED: frozenset({_S.CLARIFYING, _S.DEBATING, _S.COMPLETED, _S.CANCELLED, _S.ERROR}),
    _S.CLARIFYING: frozenset({_S.CLARIFYING, _S.DEBATING, _S.COMPLETED, _S.CANCELLED, _S.ERROR}),
    _S.DEBATING: frozenset({
        _S.DEBATING, _S.FINAL, _S.CLARIFYING, _S.COMPLETED, _S.CANCELLED, _S.ERROR,
    }),
    _S.FINAL: frozenset({_S.CLARIFYING, _S.COMPLETED, _S.CANCELLED, _S.ERROR}),
    _S.COMPLETED: frozenset({_S.COMPLETED, _S.CLARIFYING}),
    _S.CANCELLED: frozenset(),
    _S.ERROR: frozenset(),
})

TERMINAL_STATUSES = frozenset(s for s, targets in TRANSITIONS.items() if not targets)


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    return target in TRANSITIONS[current]


def coerce_status(value: SessionStatus | str) -> SessionStatus | None:
    """Return the SessionStatus for ``value``, or None if it is not one."""
    if isinstance(value, SessionStatus):
        return value
    try:
        return SessionStatus(value)
    except ValueError:
        return None


def transition(session: Session, target: SessionStatus, **changes) -> Session:
    """Return a copy of ``session`` moved to ``target``.

    Args:
        session: Current session value.
        target: Requested status.
        **changes: Extra fields to set on the new value.

    Raises:
        InvalidTransitionError: If the table does not allow the change.
    """
    if not can_transition(session.status, target):
        raise InvalidTransitionError(
            session.status.value,
            target.value,
            session_id=session.session_id,
        )
    return session.evolve(status=target, **changes)
