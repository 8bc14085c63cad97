"""SessionStore - in-memory session storage.

Implements the SessionRepository interface over a plain dict guarded by a
threading lock. Updates go through ``update_session(session_id, updater)``:
the updater receives the current value and returns the replacement, which is
stored as a single map-entry swap (copy-on-write).

Sessions live only as long as the process; nothing is persisted or expired.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from council_session.session.models import Session


SessionUpdater = Callable[[Session], Session]


@runtime_checkable
class SessionRepository(Protocol):
    """Storage interface the session manager depends on.

    A persistent or distributed backing store can replace the in-memory
    implementation by satisfying this protocol.
    """

    def create_session(self, session: Session) -> Session: ...

    def get_session(self, session_id: str) -> Session | None: ...

    def update_session(self, session_id: str, updater: SessionUpdater) -> Session | None: ...

    def save_session(self, session: Session) -> Session: ...

    def delete_session(self, session_id: str) -> bool: ...

    def list_sessions(self) -> list[Session]: ...

    def clear_all(self) -> None: ...


class InMemorySessionStore:
    """In-memory session storage with thread-safe CRUD operations.

    Attributes:
        _sessions: Internal dictionary mapping session IDs to Session values
        _lock: Threading lock for thread-safe operations
    """

    def __init__(self) -> None:
        """Initialize empty session store with thread lock."""
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(self, session: Session) -> Session:
        """Store a new session under its own id.

        Raises:
            ValueError: If a session with the same id already exists.
        """
        with self._lock:
            if session.session_id in self._sessions:
                raise ValueError(f"Session '{session.session_id}' already exists")
            self._sessions[session.session_id] = session
            return session

    def get_session(self, session_id: str) -> Session | None:
        """Retrieve session by ID.

        Returns:
            Session if found, None otherwise
        """
        with self._lock:
            return self._sessions.get(session_id)

    def update_session(self, session_id: str, updater: SessionUpdater) -> Session | None:
        """Replace a session with ``updater(current)``.

        The updater runs under the store lock, so it must be quick and must
        not call back into the store.

        Returns:
            The stored replacement, or None if the session does not exist
        """
        with self._lock:
            current = self._sessions.get(session_id)
            if current is None:
                return None
            updated = updater(current)
            self._sessions[session_id] = updated
            return updated

    def save_session(self, session: Session) -> Session:
        """Upsert a session under its id."""
        with self._lock:
            self._sessions[session.session_id] = session
            return session

    def delete_session(self, session_id: str) -> bool:
        """Delete session by ID.

        Returns:
            True if the session was deleted, False if not found
        """
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def list_sessions(self) -> list[Session]:
        with self._lock:
            return list(self._sessions.values())

    def clear_all(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["InMemorySessionStore", "SessionRepository", "SessionUpdater"]
