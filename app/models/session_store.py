"""In-memory conversation session store.

Chat and interview sessions live only as long as the process (or until the
owner deletes them).  Sessions are keyed by owner, so one user can never
read or write another user's history.
"""

from __future__ import annotations

import logging
from typing import Optional, TypeVar

from app.agents.conversation_agent import ConversationSession

logger = logging.getLogger(__name__)

SessionT = TypeVar("SessionT", bound=ConversationSession)


class SessionStore:
    """Owner-scoped registry of live conversation sessions."""

    def __init__(self) -> None:
        self._items: dict[tuple[str, str], ConversationSession] = {}

    # ── Public API ────────────────────────────────────────────────────────

    def add(self, item: SessionT) -> SessionT:
        """Register a session under its owner."""
        self._items[(item.session.user_id, item.session_id)] = item
        logger.info("Session added: id=%s feature=%s owner=%s",
                    item.session_id, item.feature_name, item.session.user_id)
        return item

    def get(self, user_id: str, session_id: str, kind: type[SessionT]) -> Optional[SessionT]:
        """Return the owner's session of the given kind, or None."""
        item = self._items.get((user_id, session_id))
        if item is None or not isinstance(item, kind):
            return None
        return item

    def remove(self, user_id: str, session_id: str) -> bool:
        """Destroy a session and its history; True when it existed."""
        item = self._items.pop((user_id, session_id), None)
        if item is None:
            return False
        item.reset()
        logger.info("Session removed: id=%s owner=%s", session_id, user_id)
        return True

    def remove_owner(self, user_id: str) -> int:
        """Destroy every session of *user_id* (sign-out)."""
        keys = [k for k in self._items if k[0] == user_id]
        for key in keys:
            self._items.pop(key).reset()
        if keys:
            logger.info("Removed %d sessions for owner=%s", len(keys), user_id)
        return len(keys)


# Module-level singleton
_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """Return the singleton SessionStore instance."""
    global _store
    if _store is None:
        _store = SessionStore()
    return _store
