# travelbot/utils/memory.py
import asyncio
import logging
import threading
from typing import Any, Dict, Literal

from pydantic import BaseModel

from ..models import Message, Session

logger = logging.getLogger(__name__)


def _dump(value: Any) -> Any:
    # nested models go back through validation as plain data
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


class SessionStore:
    """
    Volatile, process-local session memory keyed by user id.

    The map itself is guarded by a threading lock so distinct users can be
    served from any thread. Turns for one user are serialized by the
    per-user asyncio lock returned from ``lock()``; the store never takes it
    on its own.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}
        self._turn_locks: Dict[str, asyncio.Lock] = {}
        self._guard = threading.RLock()

    # --- slots / state ---

    def get_or_create(self, user_id: str) -> Session:
        with self._guard:
            sess = self._sessions.get(user_id)
            if sess is None:
                sess = Session(user_id=user_id)
                self._sessions[user_id] = sess
                logger.debug("created session for %s", user_id)
            return sess

    def update(self, user_id: str, /, **fields: Any) -> Session:
        """
        Shallow-merge ``fields`` into the stored session and re-validate.

        Fields not given are left as they are. ``user_id`` and the history
        cannot be set here; the history list is carried over as is. Raises
        pydantic's ValidationError if the merged session is not valid; the
        stored session is then unchanged.
        """
        fields.pop("user_id", None)
        fields.pop("conversation_history", None)
        with self._guard:
            cur = self.get_or_create(user_id)
            merged = cur.model_dump(exclude={"conversation_history"})
            merged.update({k: _dump(v) for k, v in fields.items()})
            updated = Session.model_validate(merged)
            updated.conversation_history = cur.conversation_history
            self._sessions[user_id] = updated
            return updated

    # --- history ---

    def append_message(
        self, user_id: str, role: Literal["user", "assistant"], content: str
    ) -> Message:
        msg = Message(role=role, content=content)
        with self._guard:
            sess = self.get_or_create(user_id)
            sess.conversation_history.append(msg)
        return msg

    # --- lifecycle ---

    def clear(self, user_id: str) -> None:
        """Drop the session. The turn lock is kept so queued turns stay serialized."""
        with self._guard:
            self._sessions.pop(user_id, None)

    def count(self) -> int:
        with self._guard:
            return len(self._sessions)

    def lock(self, user_id: str) -> asyncio.Lock:
        """Per-user turn lock."""
        with self._guard:
            lock = self._turn_locks.get(user_id)
            if lock is None:
                lock = asyncio.Lock()
                self._turn_locks[user_id] = lock
            return lock
