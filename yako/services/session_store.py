"""
Process-local, size-bounded conversation histories keyed by session id.
"""

from typing import Dict, List

from yako.models.schemas import Turn


class SessionStore:
    """Volatile in-memory store; histories live until the process exits.

    Only :meth:`append` mutates a history, and it never awaits, so turns from
    interleaved requests on the same session are kept rather than overwritten.
    The prompt for one request may still miss the turns of a concurrent one.
    """

    def __init__(self, limit: int = 20) -> None:
        self.limit = limit
        self._store: Dict[str, List[Turn]] = {}

    def get(self, session_id: str) -> List[Turn]:
        """Copy of the history for ``session_id``, oldest first (empty if unknown)."""
        return list(self._store.get(session_id, []))

    def append(self, session_id: str, *turns: Turn) -> None:
        history = self._store.setdefault(session_id, [])
        history.extend(turns)
        self.prune(session_id)

    def prune(self, session_id: str) -> None:
        """Drop the oldest turns so at most ``limit`` remain."""
        history = self._store.get(session_id)
        if history is not None and len(history) > self.limit:
            del history[:-self.limit]
