from typing import List, Optional


class QuickMatchQueue:
    """FIFO of registered connections waiting for any opponent."""

    def __init__(self):
        self._waiting: List[str] = []

    def __contains__(self, connection_id) -> bool:
        return connection_id in self._waiting

    def join(self, connection_id: str) -> Optional[str]:
        """Queue the connection, or pop and return a waiting opponent if any.

        Returns None when the connection was queued (or already queued).
        """
        if connection_id in self._waiting:
            return None
        if self._waiting:
            return self._waiting.pop(0)
        self._waiting.append(connection_id)
        return None

    def leave(self, connection_id: str) -> bool:
        """Remove from the queue. Returns True if it was queued."""
        try:
            self._waiting.remove(connection_id)
        except ValueError:
            return False
        return True

    def count(self) -> int:
        return len(self._waiting)
