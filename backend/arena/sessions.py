from typing import Dict, List, Optional

from arena.models import GameSession, Participant


class SessionStore:
    """Active two-player sessions keyed by session id."""

    def __init__(self):
        self._sessions: Dict[str, GameSession] = {}

    def __contains__(self, session_id) -> bool:
        return session_id in self._sessions

    def add(self, session_id: str, first: Participant, second: Participant) -> GameSession:
        if session_id in self._sessions:
            raise ValueError(f"Session {session_id} already exists")
        session = GameSession(session_id=session_id, participants=(first, second))
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> Optional[GameSession]:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> Optional[GameSession]:
        return self._sessions.pop(session_id, None)

    def involving(self, connection_id: str) -> List[GameSession]:
        return [s for s in self._sessions.values() if s.has_participant(connection_id)]

    def count(self) -> int:
        return len(self._sessions)
