from typing import Dict, List, Optional

from arena.models import OpenGame


class Lobby:
    """Open games awaiting a second player, in creation order.

    Private invites live here too so that join/cleanup share one path, but
    they never show up in ``list_open``.
    """

    def __init__(self):
        self._games: Dict[str, OpenGame] = {}

    def __contains__(self, game_id) -> bool:
        return game_id in self._games

    def create(self, game_id: str, host_id: str, host_name: str, invitee_id: Optional[str] = None) -> OpenGame:
        if game_id in self._games:
            raise ValueError(f"Game {game_id} already exists")
        game = OpenGame(game_id=game_id, host_id=host_id, host_name=host_name, invitee_id=invitee_id)
        self._games[game_id] = game
        return game

    def get(self, game_id: str) -> Optional[OpenGame]:
        return self._games.get(game_id)

    def pop(self, game_id: str) -> Optional[OpenGame]:
        return self._games.pop(game_id, None)

    def list_open(self) -> List[dict]:
        """Snapshot of the public games as ``[{id, hostName}]``."""
        return [g.to_dict() for g in self._games.values() if not g.is_invite]

    def hosted_by(self, connection_id: str) -> List[OpenGame]:
        return [g for g in self._games.values() if g.host_id == connection_id]

    def invites_for(self, connection_id: str) -> List[OpenGame]:
        return [g for g in self._games.values() if g.invitee_id == connection_id]

    def count_public(self) -> int:
        return sum(1 for g in self._games.values() if not g.is_invite)

    def count_invites(self) -> int:
        return sum(1 for g in self._games.values() if g.is_invite)
