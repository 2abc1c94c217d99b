from typing import Dict, Optional

from arena.models import Player


class ConnectionRegistry:
    """Maps live connection ids to display names and back.

    Names are unique among live connections: the controller checks
    ``lookup_by_name`` before registering.
    """

    def __init__(self):
        self._players: Dict[str, Player] = {}
        self._by_name: Dict[str, str] = {}

    def register(self, connection_id: str, name: str) -> Player:
        previous = self._players.get(connection_id)
        if previous and self._by_name.get(previous.display_name) == connection_id:
            del self._by_name[previous.display_name]
        player = Player(connection_id=connection_id, display_name=name)
        self._players[connection_id] = player
        self._by_name[name] = connection_id
        return player

    def unregister(self, connection_id: str) -> Optional[Player]:
        player = self._players.pop(connection_id, None)
        if player and self._by_name.get(player.display_name) == connection_id:
            del self._by_name[player.display_name]
        return player

    def lookup(self, connection_id: str) -> Optional[str]:
        player = self._players.get(connection_id)
        return player.display_name if player else None

    def lookup_by_name(self, name: str) -> Optional[str]:
        return self._by_name.get(name)

    def is_registered(self, connection_id: str) -> bool:
        return connection_id in self._players

    def count(self) -> int:
        return len(self._players)
