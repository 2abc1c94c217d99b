from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Set, Tuple
import random
import string


class Move(str, Enum):
    ROCK = 'rock'
    PAPER = 'paper'
    SCISSORS = 'scissors'


class Result(str, Enum):
    WIN = 'win'
    LOSE = 'lose'
    TIE = 'tie'


@dataclass
class Player:
    connection_id: str
    display_name: str


@dataclass
class OpenGame:
    """A single-occupant game waiting for a second player.

    Games with an ``invitee_id`` are private invites: hidden from the lobby
    list and joinable only by the invitee.
    """
    game_id: str
    host_id: str
    host_name: str
    invitee_id: Optional[str] = None

    @property
    def is_invite(self) -> bool:
        return self.invitee_id is not None

    def to_dict(self):
        return {
            'id': self.game_id,
            'hostName': self.host_name,
        }


@dataclass(frozen=True)
class Participant:
    connection_id: str
    display_name: str


@dataclass
class GameSession:
    session_id: str
    participants: Tuple[Participant, Participant]
    moves: Dict[str, Move] = field(default_factory=dict)
    rematch_votes: Set[str] = field(default_factory=set)
    round: int = 1
    # Set once both moves are in; only a mutual rematch clears it
    resolved: bool = False

    def __post_init__(self):
        if len(self.participants) != 2:
            raise ValueError('A game session needs exactly two participants')

    def has_participant(self, connection_id: str) -> bool:
        return any(p.connection_id == connection_id for p in self.participants)

    def participant(self, connection_id: str) -> Optional[Participant]:
        for p in self.participants:
            if p.connection_id == connection_id:
                return p
        return None

    def opponent_of(self, connection_id: str) -> Optional[Participant]:
        if not self.has_participant(connection_id):
            return None
        for p in self.participants:
            if p.connection_id != connection_id:
                return p
        return None

    def reset_round(self) -> None:
        self.moves.clear()
        self.rematch_votes.clear()
        self.resolved = False


def generate_game_code(is_taken: Callable[[str], bool], length=8):
    """Generate a unique game id made of lowercase letters and digits."""
    while True:
        code = ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))
        if not is_taken(code):
            return code
