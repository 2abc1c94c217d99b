"""Domain errors raised by the session controller.

Every error carries a human-readable message. The Socket.IO layer reports it
to the originating connection via the ``error`` event; none of them are fatal.
"""


class ArenaError(Exception):
    """Base class for all matchmaking and game errors."""
    message = 'Something went wrong'

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)


# ============ Registration ============

class NotRegistered(ArenaError):
    """Action attempted before ``register``."""
    def __init__(self, action='playing'):
        self.action = action
        super().__init__(f"You must register before {action}")


class NameTaken(ArenaError):
    """Display name already held by another live connection."""
    def __init__(self, name):
        self.name = name
        super().__init__(f"Name '{name}' is already taken")


class InvalidName(ArenaError):
    message = 'Please choose a valid name'


class NameLocked(ArenaError):
    """Rename attempted while the name is shown in a game, invite or session."""
    message = 'You cannot change your name while you have a game open or in progress'


# ============ Lobby ============

class GameNotFound(ArenaError):
    def __init__(self, game_id=None):
        self.game_id = game_id
        super().__init__('Game not found')


class GameFull(ArenaError):
    message = 'Game is full'


class OpponentNotFound(ArenaError):
    def __init__(self, opponent_name):
        self.opponent_name = opponent_name
        super().__init__(f"Player '{opponent_name}' is not online")


class InvalidOpponent(ArenaError):
    """Pairing a connection with itself."""
    message = 'You cannot play against yourself'


# ============ Sessions ============

class SessionNotFound(ArenaError):
    def __init__(self, session_id=None):
        self.session_id = session_id
        super().__init__('Game session not found')


class NotInSession(ArenaError):
    message = 'You are not a player in this game'


class InvalidMove(ArenaError):
    def __init__(self, move):
        self.move = move
        super().__init__(f"Invalid move: {move!r}")


class MoveAlreadySubmitted(ArenaError):
    message = 'You have already made a move this round'


class RoundOver(ArenaError):
    """Move submitted after the round resolved and before a mutual rematch."""
    message = 'This round is over; request a rematch to play again'


class RoundInProgress(ArenaError):
    """Rematch requested before the current round has a result."""
    message = 'You can only request a rematch after the round is over'
