"""Session controller: the only writer of registry, lobby, sessions and queue.

Every public operation runs under one re-entrant lock, so an inbound event is
processed to completion (including the events it emits) before the next one
touches shared state. Flask-SocketIO may dispatch handlers from several
threads; the lock keeps move resolution atomic regardless.
"""
from functools import wraps
from typing import Optional
import logging
import threading

from arena.exceptions import (
    GameFull,
    GameNotFound,
    InvalidMove,
    InvalidName,
    InvalidOpponent,
    MoveAlreadySubmitted,
    NameLocked,
    NameTaken,
    NotInSession,
    NotRegistered,
    OpponentNotFound,
    RoundInProgress,
    RoundOver,
    SessionNotFound,
)
from arena.lobby import Lobby
from arena.models import GameSession, OpenGame, Participant, generate_game_code
from arena.registry import ConnectionRegistry
from arena.services.games.matchmaking import QuickMatchQueue
from arena.services.games.outcome import parse_move, resolve
from arena.sessions import SessionStore


def exclusive(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class SessionController:

    def __init__(self, notifier, logger: Optional[logging.Logger] = None, game_id_length: int = 8, max_name_length: int = 32):
        self.notifier = notifier
        self.logger = logger or logging.getLogger(__name__)
        self.game_id_length = game_id_length
        self.max_name_length = max_name_length
        self.registry = ConnectionRegistry()
        self.lobby = Lobby()
        self.sessions = SessionStore()
        self.queue = QuickMatchQueue()
        self._lock = threading.RLock()

    # ---- Registration ----

    @exclusive
    def register(self, connection_id: str, name) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidName()
        name = name.strip()
        if len(name) > self.max_name_length:
            raise InvalidName(f"Name must be at most {self.max_name_length} characters")
        holder = self.registry.lookup_by_name(name)
        if holder is not None and holder != connection_id:
            raise NameTaken(name)
        current = self.registry.lookup(connection_id)
        if current is not None and current != name and self._name_in_use(connection_id):
            raise NameLocked()

        self.registry.register(connection_id, name)
        self.logger.info(f"[register] sid={connection_id} name={name}")
        self.notifier.send(connection_id, 'openGames', self.lobby.list_open())

    # ---- Lobby ----

    @exclusive
    def create_game(self, connection_id: str) -> OpenGame:
        host_name = self._require_name(connection_id, 'creating a game')
        game = self.lobby.create(self._new_game_id(), connection_id, host_name)
        self.logger.info(f"[game-created] game={game.game_id} host={host_name}")
        self.notifier.broadcast('gameCreated', game.to_dict())
        self.notifier.send(connection_id, 'waiting')
        return game

    @exclusive
    def create_invite(self, connection_id: str, opponent_name, game_id=None) -> OpenGame:
        """Private game for a named opponent; they accept by joining it."""
        host_name = self._require_name(connection_id, 'inviting a player')
        invitee_id = self._resolve_opponent(connection_id, opponent_name)
        if not isinstance(game_id, str) or not game_id or self._id_taken(game_id):
            game_id = self._new_game_id()

        game = self.lobby.create(game_id, connection_id, host_name, invitee_id=invitee_id)
        self.logger.info(f"[invite] game={game_id} host={host_name} invitee={self.registry.lookup(invitee_id)}")
        self.notifier.send(connection_id, 'waiting')
        self.notifier.send(invitee_id, 'gameInvite', {'gameId': game_id, 'hostName': host_name})
        return game

    @exclusive
    def decline_invite(self, connection_id: str, game_id) -> None:
        game = self.lobby.get(game_id) if isinstance(game_id, str) else None
        if game is None or game.invitee_id != connection_id:
            raise GameNotFound(game_id)
        self.lobby.pop(game_id)
        name = self.registry.lookup(connection_id)
        self.logger.info(f"[invite-declined] game={game_id} by={name}")
        self.notifier.send(game.host_id, 'inviteDeclined', name)

    @exclusive
    def create_direct_game(self, connection_id: str, opponent_name) -> GameSession:
        host_name = self._require_name(connection_id, 'starting a game')
        opponent_id = self._resolve_opponent(connection_id, opponent_name)
        return self._start_session(
            self._new_game_id(),
            Participant(connection_id, host_name),
            Participant(opponent_id, self.registry.lookup(opponent_id)),
        )

    @exclusive
    def join_game(self, connection_id: str, game_id) -> GameSession:
        if isinstance(game_id, str) and game_id in self.sessions:
            raise GameFull()
        game = self.lobby.get(game_id) if isinstance(game_id, str) else None
        if game is None:
            raise GameNotFound(game_id)
        joiner_name = self._require_name(connection_id, 'joining a game')
        if game.is_invite and game.invitee_id != connection_id:
            raise GameNotFound(game_id)
        if game.host_id == connection_id:
            raise InvalidOpponent('You cannot join your own game')

        # Promote: the open game leaves the lobby and becomes the session
        self.lobby.pop(game_id)
        if not game.is_invite:
            self.notifier.broadcast('gameClosed', game_id)
        return self._start_session(
            game_id,
            Participant(game.host_id, game.host_name),
            Participant(connection_id, joiner_name),
        )

    @exclusive
    def join_queue(self, connection_id: str) -> Optional[GameSession]:
        name = self._require_name(connection_id, 'joining the queue')
        opponent_id = self.queue.join(connection_id)
        if opponent_id is None:
            self.logger.info(f"[queue] sid={connection_id} name={name} waiting={self.queue.count()}")
            self.notifier.send(connection_id, 'waiting')
            return None
        return self._start_session(
            self._new_game_id(),
            Participant(opponent_id, self.registry.lookup(opponent_id)),
            Participant(connection_id, name),
        )

    @exclusive
    def leave_queue(self, connection_id: str) -> bool:
        return self.queue.leave(connection_id)

    # ---- Sessions ----

    @exclusive
    def submit_move(self, connection_id: str, game_id, move) -> None:
        session = self._session_for(connection_id, game_id)
        try:
            move = parse_move(move)
        except ValueError:
            raise InvalidMove(move)
        if session.resolved:
            raise RoundOver()
        if connection_id in session.moves:
            raise MoveAlreadySubmitted()

        session.moves[connection_id] = move
        self.logger.info(f"[move] game={session.session_id} round={session.round} sid={connection_id}")
        if len(session.moves) < 2:
            opponent = session.opponent_of(connection_id)
            self.notifier.send(opponent.connection_id, 'opponentMoved')
            return
        self._resolve_round(session)

    @exclusive
    def request_rematch(self, connection_id: str, game_id) -> None:
        session = self._session_for(connection_id, game_id)
        opponent = session.opponent_of(connection_id)
        if not session.resolved:
            raise RoundInProgress()
        session.rematch_votes.add(connection_id)

        if opponent.connection_id not in session.rematch_votes:
            self.logger.info(f"[rematch] game={session.session_id} requested_by={connection_id}")
            self.notifier.send(opponent.connection_id, 'rematchRequested', session.participant(connection_id).display_name)
            return

        session.reset_round()
        session.round += 1
        self.logger.info(f"[rematch] game={session.session_id} accepted round={session.round}")
        self._announce_start(session)

    # ---- Lifecycle ----

    @exclusive
    def disconnect(self, connection_id: str) -> None:
        name = self.registry.lookup(connection_id)
        self.logger.info(f"[disconnect] sid={connection_id} name={name}")
        self.queue.leave(connection_id)

        # Sessions never appeared in the lobby, so their teardown is not broadcast
        for session in self.sessions.involving(connection_id):
            self.sessions.remove(session.session_id)
            opponent = session.opponent_of(connection_id)
            if opponent is not None:
                self.notifier.send(opponent.connection_id, 'opponentDisconnected')
            self.logger.info(f"[session-ended] game={session.session_id} reason=disconnect")

        for game in self.lobby.hosted_by(connection_id):
            self.lobby.pop(game.game_id)
            if game.is_invite:
                self.notifier.send(game.invitee_id, 'gameClosed', game.game_id)
            else:
                self.notifier.broadcast('gameClosed', game.game_id)

        for game in self.lobby.invites_for(connection_id):
            self.lobby.pop(game.game_id)
            self.notifier.send(game.host_id, 'inviteDeclined', name)

        self.registry.unregister(connection_id)

    # ---- Read-only views ----

    @exclusive
    def list_open_games(self):
        return self.lobby.list_open()

    @exclusive
    def stats(self):
        return {
            'players': self.registry.count(),
            'open_games': self.lobby.count_public(),
            'pending_invites': self.lobby.count_invites(),
            'queued': self.queue.count(),
            'sessions': self.sessions.count(),
        }

    # ---- Internals ----

    def _require_name(self, connection_id: str, action: str) -> str:
        name = self.registry.lookup(connection_id)
        if name is None:
            raise NotRegistered(action)
        return name

    def _name_in_use(self, connection_id: str) -> bool:
        """True while the current name is shown in an open game, invite or session."""
        return bool(
            self.lobby.hosted_by(connection_id)
            or self.lobby.invites_for(connection_id)
            or self.sessions.involving(connection_id)
        )

    def _id_taken(self, game_id: str) -> bool:
        return game_id in self.lobby or game_id in self.sessions

    def _new_game_id(self) -> str:
        return generate_game_code(self._id_taken, length=self.game_id_length)

    def _resolve_opponent(self, connection_id: str, opponent_name) -> str:
        if not isinstance(opponent_name, str) or not opponent_name.strip():
            raise OpponentNotFound(opponent_name)
        opponent_id = self.registry.lookup_by_name(opponent_name.strip())
        if opponent_id is None:
            raise OpponentNotFound(opponent_name.strip())
        if opponent_id == connection_id:
            raise InvalidOpponent()
        return opponent_id

    def _session_for(self, connection_id: str, game_id) -> GameSession:
        session = self.sessions.get(game_id) if isinstance(game_id, str) else None
        if session is None:
            raise SessionNotFound(game_id)
        if not session.has_participant(connection_id):
            raise NotInSession()
        return session

    def _start_session(self, session_id: str, first: Participant, second: Participant) -> GameSession:
        session = self.sessions.add(session_id, first, second)
        self.queue.leave(first.connection_id)
        self.queue.leave(second.connection_id)
        self._announce_start(session)
        return session

    def _announce_start(self, session: GameSession) -> None:
        first, second = session.participants
        self.logger.info(
            f"[game-start] game={session.session_id} round={session.round} players={first.display_name},{second.display_name}"
        )
        for me, opponent in ((first, second), (second, first)):
            self.notifier.send(me.connection_id, 'gameStart', {
                'gameId': session.session_id,
                'opponentId': opponent.connection_id,
                'opponentName': opponent.display_name,
            })

    def _resolve_round(self, session: GameSession) -> None:
        first, second = session.participants
        first_move = session.moves[first.connection_id]
        second_move = session.moves[second.connection_id]
        session.moves.clear()
        session.resolved = True

        self.logger.info(
            f"[result] game={session.session_id} round={session.round} "
            f"{first.display_name}={first_move.value} {second.display_name}={second_move.value}"
        )
        for me, mine, opponent, theirs in (
            (first, first_move, second, second_move),
            (second, second_move, first, first_move),
        ):
            self.notifier.send(me.connection_id, 'gameResult', {
                'yourMove': mine.value,
                'opponentMove': theirs.value,
                'result': resolve(mine, theirs).value,
                'opponentName': opponent.display_name,
                'canRematch': True,
            })
