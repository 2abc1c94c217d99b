from functools import wraps

from flask import current_app, request
from flask_socketio import emit

from arena import socketio
from arena.exceptions import ArenaError


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _controller():
    return current_app.extensions['arena']


def _field(data, key):
    if not isinstance(data, dict):
        return None
    return data.get(key)


def event_handler(handler):
    """Adapt a one-payload handler to Socket.IO dispatch.

    Extra positional arguments are dropped, and domain errors are reported
    to the sender only as ``error(message)``.
    """
    @wraps(handler)
    def wrapper(*args):
        data = args[0] if args else None
        try:
            handler(data)
        except ArenaError as exc:
            current_app.logger.info(f"[error] sid={_get_sid()} event={handler.__name__} message={exc.message}")
            emit('error', exc.message)
    return wrapper


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(*args):
    _controller().disconnect(_get_sid())


@event_handler
def handle_register(name):
    _controller().register(_get_sid(), name)


@event_handler
def handle_create_game(data):
    _controller().create_game(_get_sid())


@event_handler
def handle_create_game_with_opponent(data):
    opponent_name = _field(data, 'opponentName')
    if opponent_name is None:
        current_app.logger.warning(f"[malformed] sid={_get_sid()} event=createGameWithOpponent")
        return
    _controller().create_invite(_get_sid(), opponent_name, game_id=_field(data, 'gameId'))


@event_handler
def handle_create_direct_game(data):
    opponent_name = _field(data, 'opponentName')
    if opponent_name is None:
        current_app.logger.warning(f"[malformed] sid={_get_sid()} event=createDirectGame")
        return
    _controller().create_direct_game(_get_sid(), opponent_name)


@event_handler
def handle_join_game(game_id):
    if not isinstance(game_id, str):
        current_app.logger.warning(f"[malformed] sid={_get_sid()} event=joinGame")
        return
    _controller().join_game(_get_sid(), game_id)


@event_handler
def handle_decline_invite(game_id):
    if not isinstance(game_id, str):
        current_app.logger.warning(f"[malformed] sid={_get_sid()} event=declineInvite")
        return
    _controller().decline_invite(_get_sid(), game_id)


@event_handler
def handle_join_queue(data):
    _controller().join_queue(_get_sid())


@event_handler
def handle_leave_queue(data):
    _controller().leave_queue(_get_sid())


@event_handler
def handle_make_move(data):
    game_id = _field(data, 'gameId')
    move = _field(data, 'move')
    if not isinstance(game_id, str) or move is None:
        current_app.logger.warning(f"[malformed] sid={_get_sid()} event=makeMove")
        return
    _controller().submit_move(_get_sid(), game_id, move)


@event_handler
def handle_request_rematch(game_id):
    if not isinstance(game_id, str):
        current_app.logger.warning(f"[malformed] sid={_get_sid()} event=requestRematch")
        return
    _controller().request_rematch(_get_sid(), game_id)


def handle_unknown_event(event, *args):
    current_app.logger.warning(f"[unknown-event] sid={_get_sid()} event={event}")


EVENT_HANDLERS = {
    'register': handle_register,
    'createGame': handle_create_game,
    'createGameWithOpponent': handle_create_game_with_opponent,
    'createDirectGame': handle_create_direct_game,
    'joinGame': handle_join_game,
    'declineInvite': handle_decline_invite,
    'joinQueue': handle_join_queue,
    'leaveQueue': handle_leave_queue,
    'makeMove': handle_make_move,
    'requestRematch': handle_request_rematch,
}


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace.

    Handlers look up the session controller on the current app, so every
    app built by ``create_app`` gets its own isolated state.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    for event, handler in EVENT_HANDLERS.items():
        socketio.on_event(event, handler, namespace=namespace)
    socketio.on_event('*', handle_unknown_event, namespace=namespace)
