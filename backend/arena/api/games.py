from flask import Blueprint, current_app, jsonify

games = Blueprint('games', __name__)


def _controller():
    return current_app.extensions['arena']


@games.route('/open', methods=['GET'])
def list_open_games():
    """
    Returns the public games currently waiting for a second player.
    """
    return jsonify(_controller().list_open_games())


@games.route('/stats', methods=['GET'])
def get_stats():
    """
    Returns live counts of players, open games, invites, queue and sessions.
    """
    return jsonify(_controller().stats())
