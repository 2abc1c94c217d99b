from typing import Any

from flask_socketio import SocketIO


class SocketIONotifier:
    """Fire-and-forget outbound events over a Flask-SocketIO server.

    ``payload=None`` emits the event with no arguments.
    """

    def __init__(self, socketio: SocketIO, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def send(self, connection_id: str, event: str, payload: Any = None) -> None:
        if payload is None:
            self.socketio.emit(event, to=connection_id, namespace=self.namespace)
        else:
            self.socketio.emit(event, payload, to=connection_id, namespace=self.namespace)

    def broadcast(self, event: str, payload: Any = None) -> None:
        if payload is None:
            self.socketio.emit(event, namespace=self.namespace)
        else:
            self.socketio.emit(event, payload, namespace=self.namespace)
