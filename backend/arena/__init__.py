from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('ALLOWED_ORIGINS') or '*'
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One controller per app: owns registry, lobby, sessions and the queue
    from arena.controller import SessionController
    from arena.notifier import SocketIONotifier
    flask_app.extensions['arena'] = SessionController(
        SocketIONotifier(socketio, namespace=namespace),
        logger=flask_app.logger,
        game_id_length=int(flask_app.config.get('GAME_ID_LENGTH', 8)),
        max_name_length=int(flask_app.config.get('MAX_NAME_LENGTH', 32)),
    )

    from arena.main import main
    flask_app.register_blueprint(main)

    from arena.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from arena.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
