import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated list of frontend origins allowed for HTTP and Socket.IO
    ALLOWED_ORIGINS = [o.strip() for o in (os.environ.get('FRONTEND_URL') or 'http://localhost:3000').split(',') if o.strip()]
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Length of generated game ids (lowercase letters + digits)
    GAME_ID_LENGTH = int(os.environ.get('GAME_ID_LENGTH', '8'))
    MAX_NAME_LENGTH = int(os.environ.get('MAX_NAME_LENGTH', '32'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
