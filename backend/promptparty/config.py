import os


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    PORT = int(os.environ.get('PORT', '3200'))
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
        ).split(',')
        if origin.strip()
    ]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '3'))
    # Swap attempts before giving up on a no-self-prompt assignment
    DERANGEMENT_MAX_ATTEMPTS = int(os.environ.get('DERANGEMENT_MAX_ATTEMPTS', '150'))
    # Garbage collection of silent rooms (seconds)
    GC_INTERVAL_SEC = int(os.environ.get('GC_INTERVAL_SEC', '3600'))
    ROOM_RETENTION_SEC = int(os.environ.get('ROOM_RETENTION_SEC', str(3 * 3600)))
