from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from promptparty.config import Config
from promptparty.registry import RoomRegistry
from promptparty.sessions import ConnectionMap

# Process-wide game state; bound to the app (and reset) in create_app
rooms = RoomRegistry()
connections = ConnectionMap()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    rooms.init_app(flask_app)
    connections.clear()
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from promptparty.main import main
    flask_app.register_blueprint(main)

    # Importing here ensures the handlers bind to the initialized socketio instance
    from promptparty.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    from promptparty.services.rooms.collector import start_room_collector
    start_room_collector(flask_app)

    return flask_app
