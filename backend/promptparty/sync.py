from flask import current_app

from promptparty import socketio
from promptparty.registry import RoomRegistry
from promptparty.views import project


def broadcast_room(registry: RoomRegistry, code: str) -> int:
    """Push each member of the room their own view of it.

    A failed delivery to one member is logged and skipped. Returns the number
    of members the state was sent to; 0 if the room no longer exists.
    """
    room = registry.lookup(code)
    if room is None:
        return 0
    namespace = current_app.config.get('SOCKETIO_NAMESPACE', '/')
    delivered = 0
    for name, member in list(room.members.items()):
        view = project(room, name, code)
        try:
            socketio.emit('state', view, to=member.sid, namespace=namespace)
            delivered += 1
        except Exception as exc:
            current_app.logger.warning(f"[broadcast-fail] room={code} member={name} sid={member.sid}: {exc}")
    registry.touch(code)
    return delivered
