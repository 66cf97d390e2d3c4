from flask import current_app, request
from flask_socketio import emit
from typing import Any, Callable, Dict, Optional

from promptparty import connections
from promptparty.errors import (
    RoomError,
    error,
    no_code_error,
    no_name_error,
    no_room_error,
    not_host_error,
    not_in_room_error,
)
from promptparty.registry import RoomRegistry, normalize_code
from promptparty.services.rooms import lifecycle
from promptparty.sync import broadcast_room

Ack = Optional[Dict[str, Any]]


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _registry() -> RoomRegistry:
    return current_app.extensions['room_registry']


def _reject(action: str, err: RoomError) -> Dict[str, Any]:
    """Log a rejected action and build the payload for the requester's ack."""
    current_app.logger.info(f"[reject] action={action} sid={_get_sid()} reason={err.message!r}")
    return err.to_dict()


def handle_connect():
    emit('connected', {'message': 'Connected'})


def handle_disconnect(*args):
    # The member record stays in its room so the player can rejoin by name
    session = connections.drop(_get_sid())
    if session:
        current_app.logger.info(f"[disconnect] room={session.room_code} member={session.name}")


def handle_create(name=None) -> Ack:
    if not isinstance(name, str) or not name:
        return _reject('create', error('A name is required to create a room.'))
    sid = _get_sid()
    registry = _registry()
    code = registry.create_room(name, sid)
    connections.bind(sid, code, name)
    current_app.logger.info(f"[room-create] room={code} host={name}")
    with registry.locked(code):
        broadcast_room(registry, code)
    return None


def handle_join(data=None) -> Ack:
    data = data if isinstance(data, dict) else {}
    raw_code = data.get('roomCode')
    name = data.get('name')
    if not isinstance(raw_code, str) or not isinstance(name, str) or not raw_code.strip() or not name:
        return _reject('join', error('Room code and name are required.'))
    code = normalize_code(raw_code)
    sid = _get_sid()
    registry = _registry()
    with registry.locked(code):
        maybe_error = lifecycle.join(registry, code, name, sid)
        if maybe_error:
            return _reject('join', maybe_error)
        connections.bind(sid, code, name)
        current_app.logger.info(f"[room-join] room={code} member={name}")
        broadcast_room(registry, code)
    return None


def handle_submit(submission=None) -> Ack:
    session = connections.get(_get_sid())
    if session is None or not session.name:
        return _reject('submit', no_name_error)
    if not session.room_code:
        return _reject('submit', no_code_error)
    if not isinstance(submission, str) or not submission:
        return _reject('submit', error('Sent an empty submission.'))
    registry = _registry()
    with registry.locked(session.room_code):
        maybe_error = lifecycle.submit_prompt(registry, session.room_code, session.name, submission)
        if maybe_error:
            return _reject('submit', maybe_error)
        broadcast_room(registry, session.room_code)
    return None


def _run_host_action(action: str, transition: Callable[[RoomRegistry, str], Optional[RoomError]]) -> Ack:
    """Check the caller is the room's host, apply ``transition`` and broadcast.

    Validation, mutation and broadcast all happen under the room lock.
    """
    session = connections.get(_get_sid())
    if session is None or not session.name:
        return _reject(action, no_name_error)
    if not session.room_code:
        return _reject(action, no_code_error)
    code = session.room_code
    registry = _registry()
    with registry.locked(code) as room:
        if room is None:
            return _reject(action, no_room_error)
        member = room.members.get(session.name)
        if member is None:
            return _reject(action, not_in_room_error)
        if not member.is_host:
            return _reject(action, not_host_error)
        maybe_error = transition(registry, code)
        if maybe_error:
            return _reject(action, maybe_error)
        current_app.logger.info(f"[phase] room={code} action={action} phase={registry.lookup(code).phase}")
        broadcast_room(registry, code)
    return None


def handle_write(*args) -> Ack:
    return _run_host_action('write', lifecycle.start_writing)


def handle_guess(*args) -> Ack:
    max_attempts = int(current_app.config.get('DERANGEMENT_MAX_ATTEMPTS', 150))
    return _run_host_action(
        'guess',
        lambda registry, code: lifecycle.start_guessing(registry, code, max_attempts=max_attempts),
    )


def handle_next(*args) -> Ack:
    return _run_host_action('next', lifecycle.advance_turn)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    from promptparty import socketio

    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create', handle_create, namespace=namespace)
    socketio.on_event('join', handle_join, namespace=namespace)
    socketio.on_event('write', handle_write, namespace=namespace)
    socketio.on_event('submit', handle_submit, namespace=namespace)
    socketio.on_event('guess', handle_guess, namespace=namespace)
    socketio.on_event('next', handle_next, namespace=namespace)
