from flask import current_app, request
from flask_socketio import emit

from arena import socketio
from arena.game import Game
from arena.protocol import (
    COLLECTIBLE_COLLECTED,
    ERROR,
    PLAYER_MOVEMENT,
    MalformedMessage,
    parse_collectible_id,
    parse_movement,
)


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _game() -> Game:
    return current_app.extensions['arena']


def _reject(event: str, exc: MalformedMessage) -> None:
    current_app.logger.warning(f"[malformed] sid={_get_sid()} event={event} reason={exc}")
    emit(ERROR, {'event': event, 'message': str(exc)})


def handle_connect(auth=None):
    _game().join(_get_sid())


def handle_disconnect(reason=None):
    _game().leave(_get_sid())


def handle_player_movement(data):
    try:
        x, y = parse_movement(data)
    except MalformedMessage as exc:
        _reject(PLAYER_MOVEMENT, exc)
        return
    _game().move(_get_sid(), x, y)


def handle_collectible_collected(data):
    try:
        collectible_id = parse_collectible_id(data)
    except MalformedMessage as exc:
        _reject(COLLECTIBLE_COLLECTED, exc)
        return
    _game().collect(_get_sid(), collectible_id)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Registration is keyed by (namespace, event), so calling this again for a
    new app replaces the previous bindings.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(PLAYER_MOVEMENT, handle_player_movement, namespace=namespace)
    socketio.on_event(COLLECTIBLE_COLLECTED, handle_collectible_collected, namespace=namespace)
