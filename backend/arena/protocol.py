"""Socket.IO event names and inbound payload parsing."""

import math

# Client -> server
PLAYER_MOVEMENT = 'playerMovement'
COLLECTIBLE_COLLECTED = 'collectibleCollected'

# Server -> client
CURRENT_PLAYERS = 'currentPlayers'
CURRENT_COLLECTIBLES = 'currentCollectibles'
NEW_PLAYER = 'newPlayer'
PLAYER_MOVED = 'playerMoved'
PLAYER_DISCONNECTED = 'playerDisconnected'
ERROR = 'error'


class MalformedMessage(ValueError):
    """An inbound payload is missing fields or carries the wrong types."""


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_movement(data):
    """Return ``(x, y)`` from a ``playerMovement`` payload.

    Values are not range-checked: out-of-bounds positions are accepted as sent.
    """
    if not isinstance(data, dict):
        raise MalformedMessage('playerMovement expects an object with x and y')
    x, y = data.get('x'), data.get('y')
    if not _is_number(x) or not _is_number(y):
        raise MalformedMessage('x and y must be numbers')
    if not (math.isfinite(x) and math.isfinite(y)):
        raise MalformedMessage('x and y must be finite')
    return x, y


def parse_collectible_id(data):
    """Return the collectible id from a ``collectibleCollected`` payload.

    Accepts ``{"collectibleId": id}`` or the bare id. Ids are integers; a
    numeric string is converted so it can match.
    """
    if isinstance(data, dict):
        if 'collectibleId' not in data:
            raise MalformedMessage('collectibleId is required')
        data = data['collectibleId']
    if isinstance(data, bool):
        raise MalformedMessage('collectibleId must be a number or string')
    if isinstance(data, int):
        return data
    if isinstance(data, float):
        return int(data) if data.is_integer() else data
    if isinstance(data, str):
        text = data.strip()
        if not text:
            raise MalformedMessage('collectibleId must not be empty')
        # isdigit alone accepts digits like '²' that int() rejects
        return int(text) if text.isascii() and text.isdigit() else text
    raise MalformedMessage('collectibleId must be a number or string')
