import math

from arena.constants import (
    COLLECTIBLE_VALUE,
    PICKUP_DISTANCE,
    PLAYER_SIZE,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)


class Player:
    def __init__(self, id, x, y, score=0):
        self.id = id
        self.x = x
        self.y = y
        self.score = score or 0

    def move_player(self, direction, speed):
        """Shift one axis by ``speed``. Screen coordinates: ``up`` lowers y.

        Unknown directions are ignored. Bounds are not applied here, see
        :func:`clamp_position`.
        """
        if direction == 'up':
            self.y -= speed
        elif direction == 'down':
            self.y += speed
        elif direction == 'left':
            self.x -= speed
        elif direction == 'right':
            self.x += speed

    def collision(self, item):
        return self.x == item.x and self.y == item.y

    def calculate_rank(self, players):
        return calculate_rank(self, players)

    def copy(self):
        return Player(self.id, self.x, self.y, self.score)

    def to_dict(self):
        return {
            'id': self.id,
            'x': self.x,
            'y': self.y,
            'score': self.score,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(data['id'], data['x'], data['y'], data.get('score', 0))

    def __repr__(self):
        return f"<Player {self.id} ({self.x}, {self.y}) score={self.score}>"


class Collectible:
    def __init__(self, id, x, y, value=COLLECTIBLE_VALUE):
        self.id = id
        self.x = x
        self.y = y
        self.value = value

    def copy(self):
        return Collectible(self.id, self.x, self.y, self.value)

    def to_dict(self):
        return {
            'id': self.id,
            'x': self.x,
            'y': self.y,
            'value': self.value,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(data['id'], data['x'], data['y'], data.get('value', COLLECTIBLE_VALUE))

    def __repr__(self):
        return f"<Collectible {self.id} ({self.x}, {self.y}) value={self.value}>"


def clamp_position(x, y, size=PLAYER_SIZE):
    """Clamp a player centre so the whole square stays on the board."""
    half = size / 2
    x = max(half, min(WORLD_WIDTH - half, x))
    y = max(half, min(WORLD_HEIGHT - half, y))
    return x, y


def distance(a, b) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def within_pickup_range(player, collectible) -> bool:
    """Distance test used in place of :meth:`Player.collision`.

    Discrete movement steps rarely land exactly on an item, so a pickup counts
    once the centres are closer than the combined radii.
    """
    return distance(player, collectible) < PICKUP_DISTANCE


def rank_order(players):
    """Players by score descending, ties broken by id ascending."""
    return sorted(players, key=lambda p: (-p.score, str(p.id)))


def calculate_rank(player, players):
    """Return ``(rank, total)`` for ``player`` within ``players``.

    The roster always counts the player itself, even if the caller passed only
    the other players.
    """
    roster = list(players)
    if not any(p.id == player.id for p in roster):
        roster.append(player)
    ordered = rank_order(roster)
    rank = next(i for i, p in enumerate(ordered) if p.id == player.id) + 1
    return rank, len(roster)


def format_rank(rank, total) -> str:
    return f"Rank: {rank}/{total}"
