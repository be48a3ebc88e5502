"""Client-side cache of the world, rebuilt only from server events.

The mirror never decides anything the server owns. It predicts the local
player's movement (move, then clamp) so the client can report a position, and
it pre-filters pickups by distance so requests are only sent for items in
reach. The server remains the judge of who scores.
"""

from typing import Dict, Iterable, List, Optional

from arena import protocol
from arena.constants import MOVE_SPEED
from arena.entities import (
    Collectible,
    Player,
    calculate_rank,
    clamp_position,
    format_rank,
    within_pickup_range,
)


class WorldMirror:
    def __init__(self, self_id: Optional[str] = None):
        self.self_id = self_id
        self.local_player: Optional[Player] = None
        self.others: Dict[str, Player] = {}
        self.collectibles: Dict[object, Collectible] = {}
        self._handlers = {
            protocol.CURRENT_PLAYERS: self.on_current_players,
            protocol.CURRENT_COLLECTIBLES: self.on_current_collectibles,
            protocol.NEW_PLAYER: self.on_new_player,
            protocol.PLAYER_MOVED: self.on_player_moved,
            protocol.PLAYER_DISCONNECTED: self.on_player_disconnected,
            protocol.COLLECTIBLE_COLLECTED: self.on_collectible_collected,
        }

    def attach(self, client) -> None:
        """Subscribe to every outbound event on a client exposing ``on(event, handler)``."""
        for event, handler in self._handlers.items():
            client.on(event, handler)

    def apply(self, event: str, payload) -> bool:
        handler = self._handlers.get(event)
        if handler is None:
            return False
        handler(payload)
        return True

    # ---- Event handlers ----

    def on_current_players(self, players: List[dict]) -> None:
        self.local_player = None
        self.others = {}
        for data in players:
            player = Player.from_dict(data)
            if player.id == self.self_id:
                self.local_player = player
            else:
                self.others[player.id] = player

    def on_current_collectibles(self, collectibles: List[dict]) -> None:
        self.collectibles = {c['id']: Collectible.from_dict(c) for c in collectibles}

    def on_new_player(self, data: dict) -> None:
        if data['id'] != self.self_id:
            self.others[data['id']] = Player.from_dict(data)

    def on_player_moved(self, data: dict) -> None:
        player = self.others.get(data['id'])
        if player:
            player.x = data['x']
            player.y = data['y']

    def on_player_disconnected(self, player_id: str) -> None:
        self.others.pop(player_id, None)

    def on_collectible_collected(self, data: dict) -> None:
        self.collectibles.pop(data['collectibleId'], None)
        replacement = Collectible.from_dict(data['newCollectible'])
        self.collectibles[replacement.id] = replacement

        player_id = data.get('playerId')
        if player_id is None:
            return
        if self.local_player and player_id == self.local_player.id:
            self.local_player.score = data['newScore']
        elif player_id in self.others:
            self.others[player_id].score = data['newScore']

    # ---- Prediction ----

    def step(self, directions: Iterable[str], speed=MOVE_SPEED) -> Optional[dict]:
        """Move the local player and return the ``playerMovement`` payload.

        Returns None when there is no local player or the clamped position did
        not change.
        """
        if self.local_player is None:
            return None
        player = self.local_player
        old = (player.x, player.y)
        for direction in directions:
            player.move_player(direction, speed)
        player.x, player.y = clamp_position(player.x, player.y)
        if (player.x, player.y) == old:
            return None
        return {'x': player.x, 'y': player.y}

    def pickup_candidates(self) -> List[object]:
        if self.local_player is None:
            return []
        return [c.id for c in self.collectibles.values() if within_pickup_range(self.local_player, c)]

    def rank(self):
        if self.local_player is None:
            return None
        return calculate_rank(self.local_player, self.others.values())

    def rank_text(self) -> Optional[str]:
        result = self.rank()
        return format_rank(*result) if result else None
