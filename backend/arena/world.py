"""Authoritative world state: connected players and active collectibles.

Every public method takes ``self.lock``. The lock is reentrant so a caller
that needs several steps to appear as one (see
:class:`arena.resolver.CollectionResolver`) can hold it across them.
Callers only ever receive copies; the stored records never leave the store.
"""

import itertools
import random
import threading
from typing import Dict, List, Optional

from arena.constants import COLLECTIBLE_VALUE, SPAWN_MARGIN, WORLD_HEIGHT, WORLD_WIDTH
from arena.entities import Collectible, Player


class WorldState:
    def __init__(self, rng: Optional[random.Random] = None):
        self.lock = threading.RLock()
        self._rng = rng or random.Random()
        self._players: Dict[str, Player] = {}
        self._collectibles: Dict[int, Collectible] = {}
        self._collectible_ids = itertools.count(1)

    def _random_position(self):
        x = self._rng.randrange(SPAWN_MARGIN, WORLD_WIDTH - SPAWN_MARGIN)
        y = self._rng.randrange(SPAWN_MARGIN, WORLD_HEIGHT - SPAWN_MARGIN)
        return x, y

    # ---- Players ----

    def add_player(self, player_id: str) -> Player:
        with self.lock:
            existing = self._players.get(player_id)
            if existing:
                return existing.copy()
            x, y = self._random_position()
            player = Player(player_id, x, y, 0)
            self._players[player_id] = player
            return player.copy()

    def remove_player(self, player_id: str) -> Optional[Player]:
        with self.lock:
            return self._players.pop(player_id, None)

    def update_player_position(self, player_id: str, x, y) -> Optional[Player]:
        """Overwrite a player's position as given.

        Returns None when the player is gone (a move that raced its own
        disconnect). Coordinates are trusted; clients clamp before sending.
        """
        with self.lock:
            player = self._players.get(player_id)
            if player is None:
                return None
            player.x = x
            player.y = y
            return player.copy()

    def credit_player(self, player_id: str, value: int) -> Optional[int]:
        with self.lock:
            player = self._players.get(player_id)
            if player is None:
                return None
            player.score += value
            return player.score

    def get_player(self, player_id: str) -> Optional[Player]:
        with self.lock:
            player = self._players.get(player_id)
            return player.copy() if player else None

    def list_players(self) -> List[Player]:
        with self.lock:
            return [p.copy() for p in self._players.values()]

    # ---- Collectibles ----

    def add_collectible(self) -> Collectible:
        with self.lock:
            x, y = self._random_position()
            collectible = Collectible(next(self._collectible_ids), x, y, COLLECTIBLE_VALUE)
            self._collectibles[collectible.id] = collectible
            return collectible.copy()

    def remove_collectible(self, collectible_id) -> Optional[Collectible]:
        """Remove and return a collectible in one step, or None if absent."""
        with self.lock:
            return self._collectibles.pop(collectible_id, None)

    def list_collectibles(self) -> List[Collectible]:
        with self.lock:
            return [c.copy() for c in self._collectibles.values()]

    def snapshot(self) -> Dict[str, list]:
        with self.lock:
            return {
                'players': [p.to_dict() for p in self._players.values()],
                'collectibles': [c.to_dict() for c in self._collectibles.values()],
            }
