"""Connection lifecycle and message flow for one game world.

Transport handlers call into :class:`Game`; it owns the store, the session
registry, the broadcaster and the collection resolver for a single app.
"""

import logging
import random
from typing import Optional

from arena import protocol
from arena.broadcast import Broadcaster
from arena.entities import Player, rank_order
from arena.resolver import CollectionOutcome, CollectionResolver
from arena.sessions import SessionRegistry
from arena.world import WorldState


class Game:
    def __init__(self, socketio, namespace: str = '/', rng: Optional[random.Random] = None,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.world = WorldState(rng=rng)
        self.sessions = SessionRegistry(self.world)
        self.broadcaster = Broadcaster(socketio, self.sessions, namespace=namespace)
        self.resolver = CollectionResolver(self.world, self.broadcaster)

    def start(self, initial_collectibles: int = 1) -> None:
        for _ in range(initial_collectibles):
            collectible = self.world.add_collectible()
            self.logger.info(f"[spawn] collectible={collectible.id} at=({collectible.x}, {collectible.y})")

    # join, move and leave emit while holding the store lock, so a departure
    # can never be followed by a relay about the departed player.

    def join(self, sid: str) -> Player:
        with self.world.lock:
            _, player = self.sessions.on_connect(sid)
            self.broadcaster.unicast(sid, protocol.CURRENT_PLAYERS, [p.to_dict() for p in self.world.list_players()])
            self.broadcaster.unicast(sid, protocol.CURRENT_COLLECTIBLES, [c.to_dict() for c in self.world.list_collectibles()])
            self.broadcaster.broadcast_except_sender(sid, protocol.NEW_PLAYER, player.to_dict())
        self.logger.info(f"[connect] sid={sid} at=({player.x}, {player.y}) online={len(self.sessions)}")
        return player

    def move(self, sid: str, x, y) -> Optional[Player]:
        with self.world.lock:
            player = self.world.update_player_position(sid, x, y)
            if player is None or not self.sessions.is_live(sid):
                self.logger.debug(f"[move-skip] sid={sid} no player")
                return None
            self.broadcaster.broadcast_except_sender(
                sid, protocol.PLAYER_MOVED, {'id': sid, 'x': player.x, 'y': player.y}
            )
        return player

    def collect(self, sid: str, collectible_id) -> Optional[CollectionOutcome]:
        outcome = self.resolver.resolve(sid, collectible_id)
        if outcome is None:
            self.logger.debug(f"[collect-skip] sid={sid} collectible={collectible_id} already gone")
        elif outcome.credited:
            self.logger.info(
                f"[collect] sid={sid} collectible={outcome.collectible_id} score={outcome.new_score} "
                f"replacement={outcome.new_collectible.id}"
            )
        else:
            self.logger.info(
                f"[collect-orphan] sid={sid} collectible={outcome.collectible_id} "
                f"replacement={outcome.new_collectible.id}"
            )
        return outcome

    def leave(self, sid: str) -> Optional[Player]:
        with self.world.lock:
            player = self.sessions.on_disconnect(sid)
            if player is None:
                return None
            self.broadcaster.broadcast_except_sender(sid, protocol.PLAYER_DISCONNECTED, sid)
        self.logger.info(f"[disconnect] sid={sid} score={player.score} online={len(self.sessions)}")
        return player

    def leaderboard(self):
        ordered = rank_order(self.world.list_players())
        return [{'id': p.id, 'score': p.score, 'rank': i + 1} for i, p in enumerate(ordered)]
