from typing import Any, Dict, Optional

from arena.broadcast import Broadcaster
from arena.entities import Collectible
from arena.protocol import COLLECTIBLE_COLLECTED
from arena.world import WorldState


class CollectionOutcome:
    def __init__(self, collectible_id, new_collectible: Collectible,
                 player_id: Optional[str], new_score: Optional[int]):
        self.collectible_id = collectible_id
        self.new_collectible = new_collectible
        self.player_id = player_id
        self.new_score = new_score

    @property
    def credited(self) -> bool:
        return self.player_id is not None

    def to_payload(self) -> Dict[str, Any]:
        return {
            'collectibleId': self.collectible_id,
            'newCollectible': self.new_collectible.to_dict(),
            'playerId': self.player_id,
            'newScore': self.new_score,
        }


class CollectionResolver:
    """Decides which pickup request for a collectible gets the point.

    Removal from the store is the only arbitration: the first request to pop
    the id wins, every later request for the same id finds nothing and is
    dropped. Removal, credit, the replacement spawn and the broadcast happen
    under one hold of the store lock so no reader sees a half-applied pickup
    and a departure cannot slip in before the result is announced.
    """

    def __init__(self, world: WorldState, broadcaster: Broadcaster):
        self.world = world
        self.broadcaster = broadcaster

    def resolve(self, sid: str, collectible_id) -> Optional[CollectionOutcome]:
        with self.world.lock:
            collected = self.world.remove_collectible(collectible_id)
            if collected is None:
                return None
            new_score = self.world.credit_player(sid, collected.value)
            replacement = self.world.add_collectible()

            # A collector that left mid-flight gets nothing, but the item is
            # still replaced so the board never runs empty.
            credited = new_score is not None and self.broadcaster.sessions.is_live(sid)
            outcome = CollectionOutcome(
                collectible_id=collected.id,
                new_collectible=replacement,
                player_id=sid if credited else None,
                new_score=new_score if credited else None,
            )
            self.broadcaster.broadcast_all(COLLECTIBLE_COLLECTED, outcome.to_payload())
        return outcome
