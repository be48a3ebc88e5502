import threading
from typing import Optional, Set, Tuple

from arena.entities import Player
from arena.world import WorldState


class SessionRegistry:
    """Live connections, keyed by the transport sid.

    The sid doubles as the player id, so there is no second mapping to keep
    in sync with the world store.
    """

    def __init__(self, world: WorldState):
        self.world = world
        self._lock = threading.Lock()
        self._live: Set[str] = set()

    def on_connect(self, sid: str) -> Tuple[str, Player]:
        with self._lock:
            self._live.add(sid)
        return sid, self.world.add_player(sid)

    def on_disconnect(self, sid: str) -> Optional[Player]:
        """Drop the session and its player. Returns None if already gone."""
        with self._lock:
            if sid not in self._live:
                return None
            self._live.discard(sid)
        return self.world.remove_player(sid)

    def is_live(self, sid: str) -> bool:
        with self._lock:
            return sid in self._live

    def live_sids(self) -> Set[str]:
        with self._lock:
            return set(self._live)

    def __len__(self):
        with self._lock:
            return len(self._live)
