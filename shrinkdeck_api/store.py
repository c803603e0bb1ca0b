"""
Redis-backed game storage.

Every change to a stored game goes through ``GameStore.update``, which
reads, applies and writes under WATCH/MULTI/EXEC. If another request
writes the same game in between, the transaction is retried against the
fresh state, so two players can never both act on a stale snapshot.
"""

import json
import logging
from typing import Callable, Optional

from redis.exceptions import WatchError

from shrinkdeck_core.errors import ConcurrentUpdateError, GameNotFoundError
from shrinkdeck_core.game import GameState

logger = logging.getLogger(__name__)

DEFAULT_TTL = 24 * 60 * 60  # 24 hours
DEFAULT_MAX_RETRIES = 5


class GameStore:
    """Game states kept as JSON under ``game:<ID>`` with a TTL"""

    def __init__(self, client, ttl: int = DEFAULT_TTL, max_retries: int = DEFAULT_MAX_RETRIES,
                 key_prefix: str = "game:"):
        self.client = client
        self.ttl = ttl
        self.max_retries = max_retries
        self.key_prefix = key_prefix

    def key(self, game_id: str) -> str:
        return f"{self.key_prefix}{game_id.upper()}"

    @staticmethod
    def _dump(state: GameState) -> str:
        return json.dumps(state.to_dict(include_hands=True))

    @staticmethod
    def _load(data) -> GameState:
        return GameState.from_dict(json.loads(data))

    def get(self, game_id: str) -> Optional[GameState]:
        """Load game state, or None if it does not exist or has expired"""
        data = self.client.get(self.key(game_id))
        if not data:
            return None
        return self._load(data)

    def load(self, game_id: str) -> GameState:
        state = self.get(game_id)
        if state is None:
            raise GameNotFoundError("Game not found")
        return state

    def create(self, state: GameState) -> bool:
        """Store a brand new game. Returns False if the id is already taken."""
        return bool(self.client.set(self.key(state.id), self._dump(state), ex=self.ttl, nx=True))

    def update(self, game_id: str, mutate: Callable[[GameState], GameState]) -> GameState:
        """
        Apply ``mutate`` to the stored state and write the result back
        atomically.

        ``mutate`` must not modify its argument. Any exception it raises
        aborts the update with nothing written.
        """
        key = self.key(game_id)

        with self.client.pipeline() as pipe:
            for attempt in range(1, self.max_retries + 1):
                try:
                    pipe.watch(key)
                    data = pipe.get(key)
                    if not data:
                        raise GameNotFoundError("Game not found")

                    new_state = mutate(self._load(data))

                    pipe.multi()
                    pipe.set(key, self._dump(new_state), ex=self.ttl)
                    pipe.execute()
                    return new_state
                except WatchError:
                    logger.info("Game %s changed during update (attempt %d), retrying", game_id, attempt)
                    continue

        raise ConcurrentUpdateError("Game was updated by another request, please retry")

    def delete(self, game_id: str):
        self.client.delete(self.key(game_id))
