# arena_server/services/player_registry.py
"""Connected players keyed by connection id."""

import random
from typing import Dict, Optional

from arena_server.config.settings import (
    PLAYER_SPRITE,
    SPAWN_MAX_X,
    SPAWN_MAX_Y,
    SPAWN_MIN_X,
    SPAWN_MIN_Y,
    START_HP,
    START_MANA,
)
from arena_server.models.entities import Player


class PlayerRegistry:
    """Maps a connection id to the state of the player it controls."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.players: Dict[str, Player] = {}
        self.rng = rng or random.Random()

    def register(self, connection_id: str) -> Player:
        """Spawn a player at a random point in the spawn area."""
        player = Player(
            id=connection_id,
            x=self.rng.uniform(SPAWN_MIN_X, SPAWN_MAX_X),
            y=self.rng.uniform(SPAWN_MIN_Y, SPAWN_MAX_Y),
            hp=START_HP,
            mana=START_MANA,
            sprite=PLAYER_SPRITE,
        )
        self.players[connection_id] = player
        return player

    def unregister(self, connection_id: str) -> Optional[Player]:
        return self.players.pop(connection_id, None)

    def get(self, connection_id: str) -> Optional[Player]:
        return self.players.get(connection_id)

    def update_position(self, connection_id: str, x: float, y: float) -> Optional[Player]:
        """Overwrite a player's position. Late messages for gone players are ignored."""
        player = self.players.get(connection_id)
        if player is None:
            return None
        # Client-reported; speed and bounds are not checked.
        player.x = x
        player.y = y
        return player

    def snapshot(self) -> Dict[str, dict]:
        return {pid: player.to_dict() for pid, player in self.players.items()}

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self.players

    def __len__(self) -> int:
        return len(self.players)
