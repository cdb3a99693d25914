# arena_server/services/game_service.py
"""Core game logic and state management."""

import logging
import random
from typing import List, Optional

from arena_server.models.entities import AttackRequest
from arena_server.services.broadcast import Broadcast, to_all, to_others, to_sender
from arena_server.services.combat_service import CombatResolver
from arena_server.services.player_registry import PlayerRegistry
from arena_server.services.world_store import WorldStore
from arena_server.utils.helpers import coerce_number

logger = logging.getLogger(__name__)


class GameSession:
    """One game instance: players, world and combat, with no global state.

    Every method is synchronous and returns the broadcasts it produced, so
    one inbound message is fully applied before the next is looked at.
    """

    def __init__(self, world: Optional[WorldStore] = None, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self.world = world or WorldStore()
        self.registry = PlayerRegistry(self.rng)
        self.combat = CombatResolver(self.registry, self.world, self.rng)

    def connect(self, connection_id: str) -> List[Broadcast]:
        """Spawn a player, send it the world and announce it to everyone else."""
        player = self.registry.register(connection_id)
        logger.info("Player %s connected at (%.1f, %.1f)", player.id, player.x, player.y)

        init = {
            "id": player.id,
            "players": self.registry.snapshot(),
            "breakables": self.world.breakables_snapshot(),
            "weapons": self.world.weapons_snapshot(),
        }
        return [
            to_sender("init", init, connection_id),
            to_others("newPlayer", player.to_dict(), connection_id),
        ]

    def disconnect(self, connection_id: str) -> List[Broadcast]:
        """Remove a player. Repeated calls for the same id emit nothing."""
        player = self.registry.unregister(connection_id)
        if player is None:
            return []
        logger.info("Player %s disconnected", connection_id)
        return [to_all("playerDisconnected", connection_id, connection_id)]

    def handle_move(self, connection_id: str, data: dict) -> List[Broadcast]:
        x = coerce_number(data.get("x"))
        y = coerce_number(data.get("y"))
        if x is None or y is None:
            logger.debug("Dropping malformed move from %s: %r", connection_id, data)
            return []

        player = self.registry.update_position(connection_id, x, y)
        if player is None:
            return []
        return [to_others("playerMoved", player.to_dict(), connection_id)]

    def handle_attack(self, connection_id: str, data: dict) -> List[Broadcast]:
        request = parse_attack(connection_id, data)
        if request is None:
            logger.debug("Dropping malformed weaponAttack from %s: %r", connection_id, data)
            return []
        return self.combat.resolve(request)

    def handle_message(self, connection_id: str, data: dict) -> List[Broadcast]:
        """Route one inbound message by its type."""
        message_type = data.get("type")

        if message_type == "move":
            return self.handle_move(connection_id, data)
        elif message_type == "weaponAttack":
            return self.handle_attack(connection_id, data)
        elif message_type == "disconnect":
            return self.disconnect(connection_id)

        logger.debug("Ignoring message of type %r from %s", message_type, connection_id)
        return []

    def get_stats(self) -> dict:
        return {
            "totalPlayers": len(self.registry),
            "totalBreakables": len(self.world.breakables),
            "destroyedBreakables": len(self.world.destroyed_ids),
            "totalWeapons": len(self.world.weapons),
        }


def parse_attack(connection_id: str, data: dict) -> Optional[AttackRequest]:
    """Validate a weaponAttack payload. The weapon key is the only identifier."""
    weapon_key = data.get("weapon")
    angle = coerce_number(data.get("angle"))
    if not isinstance(weapon_key, str) or not weapon_key or angle is None:
        return None

    return AttackRequest(
        attackerId=connection_id,
        weaponKey=weapon_key,
        angle=angle,
        x=coerce_number(data.get("x")),
        y=coerce_number(data.get("y")),
    )
