# arena_server/services/combat_service.py
"""Melee hit detection and breakable destruction."""

import logging
import random
from dataclasses import asdict
from typing import List, Optional

from arena_server.config.settings import DEFAULT_SWING_HALF_ANGLE, SWING_HALF_ANGLES
from arena_server.models.entities import (
    AttackRequest,
    Breakable,
    DroppedItem,
    Player,
    WeaponDefinition,
)
from arena_server.services.broadcast import Broadcast, to_all
from arena_server.services.player_registry import PlayerRegistry
from arena_server.services.world_store import WorldStore
from arena_server.utils.helpers import angular_delta, bearing, calculate_distance

logger = logging.getLogger(__name__)


def swing_half_angle(swing: str) -> float:
    """Half the angular width of a swing arc."""
    return SWING_HALF_ANGLES.get(swing, DEFAULT_SWING_HALF_ANGLE)


def is_hit(
    attacker_x: float,
    attacker_y: float,
    facing: float,
    target_x: float,
    target_y: float,
    weapon_range: float,
    half_angle: float,
) -> bool:
    """Check whether a target lies inside a swing arc. Both bounds are inclusive."""
    distance = calculate_distance(attacker_x, attacker_y, target_x, target_y)
    if distance > weapon_range:
        return False
    delta = angular_delta(bearing(attacker_x, attacker_y, target_x, target_y), facing)
    return abs(delta) <= half_angle


class CombatResolver:
    """Resolves weapon attacks against the live breakables."""

    def __init__(
        self,
        registry: PlayerRegistry,
        world: WorldStore,
        rng: Optional[random.Random] = None,
    ):
        self.registry = registry
        self.world = world
        self.rng = rng or random.Random()

    def resolve(self, request: AttackRequest) -> List[Broadcast]:
        """Apply one attack and return the broadcasts it produces.

        Unknown attackers and unknown weapons drop the attack without any
        broadcast. Otherwise every breakable inside the arc takes damage,
        and exactly one weaponUsed is emitted last.
        """
        attacker = self.registry.get(request.attackerId)
        if attacker is None:
            logger.debug("Dropping attack from unknown player %s", request.attackerId)
            return []

        weapon = self.world.get_weapon(request.weaponKey)
        if weapon is None:
            logger.debug(
                "Dropping attack from %s with unknown weapon %r",
                request.attackerId,
                request.weaponKey,
            )
            return []

        events: List[Broadcast] = []
        half_angle = swing_half_angle(weapon.swing)

        # list_breakables() is a copy; destroyed entries are removed mid-loop.
        for breakable in self.world.list_breakables():
            if not is_hit(
                attacker.x,
                attacker.y,
                request.angle,
                breakable.x,
                breakable.y,
                weapon.range,
                half_angle,
            ):
                continue
            events.extend(self._apply_damage(breakable, weapon))

        events.append(self._weapon_used(attacker, weapon, request.angle))
        return events

    def _apply_damage(self, breakable: Breakable, weapon: WeaponDefinition) -> List[Broadcast]:
        breakable.hp -= weapon.damage
        if not breakable.destroyed:
            return []

        events = []
        if breakable.drops:
            dropped = DroppedItem(
                x=breakable.x, y=breakable.y, item=self.rng.choice(breakable.drops)
            )
            events.append(to_all("itemDropped", asdict(dropped)))

        self.world.remove_breakable(breakable.id)
        events.append(to_all("breakableDestroyed", breakable.id))
        logger.info("Breakable %r destroyed by %s", breakable.id, weapon.key)
        return events

    def _weapon_used(self, attacker: Player, weapon: WeaponDefinition, angle: float) -> Broadcast:
        return to_all(
            "weaponUsed",
            {"attackerId": attacker.id, "weaponName": weapon.name, "angle": angle},
            origin=attacker.id,
        )
