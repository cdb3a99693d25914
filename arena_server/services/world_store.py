# arena_server/services/world_store.py
"""Weapon catalog and live breakable objects."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set

from arena_server.models.entities import Breakable, BreakableId, WeaponDefinition
from arena_server.services.catalog_loader import load_breakables, load_weapons

logger = logging.getLogger(__name__)


class WorldStore:
    """Owns the read-only weapon catalog and the mutable breakable list."""

    def __init__(
        self,
        weapons: Optional[Dict[str, WeaponDefinition]] = None,
        breakables: Optional[Iterable[Breakable]] = None,
    ):
        self.weapons: Dict[str, WeaponDefinition] = dict(weapons or {})
        # Insertion ordered, so iteration is stable across replays.
        self.breakables: Dict[BreakableId, Breakable] = {}
        self.destroyed_ids: Set[BreakableId] = set()

        for breakable in breakables or ():
            self.breakables.setdefault(breakable.id, breakable)

    @classmethod
    def load(cls, directories: Sequence[Path]) -> "WorldStore":
        """Load both catalogs, trying each directory in order."""
        store = cls(load_weapons(directories), load_breakables(directories))
        logger.info(
            "World loaded: %d weapons, %d breakables",
            len(store.weapons),
            len(store.breakables),
        )
        return store

    def get_weapon(self, key: str) -> Optional[WeaponDefinition]:
        return self.weapons.get(key)

    def list_breakables(self) -> List[Breakable]:
        return list(self.breakables.values())

    def get_breakable(self, breakable_id: BreakableId) -> Optional[Breakable]:
        return self.breakables.get(breakable_id)

    def remove_breakable(self, breakable_id: BreakableId) -> Optional[Breakable]:
        """Remove a breakable for good. Unknown ids are ignored."""
        breakable = self.breakables.pop(breakable_id, None)
        if breakable is not None:
            self.destroyed_ids.add(breakable_id)
        return breakable

    def is_destroyed(self, breakable_id: BreakableId) -> bool:
        return breakable_id in self.destroyed_ids

    def weapons_snapshot(self) -> Dict[str, dict]:
        return {key: weapon.to_dict() for key, weapon in self.weapons.items()}

    def breakables_snapshot(self) -> List[dict]:
        return [breakable.to_dict() for breakable in self.breakables.values()]
