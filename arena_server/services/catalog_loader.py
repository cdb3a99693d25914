# arena_server/services/catalog_loader.py
"""Loading of the static weapon and breakable catalogs."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from arena_server.config.settings import BREAKABLES_FILE, WEAPONS_FILE
from arena_server.models.entities import Breakable, WeaponDefinition
from arena_server.utils.helpers import coerce_number

logger = logging.getLogger(__name__)

WEAPON_FIELDS = ("name", "swing", "range", "damage", "color", "type")


class CatalogError(Exception):
    """Raised when a catalog file cannot be read or has the wrong shape."""


def read_json(path: Path) -> Any:
    """Read one JSON file, raising CatalogError on any failure."""
    try:
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, ValueError) as e:
        raise CatalogError(f"cannot read {path}: {e}") from e


def load_with_fallback(
    filename: str,
    directories: Sequence[Path],
    expected: type,
    empty: Callable[[], Any],
) -> Any:
    """Read filename from the first directory that yields valid data.

    Falls back through the directories in order and finally returns
    empty() rather than failing startup.
    """
    for directory in directories:
        path = Path(directory) / filename
        try:
            data = read_json(path)
            if not isinstance(data, expected):
                raise CatalogError(
                    f"{path} holds {type(data).__name__}, expected {expected.__name__}"
                )
        except CatalogError as e:
            logger.warning("Catalog unavailable, trying next location: %s", e)
            continue
        logger.info("Loaded %s from %s", filename, path)
        return data

    logger.warning("No usable %s found, starting with an empty catalog", filename)
    return empty()


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def parse_weapon(key: str, raw: Any) -> Optional[WeaponDefinition]:
    """Build a WeaponDefinition from a catalog entry, or None if unusable.

    range and damage are required; an entry without them could never hit.
    """
    if not isinstance(raw, dict):
        return None
    weapon_range = coerce_number(raw.get("range"))
    damage = coerce_number(raw.get("damage"))
    if weapon_range is None or damage is None:
        return None

    return WeaponDefinition(
        key=key,
        name=_text(raw.get("name"), key),
        swing=_text(raw.get("swing"), ""),
        range=weapon_range,
        damage=int(damage) if damage.is_integer() else damage,
        color=raw.get("color"),
        type=_text(raw.get("type"), "melee"),
        extra={k: v for k, v in raw.items() if k not in WEAPON_FIELDS},
    )


def parse_breakable(raw: Any) -> Optional[Breakable]:
    """Build a Breakable from a catalog entry, or None if unusable."""
    if not isinstance(raw, dict):
        return None
    breakable_id = raw.get("id")
    if isinstance(breakable_id, bool) or not isinstance(breakable_id, (str, int)):
        return None
    x = coerce_number(raw.get("x"))
    y = coerce_number(raw.get("y"))
    hp = coerce_number(raw.get("hp"))
    if x is None or y is None or hp is None:
        return None

    drops = raw.get("drops") or []
    if not isinstance(drops, list):
        return None

    hp = int(hp) if hp.is_integer() else hp
    max_hp = coerce_number(raw.get("maxHp"))
    if max_hp is None:
        max_hp = hp
    elif max_hp.is_integer():
        max_hp = int(max_hp)
    sprite = raw.get("sprite")
    return Breakable(
        id=breakable_id,
        x=x,
        y=y,
        hp=hp,
        maxHp=max_hp,
        sprite=sprite if isinstance(sprite, str) else None,
        drops=[str(item) for item in drops],
    )


def load_weapons(directories: Sequence[Path]) -> Dict[str, WeaponDefinition]:
    raw = load_with_fallback(WEAPONS_FILE, directories, dict, dict)
    weapons = {}
    for key, entry in raw.items():
        weapon = parse_weapon(key, entry)
        if weapon is None:
            logger.warning("Skipping malformed weapon %r", key)
            continue
        weapons[key] = weapon
    return weapons


def load_breakables(directories: Sequence[Path]) -> List[Breakable]:
    raw = load_with_fallback(BREAKABLES_FILE, directories, list, list)
    breakables = []
    seen = set()
    for entry in raw:
        breakable = parse_breakable(entry)
        if breakable is None:
            logger.warning("Skipping malformed breakable %r", entry)
            continue
        if breakable.id in seen:
            logger.warning("Skipping duplicate breakable id %r", breakable.id)
            continue
        if breakable.destroyed:
            logger.warning("Skipping breakable %r with no hit points", breakable.id)
            continue
        seen.add(breakable.id)
        breakables.append(breakable)
    return breakables
