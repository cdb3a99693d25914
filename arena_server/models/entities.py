# arena_server/models/entities.py
"""Game entity models and data classes."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union

BreakableId = Union[str, int]


@dataclass
class Player:
    """Represents a connected player. The id is the connection id."""

    id: str
    x: float
    y: float
    hp: int
    mana: int
    sprite: str

    def __post_init__(self):
        self.set_vitals(self.hp, self.mana)

    def set_vitals(self, hp: int, mana: int):
        """Set hit points and mana, never below zero."""
        self.hp = max(0, hp)
        self.mana = max(0, mana)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WeaponDefinition:
    """A weapon or spell entry from the static catalog."""

    key: str
    name: str
    swing: str
    range: float
    damage: int
    color: Optional[str] = None
    type: str = "melee"
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update(
            {
                "name": self.name,
                "swing": self.swing,
                "range": self.range,
                "damage": self.damage,
                "color": self.color,
                "type": self.type,
            }
        )
        return data


@dataclass
class Breakable:
    """Destructible world object with hit points and an optional loot table."""

    id: BreakableId
    x: float
    y: float
    hp: int
    maxHp: Optional[int] = None
    sprite: Optional[str] = None
    drops: List[str] = field(default_factory=list)

    @property
    def destroyed(self) -> bool:
        return self.hp <= 0

    def to_dict(self) -> dict:
        data = asdict(self)
        if self.maxHp is None:
            del data["maxHp"]
        if self.sprite is None:
            del data["sprite"]
        return data


@dataclass
class DroppedItem:
    """Loot emitted where a breakable was destroyed."""

    x: float
    y: float
    item: str


@dataclass
class AttackRequest:
    """A validated weaponAttack message.

    x and y are what the client claimed; resolution always uses the
    registry position instead.
    """

    attackerId: str
    weaponKey: str
    angle: float
    x: Optional[float] = None
    y: Optional[float] = None
