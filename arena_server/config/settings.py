# arena_server/config/settings.py
"""Game configuration constants and settings."""

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# Spawn settings
SPAWN_MIN_X = 100
SPAWN_MAX_X = 700
SPAWN_MIN_Y = 100
SPAWN_MAX_Y = 500

# Player settings
START_HP = 100
START_MANA = 100
PLAYER_SPRITE = "/sprites/player.png"

# Melee settings
SWING_HALF_ANGLES = {
    "short": math.pi / 6,
    "wide": math.pi / 3,
    "long": math.pi / 2,
}
DEFAULT_SWING_HALF_ANGLE = math.pi / 4

# Catalog settings
WEAPONS_FILE = "weapons.json"
BREAKABLES_FILE = "breakables.json"
PACKAGE_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

# Server settings
OUTBOUND_QUEUE_SIZE = 256  # messages buffered per connection
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def get_game_config():
    """Get the client-facing game configuration as a dictionary."""
    return {
        "spawnArea": {
            "minX": SPAWN_MIN_X,
            "maxX": SPAWN_MAX_X,
            "minY": SPAWN_MIN_Y,
            "maxY": SPAWN_MAX_Y,
        },
        "startHp": START_HP,
        "startMana": START_MANA,
        "playerSprite": PLAYER_SPRITE,
        "swingHalfAngles": dict(SWING_HALF_ANGLES),
        "defaultSwingHalfAngle": DEFAULT_SWING_HALF_ANGLE,
    }


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Process configuration, read once at startup."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    data_dir: Path = PACKAGE_DATA_DIR
    fallback_data_dir: Path = Path("data")
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from ARENA_* environment variables."""
        data_dir = os.getenv("ARENA_DATA_DIR")
        fallback_data_dir = os.getenv("ARENA_FALLBACK_DATA_DIR")
        seed = os.getenv("ARENA_SEED")

        return cls(
            host=os.getenv("ARENA_HOST", DEFAULT_HOST),
            port=int(os.getenv("ARENA_PORT", str(DEFAULT_PORT))),
            data_dir=Path(data_dir) if data_dir else PACKAGE_DATA_DIR,
            fallback_data_dir=(
                Path(fallback_data_dir) if fallback_data_dir else Path("data")
            ),
            log_level=os.getenv("ARENA_LOG_LEVEL", "INFO"),
            cors_origins=_split_csv(os.getenv("ARENA_CORS_ORIGINS", "*")),
            seed=int(seed) if seed else None,
        )
