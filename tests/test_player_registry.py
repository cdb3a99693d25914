"""Tests for the player registry."""

import random

from arena_server.config.settings import (
    PLAYER_SPRITE,
    SPAWN_MAX_X,
    SPAWN_MAX_Y,
    SPAWN_MIN_X,
    SPAWN_MIN_Y,
)
from arena_server.models.entities import Player
from arena_server.services.player_registry import PlayerRegistry


def test_register_spawns_inside_area_with_full_vitals():
    registry = PlayerRegistry(random.Random(3))
    for i in range(50):
        player = registry.register(f"conn-{i}")
        assert player.id == f"conn-{i}"
        assert SPAWN_MIN_X <= player.x <= SPAWN_MAX_X
        assert SPAWN_MIN_Y <= player.y <= SPAWN_MAX_Y
        assert (player.hp, player.mana, player.sprite) == (100, 100, PLAYER_SPRITE)
    assert len(registry) == 50


def test_unregister_is_idempotent():
    registry = PlayerRegistry()
    registry.register("a")

    assert registry.unregister("a").id == "a"
    assert registry.unregister("a") is None
    assert "a" not in registry


def test_update_position_ignores_unknown_connection():
    registry = PlayerRegistry()
    assert registry.update_position("gone", 1, 2) is None
    assert len(registry) == 0


def test_update_position_overwrites_without_bounds_check():
    registry = PlayerRegistry()
    registry.register("a")

    player = registry.update_position("a", -5000.0, 99999.0)

    assert (player.x, player.y) == (-5000.0, 99999.0)


def test_snapshot_is_detached_from_live_state():
    registry = PlayerRegistry()
    spawned = registry.register("a")
    registry.register("b")
    spawn_x, spawn_y = spawned.x, spawned.y

    snapshot = registry.snapshot()
    registry.update_position("a", 1.0, 2.0)
    registry.unregister("b")

    assert set(snapshot) == {"a", "b"}
    assert (snapshot["a"]["x"], snapshot["a"]["y"]) == (spawn_x, spawn_y)


def test_vitals_never_go_negative():
    player = Player(id="a", x=0, y=0, hp=-5, mana=-1, sprite="s")
    assert (player.hp, player.mana) == (0, 0)

    player.set_vitals(30, -20)
    assert (player.hp, player.mana) == (30, 0)
