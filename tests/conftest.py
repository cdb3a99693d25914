"""Shared fixtures for the arena server tests."""

import pytest
from fastapi.testclient import TestClient

from arena_server.config.settings import Settings
from arena_server.main import create_app
from arena_server.models.entities import Breakable, WeaponDefinition
from arena_server.services.game_service import GameSession
from arena_server.services.world_store import WorldStore


@pytest.fixture()
def weapons():
    return {
        "iron_sword": WeaponDefinition(
            key="iron_sword", name="Iron Sword", swing="wide", range=50, damage=10
        ),
        "dagger": WeaponDefinition(
            key="dagger", name="Dagger", swing="short", range=40, damage=5
        ),
        "spear": WeaponDefinition(
            key="spear", name="Spear", swing="long", range=70, damage=8
        ),
        "flail": WeaponDefinition(
            key="flail", name="Flail", swing="spin", range=50, damage=1
        ),
    }


@pytest.fixture()
def make_session(weapons):
    """Build a seeded session over the given breakables."""

    def _make(*breakables):
        return GameSession(WorldStore(weapons, breakables), seed=1234)

    return _make


@pytest.fixture()
def spawn():
    """Register a player and pin it to a known position."""

    def _spawn(session, connection_id="attacker", x=0.0, y=0.0):
        session.registry.register(connection_id)
        return session.registry.update_position(connection_id, x, y)

    return _spawn


@pytest.fixture()
def client(make_session):
    session = make_session(
        Breakable(id="crate", x=40, y=0, hp=10, drops=["coin"]),
        Breakable(id="rock", x=300, y=300, hp=50),
    )
    app = create_app(Settings(), session=session)
    with TestClient(app) as test_client:
        yield test_client
