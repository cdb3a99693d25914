# arena_server/api/routes.py
"""API routes for the game server."""

from fastapi import APIRouter

from arena_server.config.settings import get_game_config
from arena_server.services.broadcast import BroadcastCoordinator
from arena_server.services.game_service import GameSession


class GameAPI:
    """Read-only API routes for game-related endpoints."""

    def __init__(self, session: GameSession, coordinator: BroadcastCoordinator):
        self.session = session
        self.coordinator = coordinator
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Set up all API routes."""

        @self.router.get("/")
        async def root():
            """Root endpoint."""
            return {"message": "Arena Server Running"}

        @self.router.get("/api/game/config")
        async def get_game_config_endpoint():
            """Get spawn area, starting vitals and swing arcs."""
            return get_game_config()

        @self.router.get("/api/game/weapons")
        async def get_weapons():
            """Get the weapon catalog."""
            return {"weapons": self.session.world.weapons_snapshot()}

        @self.router.get("/api/game/breakables")
        async def get_breakables():
            """Get all live breakables."""
            return {"breakables": self.session.world.breakables_snapshot()}

        @self.router.get("/api/game/players")
        async def get_players():
            """Get all current players."""
            return {"players": self.session.registry.snapshot()}

        @self.router.get("/api/game/stats")
        async def get_game_stats():
            """Get game statistics."""
            return {
                **self.session.get_stats(),
                "totalConnections": len(self.coordinator),
            }
