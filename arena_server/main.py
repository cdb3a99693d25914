# arena_server/main.py
"""FastAPI application wiring for the arena server."""

import logging
from typing import Optional

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from arena_server.api.routes import GameAPI
from arena_server.config.settings import Settings
from arena_server.logging_config import configure_logging
from arena_server.services.broadcast import BroadcastCoordinator
from arena_server.services.game_service import GameSession
from arena_server.services.websocket_service import WebSocketService
from arena_server.services.world_store import WorldStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    session: Optional[GameSession] = None,
) -> FastAPI:
    """Build an app that owns exactly one game session."""
    settings = settings or Settings.from_env()
    if session is None:
        world = WorldStore.load([settings.data_dir, settings.fallback_data_dir])
        session = GameSession(world, seed=settings.seed)

    app = FastAPI(title="Arena Server")

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    coordinator = BroadcastCoordinator()
    websocket_service = WebSocketService(session, coordinator)

    app.state.settings = settings
    app.state.session = session
    app.state.websocket_service = websocket_service
    app.include_router(GameAPI(session, coordinator).router)

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await websocket_service.handle_connection(websocket)

    return app


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Starting arena server on %s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
