"""
Process entry point: builds the engine and session manager explicitly.

Nothing here lives at module scope; the transport layer owns the returned
manager and passes it to its handlers.
"""

from __future__ import annotations

import structlog

from burako.logic.engine import GameEngine
from burako.server.settings import ServerSettings
from burako.session.manager import TableSessionManager
from shared.logging import setup_logging

logger = structlog.get_logger()


def create_session_manager(
    settings: ServerSettings | None = None,
    engine: GameEngine | None = None,
) -> TableSessionManager:
    if settings is None:
        settings = ServerSettings()

    if engine is None:
        engine = GameEngine(settings.game, seed=settings.rng_seed)

    return TableSessionManager(engine, max_tables=settings.max_tables)


def bootstrap(settings: ServerSettings | None = None) -> TableSessionManager:
    """Configure logging and return a ready session manager."""
    if settings is None:
        settings = ServerSettings()
    log_path = setup_logging(log_dir=settings.log_dir)
    manager = create_session_manager(settings)
    logger.info("burako engine ready", max_tables=settings.max_tables, log_file=str(log_path) if log_path else None)
    return manager
