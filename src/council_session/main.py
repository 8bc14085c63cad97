"""
Main entry point for the council-session service.

Creates the FastAPI application instance for uvicorn:

    uvicorn council_session.main:app --port 8090
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from council_session import __version__
from council_session.api.error_handlers import register_error_handlers
from council_session.api.routes import council_router, health_router
from council_session.api.routes.health import set_service_start_time
from council_session.core.config import Settings, get_settings
from council_session.core.logging import configure_logging, get_logger
from council_session.council.consult import CouncilConsultController
from council_session.council.discuss import CouncilDiscussController
from council_session.personas.protocols import DraftGenerator
from council_session.session.locks import SessionLockRegistry
from council_session.session.manager import SessionManager, SessionManagerConfig
from council_session.session.store import InMemorySessionStore, SessionRepository


# Configure structured logging on module load
configure_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Sessions live only in process memory; nothing is restored on startup
    and everything is lost on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting council-session service",
        port=settings.port,
        environment=settings.environment,
        debate_cycle_limit=settings.debate_cycle_limit,
        extended_debate_cycle_limit=settings.extended_debate_cycle_limit,
    )
    logger.warning("Session store is in-memory only; sessions do not survive a restart")

    set_service_start_time()

    yield

    remaining = len(app.state.council_controller.manager.list_sessions())
    logger.info("Shutting down council-session service", discarded_sessions=remaining)


def create_app(
    settings: Settings | None = None,
    store: SessionRepository | None = None,
    draft_generator: DraftGenerator | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration, defaults to ``get_settings()``
        store: Session repository, defaults to a fresh in-memory store
        draft_generator: Persona draft source, defaults to the
            contract-based generator

    Registers:
    - council_router: POST /v1/council/discuss, GET/DELETE /v1/council/sessions/{id},
      POST /v1/council/consult, POST /v1/council/personas/consult,
      GET /v1/council/personas
    - health_router: GET /health, /health/ready, /health/live
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Council Session Service",
        description="Multi-persona consultation sessions with clarification and bounded debate",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    manager = SessionManager(
        store if store is not None else InMemorySessionStore(),
        SessionManagerConfig.from_settings(settings),
    )
    app.state.settings = settings
    app.state.council_controller = CouncilDiscussController(
        manager,
        settings,
        draft_generator=draft_generator,
        locks=SessionLockRegistry(),
    )
    app.state.consult_controller = CouncilConsultController()

    app.include_router(council_router)
    app.include_router(health_router)

    return app


# Create application instance
app = create_app()
