"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from cueline import __version__
from cueline.api.errors import register_exception_handlers
from cueline.api.v1.api import api_router
from cueline.config import CueLineSettings, get_logger, get_settings
from cueline.database.connection_manager import DatabaseConnectionManager
from cueline.database.initializer import DatabaseInitializer
from cueline.database.script_store import ScriptStore
from cueline.storage.audio_assets import AudioAssetStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the stores on startup and release the database on shutdown."""
    settings: CueLineSettings = app.state.settings
    logger.info("Starting CueLine API", database=str(settings.database_path))

    DatabaseInitializer().ensure_database(settings)
    connection_manager = DatabaseConnectionManager(settings)

    audio_store = AudioAssetStore.from_settings(settings)
    audio_store.ensure_directory()

    app.state.store = ScriptStore(connection_manager)
    app.state.audio_store = audio_store

    yield

    logger.info("Shutting down CueLine API")
    connection_manager.close()


def create_app(settings: CueLineSettings | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Settings to run with; defaults to the global settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="CueLine API",
        description="Script authoring and rehearsal REST API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "CueLine API", "version": __version__, "docs": "/api/docs"}

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    app.mount(
        settings.audio_url_prefix,
        StaticFiles(directory=settings.audio_dir, check_dir=False),
        name="audio",
    )

    return app
