"""FastAPI application factory and configuration."""

import asyncio
import logging
import mimetypes
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

from fastapi import FastAPI, Request
from fastapi.responses import Response
from mpdsonic import LocalFilesystem, MPDDatabase
from rich.console import Console
from rich.logging import RichHandler

from mpdsonic_api.api.container import Services
from mpdsonic_api.api.exceptions import register_exception_handlers
from mpdsonic_api.api.routes import browsing, media, system
from mpdsonic_api.services.keepalive import Keepalive
from mpdsonic_api.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Audio types missing from some platforms' mimetypes tables
AUDIO_TYPES = {
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
    ".opus": "audio/ogg",
    ".m4a": "audio/mp4",
    ".wv": "audio/x-wavpack",
}


def setup_logging(settings: Settings) -> None:
    """Configure logging with Rich handler for all loggers including uvicorn."""
    console = Console(force_terminal=True)

    handler = RichHandler(
        console=console, rich_tracebacks=True, show_path=False, markup=False
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))

    # Configure root logger
    logging.root.handlers = [handler]
    logging.root.setLevel(settings.log_level)

    # Configure uvicorn loggers to use Rich
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False


def create_services(settings: Settings) -> Services:
    """Create all application services with proper dependency wiring.

    Args:
        settings: Application settings.

    Returns:
        Services container with all application services.

    Raises:
        DatabaseError: If MPD cannot be reached.
    """
    database = MPDDatabase(
        host=settings.mpd_host,
        port=settings.mpd_port,
        password=settings.mpd_password,
        timeout=settings.mpd_timeout,
    )
    database.connect()

    return Services(
        database=database,
        filesystem=LocalFilesystem(),
        keepalive=Keepalive(database, settings.keepalive_seconds),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    logger.info("Starting application...")

    services: Services | None = getattr(app.state, "services", None)
    if services is None:
        # Connecting blocks, keep it off the event loop
        services = await asyncio.to_thread(create_services, settings)
        app.state.services = services
    logger.info("Services initialized")

    services.keepalive.start()

    yield

    # Shutdown sequence
    await services.keepalive.stop()
    services.close()


def _version() -> str:
    try:
        return version("mpdsonic")
    except PackageNotFoundError:
        return "0.0.0"


def create_app(
    settings: Settings | None = None, services: Services | None = None
) -> FastAPI:
    """Create and configure the main FastAPI application.

    Args:
        settings: Settings to use. Loaded from the environment if not given.
        services: Pre-built services. Created from settings at startup if
            not given.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="mpdsonic",
        description="Subsonic API bridge for MPD",
        version=_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings
    if services is not None:
        app.state.services = services

    register_exception_handlers(app)

    if settings.verbose:

        @app.middleware("http")
        async def log_requests(
            request: Request, call_next: Callable[[Request], Awaitable[Response]]
        ) -> Response:
            """Log every incoming request."""
            client = request.client.host if request.client else "-"
            logger.info("%s -> %s %s", client, request.method, request.url)
            return await call_next(request)

    app.include_router(system.router)
    app.include_router(browsing.router)
    app.include_router(media.router)

    for extension, content_type in AUDIO_TYPES.items():
        mimetypes.add_type(content_type, extension)

    return app
