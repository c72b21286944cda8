"""neo-access application factory.

``create_app`` builds a FastAPI application exposing the self-service
endpoints. The database pool, the schema and the services are set up in the
lifespan handler, once per process, and torn down on shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from .api.exception_handlers import register_exception_handlers
from .config.logging_config import setup_logging
from .config.settings import AccessSettings, get_settings
from .database.connection import DatabaseManager
from .database.schema import init_schema
from .features.self_service import HeaderIdentityResolver, IdentityResolver
from .features.self_service.routers.me import router as me_router
from .services import AccessServices


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: AccessSettings = app.state.settings
    database: Optional[DatabaseManager] = None

    if app.state.services is None:
        database = DatabaseManager.from_settings(settings)
        await database.create_pool()
        if settings.auto_init_schema:
            await init_schema(database)
        app.state.database = database
        app.state.services = AccessServices.from_database(database)
        logger.info(f"{settings.app_name} {settings.app_version} started ({settings.environment})")

    yield

    if database is not None:
        await database.close_pool()
        app.state.services = None
        app.state.database = None
        logger.info(f"{settings.app_name} stopped")


def create_app(
    settings: Optional[AccessSettings] = None,
    identity_resolver: Optional[IdentityResolver] = None,
    services: Optional[AccessServices] = None
) -> FastAPI:
    """Create the neo-access API.

    Args:
        settings: Explicit settings; read from the environment when omitted
        identity_resolver: How callers are identified; defaults to the
            trusted header named by ``settings.identity_header``
        services: Prebuilt services; when given, no database is opened

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Users, groups, memberships and scoped role grants",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.identity_resolver = identity_resolver or HeaderIdentityResolver(settings.identity_header)
    app.state.services = services
    app.state.database = None

    register_exception_handlers(app, is_production=settings.is_production)
    app.include_router(me_router)

    return app
