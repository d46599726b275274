"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

Routes:
    Authentication lives at the root (/signup, /login, /refresh, /logout,
    /me), social features under /api, and /health is always public.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from plaza.infrastructure.persistence.sqlalchemy.init_db import (
    create_engine_from_settings,
    create_tables,
)
from plaza.presentation.api.exception_handlers import setup_exception_handlers
from plaza.presentation.api.middleware import IdentityMiddleware
from plaza.presentation.api.routers import (
    admin_router,
    auth_router,
    comments_router,
    likes_router,
    posts_router,
)
from plaza.presentation.api.schemas.common import HealthResponse
from plaza_auth import JWTService, PasswordHashingService
from plaza_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging(log_level_str: str) -> None:
    """Configure application logging.

    Sets up logging for the plaza application with:
    - Console output with timestamps and module names
    - Configurable log level for plaza modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    # Define log format
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    # Set levels for our application
    logging.getLogger("plaza").setLevel(log_level)
    logging.getLogger("plaza_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Signup, login and session management.

**Tokens:**
- Access tokens authenticate requests via `Authorization: Bearer <token>`
- Refresh tokens are stored server side and rotate on every refresh

**Security:**
- Passwords are hashed with bcrypt
- Accounts are locked for a while after repeated failed logins
""",
    },
    {
        "name": "Posts",
        "description": "Posts with PUBLIC, PRIVATE or FOLLOWERS visibility.",
    },
    {
        "name": "Comments",
        "description": "Comments on posts with one level of replies.",
    },
    {
        "name": "Likes",
        "description": "Likes on posts and comments.",
    },
    {
        "name": "Admin",
        "description": "User status management and session housekeeping.",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Plaza API v%s...", API_VERSION)
    engine: AsyncEngine = app.state.engine
    await _init_database_schema(engine)
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down Plaza API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.
    engine
        Optional engine override, e.g. a temporary SQLite database.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Configure logging on first app creation (not on module import)
    _configure_logging(settings.log_level)

    if engine is None:
        engine = create_engine_from_settings(settings)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="A small **social backend** with JWT authentication.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    # Process-wide state shared by dependencies and middleware
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = async_sessionmaker(
        engine,
        expire_on_commit=False,
        autoflush=False,
    )
    app.state.jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
        refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
    )
    app.state.password_service = PasswordHashingService(
        rounds=settings.bcrypt_rounds,
        min_length=settings.password_min_length,
        max_length=settings.password_max_length,
    )

    # Added first so CORS wraps it and preflight requests skip identity lookup
    app.add_middleware(IdentityMiddleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(auth_router, tags=["Authentication"])
    app.include_router(posts_router)
    app.include_router(comments_router)
    app.include_router(likes_router)
    app.include_router(admin_router)

    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers and monitoring."""
        return HealthResponse(success=True, message="ok")

    return app


# Application instance for uvicorn
app = create_app()
