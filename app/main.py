"""FastAPI application entrypoint. No business logic; only wiring, startup and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker

from app.api.errors import register_exception_handlers
from app.api.v1 import router as v1_router
from app.core.config import APP_VERSION, Settings, settings
from app.core.database import SessionLocal, session_scope
from app.core.logging_config import configure_logging
from app.core.rate_limit import LoginRateLimiter
from app.repositories.blacklist import BlacklistRepository
from app.repositories.users import UserRepository
from app.services.auth_service import AuthService
from app.services.token_codec import TokenCodec

logger = logging.getLogger(__name__)


def bootstrap_superadmin(session_factory: sessionmaker, codec: TokenCodec, app_settings: Settings) -> None:
    """Ensure the default super admin exists. Runs once at startup, before traffic."""
    with session_scope(session_factory) as db:
        service = AuthService(UserRepository(db), BlacklistRepository(db), codec, app_settings)
        service.create_default_superadmin()


def create_app(
    app_settings: Settings | None = None,
    session_factory: sessionmaker | None = None,
) -> FastAPI:
    """
    Build the API. The token codec and login rate limiter are constructed here,
    once per process, and shared through app.state.
    """
    app_settings = app_settings or settings
    session_factory = session_factory or SessionLocal

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(app_settings)
        bootstrap_superadmin(session_factory, app.state.token_codec, app_settings)
        logger.info("API started", extra={"environment": app_settings.APP_ENV})
        yield

    app = FastAPI(
        title="HasLaw CMS API",
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.token_codec = TokenCodec.from_settings(app_settings)
    app.state.login_rate_limiter = LoginRateLimiter(app_settings.LOGIN_RATE_LIMIT_PER_MINUTE)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if app_settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(v1_router, prefix=app_settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "HasLaw CMS API"}

    return app


app = create_app()
