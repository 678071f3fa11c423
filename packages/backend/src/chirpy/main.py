"""FastAPI application factory.

Learn: App factory pattern. create_app() returns a configured FastAPI
instance. The access-token codec and the database engine are built here
from the settings and kept on app.state; routes reach them through
Depends(get_token_codec) and Depends(get_db).
Nothing in the auth layer reads the signing secret from a global.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chirpy import __version__
from chirpy.api import admin_router, api_router
from chirpy.api.errors import register_error_handlers
from chirpy.auth.jwt import AccessTokenCodec
from chirpy.config import Settings, settings as default_settings
from chirpy.db.engine import build_engine, build_session_factory

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    cfg: Settings = app.state.settings
    logger.info(
        "chirpy.starting",
        version=__version__,
        environment=cfg.environment,
        platform=cfg.platform,
        port=cfg.port,
    )
    if not cfg.polka_key:
        logger.warning("chirpy.polka_key_unset")

    yield

    logger.info("chirpy.shutdown")
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    cfg = settings or default_settings

    app = FastAPI(
        title="Chirpy",
        description="Small social-posting service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.engine = build_engine(cfg.database_url, echo=cfg.debug)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.token_codec = AccessTokenCodec(
        cfg.jwt_secret,
        issuer=cfg.jwt_issuer,
        algorithm=cfg.jwt_algorithm,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → SecurityHeaders → CORS → handler
    from chirpy.middleware.request_id import RequestIdMiddleware
    from chirpy.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_error_handlers(app)

    app.include_router(api_router)
    app.include_router(admin_router, tags=["admin"])

    return app


# Default app instance (used by uvicorn: chirpy.main:app)
app = create_app()
