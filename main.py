"""
Credential service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from datetime import timedelta
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from auth.password import PasswordHasher
from auth.routes import request_validation_handler, router as auth_router
from auth.tokens import TokenService
from auth.workflow import AuthWorkflow
from config.settings import Settings, config
from database.session import create_engine, create_session_factory, create_tables
from database.store import SqlAlchemyCredentialStore

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("aiosqlite", "sqlalchemy.engine", "httpx"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config

    app = FastAPI(
        title="Credential Service",
        version="1.0.0",
        description="Signup, login and signed bearer tokens.",
    )

    engine = create_engine(settings.database_url, echo=settings.debug)
    tokens = TokenService(
        settings.signing_key,
        lifetime=timedelta(seconds=settings.jwt_expiry_seconds),
    )
    app.state.tokens = tokens
    app.state.workflow = AuthWorkflow(
        store=SqlAlchemyCredentialStore(create_session_factory(engine)),
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        tokens=tokens,
    )

    # Routes
    app.include_router(auth_router, prefix="/api/v1/auth")
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.on_event("startup")
    async def on_startup():
        if settings.jwt_secret == Settings.model_fields["jwt_secret"].default:
            logger.warning("JWT_SECRET is the built-in default; set it before deploying")
        await create_tables(engine)
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await engine.dispose()

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
