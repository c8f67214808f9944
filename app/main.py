# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, get_settings
from app.core.errors import (
    ConfigurationMissing,
    InvalidCredentials,
    StoreUnavailable,
    TokenInvalid,
    configuration_missing_handler,
    http_exception_handler,
    invalid_credentials_handler,
    request_id_middleware,
    store_unavailable_handler,
    token_invalid_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.core.logging import configure_logging
from app.db.base import Base
from app.db.session import create_db_engine, create_session_factory
from app.models import admin, employee, payment, ppdb, school, student, user  # noqa: F401
from app.routes.auth import router as auth_router
from app.routes.branding import router as branding_router
from app.routes.classes import router as classes_router
from app.routes.dashboard import router as dashboard_router
from app.routes.db import router as db_router
from app.routes.majors import router as majors_router
from app.routes.payments import router as payments_router
from app.routes.periods import router as periods_router
from app.routes.pos import router as pos_router
from app.routes.ppdb_auth import router as ppdb_auth_router
from app.routes.profile import router as profile_router
from app.routes.seed_admin import router as seed_admin_router
from app.routes.settings import router as settings_router
from app.routes.student_auth import router as student_auth_router
from app.routes.students import router as students_router
from app.routes.teacher_auth import router as teacher_auth_router
from app.routes.users import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=app.state.engine)
    logger.info("Application started | env=%s", app.state.settings.env)
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the application with its own settings, engine and session factory.

    Nothing is read from module globals at request time: handlers reach the
    store through request.app.state, so tests can pass an in-memory engine.
    Run with: uvicorn app.main:create_app --factory
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; logins will be refused")

    engine = engine or create_db_engine(settings.database_url)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        default_response_class=JSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # =========================
    # FORCE UTF-8 IN JSON
    # =========================
    @app.middleware("http")
    async def force_utf8_json(request: Request, call_next):
        response = await call_next(request)
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            response.headers["Content-Type"] = "application/json; charset=utf-8"
        return response

    app.middleware("http")(request_id_middleware)

    # Errors
    app.add_exception_handler(InvalidCredentials, invalid_credentials_handler)
    app.add_exception_handler(TokenInvalid, token_invalid_handler)
    app.add_exception_handler(StoreUnavailable, store_unavailable_handler)
    app.add_exception_handler(ConfigurationMissing, configuration_missing_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routers
    app.include_router(db_router)
    app.include_router(auth_router)
    app.include_router(student_auth_router)
    app.include_router(teacher_auth_router)
    app.include_router(ppdb_auth_router)
    app.include_router(branding_router)
    app.include_router(profile_router)
    app.include_router(users_router)
    app.include_router(students_router)
    app.include_router(classes_router)
    app.include_router(majors_router)
    app.include_router(periods_router)
    app.include_router(settings_router)
    app.include_router(pos_router)
    app.include_router(payments_router)
    app.include_router(dashboard_router)
    app.include_router(seed_admin_router)

    return app
