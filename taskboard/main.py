"""FastAPI application entrypoint. No business logic; only wiring, lifespan and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.api import router as api_router
from taskboard.core.config import Settings, get_settings
from taskboard.core.database import build_engine, build_session_factory
from taskboard.core.errors import ServiceError
from taskboard.core.security import TokenService
from taskboard.models import Base
from taskboard.services.directory import build_user_directory

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def _format_validation_errors(errors: list[dict]) -> str:
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        msg = err.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators with "Value error, ".
        msg = msg.removeprefix("Value error, ")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the API as {"message": ...} with the matching status code."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse({"message": exc.message}, status_code=exc.status_code, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        return JSONResponse(
            {
                "message": _format_validation_errors(errors),
                "errors": [
                    {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in errors
                ],
            },
            status_code=400,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            {"message": str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"message": "Internal server error"}, status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application. Settings are resolved here so a missing JWT_SECRET
    fails at startup rather than on the first request.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    token_service = TokenService.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        engine = build_engine(settings)
        if settings.DB_AUTO_CREATE:
            Base.metadata.create_all(engine)
        session_factory = build_session_factory(engine)
        app.state.settings = settings
        app.state.token_service = token_service
        app.state.session_factory = session_factory
        app.state.user_directory = build_user_directory(settings, session_factory)
        logger.info(
            "Taskboard started env=%s directory=%s token_ttl_min=%s",
            settings.APP_ENV,
            settings.USER_DIRECTORY_BACKEND,
            settings.JWT_EXPIRE_MINUTES,
        )
        try:
            yield
        finally:
            close = getattr(app.state.user_directory, "close", None)
            if close is not None:
                close()
            engine.dispose()

    app = FastAPI(
        title="Taskboard API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Taskboard API"}

    return app
