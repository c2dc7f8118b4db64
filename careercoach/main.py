# main.py
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from careercoach.config import settings
from careercoach.config import build_sqlalchemy_db_url
from careercoach.database import Base, engine
from careercoach.errors import InternalError
from careercoach.models import CareerOption, CareerPath
from careercoach.api.routes.ai_career_coach import router as ai_career_coach_router
from careercoach.api.routes.careers import router as careers_router
from careercoach.api.routes.health import router as health_router
from careercoach.services.ai_gateway import build_ai_gateway


logger = logging.getLogger(__name__)

GENERIC_ERROR_TEXT = "Internal server error"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors: list[dict[str, Any]] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append(
            {
                "field": ".".join(loc) or "body",
                "message": err.get("msg", "Invalid value"),
                "type": err.get("type", "value_error"),
            }
        )
    return errors


def register_exception_handlers(application: FastAPI) -> None:
    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": "Invalid request data",
                "errors": _validation_errors(exc),
            },
        )

    @application.exception_handler(InternalError)
    async def internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
        logger.error("request failed path=%s error=%s", request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": exc.public_message, "error": GENERIC_ERROR_TEXT},
        )

    @application.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("database error path=%s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Database error", "error": GENERIC_ERROR_TEXT},
        )

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message},
            headers=getattr(exc, "headers", None),
        )

    @application.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled error path=%s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "An unexpected error occurred", "error": GENERIC_ERROR_TEXT},
        )


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Built once per process; tests install a fake before startup.
        if getattr(app.state, "ai_gateway", None) is None:
            app.state.ai_gateway = build_ai_gateway(settings)
        logger.info("AI gateway ready provider=%s", app.state.ai_gateway.name)
        yield

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application)

    # Health endpoints (do not depend on API_PREFIX)
    application.include_router(health_router)

    application.include_router(ai_career_coach_router, prefix=settings.api_prefix)
    application.include_router(careers_router, prefix=settings.api_prefix)

    # Avoid accidental schema changes in shared MySQL databases.
    # For local/test sqlite usage, auto-create ORM tables is still convenient.
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
