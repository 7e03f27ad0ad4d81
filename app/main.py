import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.attendance.router import router as attendance_router
from app.api.v1.auth.router import router as auth_router
from app.api.v1.dashboard.router import router as dashboard_router
from app.api.v1.fees.router import router as fees_router
from app.api.v1.library.router import router as library_router
from app.api.v1.reports.router import router as reports_router
from app.api.v1.seating.router import router as seating_router
from app.api.v1.students.router import router as students_router
from app.api.v1.users.router import router as users_router
from app.core.config import settings
from app.core.logger import setup_logging
from app.db.init_db import init_db
from app.db.seed import seed_database
from app.db.session import AsyncSessionLocal

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Missing required fields"


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    for err in errors:
        if err.get("type") == "missing":
            return MISSING_FIELDS
        if err.get("type") == "string_too_short" and err.get("input") == "":
            return MISSING_FIELDS
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid request: {field}: {first.get('msg')}" if field else f"Invalid request: {first.get('msg')}"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": message},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    if settings.seed_demo_data:
        async with AsyncSessionLocal() as db:
            await seed_database(db)
    logger.info("Institute backend ready")
    yield


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Institute Management Backend", lifespan=lifespan)

    # CORS: allow the dashboard frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(students_router)
    app.include_router(attendance_router)
    app.include_router(reports_router)
    app.include_router(library_router)
    app.include_router(seating_router)
    app.include_router(fees_router)
    app.include_router(dashboard_router)

    @app.get("/health", tags=["health"])
    async def health():
        return {
            "success": True,
            "data": {"status": "ok", "time": datetime.now(timezone.utc).isoformat()},
        }

    return app


app = create_app()
