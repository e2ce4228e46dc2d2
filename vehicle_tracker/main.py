import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import DataError, IntegrityError

from vehicle_tracker.config import settings
from vehicle_tracker.database import check_db_connection
from vehicle_tracker.utils.exceptions import AppException
from vehicle_tracker.schemas.common import ErrorResponse
from vehicle_tracker.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    data_error_handler,
    generic_exception_handler,
)

from vehicle_tracker.api.v1 import auth
from vehicle_tracker.api.v1 import vehicles
from vehicle_tracker.api.v1 import maintenance
from vehicle_tracker.api.v1 import fuel_logs

logging.basicConfig(
    level=logging.DEBUG if settings.APP_DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"

# Documented error envelope for every authenticated router
ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404)
}


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=APP_VERSION,
        description="Vehicle, fuel log & maintenance tracking API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # ─── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(DataError, data_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = "/api/v1"
    app.include_router(auth.router,        prefix=PREFIX, tags=["Auth"], responses=ERROR_RESPONSES)
    app.include_router(vehicles.router,    prefix=PREFIX, tags=["Vehicles"], responses=ERROR_RESPONSES)
    app.include_router(maintenance.router, prefix=PREFIX, tags=["Maintenance"], responses=ERROR_RESPONSES)
    app.include_router(fuel_logs.router,   prefix=PREFIX, tags=["Fuel Logs"], responses=ERROR_RESPONSES)

    # ─── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup():
        ok = check_db_connection()
        if ok:
            logger.info("DB connected")
        else:
            logger.error("DB connection FAILED")

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "app": settings.APP_NAME, "version": APP_VERSION}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("vehicle_tracker.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
