import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobly.api.routes.companies import router as companies_router
from jobly.api.routes.health import router as health_router
from jobly.api.routes.jobs import router as jobs_router

from jobly.core.config import settings
from jobly.core.errors import ApiError
from jobly.core.logging import configure_logging
from jobly.db.base import create_all
from jobly.db.session import engine

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME, version="1.0", debug=settings.DEBUG)

allowed_origins = settings.cors_origins_list

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["health"])
app.include_router(companies_router)
app.include_router(jobs_router)


def _error(message, status: int) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"message": message, "status": status}})


@app.exception_handler(ApiError)
async def _api_error(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status >= 500:
        logger.error("[api] %s %s failed: %s", request.method, request.url.path, exc.message)
    return _error(exc.message, exc.status)


@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [
        f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', 'invalid')}"
        for e in exc.errors()
    ]
    return _error(messages, 400)


@app.exception_handler(Exception)
async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    # never leak internals to the client
    logger.exception("[api] unhandled error on %s %s", request.method, request.url.path)
    return _error("Internal Server Error", 500)


@app.on_event("startup")
def _startup_db() -> None:
    create_all(engine)
    if settings.DATABASE_URL.startswith("sqlite:///"):
        logger.info("[db] using %s", Path(settings.DATABASE_URL.replace("sqlite:///", "")).resolve())
    logger.info("[cors] allow_origins = %s", allowed_origins)
