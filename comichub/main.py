"""
ComicHub

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm.exc import StaleDataError

from comichub.api.middleware.rate_limit import RateLimitMiddleware
from comichub.api.middleware.request_id import RequestIdMiddleware
from comichub.api.routes import router as api_router
from comichub.config import get_settings
from comichub.database import close_db, init_db
from comichub.kernel.errors import ComicHubError
from comichub.logging_config import configure_logging, get_logger
from comichub.schemas.common import HealthResponse

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Configure logging, create tables on startup and dispose the engine on shutdown."""
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.project_name,
    description="""
    ComicHub: community comic recommendations with staff moderation.

    ## Features

    - **Recommendations**: Submit, browse, vote, save and review comics
    - **Moderation**: Approve, reject, feature and edit recommendations; ban accounts
    - **Appeals**: One appeal per rejection or ban
    - **Audit Trail**: Append-only log of every staff action
    - **News**: Staff-curated articles
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# add_middleware stacks innermost-first: the last one added is outermost.
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(request: Request, status_code: int, content: dict, headers: dict = None) -> JSONResponse:
    headers = dict(headers or {})
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
        if status_code >= 500:
            content["request_id"] = req_id
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(ComicHubError)
async def domain_exception_handler(request: Request, exc: ComicHubError):
    """Map the domain error taxonomy to HTTP status codes."""
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.detail, extra={"path": request.url.path})
    return _error_response(request, exc.status_code, {"error": exc.detail, "detail": exc.detail})


@app.exception_handler(StaleDataError)
async def stale_data_handler(request: Request, exc: StaleDataError):
    return _error_response(
        request,
        status.HTTP_409_CONFLICT,
        {"detail": "The target was modified by another request; reload and retry"},
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return _error_response(
        request,
        exc.status_code,
        {"error": exc.detail, "detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {"detail": "Validation error", "errors": errors},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.debug:
        content = {"detail": str(exc), "type": type(exc).__name__}
    else:
        content = {"detail": "Internal server error"}
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, content)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    return HealthResponse(status="ok", version=settings.version, database="connected")


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": settings.api_prefix,
    }


app.include_router(api_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "comichub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
