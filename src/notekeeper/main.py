# Main application entry point
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import auth_router, health_router, notes_router
from .config import get_settings
from .core.exceptions import NoteKeeperError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.repositories.errors import StoreError
from .database import create_tables, engine

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()

SERVER_ERROR_MESSAGE = "Server error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting NoteKeeper application",
        extra={
            "version": settings.app_version,
            "environment": settings.environment,
            "debug": settings.debug,
        },
    )

    # Allow tests to skip touching the real DB (e.g., when using SQLite in-memory)
    if os.getenv("NOTEKEEPER_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to NOTEKEEPER_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    # Shutdown
    logger.info("Shutting down NoteKeeper application")
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Personal note storage API with optimistic concurrency control",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NoteKeeperError)
async def notekeeper_error_handler(request: Request, exc: NoteKeeperError):
    """Domain errors carry their own status and message."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are plain 400s with a readable message."""
    messages = []
    for error in exc.errors():
        msg = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {msg}" if location else msg)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "; ".join(messages) or "Invalid request"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    """Store failures that escaped the services are server faults."""
    logger.error(
        "Storage failure",
        exc_info=exc,
        extra={"kind": exc.kind.value, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": SERVER_ERROR_MESSAGE},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error", exc_info=exc, extra={"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": SERVER_ERROR_MESSAGE},
    )


# Include routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(notes_router, prefix=settings.api_prefix)
app.include_router(health_router, prefix=settings.api_prefix)


# Root endpoint
@app.get("/")
async def root():
    return {"message": "NoteKeeper API"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notekeeper.main:app", host=settings.host, port=settings.port, reload=settings.reload)
