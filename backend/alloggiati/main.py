"""Alloggiati Web: FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from alloggiati.api.v1.admin import router as admin_router
from alloggiati.api.v1.auth import router as auth_router
from alloggiati.api.v1.bookings import router as bookings_router
from alloggiati.api.v1.guests import router as guests_router
from alloggiati.api.v1.submissions import router as submissions_router
from alloggiati.config import settings
from alloggiati.errors import DataAccessError, RegistrationError

# Configure root logger so all alloggiati.* loggers output to stderr.
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    yield
    # Shutdown: dispose engine connections
    from alloggiati.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Guest registration for front-desk staff: drafts, review, finalize and admin review.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handlers


@app.exception_handler(RegistrationError)
async def registration_error_handler(request: Request, exc: RegistrationError) -> JSONResponse:
    """Render domain errors as JSON with their status code and redirect hint."""
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Any unhandled database failure is reported as a retryable data access error."""
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    error = DataAccessError("The data store is unavailable, please try again")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Routers
app.include_router(auth_router)
app.include_router(bookings_router)
app.include_router(guests_router)
app.include_router(submissions_router)
app.include_router(admin_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("alloggiati.main:app", host=settings.host, port=settings.port, reload=settings.debug)
