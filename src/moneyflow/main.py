"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from moneyflow import __version__
from moneyflow.config.settings import get_settings
from moneyflow.config.logging_config import setup_logging
from moneyflow.repositories.sqlalchemy.database import init_db
from moneyflow.api.routers import (
    accounts_router,
    categories_router,
    transactions_router,
    dataset_router,
    statistics_router,
)
from moneyflow.core.exceptions import (
    AppError,
    MalformedSnapshotError,
    NotFoundError,
    StoreError,
    ValidationError,
)

ERROR_STATUS = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (MalformedSnapshotError, 422),
    (StoreError, 503),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    init_db()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Personal finance ledger with consistent account balances",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(accounts_router)
app.include_router(categories_router)
app.include_router(transactions_router)
app.include_router(dataset_router)
app.include_router(statistics_router)


def status_for(exc: AppError) -> int:
    """HTTP status for an application error."""
    for error_cls, status_code in ERROR_STATUS:
        if isinstance(exc, error_cls):
            return status_code
    return 400


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    content = {"error": exc.code, "message": exc.message}
    if isinstance(exc, MalformedSnapshotError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=status_for(exc), content=content)


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
