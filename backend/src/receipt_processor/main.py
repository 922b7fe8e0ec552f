"""
FastAPI application entry point.

This is the main application that ties together all components:
- API routes for receipt submission and points lookup
- The in-memory receipt store shared by all requests
- Error handling and logging
"""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from receipt_processor import __version__
from receipt_processor.api.routes import debug, health, receipts
from receipt_processor.config import Settings, get_settings
from receipt_processor.domain.errors import ReceiptError
from receipt_processor.infrastructure.store import ReceiptStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Logs startup and shutdown. Receipts are kept in memory only, so
    everything stored is dropped when the process exits.
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting Receipt Processor v{__version__}")
    logger.info(f"Debug mode: {settings.debug}")

    yield  # Application runs here

    logger.info(f"Shutting down Receipt Processor, discarding {len(app.state.receipt_store)} receipts")


def _validation_message(exc: RequestValidationError) -> str:
    """Render the first validation error as a single line."""
    errors = exc.errors()
    if not errors:
        return "The receipt is invalid"

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use. Loads from the environment if None.

    Returns:
        Configured FastAPI instance ready to serve requests.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Receipt Processor API",
        description=(
            "Submit purchase receipts and look up the loyalty points "
            "each receipt earns."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.receipt_store = ReceiptStore()
    app.dependency_overrides[get_settings] = lambda: settings

    # Register routers
    app.include_router(health.router)
    app.include_router(receipts.router)

    # Debug router (only in debug mode)
    if settings.debug:
        app.include_router(debug.router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed payloads as client errors."""
        detail = _validation_message(exc)
        logger.info(f"Rejected {request.method} {request.url.path}: {detail}")

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Bad Request",
                "detail": detail,
            },
        )

    @app.exception_handler(ReceiptError)
    async def receipt_exception_handler(request: Request, exc: ReceiptError):
        """Map store errors to their HTTP status."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": HTTPStatus(exc.status_code).phrase,
                "detail": exc.message,
            },
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")

        # Don't expose internal errors in production
        if settings.debug:
            detail = str(exc)
        else:
            detail = "An internal error occurred"

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal Server Error",
                "detail": detail,
            },
        )

    return app


# Create the application instance
app = create_app()


def run() -> None:
    """Run the development server."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "receipt_processor.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# Development server entry point
if __name__ == "__main__":
    run()
