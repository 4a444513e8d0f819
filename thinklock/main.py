# ==============================================================================
# MAIN APPLICATION - FastAPI Entry Point
# ==============================================================================
# Application factory with lifespan events, middleware, and routing
# ==============================================================================

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
import logging

from thinklock.api.router import api_router
from thinklock.clients.image_storage import ImageStorage
from thinklock.clients.payment_gateway import PaymentGateway
from thinklock.core.constants import APIConstants, ErrorMessages
from thinklock.core.exceptions import AppException, DatabaseError, ValidationError
from thinklock.core.settings import settings
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter
from thinklock.database.factory import DatabaseFactory
from thinklock.middleware.request_logger import RequestLoggerMiddleware
from thinklock.schemas.base import HealthResponse
from thinklock.services.account_service import AccountService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ==============================================================================
# LIFESPAN MANAGEMENT
# ==============================================================================

async def bootstrap_admin(adapter: MongoDBAdapter) -> None:
    """Ensure the configured bootstrap admin account exists."""
    if not (settings.INITIAL_ADMIN_ID and settings.INITIAL_ADMIN_PASSWORD):
        return
    await AccountService(adapter).ensure_admin(
        settings.INITIAL_ADMIN_ID,
        settings.INITIAL_ADMIN_PASSWORD,
        email=settings.INITIAL_ADMIN_EMAIL,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: connect the database (unless one was injected), ensure
      indexes and the bootstrap admin
    - Shutdown: close outbound clients and the database connection
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    owns_database = app.state.adapter is None
    if owns_database:
        try:
            app.state.adapter = await DatabaseFactory.initialize()
            logger.info("Database initialized successfully")
        except DatabaseError as e:
            logger.error(f"Failed to initialize database: {e}")
            # Continue without a database outside production
            if settings.is_production:
                raise

    if app.state.adapter is not None:
        await bootstrap_admin(app.state.adapter)

    yield

    logger.info("Shutting down application...")
    await app.state.payment_gateway.close()
    await app.state.image_storage.close()
    if owns_database:
        await DatabaseFactory.shutdown()
        app.state.adapter = None
    logger.info("Application shutdown complete")


# ==============================================================================
# APPLICATION FACTORY
# ==============================================================================

def create_app(
    adapter: Optional[MongoDBAdapter] = None,
    payment_gateway: Optional[PaymentGateway] = None,
    image_storage: Optional[ImageStorage] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Collaborators can be injected (tests pass an in-memory database
    and mocked providers); otherwise they are built from settings.

    Args:
        adapter: Connected database adapter
        payment_gateway: Payment provider client
        image_storage: Image storage client

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.API_DESCRIPTION,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
    )

    app.state.adapter = adapter
    app.state.payment_gateway = payment_gateway or PaymentGateway()
    app.state.image_storage = image_storage or ImageStorage()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggerMiddleware)

    # Register exception handlers
    register_exception_handlers(app)

    # Include routers
    app.include_router(api_router)

    # Register health endpoints
    register_health_endpoints(app)

    return app


# ==============================================================================
# EXCEPTION HANDLERS
# ==============================================================================

def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        """Handle application exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(exc.to_dict()),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Render schema validation failures in the error envelope."""
        error = ValidationError(
            message="Request validation failed",
            errors=jsonable_encoder(exc.errors()),
        )
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_dict(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")

        if settings.DEBUG:
            detail = str(exc)
        else:
            detail = ErrorMessages.INTERNAL_ERROR

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": detail,
                    "details": {},
                }
            },
        )


# ==============================================================================
# HEALTH ENDPOINTS
# ==============================================================================

def register_health_endpoints(app: FastAPI) -> None:
    """Register liveness and health check endpoints."""

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
        description="Check application and database health.",
    )
    async def health_check(request: Request) -> HealthResponse:
        """Application health check."""
        adapter = request.app.state.adapter
        db_healthy = adapter is not None and await adapter.health_check()

        return HealthResponse(
            status="healthy" if db_healthy else "degraded",
            version=settings.APP_VERSION,
            database="connected" if db_healthy else "disconnected",
        )

    @app.get(
        "/",
        response_class=PlainTextResponse,
        tags=["Health"],
        summary="Liveness",
    )
    async def root() -> str:
        return APIConstants.LIVENESS_MESSAGE


# Create application instance
app = create_app()


# ==============================================================================
# DEVELOPMENT RUNNER
# ==============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "thinklock.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
