import json
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CommonSettings, settings as default_settings
from core.context import AppContext
from core.error_handlers import register_exception_handlers
from core.logging_config import get_logger, setup_logging
from core.middleware import RequestLoggingMiddleware
from api.auth.views import router as auth_router
from api.users.views import router as users_router
from api.products.views import router as products_router
from api.orders.views import router as orders_router

logger = get_logger("main")


def get_cors_origins(settings: CommonSettings) -> list[str]:
    """Get CORS origins from settings or use defaults."""
    cors_env = settings.CORS_ORIGINS

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins for development
    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]


def create_app(
    settings: CommonSettings | None = None,
    context: AppContext | None = None,
) -> FastAPI:
    """
    Build the application.

    A prebuilt ``context`` (tests) is used as is and left for the caller to
    dispose; otherwise one is created from ``settings`` at startup.
    """
    if settings is None:
        settings = context.settings if context is not None else default_settings

    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_context = getattr(app.state, "context", None) is None
        if owns_context:
            app.state.context = AppContext.from_settings(settings)
        logger.info(f"Starting Garments Order Tracker API ({settings.APP_ENV})")
        yield
        if owns_context:
            await app.state.context.dispose()
            app.state.context = None
        logger.info("Shutdown complete")

    app = FastAPI(
        title="Garments Order Tracker API",
        description="API for garment order placement, approval and production tracking",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    # Authentication and account endpoints
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")

    # Business endpoints
    app.include_router(products_router, prefix="/api/v1")
    app.include_router(orders_router, prefix="/api/v1")

    # Health check endpoint
    @app.get("/health", tags=["system"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    return app


app = create_app()
