from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from ..config import ConfigurationError, Settings
from ..schemas.common import format_error_list
from ..store import InvalidCursorError, NotFoundError, StoreError, Stores, build_stores
from ..ui import CrmData
from . import views
from .responses import bad, not_found, server_error
from .routes import clients, contracts, properties, transactions

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, stores: Optional[Stores] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: runtime settings; read from the environment when omitted
        stores: prebuilt stores; built from settings at startup when omitted
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Estate CRM API",
        description="Client, property listing, ledger and contract management for a real-estate agency.",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "Clients", "description": "Client management and pipeline status"},
            {"name": "Properties", "description": "Property listings"},
            {"name": "Transactions", "description": "Accounting ledger"},
            {"name": "Contracts", "description": "Contracts between clients and properties"},
            {"name": "Health", "description": "Service health"},
        ],
    )
    app.state.settings = settings
    app.state.stores = None
    app.state.crm_data = None
    if stores is not None:
        _attach(app, stores)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return bad(format_error_list(exc.errors()))

    @app.exception_handler(InvalidCursorError)
    async def cursor_exception_handler(request: Request, exc: InvalidCursorError):
        return bad(str(exc))

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        return bad(str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_exception_handler(request: Request, exc: NotFoundError):
        return not_found(str(exc))

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return server_error()

    @app.on_event("startup")
    async def startup_event():
        """Build the stores for the configured backend."""
        logger.info("Starting up Estate CRM API...")
        try:
            settings.validate_logging()
            logging.getLogger().setLevel(settings.log_level)
            if app.state.stores is None:
                _attach(app, build_stores(settings))
                logger.info("Stores initialized successfully")
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            raise

    @app.on_event("shutdown")
    async def shutdown_event():
        """Release store resources."""
        logger.info("Shutting down Estate CRM API...")
        if app.state.stores is not None:
            app.state.stores.close()

    @app.get("/health", tags=["Health"])
    async def detailed_health_check():
        """
        Detailed health check endpoint.

        Reports whether the configured store answers a count query.
        """
        stores = app.state.stores
        try:
            if stores is None:
                raise RuntimeError("stores are not initialized")
            stores.clients.count()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"success": False, "error": "Service unhealthy - store unreachable"},
            )
        return {
            "success": True,
            "data": {"status": "healthy", "version": API_VERSION, "backend": stores.backend},
        }

    # Include routers
    app.include_router(clients.router, prefix="/api")
    app.include_router(properties.router, prefix="/api")
    app.include_router(transactions.router, prefix="/api")
    app.include_router(contracts.router, prefix="/api")
    app.include_router(views.router)

    return app


def _attach(app: FastAPI, stores: Stores):
    app.state.stores = stores
    app.state.crm_data = CrmData(stores, auto_seed=app.state.settings.auto_seed)


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "estate_crm.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
