"""
Handover Ops API

FastAPI application for the project handover dashboard. create_app() wires
CORS, correlation-id tagging, the error handlers, the versioned API router and
the root health endpoints; the module-level `app` is what uvicorn serves.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from .config.settings import settings
from .api.routes import api_router, health_router
from .api.routes.health import APP_NAME, APP_VERSION
from .api.middleware import CorrelationIdMiddleware, register_error_handlers
from .repositories.mongo_client import create_indexes, close_connection
from .utils.logger import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The API stays up without indexes; reads degrade to collection scans
    try:
        create_indexes()
    except PyMongoError as e:
        logger.error(f"Index creation failed, continuing without: {e}")

    logger.info(f"{APP_NAME} {APP_VERSION} started", extra={"action": "startup"})
    yield
    close_connection()
    logger.info(f"{APP_NAME} stopped", extra={"action": "shutdown"})


def create_app() -> FastAPI:
    """Build a configured application instance (tests build their own)"""
    docs = settings.docs_enabled
    application = FastAPI(
        title=APP_NAME,
        description="Sales and launch checklists, completion progress and version history for app handovers",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if docs else None,
        redoc_url="/api/redoc" if docs else None,
        openapi_url="/api/openapi.json" if docs else None,
    )

    # Credentials cannot be combined with a wildcard origin
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.allow_all_origins else settings.cors_origins_list,
        allow_credentials=not settings.allow_all_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-Id"],
    )
    application.add_middleware(CorrelationIdMiddleware)

    register_error_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router, prefix="/api/v1")
    return application


app = create_app()
