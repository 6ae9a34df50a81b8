"""
FastAPI Application Factory
Creates and configures the FastAPI app instance
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pstremio.api.endpoints import configure, health, manifest, stream
from pstremio.core.config import settings
from pstremio.services.providers import get_provider_engine
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info(f"Starting {settings.ADDON_NAME}")
    logger.info(f"Base URL: {settings.BASE_URL}")
    logger.info(f"Provider engine: {settings.PROVIDERS_API_URL}")
    
    yield
    
    logger.info(f"Shutting down {settings.ADDON_NAME}")
    await get_provider_engine().close()


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    
    app = FastAPI(
        title=settings.ADDON_NAME,
        description="Stremio stream addons backed by a scraping provider engine",
        version=settings.ADDON_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    
    # Stremio clients fetch from any origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Include routers
    app.include_router(health.router)
    app.include_router(configure.router)
    app.include_router(manifest.router)
    app.include_router(stream.router)
    
    return app


