import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yardview.core.config import get_settings
from yardview.core.database import engine, AsyncSessionLocal, create_tables
from yardview.core.logging_config import setup_logging
from yardview.api.v1.router import api_router
from yardview.services.block_config_service import BlockConfigService

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tablas y bloques por defecto
    await create_tables()

    async with AsyncSessionLocal() as session:
        await BlockConfigService(session).seed_defaults()

    logger.info(f"🚀 {settings.PROJECT_NAME} v{settings.VERSION} listo")
    yield
    await engine.dispose()


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Configure CORS - URLs del frontend desde la configuración
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Container Yard Viewer API",
        "version": settings.VERSION
    }

# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy"}
