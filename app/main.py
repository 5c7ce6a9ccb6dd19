# app/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.config.database import Base, engine
from app.core.error_handlers import setup_error_handlers
from app.core.metrics import metrics_response
from app.core.middleware import setup_middleware
from app.api.v1.router import api_router
from app.shared.database import models  # noqa: F401  registra los modelos en Base

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s"
)
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"{settings.app_name} Starting - Version: {settings.version}")
    logger.info(f"Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"JWT Algorithm: {settings.algorithm}, Token Expire: {settings.access_token_expire_minutes} minutes")

    if settings.create_tables:
        Base.metadata.create_all(bind=engine)
        logger.info("Tablas verificadas/creadas")

    yield

    # Shutdown
    engine.dispose()
    logger.info(f"{settings.app_name} Shutting down")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Servicio de Puntos de Recogida: PVZ, recepciones y productos",
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
setup_error_handlers(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": settings.app_name,
        "version": settings.version,
        "status": "running",
        "docs": "/docs",
        "api": "/api/v1"
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name
    }

@app.get("/metrics", include_in_schema=False)
async def metrics():
    return metrics_response()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
