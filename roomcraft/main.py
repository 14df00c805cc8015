"""
FastAPI main application for Roomcraft
"""
import logging
import re
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from roomcraft.core.config import settings
from roomcraft.core.database import AsyncSessionLocal, create_tables
from roomcraft.core.exceptions import CatalogUnavailable
from roomcraft.core.logging import setup_logging
from roomcraft.middleware import RequestLoggingMiddleware
from roomcraft.routers import auth, models, products, recommendations, room, tools
from roomcraft.schemas.common import ApiResponse
from roomcraft.services.catalog_service import CatalogService
from roomcraft.services.session_store import create_session_store

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Starting Roomcraft API...")

    if settings.openai_api_key:
        key = settings.openai_api_key
        key_preview = f"{key[:7]}...{key[-4:]}" if len(key) > 11 else "***"
        logger.info(f"OPENAI_API_KEY is set: {key_preview}")
    else:
        logger.warning("OPENAI_API_KEY is NOT set - recommendations will use catalog fallback")

    sanitized = re.sub(r":\/\/[^:]*:[^@]*@", "://***:***@", settings.database_url)
    logger.info(f"Database: {sanitized}")

    try:
        await create_tables()
        if settings.seed_sample_data:
            async with AsyncSessionLocal() as session:
                await CatalogService(session).seed_sample_data()
    except (CatalogUnavailable, OSError) as e:
        logger.error(f"Database initialisation failed, catalog endpoints will return errors: {e}")

    app.state.session_store = create_session_store()
    logger.info("Application started")

    yield

    # Shutdown
    logger.info("Shutting down Roomcraft API...")
    await app.state.session_store.close()
    logger.info("Application stopped")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Room analysis and product recommendation API",
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url="/redoc" if settings.environment == "development" else None,
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed requests get the same envelope as every other error"""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.warning(f"Invalid request to {request.url.path}: {details}")
    return JSONResponse(status_code=400, content=ApiResponse.failure("Invalid request", details))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse.failure(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.version,
        "database": "ready",  # Database sessions managed per-request
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "description": "Room analysis and product recommendation API",
        "docs": "/docs" if settings.environment == "development" else None,
        "endpoints": {
            "products": "/api/products",
            "search": "/api/search",
            "recommend": "/api/recommend",
            "room": "/api/room",
            "models": "/api/models",
            "tools": "/api/tools",
            "auth": "/api/auth",
        },
    }


# Include routers
app.include_router(products.router, prefix="/api")
app.include_router(recommendations.router, prefix="/api")
app.include_router(room.router, prefix="/api")
app.include_router(models.router, prefix="/api")
app.include_router(tools.router, prefix="/api")
app.include_router(auth.router, prefix="/api")

# Mount uploaded room photos
upload_dir = Path(settings.upload_path)
upload_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "roomcraft.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_config=None,  # Use our custom logging
        access_log=False,  # We handle this in middleware
    )
