"""
Main FastAPI application
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.config import settings
from .core.exceptions import setup_exception_handlers
from .api.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

# Tables are managed by Alembic migrations (backend/migrations)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="DBE subcontracting participation tracking and compliance reporting",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Include API routes
app.include_router(api_router)


# Health check endpoints
@app.get("/")
async def root():
    return {
        "message": f"{settings.APP_NAME} API is running!",
        "status": "healthy",
        "version": settings.APP_VERSION,
        "endpoints": ["/", "/health", "/docs", "/redoc", f"{settings.API_V1_PREFIX}"]
    }


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "service": "dbe-tracker",
        "database": settings.DATABASE_URL.split(":", 1)[0]
    }
