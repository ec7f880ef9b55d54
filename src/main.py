"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import auth, items, products
from src.api.error_handlers import register_error_handlers
from src.config import get_settings
from src.database import init_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    if settings.uses_development_secrets:
        logger.warning(
            "Running with development JWT_SECRET/INTERNAL_API_KEY; set both before deploying"
        )
    logger.info(f"CORS origins configured: {settings.cors_origins}")
    if settings.create_tables_on_startup:
        init_db()
    yield


app = FastAPI(
    title="Dish Delight API",
    description="Restaurant menu management with owner-scoped products",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Internal-Key"],
)

register_error_handlers(app)

# Register routers
app.include_router(auth.router)
app.include_router(items.router)
app.include_router(products.router)


@app.get("/")
async def root():
    """Service banner listing the available endpoints."""
    return {
        "message": "Dish Delight API Server",
        "version": API_VERSION,
        "status": "running",
        "timestamp": datetime.now(UTC).isoformat(),
        "endpoints": {
            "health": "GET /health",
            "items": "GET /items",
            "itemDetail": "GET /items/:id",
            "auth": {
                "register": "POST /auth/register",
                "login": "POST /auth/login",
                "oauth": "POST /auth/oauth",
            },
            "protected": {
                "myItems": "GET /items/mine",
                "products": "GET /products",
                "createProduct": "POST /products",
                "updateProduct": "PUT /products/:id",
                "deleteProduct": "DELETE /products/:id",
            },
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}
