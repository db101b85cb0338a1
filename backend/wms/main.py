"""
WMS Ledger - Main FastAPI Application
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wms.config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

from wms.api import (  # noqa: E402
    auth_router,
    catalog_router,
    product_batches_router,
    product_items_router,
    product_stocks_router,
    product_units_router,
    tracks_router,
)
from wms.api.responses import install_exception_handlers  # noqa: E402
from wms.database import create_tables  # noqa: E402
from wms.services.cache import ResponseCache  # noqa: E402

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Warehouse inventory ledger with audited, restorable history",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_exception_handlers(app)

app.state.cache = ResponseCache(ttl_seconds=settings.CACHE_TTL_SECONDS, enabled=settings.CACHE_ENABLED)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.APP_VERSION}


@app.on_event("startup")
def init_database():
    """Create missing tables when AUTO_CREATE_TABLES is on (no migration tool in this project)."""
    if not settings.AUTO_CREATE_TABLES:
        logger.info("AUTO_CREATE_TABLES disabled; expecting an existing schema")
        return
    create_tables()
    logger.info("Database tables ready")


# Include routers
app.include_router(auth_router, prefix=settings.API_PREFIX, tags=["Authentication"])
app.include_router(catalog_router, prefix=settings.API_PREFIX, tags=["Catalog"])
app.include_router(product_batches_router, prefix=settings.API_PREFIX, tags=["Product Batches"])
app.include_router(product_stocks_router, prefix=settings.API_PREFIX, tags=["Product Stocks"])
app.include_router(product_items_router, prefix=settings.API_PREFIX, tags=["Product Items"])
app.include_router(product_units_router, prefix=settings.API_PREFIX, tags=["Product Units"])
app.include_router(tracks_router, prefix=settings.API_PREFIX, tags=["Tracks"])

