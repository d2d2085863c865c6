import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_admin.api.v1 import categories, drafts, options, orders, products
from catalog_admin.core.config import settings
from catalog_admin.core.http import close_http_client, get_http_client
from catalog_admin.core.redis import close_redis, get_redis
from catalog_admin.middleware.metrics import PrometheusMiddleware, metrics_endpoint

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting catalog admin service...")
    logger.info(f"Storefront API: {settings.CATALOG_API_URL}")

    await get_http_client()
    try:
        redis = await get_redis()
        await redis.ping()
    except Exception as e:
        # Drafts are unavailable until Redis comes back; read-only routes still work
        logger.warning(f"Draft store not reachable at startup: {e}")

    yield

    logger.info("Closing storefront client and draft store")
    await close_http_client()
    await close_redis()


app = FastAPI(
    title="Catalog Admin",
    version="1.0.0",
    description="Product, variant and category editing for the storefront back office",
    lifespan=lifespan,
)

# Prometheus Metrics Middleware (must be first to capture all requests)
app.add_middleware(PrometheusMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(drafts.router, prefix="/api/v1/drafts", tags=["drafts"])
app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])
app.include_router(products.router, prefix="/api/v1/products", tags=["products"])
app.include_router(orders.router, prefix="/api/v1/orders", tags=["orders"])
app.include_router(options.router, prefix="/api/v1/options", tags=["options"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


app.add_route("/metrics", metrics_endpoint)
