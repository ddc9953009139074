import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from apps.api.errors import setup_exception_handlers
from apps.api.middlewares.content_type import JSONContentTypeMiddleware
from apps.api.middlewares.metrics import MetricsMiddleware
from apps.api.routers import auth, discover, health, swipe, users
from core import close_db, close_redis
from core.auth import bearer_auth
from core.config import settings
from core.location import close_location_resolver

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info(f"Starting API: environment={settings.environment}, port={settings.port}")
    yield
    # Shutdown: cache first, then database
    await close_redis()
    await close_location_resolver()
    await close_db()
    logger.info("API stopped")


app = FastAPI(
    title="Swipe Match API",
    description="API for account creation, discovery and swipe matching",
    version="0.1.0",
    lifespan=lifespan,
)

setup_exception_handlers(app)

# Middlewares
app.add_middleware(JSONContentTypeMiddleware)
app.add_middleware(MetricsMiddleware)

# Public routes
app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix="/user", tags=["user"])
app.include_router(auth.router, tags=["auth"])

# Private routes
app.include_router(discover.router, prefix="/discover", tags=["discover"], dependencies=[Depends(bearer_auth)])
app.include_router(swipe.router, prefix="/swipe", tags=["swipe"], dependencies=[Depends(bearer_auth)])


@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
