import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from .api.errors import register_exception_handlers
from .api.middleware import (
    InternalErrorMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
    SlidingWindowLimiter,
)
from .api.v1.api import router as api_router
from .core.config import settings
from .core.logging_setup import setup_logging
from .db.session import sync_engine
from . import models  # noqa: F401  registers the tables on SQLModel.metadata

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create database tables on startup
def create_db_and_tables():
    SQLModel.metadata.create_all(sync_engine)

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("%s ready on %s", settings.PROJECT_NAME, settings.API_PREFIX)
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Personal task tracking API",
    version="1.0.0",
    lifespan=lifespan
)

rate_limiter = SlidingWindowLimiter(
    max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)

# Last added runs first
app.add_middleware(InternalErrorMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RateLimitMiddleware, limiter=rate_limiter)
app.add_middleware(SecurityHeadersMiddleware)

register_exception_handlers(app)

# Include API routers
app.include_router(api_router, prefix=settings.API_PREFIX)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
