"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.database import engine
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging

configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup; release pooled DB connections on shutdown."""
    logger.info(
        "SynergySphere API starting (env=%s, access_ttl=%sm, refresh_ttl=%sd)",
        settings.APP_ENV,
        settings.JWT_ACCESS_EXPIRE_MINUTES,
        settings.JWT_REFRESH_EXPIRE_DAYS,
    )
    yield
    engine.dispose()
    logger.info("SynergySphere API shutdown complete")


app = FastAPI(
    title="SynergySphere API",
    description="Team collaboration: projects, members, tasks, messages and notifications.",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; points clients at the versioned API."""
    return {"message": "SynergySphere API", "api": settings.API_V1_PREFIX}
