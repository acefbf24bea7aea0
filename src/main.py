"""FastAPI entry point for the Rift Duo analytics service."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from analytics.config import riot_config_from_env

from . import __version__
from .api.rest.routes import router as analytics_router

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000"


def _cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = riot_config_from_env()
    if not config.api_key:
        logger.warning("RIOT_API_KEY is not set; live player analytics will be rejected")
    logger.info(f"Serving Riot data from {config.platform}/{config.region}")
    yield


app = FastAPI(
    title="Rift Duo API",
    description="League of Legends player analytics and duo matching API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    status: str
    version: str
    api_key_configured: bool
    platform: str
    region: str


@app.get("/", tags=["meta"])
async def index():
    """Service name, version and the list of routes."""
    return {
        "name": "Rift Duo API",
        "version": __version__,
        "docs": "/docs",
        "routes": [
            "GET /health",
            "POST /api/analytics/compute",
            "GET /api/players/{puuid}/analytics",
            "POST /api/compatibility",
        ],
    }


@app.get("/health", response_model=HealthResponse, tags=["meta"])
async def health():
    config = riot_config_from_env()
    return HealthResponse(
        status="ok",
        version=__version__,
        api_key_configured=bool(config.api_key),
        platform=config.platform,
        region=config.region,
    )


app.include_router(analytics_router)
