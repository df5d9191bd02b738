"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dnsintel.api.routers import dns, health
from dnsintel.core.config import get_settings
from dnsintel.core.exceptions import ValidationError, ZoneFetchError
from dnsintel.core.logging import get_logger, setup_logging
from dnsintel.version import __version__

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler."""
    setup_logging()
    yield


app = FastAPI(
    title="DNS Intel API",
    description="DNS intelligence: zone health, propagation, subdomains and WHOIS",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware - configured via CORS_ORIGINS environment variable
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def invalid_domain_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid domain", "details": exc.errors},
    )


@app.exception_handler(ZoneFetchError)
async def zone_fetch_handler(request: Request, exc: ZoneFetchError) -> JSONResponse:
    logger.error("zone_fetch_failed", target=exc.target, error=exc.message)
    return JSONResponse(
        status_code=502,
        content={"error": "Zone fetch failed", "message": exc.message},
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(dns.router, prefix="/api/v1", tags=["DNS"])
