from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.api.main import api_router
from app.services.upstream import upstream_proxy

from .config import settings
from .version import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    if not settings.API_BASE:
        logger.warning("API_BASE is not set; /api/proxy requests will fail with 500")
    yield
    try:
        await upstream_proxy.close()
        logger.info("Upstream proxy client closed")
    except Exception as exc:
        logger.warning(f"Failed to close upstream proxy client: {exc}")


app = FastAPI(
    title="AnimeRate",
    description="Catalog and passthrough for the anime recommendation client",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
