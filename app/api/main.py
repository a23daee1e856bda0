from fastapi import APIRouter

from .endpoints.catalog import router as catalog_router
from .endpoints.health import router as health_router
from .endpoints.proxy import router as proxy_router

api_router = APIRouter()


@api_router.get("/")
async def root():
    return {"message": "AnimeRate API is running"}


api_router.include_router(health_router)
api_router.include_router(catalog_router)
api_router.include_router(proxy_router)
