from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from app.core.config import settings

router = APIRouter(tags=["catalog"])


def catalog_file() -> Path:
    path = Path(settings.CATALOG_FILE)
    if not path.is_absolute():
        # app/api/endpoints/catalog.py -> project root
        path = Path(__file__).resolve().parents[3] / path
    return path


@router.get(settings.CATALOG_PATH, summary="Catalog CSV, never cached")
async def get_catalog_csv() -> FileResponse:
    path = catalog_file()
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"CSV not found at {settings.CATALOG_PATH}")
    return FileResponse(path, media_type="text/csv", headers={"Cache-Control": "no-store"})
