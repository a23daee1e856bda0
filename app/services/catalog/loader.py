import io
import time
from pathlib import Path

import httpx
import pandas as pd
from loguru import logger

from app.core.base_client import BaseClient
from app.core.config import settings
from app.core.exceptions import CatalogLoadError
from app.models.catalog import CatalogEntry

REQUIRED_COLUMNS = ("anime_id", "name")


def _valid_ids(column: pd.Series) -> pd.Series:
    """True where the cell holds a non-negative whole number written as plain digits."""
    return column.str.strip().str.fullmatch(r"\d+").fillna(False).astype(bool)


def parse_catalog(text: str) -> list[CatalogEntry]:
    """
    Parse catalog CSV text into entries.

    The first row is the header. Rows whose ``anime_id`` is not an integer or whose
    ``name`` is empty are dropped, as are blank lines and rows with too many fields.
    Only the first row for a given id is kept.
    """
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            index_col=False,
            keep_default_na=False,
            skip_blank_lines=True,
            on_bad_lines="skip",
        )
    except pd.errors.EmptyDataError:
        return []

    if any(col not in df.columns for col in REQUIRED_COLUMNS):
        logger.warning(f"Catalog is missing required columns {REQUIRED_COLUMNS}; got {list(df.columns)}")
        return []

    # short rows are padded with NaN even with keep_default_na=False
    df = df.fillna("")
    df = df[_valid_ids(df["anime_id"]) & (df["name"] != "")].copy()
    # exact Python ints, no float64 round-trip
    df["anime_id"] = df["anime_id"].str.strip().map(int)
    df = df.drop_duplicates(subset="anime_id", keep="first")

    has_genre = "genre" in df.columns
    has_type = "type" in df.columns
    entries = [
        CatalogEntry(
            anime_id=int(row["anime_id"]),
            name=row["name"],
            genre=row["genre"] if has_genre else "",
            type=(row["type"] or None) if has_type else None,
        )
        for row in df.to_dict(orient="records")
    ]
    return entries


def parse_catalog_file(path: str | Path) -> list[CatalogEntry]:
    """Parse a catalog CSV stored on the local filesystem."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(f"CSV not found at {path}") from e
    return parse_catalog(text)


class CatalogLoader(BaseClient):
    """
    Fetches the catalog CSV over HTTP, bypassing any caches so edits show up on reload.
    """

    def __init__(
        self,
        base_url: str | None = None,
        path: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            base_url=base_url if base_url is not None else settings.APP_BASE_URL,
            timeout=timeout or settings.REQUEST_TIMEOUT,
            max_retries=1,
            headers={"Cache-Control": "no-store", "Pragma": "no-cache", "Accept": "text/csv"},
            transport=transport,
        )
        self.path = path or settings.CATALOG_PATH

    async def fetch_text(self) -> str:
        try:
            response = await self.get(self.path, params={"_": int(time.time() * 1000)})
        except httpx.RequestError as e:
            raise CatalogLoadError(f"Failed to fetch CSV from {self.path}: {e}") from e
        if not response.is_success:
            logger.warning(f"Catalog fetch returned {response.status_code} for {self.path}")
            raise CatalogLoadError(f"CSV not found at {self.path}")
        return response.text

    async def load(self) -> list[CatalogEntry]:
        """Fetch and parse the catalog. Raises CatalogLoadError, never returns a partial catalog."""
        text = await self.fetch_text()
        try:
            entries = parse_catalog(text)
        except Exception as e:
            logger.exception(f"Failed to parse catalog CSV: {e}")
            raise CatalogLoadError(f"Failed to parse CSV: {e}") from e
        logger.info(f"Loaded {len(entries)} catalog entries from {self.path}")
        return entries
