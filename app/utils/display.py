import json
import math
from typing import Any

from app.core.constants import MAL_ANIME_URL, UNKNOWN_LABEL
from app.models.catalog import CatalogEntry
from app.services.catalog.index import split_genres


def score_pct(score: float) -> str:
    """0.873 -> "87.3%"."""
    return f"{score * 100:.1f}%"


def stars(score: float, out_of: int = 5) -> str:
    """Render a 0–1 score as filled/empty stars, e.g. 0.62 -> "★★★☆☆"."""
    filled = max(0, min(out_of, math.floor(score * out_of + 0.5)))
    return "★" * filled + "☆" * (out_of - filled)


def mal_link(anime_id: int) -> str:
    return MAL_ANIME_URL.format(anime_id=anime_id)


def main_genre(entry: CatalogEntry) -> str:
    genres = split_genres(entry.genre)
    return genres[0] if genres else UNKNOWN_LABEL


def format_json(data: Any) -> str:
    """Pretty JSON for the raw-response view; plain text is shown as is."""
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False)
