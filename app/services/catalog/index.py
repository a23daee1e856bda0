from collections.abc import Iterable

from app.core.constants import UNKNOWN_LABEL
from app.models.catalog import CatalogEntry, FacetSet


def split_genres(genre: str | None) -> list[str]:
    """Split a comma-separated genre field into trimmed, non-empty tags."""
    if not genre:
        return []
    return [tag.strip() for tag in genre.split(",") if tag.strip()]


def entry_type(entry: CatalogEntry) -> str:
    return entry.type or UNKNOWN_LABEL


def build_facets(entries: Iterable[CatalogEntry]) -> FacetSet:
    """Distinct, sorted type labels and genre tags of a catalog."""
    types: set[str] = set()
    genres: set[str] = set()
    for entry in entries:
        types.add(entry_type(entry))
        genres.update(split_genres(entry.genre))
    return FacetSet(types=sorted(types), genres=sorted(genres))
