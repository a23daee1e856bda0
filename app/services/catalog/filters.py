from collections.abc import Sequence

from app.core.constants import ALL_FILTER
from app.models.catalog import CatalogEntry

from .index import entry_type, split_genres


def facet_choice(value: str | None) -> str | None:
    """Map a facet selection from the UI to an optional constraint ("All" means none)."""
    if value is None or value == ALL_FILTER:
        return None
    return value


def matches(entry: CatalogEntry, query: str = "", category: str | None = None, genre: str | None = None) -> bool:
    if query:
        if query.lower() not in entry.name.lower() and query not in str(entry.anime_id):
            return False
    if category is not None and entry_type(entry) != category:
        return False
    if genre is not None and genre not in split_genres(entry.genre):
        return False
    return True


def filter_catalog(
    entries: Sequence[CatalogEntry],
    query: str = "",
    category: str | None = None,
    genre: str | None = None,
) -> list[CatalogEntry]:
    """
    Entries matching the query and facet constraints, in catalog order.

    The query matches the name case-insensitively or the id's decimal text as a substring.
    ``None`` for category or genre means no constraint.
    """
    return [e for e in entries if matches(e, query, category, genre)]
