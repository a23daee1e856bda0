from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from app.core.constants import SCORE_FIELD
from app.models.recommendation import RecommendationItem


def _score(item: Any) -> float:
    if not isinstance(item, Mapping):
        return 0.0
    try:
        return float(item.get(SCORE_FIELD) or 0.0)
    except (TypeError, ValueError):
        return 0.0


def extract_items(data: Any) -> list[Any]:
    """The ranked list of a response: its ``items`` field, or the response itself when it is a list."""
    if isinstance(data, Mapping):
        items = data.get("items")
        return list(items) if isinstance(items, list) else []
    if isinstance(data, list):
        return list(data)
    return []


def sort_items(items: list[Any]) -> list[Any]:
    """Sort by descending predicted score. ``sorted`` is stable, so ties keep their input order."""
    return sorted(items, key=_score, reverse=True)


def normalize_response(data: Any) -> dict[str, Any]:
    """
    Return a copy of a recommendation response with ``items`` sorted by score.

    Other response fields are preserved for display; the input is left untouched.
    A bare list response becomes ``{"items": [...]}``.
    """
    result = dict(data) if isinstance(data, Mapping) else {}
    result["items"] = sort_items(extract_items(data))
    return result


def to_items(result: Mapping[str, Any]) -> list[RecommendationItem]:
    """Typed view of normalized items; entries that don't validate are skipped."""
    items = []
    for raw in result.get("items", []):
        try:
            items.append(RecommendationItem.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping malformed recommendation item {raw!r}: {e.error_count()} errors")
    return items
