from collections.abc import Callable, Iterable
from typing import Any

from loguru import logger

from app.core.constants import RATING_MAX, RATING_MIN
from app.models.recommendation import RatedPair


def clamp_rating(value: Any) -> int:
    """Coerce raw control input to an integer rating in [0, 10]; unparseable input is 0."""
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return RATING_MIN
    return max(RATING_MIN, min(RATING_MAX, number))


class RatingStore:
    """
    In-memory ratings keyed by anime id.

    The store accepts any value; range enforcement belongs to the input boundary
    (see ``clamp_rating``). A rating of 0 counts as unrated.
    """

    def __init__(self):
        self._ratings: dict[int, int] = {}
        self._clear_listeners: list[Callable[[], None]] = []

    def __len__(self) -> int:
        return len(self._ratings)

    def __contains__(self, anime_id: int) -> bool:
        return anime_id in self._ratings

    def get(self, anime_id: int) -> int:
        return self._ratings.get(anime_id, 0)

    def set_rating(self, anime_id: int, value: int) -> None:
        self._ratings[anime_id] = value

    def on_clear(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every ``clear()``."""
        self._clear_listeners.append(listener)

    def clear(self) -> None:
        self._ratings.clear()
        for listener in self._clear_listeners:
            listener()

    def retain(self, anime_ids: Iterable[int]) -> int:
        """Drop ratings whose id is not in ``anime_ids``. Returns how many were dropped."""
        keep = set(anime_ids)
        stale = [anime_id for anime_id in self._ratings if anime_id not in keep]
        for anime_id in stale:
            del self._ratings[anime_id]
        if stale:
            logger.info(f"Dropped {len(stale)} ratings for ids no longer in the catalog")
        return len(stale)

    def rated_pairs(self) -> list[RatedPair]:
        """Pairs with a strictly positive rating, in insertion order."""
        return [
            RatedPair(anime_id=anime_id, rating=rating) for anime_id, rating in self._ratings.items() if rating > 0
        ]
