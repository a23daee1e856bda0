import re
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import ValidationError

from app.core.constants import NO_TYPE_CONSTRAINT
from app.core.exceptions import RequestValidationError
from app.models.recommendation import (
    BootstrapRecommendRequest,
    PredictRequest,
    RatedPair,
    RecommendRequest,
)

T = TypeVar("T")

LIST_SEPARATORS = re.compile(r"[,\n]+")
NUMBER_SEPARATORS = re.compile(r"[,\s]+")

MISSING_RATINGS_MESSAGE = "Please rate at least 1 anime (0..10)."


def _parse_number(text: str) -> int | float | None:
    try:
        number = float(text)
    except ValueError:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return int(number) if number.is_integer() else number


def _as_int(number: int | float | None) -> int | None:
    if number is None or (isinstance(number, float) and not number.is_integer()):
        return None
    return int(number)


def parse_string_list(text: str | None) -> list[str]:
    """Split free text on commas/newlines into trimmed, non-empty fragments."""
    if not text:
        return []
    return [part.strip() for part in LIST_SEPARATORS.split(text) if part.strip()]


def parse_number_list(text: str | None) -> list[int | float]:
    """Split free text on commas/whitespace and keep the fragments that parse as numbers."""
    if not text:
        return []
    numbers = (_parse_number(part) for part in NUMBER_SEPARATORS.split(text) if part.strip())
    return [n for n in numbers if n is not None]


def parse_rated_pairs(text: str | None) -> list[RatedPair]:
    """
    Parse ``id:rating`` tokens separated by commas or newlines.

    Tokens without a colon, or with either side not a whole number, are dropped; anything after
    a second colon is ignored. Zero ratings are kept; filtering to positive ratings happens when the request is built.
    """
    pairs = []
    for token in parse_string_list(text):
        if ":" not in token:
            continue
        id_text, rating_text = (part.strip() for part in token.split(":")[:2])
        anime_id = _as_int(_parse_number(id_text))
        rating = _as_int(_parse_number(rating_text))
        if anime_id is None or rating is None:
            continue
        pairs.append(RatedPair(anime_id=anime_id, rating=rating))
    return pairs


def optional_list(items: Iterable[T] | None) -> list[T] | None:
    """An empty list goes over the wire as null."""
    items = list(items or [])
    return items or None


def type_constraint(value: str | None) -> str | None:
    """Map the "None" type selection to an absent constraint."""
    if value is None or value == "" or value == NO_TYPE_CONSTRAINT:
        return None
    return value


def _genres(value: str | Iterable[str] | None) -> list[str] | None:
    if value is None or isinstance(value, str):
        return optional_list(parse_string_list(value))
    return optional_list(parse_string_list(",".join(value)))


def _top_k(value: Any) -> int:
    try:
        top_k = int(value)
    except (TypeError, ValueError):
        raise RequestValidationError("top_k must be a positive integer.")
    if top_k <= 0:
        raise RequestValidationError("top_k must be a positive integer.")
    return top_k


def _whole_number(value: Any, field: str) -> int | None:
    if value is None or value == "":
        return None
    number = _as_int(_parse_number(str(value).strip()))
    if number is None:
        raise RequestValidationError(f"{field} must be a whole number.")
    return number


def build_bootstrap_request(
    session_key: str,
    rated: str | Iterable[RatedPair],
    top_k: Any,
    allowed_genres: str | Iterable[str] | None = None,
    only_type: str | None = None,
) -> BootstrapRecommendRequest:
    """
    Build a /bootstrap_recommend body from freshly supplied ratings.

    ``rated`` is either pairs from the rating store or ``id:rating`` text. Only pairs
    with a positive rating are sent; with none left the request is rejected locally.
    """
    pairs = parse_rated_pairs(rated) if isinstance(rated, str) else list(rated)
    pairs = [p for p in pairs if p.rating > 0]
    if not pairs:
        raise RequestValidationError(MISSING_RATINGS_MESSAGE)

    try:
        return BootstrapRecommendRequest(
            session_key=session_key,
            rated=pairs,
            top_k=_top_k(top_k),
            allowed_genres=_genres(allowed_genres),
            only_type=type_constraint(only_type),
        )
    except ValidationError as e:
        raise RequestValidationError(str(e)) from e


def build_recommend_request(
    user_id: Any,
    top_k: Any,
    allowed_genres: str | Iterable[str] | None = None,
    exclude_anime_ids: str | Iterable[int] | None = None,
    only_type: str | None = None,
    preferred_genres: str | Iterable[str] | None = None,
) -> RecommendRequest:
    """Build a /recommend body. Without a user id the preferred genres drive a cold start."""
    if exclude_anime_ids is None or isinstance(exclude_anime_ids, str):
        numbers = parse_number_list(exclude_anime_ids)
    else:
        numbers = list(exclude_anime_ids)
    exclude = [i for i in (_as_int(n) for n in numbers) if i is not None]

    return RecommendRequest(
        user_id=_whole_number(user_id, "user_id"),
        top_k=_top_k(top_k),
        allowed_genres=_genres(allowed_genres),
        exclude_anime_ids=optional_list(exclude),
        only_type=type_constraint(only_type),
        preferred_genres=_genres(preferred_genres),
    )


def build_predict_request(user_id: Any, anime_id: Any) -> PredictRequest:
    uid = _whole_number(user_id, "user_id")
    aid = _whole_number(anime_id, "anime_id")
    if uid is None or aid is None:
        raise RequestValidationError("Both user_id and anime_id are required.")
    return PredictRequest(user_id=uid, anime_id=aid)
