from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RatedPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    anime_id: int
    rating: int


class PredictRequest(BaseModel):
    user_id: int
    anime_id: int


class RecommendRequest(BaseModel):
    """Body of POST /recommend. A null user_id takes the cold-start path."""

    user_id: int | None = None
    top_k: int = Field(gt=0)
    allowed_genres: list[str] | None = None
    exclude_anime_ids: list[int] | None = None
    only_type: str | None = None
    preferred_genres: list[str] | None = None


class BootstrapRecommendRequest(BaseModel):
    """Body of POST /bootstrap_recommend."""

    session_key: str
    rated: list[RatedPair] = Field(min_length=1)
    top_k: int = Field(gt=0)
    allowed_genres: list[str] | None = None
    only_type: str | None = None


class RecommendationItem(BaseModel):
    """A ranked item returned by the recommendation service."""

    model_config = ConfigDict(extra="allow")

    anime_id: int
    name: str | None = None
    main_genre: str | None = None
    predicted_score_0_1: float = Field(default=0.0, ge=0.0, le=1.0)


class ApiResult(BaseModel):
    """Outcome of a call to the recommendation service.

    ``data`` is the decoded JSON body, or the raw text when the body is not JSON.
    """

    ok: bool
    status_code: int
    data: Any = None
