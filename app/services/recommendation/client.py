import json
from typing import Any

import httpx
from loguru import logger

from app.core.base_client import BaseClient
from app.core.config import settings
from app.core.version import __version__
from app.models.recommendation import (
    ApiResult,
    BootstrapRecommendRequest,
    PredictRequest,
    RecommendRequest,
)

DEFAULT_ERROR = "Request failed"


def decode_body(response: httpx.Response) -> Any:
    """Decoded JSON body, or the raw text when the body is not valid JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


def error_message(data: Any) -> str:
    """User-visible message for a failed call: raw text, the ``detail`` field, or a generic message."""
    if isinstance(data, str):
        return data or DEFAULT_ERROR
    if isinstance(data, dict) and data.get("detail"):
        detail = data["detail"]
        return detail if isinstance(detail, str) else json.dumps(detail)
    return DEFAULT_ERROR


class RecommenderClient(BaseClient):
    """
    Client for the recommendation service, reached through the passthrough prefix.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if base_url is None:
            base_url = settings.APP_BASE_URL.rstrip("/") + settings.API_PREFIX
        headers = {
            "User-Agent": f"AnimeRate/{__version__}",
            "Accept": "application/json",
        }
        super().__init__(
            base_url=base_url,
            timeout=timeout or settings.REQUEST_TIMEOUT,
            max_retries=max_retries or settings.MAX_RETRIES,
            headers=headers,
            transport=transport,
        )

    async def _call(self, method: str, path: str, body: dict[str, Any] | None = None) -> ApiResult:
        try:
            if method == "GET":
                response = await self.get(path, headers={"Cache-Control": "no-store"})
            else:
                response = await self.post(path, json=body)
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} unreachable: {e}")
            return ApiResult(ok=False, status_code=0, data=f"Service unreachable: {e}")

        data = decode_body(response)
        if not response.is_success:
            logger.warning(f"{method} {path} returned {response.status_code}: {error_message(data)}")
        return ApiResult(ok=response.is_success, status_code=response.status_code, data=data)

    async def health(self) -> ApiResult:
        return await self._call("GET", "/health")

    async def predict(self, request: PredictRequest) -> ApiResult:
        return await self._call("POST", "/predict", request.model_dump())

    async def recommend(self, request: RecommendRequest) -> ApiResult:
        return await self._call("POST", "/recommend", request.model_dump())

    async def bootstrap_recommend(self, request: BootstrapRecommendRequest) -> ApiResult:
        return await self._call("POST", "/bootstrap_recommend", request.model_dump())
