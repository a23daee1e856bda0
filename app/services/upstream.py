import httpx
from loguru import logger

from app.core.base_client import BaseClient
from app.core.config import settings

DEFAULT_CONTENT_TYPE = "application/json"


def join_url(base: str, path: str) -> str:
    """Join the upstream base and a sub-path with exactly one slash between them."""
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


class UpstreamProxy(BaseClient):
    """
    Forwards requests to the recommendation service configured by ``API_BASE``.
    """

    def __init__(self, api_base: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(timeout=settings.REQUEST_TIMEOUT, max_retries=1, transport=transport)
        self._api_base = api_base

    @property
    def api_base(self) -> str:
        return self._api_base if self._api_base is not None else settings.API_BASE

    @property
    def configured(self) -> bool:
        return bool(self.api_base)

    async def forward_get(self, path: str, params: list[tuple[str, str]]) -> httpx.Response:
        target = join_url(self.api_base, path)
        logger.debug(f"Proxy GET {target}")
        return await self.get(target, params=params, headers={"Cache-Control": "no-store"})

    async def forward_post(self, path: str, body: bytes) -> httpx.Response:
        target = join_url(self.api_base, path)
        logger.debug(f"Proxy POST {target}")
        return await self._request("POST", target, content=body, headers={"content-type": "application/json"})


upstream_proxy = UpstreamProxy()


def get_upstream_proxy() -> UpstreamProxy:
    return upstream_proxy
