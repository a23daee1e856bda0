import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from app.services.upstream import DEFAULT_CONTENT_TYPE, UpstreamProxy, get_upstream_proxy

router = APIRouter(prefix="/api/proxy", tags=["proxy"])


def _relay(upstream: httpx.Response) -> Response:
    """Pass the upstream status and body through verbatim."""
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type", DEFAULT_CONTENT_TYPE),
    )


def _unreachable(proxy: UpstreamProxy, path: str, exc: Exception) -> JSONResponse:
    logger.error(f"Upstream {proxy.api_base} unreachable for /{path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": f"Upstream unreachable: {exc}"})


@router.get("/{path:path}")
async def proxy_get(path: str, request: Request, proxy: UpstreamProxy = Depends(get_upstream_proxy)):
    if not proxy.configured:
        return PlainTextResponse("API base not set", status_code=500)
    try:
        upstream = await proxy.forward_get(path, request.query_params.multi_items())
    except httpx.RequestError as e:
        return _unreachable(proxy, path, e)
    return _relay(upstream)


@router.post("/{path:path}")
async def proxy_post(path: str, request: Request, proxy: UpstreamProxy = Depends(get_upstream_proxy)):
    if not proxy.configured:
        return PlainTextResponse("API base not set", status_code=500)
    body = await request.body()
    try:
        upstream = await proxy.forward_post(path, body)
    except httpx.RequestError as e:
        return _unreachable(proxy, path, e)
    return _relay(upstream)
