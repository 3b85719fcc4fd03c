"""Image proxy endpoint.

Answers with the raw image bytes, or a short plain-text error so an
``<img>`` tag never receives a JSON body.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from gamehaven.errors import CatalogError
from gamehaven.services.image_proxy import ImageProxy

router = APIRouter(prefix="/api/image-proxy", tags=["image-proxy"])


def get_image_proxy() -> ImageProxy:
    return ImageProxy.from_settings()


@router.get("")
async def proxy_image(
    proxy: Annotated[ImageProxy, Depends(get_image_proxy)],
    url: str | None = None,
):
    try:
        image = await proxy.fetch(url)
    except CatalogError as exc:
        return PlainTextResponse(exc.message, status_code=exc.status_code)
    return Response(content=image.content, headers=image.headers)
