"""Image transform endpoint."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from app.api.dependencies import get_image_service, get_remote_fetcher
from app.core.imaging import ensure_imaging_ready
from app.services.fetcher_service import RemoteFetcher
from app.services.image_service import ImageService
from app.utils.validators import parse_transform_params

logger = logging.getLogger(__name__)
router = APIRouter(tags=["transform"])

# The endpoint accepts any method on any path; only the query string matters.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=ALL_METHODS)
async def transform_image(
    request: Request,
    fetcher: RemoteFetcher = Depends(get_remote_fetcher),
    image_service: ImageService = Depends(get_image_service),
) -> Response:
    """
    Fetch a remote image and return it resized or cropped.

    - **image**: Source image URL (required)
    - **width** / **height**: Target size, 0..2048, not both zero
    - **mode**: `resize` (default) or `crop`

    Pipeline progress is recorded on `request.state` for the timing middleware.
    """
    request.state.pipeline_stage = "received"
    params = parse_transform_params(request.query_params)
    request.state.pipeline_stage = "validated"

    logger.info(
        f"Route {request.url.path} called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": request.url.path,
            "params": {
                "image": params.image[:200],
                "width": params.width,
                "height": params.height,
                "mode": params.mode.value,
            },
        },
    )

    remote_image = await fetcher.fetch(params.image)
    request.state.pipeline_stage = "fetched"
    request.state.source_bytes = len(remote_image.content)

    ensure_imaging_ready()
    transformed = await run_in_threadpool(image_service.transform, remote_image.content, params)
    request.state.pipeline_stage = "transformed"
    request.state.output_bytes = len(transformed.content)

    return Response(content=transformed.content, media_type=remote_image.media_type)
