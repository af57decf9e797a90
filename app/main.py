"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from app.api.routes import transform
from app.config import settings
from app.core.imaging import initialize_imaging, shutdown_imaging
from app.core.request_id import get_request_id
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.performance import PipelineTimingMiddleware
from app.utils.exceptions import (
    TRANSFORM_ERROR_MESSAGE,
    FetchError,
    ImageProcessingError,
    ImageProxyException,
    ValidationError,
)
from app.utils.logging_config import setup_logging

# Setup logging
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

# The transform route is the only endpoint, so docs and schema are disabled
app = FastAPI(
    title="Image Proxy",
    description="On-demand resize and crop of remote images",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


@app.exception_handler(ImageProxyException)
async def image_proxy_exception_handler(request: Request, exc: ImageProxyException) -> PlainTextResponse:
    """Map pipeline exceptions to plain-text responses."""
    request_id = get_request_id()
    log_extra = {"request_id": request_id, "path": request.url.path, "error_type": type(exc).__name__}

    if isinstance(exc, ValidationError):
        status_code = status.HTTP_404_NOT_FOUND
        message = str(exc)
        logger.info(f"Rejected parameters: {message}", extra=log_extra)
    elif isinstance(exc, FetchError):
        status_code = status.HTTP_400_BAD_REQUEST
        message = str(exc)
        logger.warning(f"Fetch failed: {message}", extra=log_extra)
    elif isinstance(exc, ImageProcessingError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        message = TRANSFORM_ERROR_MESSAGE
        logger.error(f"Transform failed: {str(exc)}", extra=log_extra, exc_info=exc)
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        message = "Internal server error"
        logger.error(f"Exception: {str(exc)}", extra=log_extra, exc_info=exc)

    return PlainTextResponse(message, status_code=status_code)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Handle unexpected exceptions."""
    logger.error(
        f"Unexpected exception: {str(exc)}",
        extra={"request_id": get_request_id()},
        exc_info=exc,
    )
    return PlainTextResponse("Internal server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Stop browsers from sniffing or framing proxied images."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "no-referrer"
    return response


# Add middleware (order matters: request logging runs outermost)
app.add_middleware(PipelineTimingMiddleware, slow_transform_threshold=settings.slow_transform_seconds)
app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(transform.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event."""
    logger.info("Image proxy starting up...")
    initialize_imaging(settings.max_image_pixels)
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Upstream timeout: {settings.http_timeout}s")


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event."""
    shutdown_imaging()
    logger.info("Image proxy shutting down...")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
