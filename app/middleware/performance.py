"""Pipeline timing middleware."""

import logging
import time
from typing import Any, Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


def pipeline_summary(request: Request) -> Dict[str, Any]:
    """Collect what the transform route recorded on request.state."""
    state = request.state
    return {
        "stage": getattr(state, "pipeline_stage", "received"),
        "source_bytes": getattr(state, "source_bytes", None),
        "output_bytes": getattr(state, "output_bytes", None),
    }


class PipelineTimingMiddleware(BaseHTTPMiddleware):
    """Times each transform and logs how far the pipeline got."""

    def __init__(self, app: ASGIApp, slow_transform_threshold: float = 2.0):
        """
        Args:
            app: ASGI application
            slow_transform_threshold: Seconds after which a completed transform is logged as slow
        """
        super().__init__(app)
        self.slow_threshold = slow_transform_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add X-Response-Time and log the final pipeline stage."""
        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time
        duration_ms = round(duration * 1000, 2)

        response.headers["X-Response-Time"] = f"{duration_ms}ms"

        summary = pipeline_summary(request)
        log_data = {
            "request_id": getattr(request.state, "request_id", "unknown"),
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            **summary,
        }

        if summary["stage"] != "transformed":
            logger.info(f"Pipeline stopped after '{summary['stage']}'", extra=log_data)
        elif duration >= self.slow_threshold:
            logger.warning(f"Slow transform took {duration_ms}ms", extra=log_data)
        else:
            logger.debug(f"Transform completed in {duration_ms}ms", extra=log_data)

        return response
