"""One-time initialization of the Pillow image subsystem."""

import logging
import threading

from PIL import Image

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_initialized = False


def initialize_imaging(max_image_pixels: int) -> None:
    """
    Register Pillow codecs and apply process-wide limits.

    Safe to call more than once; only the first call does any work.

    Raises:
        RuntimeError: If Pillow registers no decoders
    """
    global _initialized

    with _lock:
        if _initialized:
            return

        Image.init()
        if not Image.OPEN:
            raise RuntimeError("Pillow registered no image decoders")

        Image.MAX_IMAGE_PIXELS = max_image_pixels
        _initialized = True

        logger.info(
            "Image subsystem initialized",
            extra={
                "decoders": len(Image.OPEN),
                "encoders": len(Image.SAVE),
                "max_image_pixels": max_image_pixels,
            },
        )


def shutdown_imaging() -> None:
    """Mark the image subsystem as released."""
    global _initialized

    with _lock:
        if _initialized:
            _initialized = False
            logger.info("Image subsystem shut down")


def is_imaging_ready() -> bool:
    """Report whether startup has initialized the image subsystem."""
    return _initialized


def ensure_imaging_ready() -> None:
    """Raise if a request arrives before startup completed."""
    if not _initialized:
        raise RuntimeError("Image subsystem is not initialized")
