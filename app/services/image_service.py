"""Image processing service."""

import io
import logging
from typing import Any, Dict, Tuple

from PIL import Image, UnidentifiedImageError

from app.models.transform import TransformedImage, TransformMode, TransformRequest
from app.utils.exceptions import ImageDecodeError, ImageEncodeError

logger = logging.getLogger(__name__)

# Formats whose encoders accept a quality setting
LOSSY_FORMATS = {"JPEG", "WEBP"}


def target_size(source: Tuple[int, int], width: int, height: int) -> Tuple[int, int]:
    """
    Compute the resize geometry.

    Both sides given: exact size, aspect ratio ignored.
    One side zero: that side follows the source aspect ratio.
    """
    src_w, src_h = source
    if width and height:
        return width, height
    if width:
        return width, max(1, round(src_h * width / src_w))
    return max(1, round(src_w * height / src_h)), height


def crop_box(source: Tuple[int, int], width: int, height: int) -> Tuple[int, int, int, int]:
    """
    Compute a top-left anchored crop region, clipped to the source bounds.

    A zero side keeps the full extent of that axis.
    """
    src_w, src_h = source
    return 0, 0, min(width or src_w, src_w), min(height or src_h, src_h)


class ImageService:
    """Service for resizing and cropping images."""

    def __init__(self, quality: int = 90):
        self.quality = quality

    def transform(self, image_bytes: bytes, params: TransformRequest) -> TransformedImage:
        """
        Decode, transform and re-encode an image in its source format.

        Args:
            image_bytes: Encoded source image
            params: Validated transform parameters

        Returns:
            TransformedImage holding freshly encoded bytes

        Raises:
            ImageDecodeError: If the bytes are not a decodable image
            ImageEncodeError: If the result cannot be written in the source format
        """
        source = self._decode(image_bytes)
        source_format = source.format

        if params.mode is TransformMode.RESIZE:
            size = target_size(source.size, params.width, params.height)
            result = source.resize(size, Image.LANCZOS)
        else:
            result = source.crop(crop_box(source.size, params.width, params.height))

        logger.debug(
            f"Transformed {source_format} image",
            extra={
                "mode": params.mode.value,
                "source_size": list(source.size),
                "output_size": list(result.size),
            },
        )

        return TransformedImage(
            content=self._encode(result, source_format, source.info),
            format=source_format,
        )

    @staticmethod
    def _decode(image_bytes: bytes) -> Image.Image:
        if not image_bytes:
            raise ImageDecodeError("Image data is empty")

        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            raise ImageDecodeError(f"Could not decode image: {str(e)}") from e

        return image

    def _encode(self, image: Image.Image, image_format: str, info: Dict[str, Any]) -> bytes:
        save_kwargs: Dict[str, Any] = {}
        if info.get("icc_profile"):
            save_kwargs["icc_profile"] = info["icc_profile"]
        if "transparency" in info and image.mode in ("P", "L", "RGB"):
            save_kwargs["transparency"] = info["transparency"]
        if image_format in LOSSY_FORMATS:
            save_kwargs["quality"] = self.quality
            if info.get("exif"):
                save_kwargs["exif"] = info["exif"]

        out = io.BytesIO()
        try:
            image.save(out, format=image_format, **save_kwargs)
        except (KeyError, OSError, ValueError) as e:
            raise ImageEncodeError(f"Could not encode image as {image_format}: {str(e)}") from e

        return out.getvalue()
