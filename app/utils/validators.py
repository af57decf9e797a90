"""Input validation utilities."""

import math
from typing import Any, Mapping, Optional

from app.models.transform import MAX_DIMENSION, TransformMode, TransformRequest
from app.utils.exceptions import (
    DimensionTooLargeError,
    MissingDimensionsError,
    MissingImageError,
    NegativeDimensionError,
    UnsupportedModeError,
)


def _first_value(query: Mapping[str, Any], key: str) -> Optional[str]:
    """Return the first value for a query key, or None when absent."""
    getlist = getattr(query, "getlist", None)
    if getlist is not None:
        values = getlist(key)
        return values[0] if values else None
    value = query.get(key)
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def coerce_dimension(raw: Optional[str]) -> float:
    """
    Coerce a raw query value to a dimension.

    Missing, blank, non-numeric and NaN values become 0. The value is not
    truncated here, so range checks see exactly what the caller sent.

    Args:
        raw: Raw query string value

    Returns:
        Dimension as a float (possibly fractional or +/-inf)
    """
    if raw is None:
        return 0.0

    text = raw.strip()
    if not text or "_" in text:
        return 0.0

    try:
        value = float(text)
    except ValueError:
        return 0.0

    if math.isnan(value):
        return 0.0
    return value


def parse_transform_params(query: Mapping[str, Any]) -> TransformRequest:
    """
    Validate query parameters into a transform request.

    Args:
        query: Query parameters (Starlette QueryParams or a plain mapping)

    Returns:
        Validated TransformRequest

    Raises:
        ValidationError: One subclass per rejection reason
    """
    image = _first_value(query, "image")
    if image is None:
        raise MissingImageError()

    width = coerce_dimension(_first_value(query, "width"))
    height = coerce_dimension(_first_value(query, "height"))

    if width == 0 and height == 0:
        raise MissingDimensionsError()
    if width < 0 or height < 0:
        raise NegativeDimensionError()
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise DimensionTooLargeError(MAX_DIMENSION)

    # Fractions truncate toward zero, which can still leave nothing to size by
    width, height = math.trunc(width), math.trunc(height)
    if width == 0 and height == 0:
        raise MissingDimensionsError()

    mode = _first_value(query, "mode") or TransformMode.RESIZE.value
    if mode not in (TransformMode.RESIZE.value, TransformMode.CROP.value):
        raise UnsupportedModeError()

    return TransformRequest(
        image=image,
        width=width,
        height=height,
        mode=TransformMode(mode),
    )
