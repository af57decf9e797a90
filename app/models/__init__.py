"""Pydantic models."""

from app.models.transform import (
    MAX_DIMENSION,
    RemoteImage,
    TransformedImage,
    TransformMode,
    TransformRequest,
)

__all__ = [
    "MAX_DIMENSION",
    "RemoteImage",
    "TransformedImage",
    "TransformMode",
    "TransformRequest",
]
