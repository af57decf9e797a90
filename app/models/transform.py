"""Transform request and image payload models."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_DIMENSION = 2048


class TransformMode(str, Enum):
    """Supported transformation modes."""

    RESIZE = "resize"
    CROP = "crop"


class TransformRequest(BaseModel):
    """Validated transformation parameters for a single request."""

    model_config = ConfigDict(frozen=True)

    image: str = Field(..., description="Source image URL")
    width: int = Field(0, ge=0, le=MAX_DIMENSION, description="Target width (0 = proportional)")
    height: int = Field(0, ge=0, le=MAX_DIMENSION, description="Target height (0 = proportional)")
    mode: TransformMode = Field(TransformMode.RESIZE, description="Resize or crop")

    @model_validator(mode="after")
    def _check_not_both_zero(self) -> "TransformRequest":
        if self.width == 0 and self.height == 0:
            raise ValueError("width and height cannot both be zero")
        return self


@dataclass(frozen=True)
class RemoteImage:
    """Image bytes downloaded from a remote URL."""

    content: bytes
    media_type: str


@dataclass(frozen=True)
class TransformedImage:
    """Re-encoded output of the image transformer."""

    content: bytes
    format: str
