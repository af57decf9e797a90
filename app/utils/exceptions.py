"""Custom exception classes."""


class ImageProxyException(Exception):
    """Base exception for the image proxy application."""

    pass


class ValidationError(ImageProxyException):
    """Raised when query parameter validation fails."""

    pass


class MissingImageError(ValidationError):
    """Raised when the 'image' parameter is absent."""

    def __init__(self) -> None:
        super().__init__("Missing 'image' query parameter.")


class MissingDimensionsError(ValidationError):
    """Raised when width and height are both zero."""

    def __init__(self) -> None:
        super().__init__("Missing non-zero 'width' or 'height' query parameters.")


class NegativeDimensionError(ValidationError):
    """Raised when width or height is negative."""

    def __init__(self) -> None:
        super().__init__("Negative width or height is not supported.")


class DimensionTooLargeError(ValidationError):
    """Raised when width or height exceeds the maximum dimension."""

    def __init__(self, max_dimension: int) -> None:
        super().__init__(f"Width and height cannot exceed {max_dimension}.")
        self.max_dimension = max_dimension


class UnsupportedModeError(ValidationError):
    """Raised when mode is neither 'resize' nor 'crop'."""

    def __init__(self) -> None:
        super().__init__("Mode not accepted.")


class FetchError(ImageProxyException):
    """Raised when the remote image cannot be retrieved."""

    def __init__(self, message: str = "Error retrieving image from URL.") -> None:
        super().__init__(message)


class NotAnImageError(FetchError):
    """Raised when the remote resource is not declared as an image."""

    def __init__(self) -> None:
        super().__init__("URL is not an image type.")


# Body returned to clients for any transform failure; details are only logged
TRANSFORM_ERROR_MESSAGE = "Error transforming image."


class ImageProcessingError(ImageProxyException):
    """Raised when image processing fails."""

    pass


class ImageDecodeError(ImageProcessingError):
    """Raised when image bytes cannot be decoded."""

    pass


class ImageEncodeError(ImageProcessingError):
    """Raised when the transformed image cannot be re-encoded."""

    pass
