"""Shared API dependencies."""

from app.config import settings
from app.services.fetcher_service import RemoteFetcher
from app.services.image_service import ImageService


def get_remote_fetcher() -> RemoteFetcher:
    """Get remote fetcher instance."""
    return RemoteFetcher(timeout=settings.http_timeout, user_agent=settings.user_agent)


def get_image_service() -> ImageService:
    """Get image service instance."""
    return ImageService(quality=settings.output_quality)
