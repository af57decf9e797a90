"""Remote image fetching service."""

import logging
from typing import Optional

import httpx

from app.models.transform import RemoteImage
from app.utils.exceptions import FetchError, NotAnImageError

logger = logging.getLogger(__name__)


def parse_media_type(content_type: Optional[str]) -> str:
    """
    Extract the media type from a Content-Type header.

    Parameters such as charset are dropped and the result is lower-cased,
    e.g. "Image/PNG; charset=binary" -> "image/png".
    """
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


class RemoteFetcher:
    """Downloads a remote resource and checks it is declared as an image."""

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent upstream
            transport: Optional httpx transport (used to stub the network in tests)
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    async def fetch(self, url: str) -> RemoteImage:
        """
        Fetch an image with a single GET request.

        Args:
            url: Source image URL

        Returns:
            RemoteImage with the body bytes and the declared media type

        Raises:
            FetchError: On transport failure or a non-success status
            NotAnImageError: If the declared content type is not image/*
        """
        headers = {"User-Agent": self.user_agent} if self.user_agent else None

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(
                f"Failed to fetch image: {str(e)}",
                extra={"url": url[:200], "error_type": type(e).__name__},
            )
            raise FetchError() from e

        if not response.is_success:
            logger.warning(
                f"Upstream returned {response.status_code}",
                extra={"url": url[:200], "status_code": response.status_code},
            )
            raise FetchError()

        media_type = parse_media_type(response.headers.get("content-type"))
        if media_type.split("/", 1)[0] != "image":
            logger.warning(
                "Upstream resource is not an image",
                extra={"url": url[:200], "content_type": media_type or None},
            )
            raise NotAnImageError()

        logger.debug(
            "Fetched remote image",
            extra={"url": url[:200], "media_type": media_type, "size_bytes": len(response.content)},
        )
        return RemoteImage(content=response.content, media_type=media_type)
