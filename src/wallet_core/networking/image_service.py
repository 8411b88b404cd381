import logging
from typing import Optional
from urllib.parse import urljoin

import backoff
import httpx

from src.wallet_core.config import AppConfig

logger = logging.getLogger(__name__)


def icon_path(category: str, type_id: int, size: int) -> str:
    """Relative image server path for an item icon, e.g. 'types/34/icon?size=64'."""
    return f"{category}s/{type_id}/icon?size={size}"


class ImageService:
    """Fetches item icons from the image server, falling back to a second host."""

    def __init__(self, config: AppConfig, client: Optional[httpx.AsyncClient] = None):
        self._config = config
        self._client = client or httpx.AsyncClient(
            timeout=config.request_timeout, follow_redirects=True
        )

    async def __aenter__(self) -> "ImageService":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    def cdn_uri(self, path: str) -> str:
        return urljoin(self._config.image_server_cdn_url, path)

    def base_uri(self, path: str) -> str:
        return urljoin(self._config.image_server_base_url, path)

    def icon_url(self, type_id: int, use_fallback: bool = False) -> str:
        path = icon_path("type", type_id, self._config.icon_size)
        return self.base_uri(path) if use_fallback else self.cdn_uri(path)

    async def get_image(self, url: str) -> Optional[bytes]:
        """Returns the image bytes, or None if the server did not deliver one."""
        try:
            response = await self._get_with_retry(url)
        except httpx.TransportError as e:
            logger.warning("Image request to %s failed: %s", url, e)
            return None

        if response.is_error:
            logger.debug("Image server answered %s for %s", response.status_code, url)
            return None
        if not response.content:
            return None
        return response.content

    async def _get_with_retry(self, url: str) -> httpx.Response:
        @backoff.on_exception(
            backoff.expo,
            httpx.TransportError,
            max_tries=self._config.max_retries,
            max_value=4,
        )
        async def _get() -> httpx.Response:
            return await self._client.get(url)

        return await _get()

    async def fetch_type_icon(self, type_id: int) -> Optional[bytes]:
        """Tries the CDN first, then the fallback host exactly once."""
        use_fallback = False
        while True:
            image = await self.get_image(self.icon_url(type_id, use_fallback))
            if image is None and not use_fallback:
                logger.debug("No icon for type %s from CDN, trying fallback", type_id)
                use_fallback = True
                continue
            return image
