"""Base Blogger client with URL building and response checking."""

from typing import Any
from urllib.parse import urlencode

import httpx
from loguru import logger

from blogmirror.config import DEFAULT_BASE_URL, BloggerCredentials
from blogmirror.errors import RemoteFetchError


class BloggerClient:
    """Blogger v3 API client bound to one blog and API key."""

    def __init__(self, credentials: BloggerCredentials, base_url: str = DEFAULT_BASE_URL) -> None:
        """Initialize client with credentials."""
        if not credentials.api_key:
            raise ValueError("api_key is required")
        if not credentials.blog_id:
            raise ValueError("blog_id is required")
        self._api_key = credentials.api_key
        self._blog_id = credentials.blog_id
        self._base_url = base_url.rstrip("/")

    @property
    def blog_id(self) -> str:
        return self._blog_id

    def build_url(self, path: str, params: dict[str, str] | None = None) -> str:
        """Build a full API URL for a path under the blog, adding the API key."""
        query: dict[str, str] = {"key": self._api_key}
        if params:
            query.update(params)
        return f"{self._base_url}/blogs/{self._blog_id}/{path}?{urlencode(query)}"

    def redact(self, url: str) -> str:
        """Strip the API key from a URL so it can be logged or shown."""
        return url.replace(self._api_key, "***")

    async def get_json(self, http_client: httpx.AsyncClient, url: str) -> dict[str, Any]:
        """GET a URL and return its JSON body.

        Raises:
            RemoteFetchError: On a transport failure, a non-2xx response or a non-JSON body.
        """
        safe_url = self.redact(url)
        logger.debug("GET {}", safe_url)
        try:
            response = await http_client.get(url)
        except httpx.TransportError as e:
            logger.warning("Request to {} failed: {}", safe_url, e)
            raise RemoteFetchError(safe_url, detail=str(e)) from e

        if not response.is_success:
            logger.warning("Request to {} returned HTTP {}", safe_url, response.status_code)
            raise RemoteFetchError(safe_url, status_code=response.status_code)

        try:
            result: dict[str, Any] = response.json()
        except ValueError as e:
            logger.warning("Request to {} returned a non-JSON body", safe_url)
            raise RemoteFetchError(
                safe_url, status_code=response.status_code, detail="response is not JSON"
            ) from e
        return result
