"""
HTTP client utilities for depmatrix.

This module provides the asynchronous client used to read package
documents from the npm registry. Transient failures (timeouts, dropped
connections, 5xx answers and 429 throttling) are retried with backoff;
a 404 means the package does not exist and is reported at once.
"""

from __future__ import annotations

import httpx
import random
import asyncio
from typing import Any, Dict, Optional, cast

from depmatrix.utils.logger import get_logger
from depmatrix.__version__ import __version__
from depmatrix.exceptions import NetworkError, RegistryError
from depmatrix.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    USER_AGENT_TEMPLATE,
)

logger = get_logger("http")

MAX_THROTTLED_RETRIES = 5


class HTTPClient:
    """Asynchronous JSON client for the package registry.

    Concurrency is bounded by the caller (see
    :class:`~depmatrix.core.registry.NpmRegistry`), not here.

    Args:
        timeout: Request timeout in seconds.
        max_retries: Retries after the first attempt for transient failures.
        user_agent: Custom User-Agent header value.

    Example:
        >>> async with HTTPClient() as client:
        ...     data = await client.get_json("https://registry.npmjs.org/left-pad")
    """

    def __init__(
        self,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        user_agent: Optional[str] = None,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max_retries
        self.user_agent = user_agent or USER_AGENT_TEMPLATE.format(version=__version__)

        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HTTPClient":
        self._open()
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()

    def _open(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                http2=True,
                follow_redirects=True,
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str) -> httpx.Response:
        """GET *url*, retrying transient failures.

        Raises:
            RegistryError: The resource does not exist (404).
            NetworkError: Any other 4xx status, too many 429 answers, or
                retries were exhausted.
        """
        client = self._open()
        failures = 0
        throttled = 0
        last_exc: Optional[Exception] = None

        while failures <= self.max_retries:
            try:
                response = await client.get(url)
            except httpx.TransportError as exc:
                last_exc = exc
                logger.warning(
                    "%s fetching %s (%d/%d)",
                    type(exc).__name__,
                    url,
                    failures + 1,
                    self.max_retries + 1,
                )
            else:
                status = response.status_code

                if status == 429:
                    throttled += 1
                    if throttled > MAX_THROTTLED_RETRIES:
                        raise NetworkError(
                            f"Registry kept throttling after {MAX_THROTTLED_RETRIES} retries",
                            url=url,
                            status_code=429,
                        )
                    delay = _retry_after_seconds(response)
                    logger.warning("Throttled by registry, waiting %ds", delay)
                    await asyncio.sleep(delay)
                    continue

                if status == 404:
                    raise RegistryError(
                        f"Package not found: {url}", url=url, status_code=404
                    )

                if 400 <= status < 500:
                    raise NetworkError(
                        f"HTTP {status} error for {url}",
                        url=url,
                        status_code=status,
                        response_body=response.text,
                    )

                if status < 500:
                    return response

                last_exc = NetworkError(
                    f"HTTP {status} error for {url}", url=url, status_code=status
                )
                logger.warning(
                    "Registry answered %d (%d/%d): %s",
                    status,
                    failures + 1,
                    self.max_retries + 1,
                    url,
                )

            if failures < self.max_retries:
                await asyncio.sleep((2**failures) + random.uniform(0.0, 0.3))
            failures += 1

        raise NetworkError(
            f"Request failed after {self.max_retries + 1} attempts: {url}",
            url=url,
        ) from last_exc

    async def get_json(self, url: str) -> Dict[str, Any]:
        """Fetch a URL and parse the response as a JSON object."""
        response = await self.get(url)

        try:
            data = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Invalid JSON response from {url}",
                url=url,
                response_body=response.text,
            ) from exc

        if not isinstance(data, dict):
            raise NetworkError(
                f"Expected JSON object from {url}",
                url=url,
                response_body=response.text,
            )

        return cast(Dict[str, Any], data)


def _retry_after_seconds(response: httpx.Response) -> int:
    """Read ``Retry-After`` as whole seconds, defaulting to 1."""
    try:
        return max(int(response.headers.get("Retry-After", "1")), 0)
    except ValueError:
        return 1
