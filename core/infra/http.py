"""
http.py – Async HTTP transport built on *aiohttp* with per-instance default
          headers and a single-attempt request model.

Retries are the caller's job (see :mod:`core.retry`); this client only turns
every way a request can fail into a :class:`~core.errors.TransportError`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Mapping, Optional

import aiohttp

from ..errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "accept": "application/json, text/plain, */*",
    "user-agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36",
}


class HttpClient:
    """
    Thin wrapper over *aiohttp.ClientSession* adding:

    * global & per-request headers (keeps user-agent in one place)
    * an injectable session so connections can be pooled and tests can
      substitute the transport
    * async context-manager support
    """

    def __init__(
        self,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
        default_headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._external_session = session
        self._timeout = timeout
        self._own_session: Optional[aiohttp.ClientSession] = None
        self._default_headers: Dict[str, str] = dict(
            DEFAULT_HEADERS if default_headers is None else default_headers
        )

    # ---------------------------------------------- #
    # Async context-manager
    async def __aenter__(self) -> "HttpClient":  # noqa: D401
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: D401
        await self.close()

    # ---------------------------------------------- #
    # Session management
    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._external_session:
            return self._external_session
        if self._own_session is None or self._own_session.closed:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            self._own_session = aiohttp.ClientSession(timeout=timeout)
        return self._own_session

    async def close(self) -> None:
        # An injected session belongs to the caller
        if self._own_session and not self._own_session.closed:
            await self._own_session.close()
            self._own_session = None

    def _merge_headers(self, extra: Mapping[str, str] | None) -> Dict[str, str]:
        merged: Dict[str, str] = {**self._default_headers}
        if extra:
            merged.update(extra)
        return merged

    # ---------------------------------------------- #
    # Public helpers
    async def get_bytes(self, url: str, **kwargs) -> bytes:
        """GET ``url`` and return the body; non-2xx statuses are failures."""
        session = await self._ensure_session()
        kwargs["headers"] = self._merge_headers(kwargs.pop("headers", None))

        logger.debug("GET %s", url)
        try:
            async with session.get(url, **kwargs) as resp:
                resp.raise_for_status()
                return await resp.read()
        except aiohttp.ClientResponseError as e:
            raise TransportError(url, f"HTTP {e.status} {e.message}") from e
        except aiohttp.ClientError as e:
            raise TransportError(url, str(e) or type(e).__name__) from e
        except asyncio.TimeoutError as e:
            raise TransportError(url, f"timed out after {self._timeout:.0f}s") from e
