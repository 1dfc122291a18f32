from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlparse

import aiohttp

from ...domain.shared.errors import MetadataFetchError
from ..metrics import metrics


class HttpMetadataFetcher:
    """Fetches token metadata documents over HTTP(S) and decodes them as JSON."""

    def __init__(
        self,
        *,
        allowed_hosts: set[str] | None = None,
        max_download_bytes: int = 1_000_000,
        request_timeout: int = 10,
        session_timeout: int = 15,
    ):
        self.allowed_hosts = {host.lower() for host in allowed_hosts} if allowed_hosts else None
        self.max_download_bytes = max_download_bytes
        self._request_timeout = request_timeout
        self._session_timeout = session_timeout
        self._session: aiohttp.ClientSession | None = None

    @metrics.wrap_async("http:metadata_fetch", source="metadata")
    async def fetch_json(self, url: str) -> Any:
        if not self.is_allowed_url(url):
            raise MetadataFetchError(f"Metadata URL not allowed: {url}")
        session = self._get_session()
        try:
            timeout = aiohttp.ClientTimeout(total=self._request_timeout)
            async with session.get(url, timeout=timeout) as resp:
                if resp.status != 200:
                    raise MetadataFetchError(f"Metadata request to {url} returned HTTP {resp.status}")
                buffer = bytearray()
                async for chunk in resp.content.iter_chunked(64 * 1024):
                    buffer.extend(chunk)
                    if len(buffer) > self.max_download_bytes:
                        raise MetadataFetchError(
                            f"Metadata at {url} exceeds {self.max_download_bytes} bytes"
                        )
        except aiohttp.ClientError as exc:
            raise MetadataFetchError(f"Metadata request to {url} failed: {exc}") from exc
        try:
            return json.loads(bytes(buffer).decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise MetadataFetchError(f"Metadata at {url} is not valid JSON") from exc

    def is_allowed_url(self, url: str) -> bool:
        if not url:
            return False
        parsed = urlparse(url)
        if parsed.scheme not in {"http", "https"}:
            return False
        host = (parsed.hostname or "").lower()
        if not host:
            return False
        if self.allowed_hosts and host not in self.allowed_hosts:
            return False
        return True

    def _get_session(self) -> aiohttp.ClientSession:
        if not self._session or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._session_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
