"""Remote ``marketplace.json`` retrieval with a short-lived cache."""

from __future__ import annotations
import logging
import time
from collections.abc import Callable
import httpx
from pydantic import ValidationError
from ark_cli.marketplace.catalog import MARKETPLACE_JSON_URL
from ark_cli.marketplace.models import MarketplaceManifest


logger = logging.getLogger(__name__)

MANIFEST_CACHE_TTL_SECONDS = 5 * 60
MANIFEST_REQUEST_TIMEOUT_SECONDS = 10.0


class ManifestFetchError(RuntimeError):
    """Raised when the marketplace manifest cannot be retrieved or decoded."""

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: int | None = None,
    ) -> None:
        """Initialise the error with the request URL and optional status."""
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ManifestFetcher:
    """Fetch the marketplace manifest and cache it for ``ttl_seconds``."""

    def __init__(
        self,
        *,
        url: str = MARKETPLACE_JSON_URL,
        ttl_seconds: float = MANIFEST_CACHE_TTL_SECONDS,
        timeout: float = MANIFEST_REQUEST_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Create a fetcher for ``url`` with an empty cache."""
        self.url = url
        self.ttl_seconds = ttl_seconds
        self.timeout = timeout
        self._clock = clock
        self._cached_manifest: MarketplaceManifest | None = None
        self._cache_timestamp: float | None = None

    @property
    def cached_manifest(self) -> MarketplaceManifest | None:
        """Return the last fetched manifest, fresh or not."""
        return self._cached_manifest

    def cache_age(self) -> float | None:
        """Return seconds since the cached manifest was fetched."""
        if self._cache_timestamp is None:
            return None
        return self._clock() - self._cache_timestamp

    def clear_cache(self) -> None:
        """Discard the cached manifest and its timestamp."""
        self._cached_manifest = None
        self._cache_timestamp = None

    def _is_fresh(self) -> bool:
        age = self.cache_age()
        return (
            self._cached_manifest is not None
            and age is not None
            and age < self.ttl_seconds
        )

    async def load(self) -> MarketplaceManifest:
        """Request and decode the manifest, raising on any failure."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=True
            ) as client:
                response = await client.get(
                    self.url, headers={"Accept": "application/json"}
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            msg = f"Marketplace manifest request failed with status {status}"
            raise ManifestFetchError(msg, url=self.url, status_code=status) from exc
        except httpx.HTTPError as exc:
            msg = f"Unable to reach marketplace manifest: {exc}"
            raise ManifestFetchError(msg, url=self.url) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            msg = "Marketplace manifest is not valid JSON"
            raise ManifestFetchError(
                msg, url=self.url, status_code=response.status_code
            ) from exc

        try:
            return MarketplaceManifest.model_validate(payload)
        except ValidationError as exc:
            msg = "Marketplace manifest does not match the expected shape"
            raise ManifestFetchError(
                msg, url=self.url, status_code=response.status_code
            ) from exc

    async def fetch(self, force_refresh: bool = False) -> MarketplaceManifest | None:
        """Return the manifest, or ``None`` when it cannot be retrieved."""
        if not force_refresh and self._is_fresh():
            return self._cached_manifest

        now = self._clock()
        try:
            manifest = await self.load()
        except ManifestFetchError as exc:
            logger.warning(
                "Marketplace manifest unavailable from %s: %s", exc.url, exc
            )
            return None

        self._cached_manifest = manifest
        self._cache_timestamp = now
        logger.debug(
            "Fetched marketplace manifest version %s with %d items",
            manifest.version,
            len(manifest.items),
        )
        return manifest


__all__ = [
    "MANIFEST_CACHE_TTL_SECONDS",
    "MANIFEST_REQUEST_TIMEOUT_SECONDS",
    "ManifestFetchError",
    "ManifestFetcher",
]
