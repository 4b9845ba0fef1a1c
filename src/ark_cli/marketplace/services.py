"""Marketplace service resolution with manifest and fallback sources."""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Literal
from ark_cli.marketplace.catalog import (
    FALLBACK_MARKETPLACE_SERVICES,
    MARKETPLACE_REGISTRY,
)
from ark_cli.marketplace.fetcher import ManifestFetcher
from ark_cli.marketplace.mapper import map_item_to_service
from ark_cli.marketplace.models import (
    MarketplaceManifest,
    ServiceCollection,
    ServiceRecord,
)


if TYPE_CHECKING:
    from ark_cli.config import MarketplaceSettings


logger = logging.getLogger(__name__)

ServiceSource = Literal["manifest", "fallback"]
FallbackReason = Literal["unavailable", "no-installable-items"]


def services_from_manifest(
    manifest: MarketplaceManifest | None,
    registry: str = MARKETPLACE_REGISTRY,
) -> dict[str, ServiceRecord] | None:
    """Map installable manifest items into a collection keyed by name.

    Items without ``ark`` hints, or whose name has no slug characters, are
    skipped. Later items replace earlier ones sharing the same sanitized name.
    Returns ``None`` when nothing qualifies.
    """
    if manifest is None or not manifest.items:
        return None

    services: dict[str, ServiceRecord] = {}
    for item in manifest.items:
        if item.ark is None:
            logger.debug("Skipping marketplace item %r without ark hints", item.name)
            continue
        service = map_item_to_service(item, registry)
        if not service.name:
            logger.debug("Skipping marketplace item %r with no usable name", item.name)
            continue
        services[service.name] = service

    return services or None


class MarketplaceClient:
    """Resolve marketplace services, caching the result for the session.

    The resolved collection has no expiry of its own; only a forced refresh
    or :meth:`clear_cache` discards it. Manifest freshness is governed by the
    wrapped :class:`ManifestFetcher`.
    """

    def __init__(
        self,
        fetcher: ManifestFetcher | None = None,
        *,
        registry: str = MARKETPLACE_REGISTRY,
    ) -> None:
        """Create a client with empty caches."""
        self.fetcher = fetcher or ManifestFetcher()
        self.registry = registry
        self._cached_services: ServiceCollection | None = None
        self.source: ServiceSource | None = None
        self.fallback_reason: FallbackReason | None = None
        self._manifest: MarketplaceManifest | None = None

    @classmethod
    def from_settings(cls, settings: MarketplaceSettings) -> MarketplaceClient:
        """Build a client wired to the configured manifest and registry."""
        fetcher = ManifestFetcher(
            url=settings.manifest_url,
            ttl_seconds=settings.cache_ttl_seconds,
            timeout=settings.timeout_seconds,
        )
        return cls(fetcher, registry=settings.registry)

    @property
    def manifest(self) -> MarketplaceManifest | None:
        """Return the manifest behind the last resolution, if one was fetched."""
        return self._manifest

    def clear_cache(self) -> None:
        """Forget the resolved service collection."""
        self._cached_services = None
        self.source = None
        self.fallback_reason = None
        self._manifest = None

    def reset(self) -> None:
        """Clear both the resolved services and the manifest cache."""
        self.clear_cache()
        self.fetcher.clear_cache()

    async def get_all(self, force_refresh: bool = False) -> ServiceCollection:
        """Return all marketplace services, falling back to the built-ins."""
        if force_refresh:
            self.clear_cache()

        if self._cached_services is not None:
            return self._cached_services

        manifest = await self.fetcher.fetch(force_refresh)
        self._manifest = manifest
        services = services_from_manifest(manifest, self.registry)
        if services is not None:
            self._cached_services = services
            self.source = "manifest"
            self.fallback_reason = None
            return services

        self.fallback_reason = (
            "unavailable" if manifest is None else "no-installable-items"
        )
        logger.info("Using fallback marketplace services (%s)", self.fallback_reason)
        self._cached_services = FALLBACK_MARKETPLACE_SERVICES
        self.source = "fallback"
        return FALLBACK_MARKETPLACE_SERVICES

    async def get_one(self, name: str) -> ServiceRecord | None:
        """Return the service registered as ``name`` if it exists."""
        services = await self.get_all()
        return services.get(name)

    def get_all_sync(self) -> ServiceCollection:
        """Return the built-in services without touching caches or network."""
        return FALLBACK_MARKETPLACE_SERVICES

    def get_one_sync(self, name: str) -> ServiceRecord | None:
        """Return a built-in service by ``name`` without network access."""
        return FALLBACK_MARKETPLACE_SERVICES.get(name)


__all__ = [
    "FallbackReason",
    "MarketplaceClient",
    "ServiceSource",
    "services_from_manifest",
]
