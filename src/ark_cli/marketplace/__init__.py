"""Marketplace catalog for the ARK command line tool.

Services are resolved from the remote ``marketplace.json`` manifest when it is
reachable and from a small built-in catalog otherwise.
"""

from ark_cli.marketplace.catalog import (
    FALLBACK_MARKETPLACE_SERVICES,
    MARKETPLACE_JSON_URL,
    MARKETPLACE_REGISTRY,
    MARKETPLACE_REPO_URL,
    extract_marketplace_service_name,
    is_marketplace_service,
    marketplace_service_path,
)
from ark_cli.marketplace.fetcher import ManifestFetcher, ManifestFetchError
from ark_cli.marketplace.mapper import map_item_to_service, sanitize_service_name
from ark_cli.marketplace.models import (
    ArkDeploymentHints,
    MarketplaceItem,
    MarketplaceManifest,
    ServiceCollection,
    ServiceRecord,
)
from ark_cli.marketplace.services import (
    FallbackReason,
    MarketplaceClient,
    services_from_manifest,
)


__all__ = [
    # Catalog
    "FALLBACK_MARKETPLACE_SERVICES",
    "MARKETPLACE_JSON_URL",
    "MARKETPLACE_REGISTRY",
    "MARKETPLACE_REPO_URL",
    "extract_marketplace_service_name",
    "is_marketplace_service",
    "marketplace_service_path",
    # Models
    "ArkDeploymentHints",
    "MarketplaceItem",
    "MarketplaceManifest",
    "ServiceCollection",
    "ServiceRecord",
    # Resolution
    "FallbackReason",
    "ManifestFetchError",
    "ManifestFetcher",
    "MarketplaceClient",
    "map_item_to_service",
    "sanitize_service_name",
    "services_from_manifest",
]
