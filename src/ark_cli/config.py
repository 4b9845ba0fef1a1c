"""Runtime configuration helpers for the ARK CLI."""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from dynaconf import Dynaconf
from ark_cli.marketplace.catalog import MARKETPLACE_JSON_URL, MARKETPLACE_REGISTRY
from ark_cli.marketplace.fetcher import (
    MANIFEST_CACHE_TTL_SECONDS,
    MANIFEST_REQUEST_TIMEOUT_SECONDS,
)


_DEFAULTS: dict[str, object] = {
    "MARKETPLACE_URL": MARKETPLACE_JSON_URL,
    "MARKETPLACE_REGISTRY": MARKETPLACE_REGISTRY,
    "MARKETPLACE_CACHE_TTL_SECONDS": MANIFEST_CACHE_TTL_SECONDS,
    "MARKETPLACE_TIMEOUT_SECONDS": MANIFEST_REQUEST_TIMEOUT_SECONDS,
}


@dataclass(frozen=True, slots=True)
class MarketplaceSettings:
    """Resolved marketplace configuration."""

    manifest_url: str
    registry: str
    cache_ttl_seconds: float
    timeout_seconds: float


def _build_loader() -> Dynaconf:
    """Create a Dynaconf loader wired to ``ARK_`` environment variables."""
    return Dynaconf(
        envvar_prefix="ARK",
        settings_files=[],
        load_dotenv=False,
        environments=False,
    )


def _positive_number(source: Dynaconf, key: str) -> float:
    raw = source.get(key, _DEFAULTS[key])
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        msg = f"ARK_{key} must be a number."
        raise ValueError(msg) from exc
    if value <= 0:
        msg = f"ARK_{key} must be greater than zero."
        raise ValueError(msg)
    return value


def _normalize_settings(source: Dynaconf) -> MarketplaceSettings:
    """Validate raw settings and fill in defaults."""
    manifest_url = source.get("MARKETPLACE_URL") or _DEFAULTS["MARKETPLACE_URL"]
    registry = source.get("MARKETPLACE_REGISTRY") or _DEFAULTS["MARKETPLACE_REGISTRY"]
    return MarketplaceSettings(
        manifest_url=str(manifest_url),
        registry=str(registry).rstrip("/"),
        cache_ttl_seconds=_positive_number(source, "MARKETPLACE_CACHE_TTL_SECONDS"),
        timeout_seconds=_positive_number(source, "MARKETPLACE_TIMEOUT_SECONDS"),
    )


@lru_cache(maxsize=1)
def _load_settings() -> MarketplaceSettings:
    """Load settings once and cache the normalized result."""
    return _normalize_settings(_build_loader())


def get_settings(*, refresh: bool = False) -> MarketplaceSettings:
    """Return the cached settings, reloading them if requested."""
    if refresh:
        _load_settings.cache_clear()
    return _load_settings()


__all__ = ["MarketplaceSettings", "get_settings"]
