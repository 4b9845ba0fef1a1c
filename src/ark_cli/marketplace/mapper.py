"""Conversion of manifest items into normalized service records."""

from __future__ import annotations
import re
from ark_cli.marketplace.catalog import DEFAULT_INSTALL_ARGS, MARKETPLACE_REGISTRY
from ark_cli.marketplace.models import (
    ArkDeploymentHints,
    MarketplaceItem,
    ServiceRecord,
)


_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9-]")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")


def sanitize_service_name(name: str) -> str:
    """Return the lowercase slug used to key and install ``name``.

    >>> sanitize_service_name("Test Service 123!")
    'test-service-123'
    """
    slug = _INVALID_NAME_CHARS.sub("-", name.lower())
    return _EDGE_HYPHENS.sub("", slug)


def map_item_to_service(
    item: MarketplaceItem,
    registry: str = MARKETPLACE_REGISTRY,
) -> ServiceRecord:
    """Build a :class:`ServiceRecord` from ``item``, filling unset hints.

    Empty strings and empty lists in the ``ark`` hints count as unset.
    """
    service_name = sanitize_service_name(item.name)
    hints = item.ark or ArkDeploymentHints()

    return ServiceRecord(
        name=service_name,
        description=item.description,
        enabled=True,
        category="marketplace",
        namespace=hints.namespace or service_name,
        helm_release_name=hints.helm_release_name or service_name,
        chart_path=hints.chart_path or f"{registry}/{service_name}",
        install_args=tuple(hints.install_args or DEFAULT_INSTALL_ARGS),
        k8s_service_name=hints.k8s_service_name or service_name,
        k8s_service_port=hints.k8s_service_port,
        k8s_port_forward_local_port=hints.k8s_port_forward_local_port,
        k8s_deployment_name=hints.k8s_deployment_name or service_name,
        k8s_dev_deployment_name=hints.k8s_dev_deployment_name,
    )


__all__ = ["map_item_to_service", "sanitize_service_name"]
