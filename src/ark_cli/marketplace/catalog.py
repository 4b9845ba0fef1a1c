"""Built-in marketplace catalog and install path conventions."""

from __future__ import annotations
from types import MappingProxyType
from ark_cli.marketplace.models import ServiceCollection, ServiceRecord


MARKETPLACE_REPO_URL = "https://github.com/mckinsey/agents-at-scale-marketplace"
MARKETPLACE_JSON_URL = f"{MARKETPLACE_REPO_URL}/raw/main/marketplace.json"
MARKETPLACE_REGISTRY = "oci://ghcr.io/mckinsey/agents-at-scale-marketplace/charts"
MARKETPLACE_SERVICE_PREFIX = "marketplace/services/"

DEFAULT_INSTALL_ARGS: tuple[str, ...] = ("--create-namespace",)


FALLBACK_MARKETPLACE_SERVICES: ServiceCollection = MappingProxyType(
    {
        "phoenix": ServiceRecord(
            name="phoenix",
            helm_release_name="phoenix",
            description=(
                "AI/ML observability and evaluation platform with "
                "OpenTelemetry integration"
            ),
            namespace="phoenix",
            chart_path=f"{MARKETPLACE_REGISTRY}/phoenix",
            install_args=DEFAULT_INSTALL_ARGS,
            k8s_service_name="phoenix",
            k8s_service_port=6006,
            k8s_deployment_name="phoenix",
        ),
        "langfuse": ServiceRecord(
            name="langfuse",
            helm_release_name="langfuse",
            description=(
                "Open-source LLM observability and analytics platform with "
                "session tracking"
            ),
            namespace="telemetry",
            chart_path=f"{MARKETPLACE_REGISTRY}/langfuse",
            install_args=DEFAULT_INSTALL_ARGS,
            k8s_service_name="langfuse",
            k8s_service_port=3000,
            k8s_deployment_name="langfuse-web",
        ),
    }
)
"""Services used when ``marketplace.json`` is unavailable."""


def is_marketplace_service(path: str) -> bool:
    """Return whether ``path`` points into the marketplace namespace."""
    return path.startswith(MARKETPLACE_SERVICE_PREFIX)


def extract_marketplace_service_name(path: str) -> str:
    """Strip the ``marketplace/services/`` prefix from ``path`` if present."""
    if is_marketplace_service(path):
        return path[len(MARKETPLACE_SERVICE_PREFIX) :]
    return path


def marketplace_service_path(name: str) -> str:
    """Return the install path presented to users for ``name``."""
    return f"{MARKETPLACE_SERVICE_PREFIX}{name}"


__all__ = [
    "DEFAULT_INSTALL_ARGS",
    "FALLBACK_MARKETPLACE_SERVICES",
    "MARKETPLACE_JSON_URL",
    "MARKETPLACE_REGISTRY",
    "MARKETPLACE_REPO_URL",
    "MARKETPLACE_SERVICE_PREFIX",
    "extract_marketplace_service_name",
    "is_marketplace_service",
    "marketplace_service_path",
]
