"""Data models for the ARK marketplace manifest and normalized services."""

from __future__ import annotations
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel


logger = logging.getLogger(__name__)


class _ManifestModel(BaseModel):
    """Base model accepting the camelCase keys used by ``marketplace.json``."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ArkDeploymentHints(_ManifestModel):
    """Deployment hints carried under the ``ark`` key of a manifest item."""

    chart_path: str | None = None
    namespace: str | None = None
    helm_release_name: str | None = None
    install_args: list[str] | None = None
    # to_camel would yield "k8SServiceName", so these carry explicit aliases.
    k8s_service_name: str | None = Field(default=None, alias="k8sServiceName")
    k8s_service_port: int | None = Field(default=None, alias="k8sServicePort")
    k8s_port_forward_local_port: int | None = Field(
        default=None, alias="k8sPortForwardLocalPort"
    )
    k8s_deployment_name: str | None = Field(
        default=None, alias="k8sDeploymentName"
    )
    k8s_dev_deployment_name: str | None = Field(
        default=None, alias="k8sDevDeploymentName"
    )


class MarketplaceItem(_ManifestModel):
    """Single entry in the remote marketplace manifest.

    Only ``name``, ``description`` and the ``ark`` hints feed service mapping,
    so they are the only typed fields. Presentation metadata is kept as
    published, whatever its shape.
    """

    name: str
    description: str
    display_name: Any = None
    version: Any = None
    author: Any = None
    homepage: Any = None
    repository: Any = None
    license: Any = None
    tags: Any = None
    category: Any = None
    icon: Any = None
    screenshots: Any = None
    documentation: Any = None
    support: Any = None
    metadata: Any = None
    ark: ArkDeploymentHints | None = None


class MarketplaceManifest(_ManifestModel):
    """The ``marketplace.json`` document listing installable items."""

    version: Any = None
    marketplace: Any = None
    items: list[MarketplaceItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _drop_invalid_items(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        items: list[MarketplaceItem] = []
        for index, raw in enumerate(value):
            try:
                items.append(MarketplaceItem.model_validate(raw))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed marketplace item at index %d: %s",
                    index,
                    exc.errors(include_url=False),
                )
        return items


@dataclass(frozen=True, slots=True)
class ServiceRecord:
    """Normalized description of an installable marketplace service."""

    name: str
    description: str
    namespace: str
    helm_release_name: str
    chart_path: str
    install_args: tuple[str, ...] = field(default_factory=tuple)
    enabled: bool = True
    category: str = "marketplace"
    k8s_service_name: str | None = None
    k8s_service_port: int | None = None
    k8s_port_forward_local_port: int | None = None
    k8s_deployment_name: str | None = None
    k8s_dev_deployment_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation, omitting unset fields."""
        payload: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "enabled": self.enabled,
            "category": self.category,
            "namespace": self.namespace,
            "helm_release_name": self.helm_release_name,
            "chart_path": self.chart_path,
            "install_args": list(self.install_args),
        }
        optional = {
            "k8s_service_name": self.k8s_service_name,
            "k8s_service_port": self.k8s_service_port,
            "k8s_port_forward_local_port": self.k8s_port_forward_local_port,
            "k8s_deployment_name": self.k8s_deployment_name,
            "k8s_dev_deployment_name": self.k8s_dev_deployment_name,
        }
        payload.update(
            {key: value for key, value in optional.items() if value is not None}
        )
        return payload


ServiceCollection = Mapping[str, ServiceRecord]
"""Services keyed by their sanitized name."""


__all__ = [
    "ArkDeploymentHints",
    "MarketplaceItem",
    "MarketplaceManifest",
    "ServiceCollection",
    "ServiceRecord",
]
