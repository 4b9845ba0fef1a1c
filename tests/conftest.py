"""Shared fixtures for ARK CLI tests."""

from __future__ import annotations
from typing import Any
import pytest
from ark_cli.marketplace import MarketplaceManifest


@pytest.fixture()
def manifest_payload() -> dict[str, Any]:
    return {
        "version": "1.0.0",
        "marketplace": "ARK Marketplace",
        "items": [
            {
                "name": "Test Service",
                "description": "Service with explicit deployment hints",
                "ark": {
                    "chartPath": "oci://registry.test/charts/test-service",
                    "namespace": "test-ns",
                    "helmReleaseName": "test-release",
                    "installArgs": ["--wait"],
                    "k8sServiceName": "test-svc",
                    "k8sServicePort": 8080,
                    "k8sPortForwardLocalPort": 18080,
                    "k8sDeploymentName": "test-deploy",
                    "k8sDevDeploymentName": "test-deploy-dev",
                },
            },
            {
                "name": "Minimal Service",
                "description": "Service relying on defaults",
                "ark": {},
            },
            {
                "name": "Docs Only",
                "description": "Listed without a deployment target",
            },
        ],
    }


@pytest.fixture()
def manifest(manifest_payload: dict[str, Any]) -> MarketplaceManifest:
    return MarketplaceManifest.model_validate(manifest_payload)
