"""Shared fixtures for CLI tests."""

from __future__ import annotations
import pytest
from typer.testing import CliRunner


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def env() -> dict[str, str]:
    return {
        "ARK_MARKETPLACE_URL": "http://marketplace.test/marketplace.json",
        "ARK_MARKETPLACE_REGISTRY": "oci://registry.test/charts",
        "NO_COLOR": "1",
        "COLUMNS": "200",
    }
