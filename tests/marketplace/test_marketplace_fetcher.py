"""Tests for the marketplace manifest fetcher."""

from __future__ import annotations
from typing import Any
import httpx
import pytest
import respx
from ark_cli.marketplace import (
    MARKETPLACE_JSON_URL,
    ManifestFetcher,
    ManifestFetchError,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def fetcher(clock: FakeClock) -> ManifestFetcher:
    return ManifestFetcher(clock=clock)


@pytest.mark.asyncio
async def test_fetch_returns_manifest(
    fetcher: ManifestFetcher, manifest_payload: dict[str, Any]
) -> None:
    with respx.mock(assert_all_called=True) as router:
        route = router.get(MARKETPLACE_JSON_URL).mock(
            return_value=httpx.Response(200, json=manifest_payload)
        )
        manifest = await fetcher.fetch()

    assert manifest is not None
    assert manifest.version == "1.0.0"
    assert manifest.marketplace == "ARK Marketplace"
    assert [item.name for item in manifest.items] == [
        "Test Service",
        "Minimal Service",
        "Docs Only",
    ]
    request = route.calls.last.request
    assert request.headers["Accept"] == "application/json"
    assert fetcher.cached_manifest is manifest


@pytest.mark.asyncio
async def test_fetch_uses_cache_within_ttl(
    fetcher: ManifestFetcher, clock: FakeClock, manifest_payload: dict[str, Any]
) -> None:
    with respx.mock() as router:
        route = router.get(MARKETPLACE_JSON_URL).mock(
            return_value=httpx.Response(200, json=manifest_payload)
        )
        first = await fetcher.fetch()
        clock.now += 4 * 60 + 59
        second = await fetcher.fetch()

    assert route.call_count == 1
    assert second is first


@pytest.mark.asyncio
async def test_fetch_refetches_after_ttl(
    fetcher: ManifestFetcher, clock: FakeClock, manifest_payload: dict[str, Any]
) -> None:
    with respx.mock() as router:
        route = router.get(MARKETPLACE_JSON_URL).mock(
            return_value=httpx.Response(200, json=manifest_payload)
        )
        await fetcher.fetch()
        clock.now += 5 * 60 + 1
        await fetcher.fetch()

    assert route.call_count == 2
    assert fetcher.cache_age() == 0


@pytest.mark.asyncio
async def test_fetch_force_refresh_bypasses_cache(
    fetcher: ManifestFetcher, manifest_payload: dict[str, Any]
) -> None:
    with respx.mock() as router:
        route = router.get(MARKETPLACE_JSON_URL).mock(
            return_value=httpx.Response(200, json=manifest_payload)
        )
        await fetcher.fetch()
        await fetcher.fetch(force_refresh=True)

    assert route.call_count == 2


@pytest.mark.asyncio
async def test_clear_cache_discards_manifest(
    fetcher: ManifestFetcher, manifest_payload: dict[str, Any]
) -> None:
    with respx.mock() as router:
        route = router.get(MARKETPLACE_JSON_URL).mock(
            return_value=httpx.Response(200, json=manifest_payload)
        )
        await fetcher.fetch()
        fetcher.clear_cache()
        assert fetcher.cached_manifest is None
        assert fetcher.cache_age() is None
        await fetcher.fetch()

    assert route.call_count == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("connection refused"),
        httpx.ConnectTimeout("timed out"),
        httpx.ReadTimeout("timed out"),
    ],
)
async def test_fetch_returns_none_on_network_error(
    fetcher: ManifestFetcher, error: Exception
) -> None:
    with respx.mock() as router:
        router.get(MARKETPLACE_JSON_URL).mock(side_effect=error)
        manifest = await fetcher.fetch()

    assert manifest is None
    assert fetcher.cached_manifest is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [404, 500, 503])
async def test_fetch_returns_none_on_error_status(
    fetcher: ManifestFetcher, status: int
) -> None:
    with respx.mock() as router:
        router.get(MARKETPLACE_JSON_URL).mock(return_value=httpx.Response(status))
        assert await fetcher.fetch() is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"items": "not-a-list"}),
    ],
)
async def test_fetch_returns_none_on_malformed_body(
    fetcher: ManifestFetcher, response: httpx.Response
) -> None:
    with respx.mock() as router:
        router.get(MARKETPLACE_JSON_URL).mock(return_value=response)
        assert await fetcher.fetch() is None


@pytest.mark.asyncio
async def test_fetch_drops_only_malformed_items(fetcher: ManifestFetcher) -> None:
    payload = {
        "version": "1.0.0",
        "items": [
            {"description": "missing name", "ark": {}},
            {"name": "Kept", "description": "valid", "ark": {}},
            {"name": "Bad Port", "description": "x", "ark": {"k8sServicePort": "x"}},
        ],
    }
    with respx.mock() as router:
        router.get(MARKETPLACE_JSON_URL).mock(
            return_value=httpx.Response(200, json=payload)
        )
        manifest = await fetcher.fetch()

    assert manifest is not None
    assert [item.name for item in manifest.items] == ["Kept"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "extra",
    [
        {"tags": None},
        {"version": 2},
        {"metadata": None},
        {"icon": None, "screenshots": None},
        {"support": "team@example.test", "displayName": 7},
    ],
)
async def test_fetch_tolerates_loose_presentation_fields(
    fetcher: ManifestFetcher, extra: dict[str, Any]
) -> None:
    payload = {
        "version": 3,
        "marketplace": None,
        "items": [
            {"name": "First", "description": "one", "ark": {}},
            {"name": "Second", "description": "two", "ark": {}, **extra},
        ],
    }
    with respx.mock() as router:
        router.get(MARKETPLACE_JSON_URL).mock(
            return_value=httpx.Response(200, json=payload)
        )
        manifest = await fetcher.fetch()

    assert manifest is not None
    assert [item.name for item in manifest.items] == ["First", "Second"]


@pytest.mark.asyncio
async def test_fetch_applies_default_timeout(
    manifest_payload: dict[str, Any],
) -> None:
    fetcher = ManifestFetcher()
    with respx.mock(assert_all_called=True) as router:
        route = router.get(MARKETPLACE_JSON_URL).mock(
            return_value=httpx.Response(200, json=manifest_payload)
        )
        await fetcher.fetch()

    timeout = route.calls.last.request.extensions["timeout"]
    assert timeout == {"connect": 10.0, "read": 10.0, "write": 10.0, "pool": 10.0}

@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_manifest(
    fetcher: ManifestFetcher, manifest_payload: dict[str, Any]
) -> None:
    with respx.mock() as router:
        router.get(MARKETPLACE_JSON_URL).mock(
            side_effect=[
                httpx.Response(200, json=manifest_payload),
                httpx.ConnectError("dns failure"),
            ]
        )
        first = await fetcher.fetch()
        refreshed = await fetcher.fetch(force_refresh=True)

    assert refreshed is None
    assert fetcher.cached_manifest is first


@pytest.mark.asyncio
async def test_load_raises_with_status_code(fetcher: ManifestFetcher) -> None:
    with respx.mock() as router:
        router.get(MARKETPLACE_JSON_URL).mock(return_value=httpx.Response(503))
        with pytest.raises(ManifestFetchError) as exc_info:
            await fetcher.load()

    assert exc_info.value.status_code == 503
    assert exc_info.value.url == MARKETPLACE_JSON_URL


@pytest.mark.asyncio
async def test_load_raises_without_status_on_network_error(
    fetcher: ManifestFetcher,
) -> None:
    with respx.mock() as router:
        router.get(MARKETPLACE_JSON_URL).mock(
            side_effect=httpx.ConnectError("refused")
        )
        with pytest.raises(ManifestFetchError, match="Unable to reach") as exc_info:
            await fetcher.load()

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_fetch_uses_configured_url(manifest_payload: dict[str, Any]) -> None:
    fetcher = ManifestFetcher(url="http://marketplace.test/marketplace.json")
    with respx.mock(assert_all_called=True) as router:
        router.get("http://marketplace.test/marketplace.json").mock(
            return_value=httpx.Response(200, json=manifest_payload)
        )
        manifest = await fetcher.fetch()

    assert manifest is not None


def test_manifest_fetch_error_attributes() -> None:
    error = ManifestFetchError("boom", url="http://x.test", status_code=500)

    assert str(error) == "boom"
    assert error.url == "http://x.test"
    assert error.status_code == 500
