import asyncio
from typing import Dict, List

import pytest
from _pytest.monkeypatch import MonkeyPatch

from event_geolocation.geolocation.v1.batch_resolver import BatchResolver
from event_geolocation.geolocation.v1.cache.geocode_cache import GeocodeCache
from event_geolocation.geolocation.v1.geocode_resolver import GeocodeResolver
from event_geolocation.geolocation.v1.geocoding_errors import (
    BatchValidationError,
    GeocodingErrorKind,
    ProviderError,
)
from event_geolocation.geolocation.v1.providers.mock_geocoding_provider import (
    MockGeocodingProvider,
)
from event_geolocation.geolocation.v1.structures.batch_outcome import FailedAddress
from event_geolocation.geolocation.v1.structures.provider_candidate import (
    ProviderCandidate,
)
from event_geolocation.geolocation.v1.structures.resolved_location import (
    ResolvedLocation,
)


def make_batch_resolver(
    provider: MockGeocodingProvider, max_batch_size: int = 100, concurrency: int = 5
) -> BatchResolver:
    return BatchResolver(
        resolver=GeocodeResolver(cache=GeocodeCache(), provider=provider),
        concurrency=concurrency,
        max_batch_size=max_batch_size,
        group_delay_seconds=0,
    )


def numbered_provider(count: int, delay_seconds: float = 0) -> MockGeocodingProvider:
    candidates: Dict[str, List[ProviderCandidate]] = {
        f"address {i}": [
            ProviderCandidate(formatted_address=f"Address {i}", lat=i % 90, lng=i % 180)
        ]
        for i in range(count)
    }
    return MockGeocodingProvider(candidates=candidates, delay_seconds=delay_seconds)


@pytest.mark.asyncio
async def test_resolved_and_failed_partition_the_input() -> None:
    provider = numbered_provider(12)
    addresses = [f"address {i}" for i in range(12)] + ["unknown 1", "unknown 2", "  "]

    outcome = await make_batch_resolver(provider).resolve_many_async(addresses)

    assert outcome.resolved_count == 12
    assert outcome.failed_count == 3
    assert set(outcome.resolved) | set(outcome.failed) == set(addresses)
    assert not set(outcome.resolved) & set(outcome.failed)
    assert outcome.failed["unknown 1"].kind == GeocodingErrorKind.NOT_FOUND
    assert outcome.failed["  "].kind == GeocodingErrorKind.INVALID_INPUT


@pytest.mark.asyncio
async def test_duplicates_cost_one_lookup(mock_provider: MockGeocodingProvider) -> None:
    addresses = ["Paris", "Los Angeles", "Paris", "Paris", "Los Angeles"]

    outcome = await make_batch_resolver(mock_provider).resolve_many_async(addresses)

    assert sorted(mock_provider.calls) == ["Los Angeles", "Paris"]
    assert list(outcome.resolved.keys()) == ["Paris", "Los Angeles"]

    expanded = outcome.expand(addresses)
    assert len(expanded) == len(addresses)
    assert all(isinstance(r, ResolvedLocation) for r in expanded)
    assert expanded[0] == expanded[2] == expanded[3]


@pytest.mark.asyncio
async def test_one_failure_does_not_affect_others(
    mock_provider: MockGeocodingProvider,
) -> None:
    mock_provider.errors["Los Angeles"] = ProviderError(
        "Geocoding API error: 503", "Los Angeles"
    )

    outcome = await make_batch_resolver(mock_provider).resolve_many_async(
        ["Paris", "Los Angeles", "San Francisco"]
    )

    assert set(outcome.resolved) == {"Paris", "San Francisco"}
    failed = outcome.result_for("Los Angeles")
    assert isinstance(failed, FailedAddress)
    assert failed.kind == GeocodingErrorKind.PROVIDER_ERROR
    assert failed.message == "Geocoding API error: 503"


@pytest.mark.asyncio
async def test_unexpected_exception_is_reported_per_address(
    mock_provider: MockGeocodingProvider,
) -> None:
    class ExplodingProvider(MockGeocodingProvider):
        async def lookup_async(self, address: str) -> List[ProviderCandidate]:
            if address == "boom":
                raise RuntimeError("boom")
            return await super().lookup_async(address)

    provider = ExplodingProvider(candidates=mock_provider.candidates)

    outcome = await make_batch_resolver(provider).resolve_many_async(["boom", "Paris"])

    assert "Paris" in outcome.resolved
    assert outcome.failed["boom"].message == "boom"


@pytest.mark.asyncio
async def test_concurrency_limit_is_respected() -> None:
    provider = numbered_provider(20, delay_seconds=0.01)

    outcome = await make_batch_resolver(provider, concurrency=3).resolve_many_async(
        [f"address {i}" for i in range(20)]
    )

    assert outcome.resolved_count == 20
    assert 1 < provider.max_in_flight <= 3


@pytest.mark.asyncio
async def test_concurrency_argument_overrides_default() -> None:
    provider = numbered_provider(10, delay_seconds=0.01)

    await make_batch_resolver(provider, concurrency=5).resolve_many_async(
        [f"address {i}" for i in range(10)], concurrency=1
    )

    assert provider.max_in_flight == 1


@pytest.mark.asyncio
async def test_empty_batch_is_rejected(mock_provider: MockGeocodingProvider) -> None:
    with pytest.raises(BatchValidationError) as e:
        await make_batch_resolver(mock_provider).resolve_many_async([])

    assert e.value.kind == GeocodingErrorKind.VALIDATION_ERROR
    assert mock_provider.call_count == 0


@pytest.mark.asyncio
async def test_oversized_batch_is_rejected() -> None:
    provider = numbered_provider(11)

    with pytest.raises(BatchValidationError):
        await make_batch_resolver(provider, max_batch_size=10).resolve_many_async(
            [f"address {i}" for i in range(11)]
        )

    assert provider.call_count == 0


@pytest.mark.asyncio
async def test_batch_at_maximum_size_is_accepted() -> None:
    provider = numbered_provider(10)

    outcome = await make_batch_resolver(provider, max_batch_size=10).resolve_many_async(
        [f"address {i}" for i in range(10)]
    )

    assert outcome.resolved_count == 10


@pytest.mark.asyncio
async def test_invalid_provider_coordinates_fail_only_that_address() -> None:
    provider = MockGeocodingProvider(
        candidates={
            "Broken": [ProviderCandidate(formatted_address="Broken", lat=91, lng=0)],
            "Fine": [ProviderCandidate(formatted_address="Fine", lat=1, lng=2)],
        }
    )

    outcome = await make_batch_resolver(provider).resolve_many_async(["Broken", "Fine"])

    assert list(outcome.resolved) == ["Fine"]
    assert outcome.failed["Broken"].kind == GeocodingErrorKind.PROVIDER_ERROR


@pytest.mark.asyncio
async def test_result_for_unknown_address() -> None:
    outcome = await make_batch_resolver(numbered_provider(1)).resolve_many_async(
        ["address 0"]
    )

    with pytest.raises(KeyError):
        outcome.result_for("address 1")


@pytest.mark.asyncio
async def test_groups_are_paused_between_but_not_after(monkeypatch: MonkeyPatch) -> None:
    provider = numbered_provider(6)
    batch_resolver = BatchResolver(
        resolver=GeocodeResolver(cache=GeocodeCache(), provider=provider),
        concurrency=2,
        group_delay_seconds=0.05,
    )
    pauses: List[float] = []
    real_sleep = asyncio.sleep

    async def recording_sleep(delay: float) -> None:
        pauses.append(delay)
        await real_sleep(0)

    monkeypatch.setattr(asyncio, "sleep", recording_sleep)

    outcome = await batch_resolver.resolve_many_async(
        [f"address {i}" for i in range(6)]
    )

    assert outcome.resolved_count == 6
    # three groups of two, so two pauses
    assert pauses == [0.05, 0.05]


@pytest.mark.asyncio
async def test_single_group_is_not_paused(monkeypatch: MonkeyPatch) -> None:
    provider = numbered_provider(2)
    batch_resolver = BatchResolver(
        resolver=GeocodeResolver(cache=GeocodeCache(), provider=provider),
        concurrency=2,
        group_delay_seconds=0.05,
    )
    pauses: List[float] = []
    real_sleep = asyncio.sleep

    async def recording_sleep(delay: float) -> None:
        pauses.append(delay)
        await real_sleep(0)

    monkeypatch.setattr(asyncio, "sleep", recording_sleep)

    await batch_resolver.resolve_many_async(["address 0", "address 1"])

    assert pauses == []


@pytest.mark.asyncio
async def test_concurrency_below_one_is_clamped_to_one() -> None:
    provider = numbered_provider(6, delay_seconds=0.01)

    outcome = await make_batch_resolver(provider, concurrency=5).resolve_many_async(
        [f"address {i}" for i in range(6)], concurrency=0
    )

    assert outcome.resolved_count == 6
    assert provider.max_in_flight == 1
