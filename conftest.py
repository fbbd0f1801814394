import os

from typing import Generator, Dict, List

import boto3
import pytest
from _pytest.fixtures import FixtureFunctionMarker
from botocore.client import BaseClient
from moto import mock_aws

from event_geolocation.geolocation.v1.geocoding_config import GeocodingConfig
from event_geolocation.geolocation.v1.providers.mock_geocoding_provider import (
    MockGeocodingProvider,
)
from event_geolocation.geolocation.v1.structures.provider_candidate import (
    ProviderCandidate,
)
from event_geolocation.geolocation.v1.structures.resolved_location import (
    AddressComponents,
)


@pytest.fixture(scope="function")
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_REGION"] = "us-east-1"


@pytest.fixture(scope="function")
def ssm_mock(
    aws_credentials: FixtureFunctionMarker,
) -> Generator[BaseClient, None, None]:
    with mock_aws():
        yield boto3.client("ssm", region_name="us-east-1")


@pytest.fixture(scope="function")
def known_candidates() -> Dict[str, List[ProviderCandidate]]:
    return {
        "Paris": [
            ProviderCandidate(
                formatted_address="Paris, France",
                lat=48.8566,
                lng=2.3522,
                place_id="place-paris",
                components=AddressComponents(
                    country="France", state="IDF", city="Paris"
                ),
            )
        ],
        "San Francisco": [
            ProviderCandidate(
                formatted_address="San Francisco, CA, USA",
                lat=37.7749,
                lng=-122.4194,
                place_id="place-sf",
            )
        ],
        "Los Angeles": [
            ProviderCandidate(
                formatted_address="Los Angeles, CA, USA",
                lat=34.0522,
                lng=-118.2437,
                place_id="place-la",
            )
        ],
    }


@pytest.fixture(scope="function")
def mock_provider(
    known_candidates: Dict[str, List[ProviderCandidate]],
) -> MockGeocodingProvider:
    return MockGeocodingProvider(candidates=known_candidates)


@pytest.fixture(scope="function")
def geocoding_config() -> GeocodingConfig:
    # no pause between batch groups so tests stay fast
    return GeocodingConfig(
        provider_name="mock",
        batch_group_delay_seconds=0,
        provider_timeout_seconds=1,
    )
