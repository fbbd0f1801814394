import dataclasses
import os
from typing import Optional


@dataclasses.dataclass
class GeocodingConfig:
    """
    Tunable settings of the geocoding service.  Every value has a default and can be
    overridden by the embedding application or through environment variables
    """

    cache_ttl_seconds: float = 60 * 60
    """how long a resolved address stays in the cache"""
    cache_max_size: int = 1000
    """maximum number of cached addresses"""
    cache_sweep_interval_seconds: float = 5 * 60
    """interval of the optional background sweep of expired cache entries"""
    batch_concurrency: int = 5
    """number of addresses resolved at the same time in a batch"""
    batch_max_size: int = 100
    """largest list of addresses accepted by one batch call"""
    batch_group_delay_seconds: float = 0.1
    """pause between concurrent groups of a batch, to stay under provider rate limits"""
    provider_timeout_seconds: float = 10
    """timeout of a single provider call"""
    provider_name: str = "google"
    """name of the provider class to use, see GeocodingProviderFactory"""
    api_key: Optional[str] = None
    """provider credential"""
    api_key_ssm_path: Optional[str] = None
    """SSM parameter path the credential is read from when api_key is not set"""

    @classmethod
    def from_environment(cls) -> "GeocodingConfig":
        defaults = cls()
        return cls(
            cache_ttl_seconds=float(
                os.environ.get(
                    "GEOCODING_CACHE_TTL_SECONDS", defaults.cache_ttl_seconds
                )
            ),
            cache_max_size=int(
                os.environ.get("GEOCODING_CACHE_MAX_SIZE", defaults.cache_max_size)
            ),
            cache_sweep_interval_seconds=float(
                os.environ.get(
                    "GEOCODING_CACHE_SWEEP_INTERVAL_SECONDS",
                    defaults.cache_sweep_interval_seconds,
                )
            ),
            batch_concurrency=int(
                os.environ.get(
                    "GEOCODING_BATCH_CONCURRENCY", defaults.batch_concurrency
                )
            ),
            batch_max_size=int(
                os.environ.get("GEOCODING_BATCH_MAX_SIZE", defaults.batch_max_size)
            ),
            batch_group_delay_seconds=float(
                os.environ.get(
                    "GEOCODING_BATCH_GROUP_DELAY_SECONDS",
                    defaults.batch_group_delay_seconds,
                )
            ),
            provider_timeout_seconds=float(
                os.environ.get(
                    "GEOCODING_PROVIDER_TIMEOUT_SECONDS",
                    defaults.provider_timeout_seconds,
                )
            ),
            provider_name=os.environ.get("GEOCODING_PROVIDER", defaults.provider_name),
            api_key=os.environ.get("GOOGLE_MAPS_API_KEY") or None,
            api_key_ssm_path=os.environ.get("GOOGLE_MAPS_API_KEY_SSM_PATH") or None,
        )
