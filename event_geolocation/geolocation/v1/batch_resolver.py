import asyncio
from typing import List, Optional, Tuple, Union

import structlog
from helix_fhir_client_sdk.utilities.list_chunker import ListChunker

from event_geolocation.geolocation.v1.geocode_resolver import GeocodeResolver
from event_geolocation.geolocation.v1.geocoding_errors import (
    BatchValidationError,
    GeocodingError,
    GeocodingErrorKind,
)
from event_geolocation.geolocation.v1.structures.batch_outcome import (
    BatchOutcome,
    FailedAddress,
)
from event_geolocation.geolocation.v1.structures.resolved_location import (
    ResolvedLocation,
)

logger = structlog.get_logger(__file__)


class BatchResolver:
    def __init__(
        self,
        *,
        resolver: GeocodeResolver,
        concurrency: int = 5,
        max_batch_size: int = 100,
        group_delay_seconds: float = 0.1,
    ) -> None:
        """
        Resolves many addresses, a fixed size group at a time, without letting one failure
        affect the others

        :param resolver: resolver used for each address
        :param concurrency: default number of addresses in flight at once
        :param max_batch_size: largest accepted list of addresses
        :param group_delay_seconds: pause between groups to stay under provider rate limits
        """
        self.resolver: GeocodeResolver = resolver
        self.concurrency: int = concurrency
        self.max_batch_size: int = max_batch_size
        self.group_delay_seconds: float = group_delay_seconds

    async def resolve_many_async(
        self, addresses: List[str], concurrency: Optional[int] = None
    ) -> BatchOutcome:
        """
        Resolves every distinct address once.  Raises BatchValidationError, before any address is
        looked up, for an empty or oversized list; any other failure is reported per address

        :param addresses: addresses, duplicates allowed
        :param concurrency: overrides the default number of addresses in flight at once
        :return: outcome keyed by distinct address
        """
        if not addresses:
            raise BatchValidationError("addresses must be a non-empty list")
        if len(addresses) > self.max_batch_size:
            raise BatchValidationError(
                f"Maximum {self.max_batch_size} addresses per batch request, got {len(addresses)}"
            )

        group_size: int = max(
            1, self.concurrency if concurrency is None else concurrency
        )
        # dict keeps the first-seen order of the addresses
        unique_addresses: List[str] = list(dict.fromkeys(addresses))
        groups: List[List[str]] = list(
            ListChunker().divide_into_chunks(unique_addresses, group_size)
        )

        outcome = BatchOutcome()
        for group_index, group in enumerate(groups):
            results: List[Tuple[str, Union[ResolvedLocation, FailedAddress]]] = (
                await asyncio.gather(*[self._resolve_one_async(a) for a in group])
            )
            for address, result in results:
                if isinstance(result, FailedAddress):
                    outcome.failed[address] = result
                else:
                    outcome.resolved[address] = result

            if group_index < len(groups) - 1 and self.group_delay_seconds > 0:
                await asyncio.sleep(self.group_delay_seconds)

        if outcome.failed:
            logger.warning(
                f"{outcome.failed_count} addresses failed to geocode",
                failed={a: f.message for a, f in outcome.failed.items()},
            )
        logger.info(
            "Batch geocoding finished",
            requested=len(addresses),
            distinct=len(unique_addresses),
            resolved=outcome.resolved_count,
            failed=outcome.failed_count,
        )
        return outcome

    async def _resolve_one_async(
        self, address: str
    ) -> Tuple[str, Union[ResolvedLocation, FailedAddress]]:
        try:
            return address, await self.resolver.resolve_async(address)
        except GeocodingError as e:
            return address, FailedAddress(
                address=address, kind=e.kind, message=e.message
            )
        except Exception as e:
            logger.exception(f"Unexpected error geocoding '{address}'", address=address)
            return address, FailedAddress(
                address=address,
                kind=GeocodingErrorKind.PROVIDER_ERROR,
                message=str(e) or e.__class__.__name__,
            )
