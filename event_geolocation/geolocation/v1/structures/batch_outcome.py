import dataclasses
from typing import Dict, List, Union

from event_geolocation.geolocation.v1.geocoding_errors import GeocodingErrorKind
from event_geolocation.geolocation.v1.structures.resolved_location import (
    ResolvedLocation,
)


@dataclasses.dataclass(frozen=True)
class FailedAddress:
    """
    An address from a batch that could not be resolved
    """

    address: str
    """the address as submitted"""
    kind: GeocodingErrorKind
    """category of the failure"""
    message: str
    """human readable error message"""


@dataclasses.dataclass
class BatchOutcome:
    """
    Result of one batch resolution.  Every distinct input address is a key of exactly one of
    resolved or failed
    """

    resolved: Dict[str, ResolvedLocation] = dataclasses.field(default_factory=dict)
    """address -> location for the addresses that resolved"""
    failed: Dict[str, FailedAddress] = dataclasses.field(default_factory=dict)
    """address -> failure record for the addresses that did not"""

    @property
    def resolved_count(self) -> int:
        return len(self.resolved)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def addresses(self) -> List[str]:
        return list(self.resolved.keys()) + list(self.failed.keys())

    def result_for(self, address: str) -> Union[ResolvedLocation, FailedAddress]:
        if address in self.resolved:
            return self.resolved[address]
        try:
            return self.failed[address]
        except KeyError:
            raise KeyError(f"{address!r} was not part of this batch")

    def expand(
        self, addresses: List[str]
    ) -> List[Union[ResolvedLocation, FailedAddress]]:
        """
        Expands the per-address results back over a list that may contain duplicates,
        keeping positional correspondence with it

        :param addresses: the original (possibly duplicated) list of addresses
        :return: one result per entry of addresses
        """
        return [self.result_for(a) for a in addresses]
