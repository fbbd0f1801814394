from enum import Enum
from typing import Optional


class GeocodingErrorKind(Enum):
    INVALID_INPUT = "InvalidInput"
    PROVIDER_NOT_CONFIGURED = "ProviderNotConfigured"
    NOT_FOUND = "NotFound"
    PROVIDER_ERROR = "ProviderError"
    VALIDATION_ERROR = "ValidationError"


class GeocodingError(Exception):
    """
    Base class of every error raised while resolving addresses
    """

    kind: GeocodingErrorKind = GeocodingErrorKind.PROVIDER_ERROR

    def __init__(self, message: str, address: Optional[str] = None) -> None:
        self.message: str = message
        self.address: Optional[str] = address
        super().__init__(self.message)


class InvalidInputError(GeocodingError):
    """
    the caller passed an address that can never be resolved (empty, blank or not a string)
    """

    kind = GeocodingErrorKind.INVALID_INPUT


class ProviderNotConfiguredError(GeocodingError):
    """
    no credential is available for the geocoding provider.  This is a deployment defect, not a transient fault
    """

    kind = GeocodingErrorKind.PROVIDER_NOT_CONFIGURED

    def __init__(
        self,
        message: str = "Geocoding provider credential is not configured",
        address: Optional[str] = None,
    ) -> None:
        super().__init__(message, address)


class AddressNotFoundError(GeocodingError):
    """
    the provider answered but had no match for the address
    """

    kind = GeocodingErrorKind.NOT_FOUND

    def __init__(self, address: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"No results found for '{address}'", address)


class ProviderError(GeocodingError):
    """
    the provider call failed (http error, timeout, malformed payload).  Callers may retry these
    """

    kind = GeocodingErrorKind.PROVIDER_ERROR


class BatchValidationError(GeocodingError):
    """
    a whole batch was rejected before any address was resolved
    """

    kind = GeocodingErrorKind.VALIDATION_ERROR
