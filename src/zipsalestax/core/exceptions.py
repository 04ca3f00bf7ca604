"""ZIP Sales Tax exception hierarchy."""

from __future__ import annotations


class ZipSalesTaxError(Exception):
    """Base exception for all ZIP Sales Tax errors."""


class RateLookupError(ZipSalesTaxError):
    """A tax rate could not be resolved for a postal code.

    Every subclass is terminal for the current resolution attempt. The
    checkout path treats all of them as "no rate available".
    """


class InvalidInput(RateLookupError):
    """Postal code has fewer than 5 digits."""

    def __init__(self, postcode: str) -> None:
        self.postcode = postcode
        super().__init__(f"Invalid ZIP code {postcode!r}: expected at least 5 digits")


class MissingCredentials(RateLookupError):
    """RapidAPI key or host is not configured."""

    def __init__(self, message: str = "Missing RapidAPI key/host.") -> None:
        super().__init__(message)


class NetworkError(RateLookupError):
    """Transport-level failure: DNS, TLS, timeout, connection refused."""

    def __init__(self, message: str) -> None:
        super().__init__(f"RapidAPI request failed: {message}")


class AuthError(RateLookupError):
    """Upstream rejected the credentials or subscription (HTTP 401/403)."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"RapidAPI auth/subscription error HTTP {status_code}.")


class UpstreamError(RateLookupError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"RapidAPI non-2xx: HTTP {status_code}. Body: {body}")


class MalformedResponse(RateLookupError):
    """Response body is not a JSON object."""

    def __init__(self, body: str) -> None:
        self.body = body
        super().__init__(f"Unexpected payload (not JSON). Body: {body}")


class MissingRateField(RateLookupError):
    """Payload has neither a combined rate nor any component rate."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = keys
        super().__init__(f"Could not find tax rate fields. Keys: {','.join(keys)}")


class OutOfRange(RateLookupError):
    """Computed percentage is outside [0, 25]."""

    def __init__(self, raw: float, percent: float) -> None:
        self.raw = raw
        self.percent = percent
        super().__init__(f"Rate out of range. raw={raw} percent={percent}")


class CacheError(ZipSalesTaxError):
    """Rate cache operation failed."""


class SettingsStoreError(ZipSalesTaxError):
    """Settings store operation failed."""


class PermissionDenied(ZipSalesTaxError):
    """Caller may not use the admin surface."""

    def __init__(self, message: str = "Insufficient permissions.") -> None:
        super().__init__(message)
