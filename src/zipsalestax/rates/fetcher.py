"""RapidAPI sales-tax-per-ZIP client.

One attempt per call with a fixed timeout. A slow upstream must not stack
retries inside a checkout request, so there is no retry layer here.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Optional
from urllib.parse import quote

import httpx

from zipsalestax.core.config import LOG_SOURCE
from zipsalestax.core.exceptions import (
    AuthError,
    MalformedResponse,
    MissingCredentials,
    MissingRateField,
    NetworkError,
    OutOfRange,
    RateLookupError,
    UpstreamError,
)
from zipsalestax.models.settings import ResolverConfig

logger = logging.getLogger(__name__)

# Plain decimal or exponent notation, no digit separators
_NUMERIC = re.compile(r"^\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*$")

DEFAULT_TIMEOUT = 10.0
BODY_SNIPPET_LENGTH = 400
MAX_RATE_PERCENT = 25.0

COMBINED_RATE_FIELD = "estimated_combined_rate"
COMPONENT_RATE_FIELDS = (
    "state_rate",
    "estimated_county_rate",
    "estimated_city_rate",
    "estimated_special_rate",
)


def _as_number(value: Any) -> Optional[float]:
    """Numbers and numeric strings as float; anything else (bools too) is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        if not _NUMERIC.match(value):
            return None
        number = float(value.strip())
    else:
        return None
    return number if math.isfinite(number) else None


def extract_raw_rate(payload: dict[str, Any]) -> float:
    """Pick the raw rate out of an upstream payload.

    ``estimated_combined_rate`` wins when numeric. Otherwise the numeric
    component rates that are present are summed.

    Raises:
        MissingRateField: neither source yields a value.
    """
    combined = _as_number(payload.get(COMBINED_RATE_FIELD))
    if combined is not None:
        return combined

    components = [_as_number(payload.get(name)) for name in COMPONENT_RATE_FIELDS]
    present = [c for c in components if c is not None]
    if present:
        return sum(present)

    raise MissingRateField([str(k) for k in payload.keys()])


def to_percentage(raw: float) -> float:
    """Scale a raw rate to a validated percentage rounded to 4 places.

    Values at or below 1.0 are fractions (``0.0825`` is 8.25%).

    Raises:
        OutOfRange: the percentage falls outside [0, 25].
    """
    percent = raw * 100.0 if raw <= 1.0 else raw
    if percent < 0.0 or percent > MAX_RATE_PERCENT:
        raise OutOfRange(raw, percent)
    return round(percent, 4)


def build_url(host: str, endpoint_path: str, postal_code: str) -> str:
    path = endpoint_path.replace("{zip}", quote(postal_code, safe=""))
    if not path.startswith("/"):
        path = "/" + path.lstrip("/")
    return f"https://{host}{path}"


class RapidAPIRateFetcher:
    """IRateFetcher backed by the RapidAPI sales tax endpoint."""

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close HTTP client."""
        self._client.close()

    def fetch(self, postal_code: str, config: ResolverConfig) -> float:
        """Fetch the tax percentage for a normalized ZIP.

        Args:
            postal_code: 5-digit ZIP
            config: Resolver configuration snapshot

        Returns:
            Percentage in [0, 25], rounded to 4 decimal places

        Raises:
            RateLookupError: On any failure; the subclass names the cause
        """
        try:
            return self._fetch(postal_code, config)
        except RateLookupError as exc:
            if config.debug_log:
                logger.error(str(exc), extra={"source": LOG_SOURCE})
            raise

    def _fetch(self, postal_code: str, config: ResolverConfig) -> float:
        key = config.api_key.strip()
        host = config.api_host.strip()
        if not key or not host:
            raise MissingCredentials()

        url = build_url(host, config.endpoint_path, postal_code)
        headers = {
            "X-RapidAPI-Key": key,
            "X-RapidAPI-Host": host,
            "Accept": "application/json",
        }

        try:
            response = self._client.get(url, headers=headers, timeout=self._timeout)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
            raise NetworkError(str(e) or e.__class__.__name__) from e

        status = response.status_code
        if status in (401, 403):
            raise AuthError(status)

        body = response.text
        if status < 200 or status >= 300:
            raise UpstreamError(status, body[:BODY_SNIPPET_LENGTH])

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponse(body[:BODY_SNIPPET_LENGTH]) from e
        if not isinstance(payload, dict):
            raise MalformedResponse(body[:BODY_SNIPPET_LENGTH])

        return to_percentage(extract_raw_rate(payload))
