"""HTTP client for the Nominatim geocoding service."""

from __future__ import annotations

import logging

import httpx

from ..config import settings
from ..models.domain import Address, Coordinate

NO_RESULT_MESSAGE = "No result found in the geocoding response."

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when the geocoding service answers with an unusable payload."""


class NoGeocodingResultError(GeocodingError):
    """Raised when the geocoding service finds no match for an address."""

    def __init__(self, message: str = NO_RESULT_MESSAGE) -> None:
        super().__init__(message)


def build_query(address: Address) -> str:
    """Build the free-text query sent to the geocoder.

    ``Main St 5, 10001 NYC, US`` for a fully populated address; empty parts are skipped.
    """
    street_line = " ".join(part for part in (address.street, address.house_number) if part)
    city_line = " ".join(part for part in (address.postcode, address.city) if part)
    return ", ".join(part for part in (street_line, city_line, address.country) if part)


class GeocodingClient:
    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.geocoding_base_url).rstrip("/")
        if not self.base_url:
            raise ValueError("Geocoding base URL is not configured.")
        self.user_agent = user_agent or settings.geocoding_user_agent
        self.timeout = timeout if timeout is not None else settings.geocoding_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    def geocode(self, address: Address) -> Coordinate:
        """Resolve an address to coordinates using the first search result.

        Transport failures (``httpx.HTTPError``) propagate unchanged; no retries are made.
        """
        query = build_query(address)
        params = {"format": "json", "q": query}
        logger.debug(f"Geocoding address {address.id}: {query!r}")

        with self._get_client() as client:
            response = client.get(f"{self.base_url}/search", params=params)
            response.raise_for_status()
            results = response.json()

        if not isinstance(results, list) or not results:
            raise NoGeocodingResultError()

        best = results[0]
        try:
            # float() ignores the process locale, "52.5" parses the same everywhere
            latitude = float(best["lat"])
            longitude = float(best["lon"])
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingError(f"Malformed geocoding result: {best!r}") from exc
        return Coordinate(latitude=latitude, longitude=longitude)


def check_health(base_url: str | None = None) -> bool:
    """Check geocoding service health through its status endpoint."""
    base = (base_url or settings.geocoding_base_url).rstrip("/")
    if not base:
        return False
    try:
        response = httpx.get(
            f"{base}/status",
            params={"format": "json"},
            headers={"User-Agent": settings.geocoding_user_agent},
            timeout=5.0,
        )
        response.raise_for_status()
        return True
    except httpx.HTTPError:
        return False
