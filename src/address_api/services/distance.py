"""Distance calculation between two stored addresses."""

from __future__ import annotations

import logging
import time

from ..config import MIN_GEOCODING_DELAY_SECONDS, settings
from ..models.domain import Address, Distance
from .geocoding import GeocodingClient
from .geospatial import haversine_km

logger = logging.getLogger(__name__)


def calculate_distance(
    address1: Address,
    address2: Address,
    geocoder: GeocodingClient | None = None,
    delay_seconds: float | None = None,
) -> Distance:
    """Geocode both addresses and return the great-circle distance between them in km.

    The two lookups run one after the other with a pause in between to stay within
    the geocoding service's rate limit. ``delay_seconds`` defaults to the configured
    delay and is never shorter than the service minimum. Failures from either lookup
    propagate unchanged.
    """
    geocoder = geocoder or GeocodingClient()
    delay = settings.geocoding_delay_seconds if delay_seconds is None else delay_seconds
    delay = max(delay, MIN_GEOCODING_DELAY_SECONDS)

    first = geocoder.geocode(address1)
    time.sleep(delay)
    second = geocoder.geocode(address2)

    distance_km = haversine_km(first.latitude, first.longitude, second.latitude, second.longitude)
    logger.info(f"Distance between addresses {address1.id} and {address2.id}: {distance_km:.3f} km")
    return Distance(address1=address1, address2=address2, distance=distance_km)
