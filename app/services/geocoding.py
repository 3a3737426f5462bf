# File: app/services/geocoding.py

"""
Address -> coordinates via the Google Geocoding API.

One request per call, no retries and no caching. "No results" is reported
as a validation error (the address is the caller's input); anything that
goes wrong on the wire or in the payload is an internal error.
"""

import logging
from typing import Any

import httpx

from app.core.config import Settings
from app.core.errors import ApiResult, internal_error, validation_error
from app.core.result import Err, Ok
from app.schemas.place import Location

logger = logging.getLogger(__name__)

NO_COORDINATES_MESSAGE = "Could not find coordinate for the given address."


class GeocodingClient:
    def __init__(
        self,
        api_key: str,
        *,
        url: str,
        http_client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.url = url
        self._http = http_client or httpx.Client(timeout=10)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeocodingClient":
        return cls(settings.GOOGLE_API_KEY, url=settings.GEOCODING_URL)

    def close(self) -> None:
        self._http.close()

    def geocode(self, address: str) -> ApiResult[Location]:
        try:
            response = self._http.get(
                self.url,
                params={"address": address, "key": self.api_key},
            )
            response.raise_for_status()
            data: dict[str, Any] | None = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Geocoding request failed for {address!r}: {exc}")
            return Err(internal_error("Geocoding the address failed."))

        if not data or data.get("status") == "ZERO_RESULTS":
            return Err(validation_error(NO_COORDINATES_MESSAGE))

        try:
            coords = data["results"][0]["geometry"]["location"]
            return Ok(Location(lat=coords["lat"], lng=coords["lng"]))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.error(f"Unexpected geocoding payload for {address!r}: {exc}")
            return Err(internal_error("Geocoding the address failed."))
