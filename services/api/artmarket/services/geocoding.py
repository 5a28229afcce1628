"""
Geoapify relay: free-text location → coordinates and a static map image.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from artmarket.config import Settings
from artmarket.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://api.geoapify.com/v1/geocode/search"
STATIC_MAP_URL = "https://maps.geoapify.com/v1/staticmap"

# Static map layout
MAP_STYLE = "osm-carto"
MAP_WIDTH = 600
MAP_HEIGHT = 300
MAP_ZOOM = 14
CIRCLE_RADIUS_METERS = 1000


@dataclass(frozen=True)
class GeocodeResult:
    lat: float
    lon: float
    map_url: str


def location_query(location: str | None, country: str | None) -> str:
    """``"<location>, <country>"``, dropping whichever part is missing."""
    parts = [part.strip() for part in (location, country) if part and part.strip()]
    return ", ".join(parts)


class GeoapifyGeocoder:
    """Looks up coordinates for a location string via Geoapify."""

    def __init__(
        self,
        api_key: str | None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "GeoapifyGeocoder":
        return cls(
            api_key=settings.geoapify_api_key,
            timeout=settings.relay_timeout,
            transport=transport,
        )

    def static_map_url(self, lat: float, lon: float) -> str:
        """Map centred on the point with a 1 km circle and a red marker."""
        point = f"lonlat:{lon},{lat}"
        params = {
            "style": MAP_STYLE,
            "width": MAP_WIDTH,
            "height": MAP_HEIGHT,
            "center": point,
            "zoom": MAP_ZOOM,
            "circle": (
                f"{point};radius:{CIRCLE_RADIUS_METERS};"
                "fillcolor:#0066ff33;strokecolor:#0066ff"
            ),
            "marker": f"{point};color:#ff0000",
            "apiKey": self.api_key,
        }
        return f"{STATIC_MAP_URL}?{urlencode(params, safe=':,;')}"

    async def geocode(self, query: str) -> GeocodeResult:
        """
        Geocode ``query`` and build the static map for the best match.

        Raises:
            ValidationError: empty query, or no match for it
            UpstreamError: no API key configured, or Geoapify failed or
                returned an unexpected body
        """
        if not query:
            raise ValidationError("Listing has no location")
        if not self.api_key:
            logger.warning("Geocoding attempted without a Geoapify API key")
            raise UpstreamError("Geocoding not configured")

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self.timeout
            ) as client:
                response = await client.get(
                    GEOCODE_URL, params={"text": query, "apiKey": self.api_key}
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Geoapify returned %s for %r", e.response.status_code, query
            )
            raise UpstreamError("Geocoding service failed") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Geoapify request error for %r: %s", query, e)
            raise UpstreamError("Geocoding service failed") from e

        features = body.get("features") if isinstance(body, dict) else None
        if not features:
            raise ValidationError("Unable to fetch geocode data")

        try:
            properties = features[0]["properties"]
            lat = float(properties["lat"])
            lon = float(properties["lon"])
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError("Geocoding service returned malformed data") from e

        logger.info("Geocoded %r to %s,%s", query, lat, lon)
        return GeocodeResult(lat=lat, lon=lon, map_url=self.static_map_url(lat, lon))
