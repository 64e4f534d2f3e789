"""
gateway/services/geolocation.py

Best-effort country resolution for emergency numbers and AQI standard selection.
Order: IP geolocation -> reverse geocoding of client coordinates -> configured default.
Never raises; every failure degrades to the next source.
"""

from typing import Optional

import httpx
import structlog

from config import settings
from gateway.constants import DEFAULT_EMERGENCY_NUMBER
from gateway.services.weather import WeatherClient, WeatherConfigError, WeatherServiceError

logger = structlog.get_logger(__name__)


class LocationPermissionError(RuntimeError):
    """The client refused to share its position."""


class LocationUnavailableError(RuntimeError):
    """The client could not determine its position."""


def location_error_for(reason: Optional[str]) -> RuntimeError:
    """Map a client-reported location failure reason to its user-facing error."""
    if reason == "permission_denied":
        return LocationPermissionError(
            "Location permission denied. Please allow location access."
        )
    if reason == "unsupported":
        return LocationUnavailableError("Geolocation not supported in this browser")
    return LocationUnavailableError("Unable to get your location")


EMERGENCY_NUMBERS: dict[str, str] = {
    "US": "911",
    "CA": "911",
    "GB": "999",
    "AU": "000",
    "NZ": "111",
    "IN": "112",
    "DE": "112",
    "FR": "112",
    "IT": "112",
    "ES": "112",
    "NL": "112",
    "BE": "112",
    "AT": "112",
    "CH": "112",
    "SE": "112",
    "NO": "112",
    "DK": "112",
    "FI": "112",
    "PL": "112",
    "PT": "112",
    "GR": "112",
    "IE": "112",
    "JP": "110",  # police; 119 fire/ambulance
    "CN": "110",  # police; 119 fire, 120 ambulance
    "KR": "112",
    "BR": "192",  # ambulance; 190 police, 193 fire
    "MX": "911",
    "AR": "911",
    "ZA": "10111",
    "EG": "122",
    "NG": "199",
    "KE": "999",
    "AE": "999",
    "SA": "997",
    "TR": "112",
    "RU": "112",
    "IL": "101",  # police; 100 fire, 102 ambulance
    "PK": "15",  # police; 16 fire, 115 ambulance
    "BD": "999",
    "PH": "911",
    "TH": "191",
    "VN": "113",
    "ID": "112",
    "MY": "999",
    "SG": "995",  # ambulance; 999 police
}


def emergency_number_for(country_code: Optional[str]) -> str:
    return EMERGENCY_NUMBERS.get((country_code or "").upper(), DEFAULT_EMERGENCY_NUMBER)


async def lookup_ip_country() -> Optional[str]:
    """Resolve the caller's country from IP geolocation, or None."""
    url = settings.ip_geolocation_url
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_sec) as client:
            response = await client.get(url)
            response.raise_for_status()
            data = response.json()
    except httpx.TimeoutException:
        logger.warning("ip_geolocation_timeout", url=url)
        return None
    except Exception as exc:
        logger.warning("ip_geolocation_failed", url=url, error=str(exc))
        return None

    country_code = data.get("country_code") if isinstance(data, dict) else None
    return country_code.upper() if country_code else None


async def resolve_country_code(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    weather_client: Optional[WeatherClient] = None,
) -> str:
    """Country code from IP, then from coordinates, then the configured default."""
    country_code = await lookup_ip_country()
    if country_code:
        return country_code

    if lat is not None and lon is not None:
        client = weather_client or WeatherClient()
        try:
            place = await client.reverse_geocode(lat, lon)
            if place.country:
                return place.country.upper()
        except (WeatherConfigError, WeatherServiceError) as exc:
            logger.warning("country_from_coords_failed", error=str(exc))

    logger.info("country_defaulted", default=settings.default_country_code)
    return settings.default_country_code
