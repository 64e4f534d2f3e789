"""
gateway/services/weather.py

OpenWeather client for geocoding and air pollution lookups.
Raises WeatherConfigError when the API key is missing (never retried) and
WeatherServiceError for transport, HTTP and empty-result failures.
"""

from typing import Optional

import httpx
import structlog
from pydantic import BaseModel

from config import settings
from gateway.schemas import AirQualityReport, AirQualitySample, PollutantConcentrations
from gateway.services.aqi import categorize

logger = structlog.get_logger(__name__)


class WeatherConfigError(RuntimeError):
    """The weather provider credential is not configured."""


class WeatherServiceError(RuntimeError):
    """The weather provider call failed or returned no usable data."""


class CityNotFoundError(WeatherServiceError):
    """Forward geocoding returned no match."""


class Place(BaseModel):
    """A geocoded location."""

    name: Optional[str] = None
    state: Optional[str] = None
    country: str = ""
    lat: Optional[float] = None
    lon: Optional[float] = None

    @property
    def label(self) -> str:
        return ", ".join(part for part in (self.name, self.state, self.country) if part)


class PollutionReading(BaseModel):
    provider_index: Optional[int] = None
    components: PollutantConcentrations


class WeatherClient:
    """Thin async wrapper over the OpenWeather geocoding and air pollution APIs."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._api_key = settings.openweather_api_key if api_key is None else api_key
        self._base_url = (base_url or settings.openweather_base_url).rstrip("/")
        self._timeout = settings.http_timeout_sec if timeout is None else timeout

    async def _get(self, path: str, params: dict) -> object:
        if not self._api_key:
            raise WeatherConfigError(
                "Missing OpenWeather API key. Set OPENWEATHER_API_KEY in .env"
            )
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params={**params, "appid": self._api_key})
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as exc:
            logger.warning("weather_timeout", path=path)
            raise WeatherServiceError("Weather service timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error("weather_http_error", path=path, status=exc.response.status_code)
            raise WeatherServiceError(
                f"Weather service returned HTTP {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("weather_unexpected_error", path=path, error=str(exc))
            raise WeatherServiceError("Failed to fetch AQI") from exc

    async def reverse_geocode(self, lat: float, lon: float) -> Place:
        data = await self._get("/geo/1.0/reverse", {"lat": lat, "lon": lon, "limit": 1})
        if isinstance(data, list) and data:
            return Place(**{**data[0], "lat": lat, "lon": lon})
        return Place(lat=lat, lon=lon)

    async def geocode_city(self, name: str) -> Place:
        data = await self._get("/geo/1.0/direct", {"q": name, "limit": 1})
        if not isinstance(data, list) or not data:
            raise CityNotFoundError("City not found")
        return Place(**data[0])

    async def air_pollution(self, lat: float, lon: float) -> PollutionReading:
        data = await self._get("/data/2.5/air_pollution", {"lat": lat, "lon": lon})
        items = data.get("list") if isinstance(data, dict) else None
        if not items:
            raise WeatherServiceError("No AQI data available for your location")
        item = items[0]
        return PollutionReading(
            provider_index=(item.get("main") or {}).get("aqi"),
            components=PollutantConcentrations(**(item.get("components") or {})),
        )

    async def report_for_coords(self, lat: float, lon: float) -> AirQualityReport:
        place = await self.reverse_geocode(lat, lon)
        return await self._report(place, lat, lon)

    async def report_for_city(self, name: str) -> AirQualityReport:
        place = await self.geocode_city(name)
        if place.lat is None or place.lon is None:
            logger.warning("geocode_missing_coords", city=name)
            raise WeatherServiceError("City location unavailable")
        return await self._report(place, place.lat, place.lon)

    async def _report(self, place: Place, lat: float, lon: float) -> AirQualityReport:
        reading = await self.air_pollution(lat, lon)
        category = categorize(
            AirQualitySample(country_code=place.country, components=reading.components)
        )
        logger.info(
            "air_quality_resolved",
            place=place.label,
            country=place.country,
            aqi=category.aqi,
            standard=category.standard,
        )
        return AirQualityReport(
            place=place.label,
            country_code=place.country,
            provider_index=reading.provider_index,
            components=reading.components,
            category=category,
        )
