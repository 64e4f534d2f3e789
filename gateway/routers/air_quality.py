"""
gateway/routers/air_quality.py

Air quality endpoints.
GET /air-quality resolves a place (coordinates or city name), fetches current
pollutant concentrations and categorises them under the local AQI standard.
POST /air-quality/categorize categorises a caller-supplied sample.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException, Query

from gateway.schemas import AirQualityReport, AirQualitySample, AqiCategory
from gateway.services.aqi import categorize
from gateway.services.geolocation import LocationPermissionError, location_error_for
from gateway.services.weather import (
    CityNotFoundError,
    WeatherClient,
    WeatherConfigError,
    WeatherServiceError,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/air-quality", tags=["air-quality"])


@router.get("", response_model=AirQualityReport)
async def air_quality(
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
    city: Optional[str] = None,
    reason: Optional[str] = Query(
        default=None,
        description="Client location failure: permission_denied | unavailable | unsupported",
    ),
) -> AirQualityReport:
    """
    Current air quality for a place.

    Coordinates take precedence over a city name. Without either, the
    client-reported location failure reason selects the error message.
    """
    client = WeatherClient()
    try:
        if lat is not None and lon is not None:
            return await client.report_for_coords(lat, lon)
        if city and city.strip():
            return await client.report_for_city(city.strip())
    except WeatherConfigError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except CityNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except WeatherServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    error = location_error_for(reason)
    logger.info(
        "air_quality_location_missing",
        reason=reason,
        permission_denied=isinstance(error, LocationPermissionError),
    )
    raise HTTPException(status_code=400, detail=str(error))


@router.post("/categorize", response_model=AqiCategory)
async def categorize_sample(sample: AirQualitySample) -> AqiCategory:
    return categorize(sample)
