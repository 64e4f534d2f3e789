"""
gateway/services/aqi.py

AQI Categorizer.
Converts raw PM2.5 / PM10 concentrations into a published air quality index
using piecewise-linear breakpoint interpolation, then maps the index to a
qualitative band under the US (EPA) or India (CPCB) standard.

Pure functions only; an index that cannot be computed is returned as None.
"""

import math
from typing import NamedTuple, Optional, Sequence

from gateway.constants import (
    AQI_ADVICE_ACCEPTABLE,
    AQI_ADVICE_ALERT,
    AQI_ADVICE_EVERYONE,
    AQI_ADVICE_GOOD,
    AQI_ADVICE_HAZARDOUS,
    AQI_ADVICE_SENSITIVE,
    AQI_ADVICE_UNAVAILABLE,
    INDIA_COUNTRY_CODE,
    INDIA_PM10_BREAKPOINTS,
    INDIA_PM25_BREAKPOINTS,
    US_PM10_BREAKPOINTS,
    US_PM25_BREAKPOINTS,
)
from gateway.schemas import AirQualitySample, AqiCategory, PollutantConcentrations

Breakpoint = tuple[float, float, int, int]  # (C_low, C_high, I_low, I_high)

STANDARD_US = "US"
STANDARD_INDIA = "India"


class AqiBand(NamedTuple):
    upper: float  # inclusive upper bound of the band
    label: str
    severity: str
    recommendation: str


_US_BANDS: tuple[AqiBand, ...] = (
    AqiBand(50, "Good", "good", AQI_ADVICE_GOOD),
    AqiBand(100, "Moderate", "moderate", AQI_ADVICE_ACCEPTABLE),
    AqiBand(150, "Unhealthy for Sensitive Groups", "sensitive", AQI_ADVICE_SENSITIVE),
    AqiBand(200, "Unhealthy", "unhealthy", AQI_ADVICE_EVERYONE),
    AqiBand(300, "Very Unhealthy", "very_unhealthy", AQI_ADVICE_ALERT),
    AqiBand(math.inf, "Hazardous", "hazardous", AQI_ADVICE_HAZARDOUS),
)

_INDIA_BANDS: tuple[AqiBand, ...] = (
    AqiBand(50, "Good", "good", AQI_ADVICE_GOOD),
    AqiBand(100, "Satisfactory", "satisfactory", AQI_ADVICE_ACCEPTABLE),
    AqiBand(200, "Moderate", "moderate", AQI_ADVICE_SENSITIVE),
    AqiBand(300, "Poor", "poor", AQI_ADVICE_EVERYONE),
    AqiBand(400, "Very Poor", "very_poor", AQI_ADVICE_ALERT),
    AqiBand(math.inf, "Severe", "severe", AQI_ADVICE_HAZARDOUS),
)

# Pollutant field name -> breakpoint table, evaluated in this order
_TABLES: dict[str, dict[str, Sequence[Breakpoint]]] = {
    STANDARD_US: {"pm2_5": US_PM25_BREAKPOINTS, "pm10": US_PM10_BREAKPOINTS},
    STANDARD_INDIA: {"pm2_5": INDIA_PM25_BREAKPOINTS, "pm10": INDIA_PM10_BREAKPOINTS},
}

_BANDS: dict[str, tuple[AqiBand, ...]] = {
    STANDARD_US: _US_BANDS,
    STANDARD_INDIA: _INDIA_BANDS,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_sub_index(
    concentration: float,
    breakpoints: Sequence[Breakpoint],
) -> Optional[int]:
    """
    Interpolate one pollutant's sub-index.

    Returns None when the concentration falls outside every interval
    (including the gaps between published intervals); values are never clamped.
    """
    for c_low, c_high, i_low, i_high in breakpoints:
        if c_low <= concentration <= c_high:
            return _round_half_up(
                (i_high - i_low) / (c_high - c_low) * (concentration - c_low) + i_low
            )
    return None


def select_standard(country_code: Optional[str]) -> str:
    """India uses the CPCB tables; every other country uses the US tables."""
    if (country_code or "").strip().upper() == INDIA_COUNTRY_CODE:
        return STANDARD_INDIA
    return STANDARD_US


def compute_sub_indices(
    components: PollutantConcentrations,
    standard: str,
) -> dict[str, int]:
    """Sub-index per pollutant that has both a reading and a matching interval."""
    sub_indices: dict[str, int] = {}
    for pollutant, breakpoints in _TABLES[standard].items():
        concentration = getattr(components, pollutant)
        if concentration is None:
            continue
        sub_index = compute_sub_index(concentration, breakpoints)
        if sub_index is not None:
            sub_indices[pollutant] = sub_index
    return sub_indices


def compute_aqi(components: PollutantConcentrations, standard: str) -> Optional[int]:
    """Overall index by the dominant-pollutant rule, or None if undefined."""
    sub_indices = compute_sub_indices(components, standard)
    if not sub_indices:
        return None
    return max(sub_indices.values())


def band_for(aqi: float, standard: str) -> AqiBand:
    for band in _BANDS[standard]:
        if aqi <= band.upper:
            return band
    return _BANDS[standard][-1]


def categorize(sample: AirQualitySample) -> AqiCategory:
    """Compute the index, dominant pollutant and band for one sample."""
    standard = select_standard(sample.country_code)
    sub_indices = compute_sub_indices(sample.components, standard)

    if not sub_indices:
        return AqiCategory(
            aqi=None,
            standard=standard,
            label="Unavailable",
            severity="unknown",
            recommendation=AQI_ADVICE_UNAVAILABLE,
            sub_indices={},
        )

    # max() keeps the first pollutant on ties (PM2.5 before PM10)
    dominant = max(sub_indices, key=sub_indices.__getitem__)
    aqi = sub_indices[dominant]
    band = band_for(aqi, standard)
    return AqiCategory(
        aqi=aqi,
        standard=standard,
        label=band.label,
        severity=band.severity,
        recommendation=band.recommendation,
        dominant_pollutant=dominant,
        sub_indices=sub_indices,
    )
