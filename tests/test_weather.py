"""
tests/test_weather.py

Unit tests for gateway/services/weather.py and gateway/services/geolocation.py.
All provider calls are mocked.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from gateway.services.geolocation import (
    LocationPermissionError,
    LocationUnavailableError,
    emergency_number_for,
    location_error_for,
    resolve_country_code,
)
from gateway.services.weather import (
    CityNotFoundError,
    Place,
    WeatherClient,
    WeatherConfigError,
    WeatherServiceError,
)
from tests.fixtures import build_air_pollution_response, build_geocode_response


def _routes(responses: dict) -> AsyncMock:
    """AsyncMock for WeatherClient._get answering by request path."""

    async def fake_get(path: str, params: dict) -> object:
        return responses[path]

    return AsyncMock(side_effect=fake_get)


def _mock_client(get: AsyncMock) -> AsyncMock:
    client = AsyncMock()
    client.get = get
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


# ── WeatherClient ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_missing_api_key_is_config_error() -> None:
    client = WeatherClient(api_key="")
    with pytest.raises(WeatherConfigError):
        await client.geocode_city("Pune")


@pytest.mark.asyncio
async def test_timeout_becomes_service_error() -> None:
    get = AsyncMock(side_effect=httpx.TimeoutException("timeout"))
    with patch("gateway.services.weather.httpx.AsyncClient", return_value=_mock_client(get)):
        with pytest.raises(WeatherServiceError):
            await WeatherClient(api_key="test-key").air_pollution(1.0, 2.0)


@pytest.mark.asyncio
async def test_api_key_sent_as_appid() -> None:
    response = MagicMock()
    response.raise_for_status = MagicMock()
    response.json.return_value = build_geocode_response()
    get = AsyncMock(return_value=response)
    with patch("gateway.services.weather.httpx.AsyncClient", return_value=_mock_client(get)):
        await WeatherClient(api_key="test-key").geocode_city("Pune")

    assert get.await_args.kwargs["params"]["appid"] == "test-key"
    assert get.await_args.kwargs["params"]["q"] == "Pune"


@pytest.mark.asyncio
async def test_unknown_city_raises_not_found() -> None:
    client = WeatherClient(api_key="test-key")
    with patch.object(client, "_get", _routes({"/geo/1.0/direct": []})):
        with pytest.raises(CityNotFoundError, match="City not found"):
            await client.report_for_city("Atlantis")


@pytest.mark.asyncio
async def test_city_without_coordinates_raises_before_pollution_lookup() -> None:
    client = WeatherClient(api_key="test-key")
    get = _routes({"/geo/1.0/direct": [{"name": "Nowhere", "country": "US"}]})
    with patch.object(client, "_get", get):
        with pytest.raises(WeatherServiceError, match="City location unavailable"):
            await client.report_for_city("Nowhere")

    assert [call.args[0] for call in get.await_args_list] == ["/geo/1.0/direct"]


@pytest.mark.asyncio
async def test_empty_pollution_list_raises() -> None:
    client = WeatherClient(api_key="test-key")
    with patch.object(client, "_get", _routes({"/data/2.5/air_pollution": {"list": []}})):
        with pytest.raises(WeatherServiceError, match="No AQI data"):
            await client.air_pollution(1.0, 2.0)


@pytest.mark.asyncio
async def test_city_report_uses_country_standard() -> None:
    client = WeatherClient(api_key="test-key")
    responses = {
        "/geo/1.0/direct": build_geocode_response(),
        "/data/2.5/air_pollution": build_air_pollution_response(pm2_5=45.0, pm10=40.0),
    }
    with patch.object(client, "_get", _routes(responses)):
        report = await client.report_for_city("Pune")

    assert report.place == "Pune, Maharashtra, IN"
    assert report.provider_index == 2
    assert report.category.standard == "India"
    assert report.category.aqi == 75


@pytest.mark.asyncio
async def test_coords_report_without_reverse_match() -> None:
    client = WeatherClient(api_key="test-key")
    responses = {
        "/geo/1.0/reverse": [],
        "/data/2.5/air_pollution": build_air_pollution_response(),
    }
    with patch.object(client, "_get", _routes(responses)):
        report = await client.report_for_coords(39.9, 116.4)

    assert report.place == ""
    assert report.category.standard == "US"
    assert report.category.aqi == 80


def test_place_label_skips_missing_parts() -> None:
    assert Place(name="Paris", country="FR").label == "Paris, FR"


# ── Geolocation ─────────────────────────────────────────────


@pytest.mark.parametrize(
    ("country_code", "expected"),
    [("GB", "999"), ("in", "112"), ("AU", "000"), ("ZZ", "911"), (None, "911")],
)
def test_emergency_number_for(country_code, expected) -> None:
    assert emergency_number_for(country_code) == expected


@pytest.mark.asyncio
async def test_country_from_ip_lookup() -> None:
    with patch(
        "gateway.services.geolocation.lookup_ip_country",
        new_callable=AsyncMock,
        return_value="GB",
    ):
        assert await resolve_country_code() == "GB"


@pytest.mark.asyncio
async def test_country_from_coordinates_when_ip_fails() -> None:
    weather = WeatherClient(api_key="test-key")
    weather.reverse_geocode = AsyncMock(return_value=Place(name="Pune", country="in"))
    with patch(
        "gateway.services.geolocation.lookup_ip_country",
        new_callable=AsyncMock,
        return_value=None,
    ):
        assert await resolve_country_code(18.5, 73.8, weather_client=weather) == "IN"


@pytest.mark.asyncio
async def test_country_defaults_when_every_source_fails() -> None:
    weather = WeatherClient(api_key="test-key")
    weather.reverse_geocode = AsyncMock(side_effect=WeatherServiceError("down"))
    with patch(
        "gateway.services.geolocation.lookup_ip_country",
        new_callable=AsyncMock,
        return_value=None,
    ), patch("gateway.services.geolocation.settings") as mock_settings:
        mock_settings.default_country_code = "US"

        assert await resolve_country_code(1.0, 2.0, weather_client=weather) == "US"


@pytest.mark.asyncio
async def test_ip_lookup_failure_returns_none() -> None:
    get = AsyncMock(side_effect=httpx.ConnectError("offline"))
    with patch("gateway.services.geolocation.httpx.AsyncClient", return_value=_mock_client(get)):
        from gateway.services.geolocation import lookup_ip_country

        assert await lookup_ip_country() is None


def test_location_errors_are_distinct() -> None:
    denied = location_error_for("permission_denied")
    unavailable = location_error_for("unavailable")

    assert isinstance(denied, LocationPermissionError)
    assert isinstance(unavailable, LocationUnavailableError)
    assert str(denied) != str(unavailable)
