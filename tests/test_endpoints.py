# request construction is pure: no network, same inputs give the same request

import pytest

from weathernow.endpoints import BASE_URL, CurrentForecast
from weathernow.models import Coordinate


@pytest.mark.parametrize(
    "lat, lon, expected",
    [
        (41.066366, 29.017375, "/forecast/abc/41.066366,29.017375"),
        (-33.8688, 151.2093, "/forecast/abc/-33.8688,151.2093"),
        (0.0, 0.0, "/forecast/abc/0.0,0.0"),
        (37.8267, -122.423, "/forecast/abc/37.8267,-122.423"),
    ],
)
def test_current_forecast_path(lat, lon, expected):
    endpoint = CurrentForecast(token="abc", coordinate=Coordinate(lat, lon))
    assert endpoint.path == expected


def test_current_forecast_request():
    endpoint = CurrentForecast(token="abc", coordinate=Coordinate(41.066366, 29.017375))
    request = endpoint.request
    assert request.method == "GET"
    assert request.url == "https://api.forecast.io/forecast/abc/41.066366,29.017375"
    assert endpoint.base_url == BASE_URL


def test_prepared_request_keeps_path():
    # requests must not re-encode the comma between latitude and longitude
    prepared = CurrentForecast("abc", Coordinate(1.5, 2.5)).request.prepare()
    assert prepared.path_url == "/forecast/abc/1.5,2.5"
    assert prepared.method == "GET"


def test_endpoints_are_values():
    a = CurrentForecast("abc", Coordinate(1.0, 2.0))
    b = CurrentForecast("abc", Coordinate(1.0, 2.0))
    assert a == b
    assert a.request.url == b.request.url
