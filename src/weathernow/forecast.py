# forecast API client: builds the endpoint and maps the JSON envelope into CurrentWeather

from __future__ import annotations
from typing import Any, Callable, Optional, Type, TypeVar

from .client import JSON, APIClient, ForecastError
from .endpoints import CurrentForecast
from .models import Coordinate, CurrentWeather, JSONDecodable
from .result import Result

D = TypeVar("D", bound=JSONDecodable)


def nested(key: str, model: Type[D]) -> Callable[[JSON], Optional[D]]:
    # parser that decodes the object stored under key; None when it is absent or not an object
    def parse(data: JSON) -> Optional[D]:
        inner = data.get(key)
        if not isinstance(inner, dict):
            return None
        return model.from_json(inner)

    return parse


parse_current_weather = nested("currently", CurrentWeather)


class ForecastAPIClient(APIClient):
    """Client for current conditions, constructed once with its API key."""

    def __init__(self, api_key: str, **kwargs: Any):
        if not api_key:
            # fail when key is missing to avoid confusing 4xx responses later
            raise ForecastError("Forecast API key is not set")
        super().__init__(**kwargs)
        self._token = api_key

    def fetch_current_weather(
        self,
        coordinate: Coordinate,
        completion: Callable[[Result[CurrentWeather]], None],
    ) -> None:
        request = CurrentForecast(token=self._token, coordinate=coordinate).request
        self.fetch(request, parse_current_weather, completion)
