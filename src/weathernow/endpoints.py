# request descriptors for the forecast API
# each variant carries only what its request needs; building a request never touches the network

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Union

import requests

from .models import Coordinate

BASE_URL = "https://api.forecast.io"


class Endpoint(Protocol):
    @property
    def base_url(self) -> str:
        ...

    @property
    def path(self) -> str:
        ...

    @property
    def request(self) -> requests.Request:
        ...


@dataclass(frozen=True)
class CurrentForecast:
    # current conditions for one coordinate
    token: str
    coordinate: Coordinate

    @property
    def base_url(self) -> str:
        return BASE_URL

    @property
    def path(self) -> str:
        lat, lon = self.coordinate.latitude, self.coordinate.longitude
        return f"/forecast/{self.token}/{lat},{lon}"

    @property
    def request(self) -> requests.Request:
        return requests.Request("GET", self.base_url + self.path)


# one case per supported forecast query
Forecast = Union[CurrentForecast]
