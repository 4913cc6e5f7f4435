# models and display helpers to keep data shapes explicit and reusable across the app

from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Type, TypeVar

T = TypeVar("T", bound="JSONDecodable")


class JSONDecodable(Protocol):
    # any type that can be built from a decoded JSON object; returns None on shape mismatch
    @classmethod
    def from_json(cls: Type[T], data: Dict[str, Any]) -> Optional[T]:
        ...


@dataclass(frozen=True)
class Coordinate:
    # immutable value object, rendered as-is into the request path
    latitude: float
    longitude: float


class WeatherIcon(Enum):
    # icon identifiers published by the forecast API; anything else maps to DEFAULT
    CLEAR_DAY = "clear-day"
    CLEAR_NIGHT = "clear-night"
    RAIN = "rain"
    SNOW = "snow"
    SLEET = "sleet"
    WIND = "wind"
    FOG = "fog"
    CLOUDY = "cloudy"
    PARTLY_CLOUDY_DAY = "partly-cloudy-day"
    PARTLY_CLOUDY_NIGHT = "partly-cloudy-night"
    DEFAULT = "default"

    @classmethod
    def from_identifier(cls, identifier: str) -> "WeatherIcon":
        try:
            return cls(identifier)
        except ValueError:
            return cls.DEFAULT

    @property
    def image_name(self) -> str:
        # opaque image resource, resolved by whatever renders it
        return f"{self.value}.png"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_GLYPHS = {
    WeatherIcon.CLEAR_DAY: "☀",
    WeatherIcon.CLEAR_NIGHT: "☾",
    WeatherIcon.RAIN: "☂",
    WeatherIcon.SNOW: "❄",
    WeatherIcon.SLEET: "❄",
    WeatherIcon.WIND: "≋",
    WeatherIcon.FOG: "≡",
    WeatherIcon.CLOUDY: "☁",
    WeatherIcon.PARTLY_CLOUDY_DAY: "⛅",
    WeatherIcon.PARTLY_CLOUDY_NIGHT: "☁",
    WeatherIcon.DEFAULT: "?",
}


def _number(value: Any) -> Optional[float]:
    # bool is an int subclass, but true/false is never a valid reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    # the JSON decoder accepts NaN and Infinity, neither is a reading
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class CurrentWeather:
    temperature: float
    humidity: float                   # 0-1 fraction
    precipitation_probability: float  # 0-1 fraction
    summary: str
    icon: WeatherIcon

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> Optional["CurrentWeather"]:
        """Build from the ``currently`` object of a forecast envelope.

        Returns None when a required field is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            return None
        temperature = _number(data.get("temperature"))
        humidity = _number(data.get("humidity"))
        precip = _number(data.get("precipProbability"))
        summary = data.get("summary")
        icon = data.get("icon")
        if temperature is None or humidity is None or precip is None:
            return None
        if not isinstance(summary, str) or not isinstance(icon, str):
            return None
        return cls(
            temperature=temperature,
            humidity=humidity,
            precipitation_probability=precip,
            summary=summary,
            icon=WeatherIcon.from_identifier(icon),
        )

    @property
    def temperature_string(self) -> str:
        return f"{round(self.temperature)}°"

    @property
    def humidity_string(self) -> str:
        return percentage(self.humidity)

    @property
    def precipitation_probability_string(self) -> str:
        return percentage(self.precipitation_probability)


def percentage(fraction: float) -> str:
    # 0.4 -> "40%"
    return f"{round(fraction * 100)}%"
