# configuration for the command line only; the library itself takes its key explicitly
# values come from the environment, with a local .env file filling the gaps during development

from __future__ import annotations
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .models import Coordinate

DEFAULT_LATITUDE = 41.066366
DEFAULT_LONGITUDE = 29.017375


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    coordinate: Coordinate


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number (got {raw!r})") from exc


def load_settings() -> Settings:
    # existing environment variables win over .env entries
    load_dotenv()
    return Settings(
        api_key=os.getenv("FORECAST_API_KEY") or None,
        coordinate=Coordinate(
            latitude=_float_env("FORECAST_LATITUDE", DEFAULT_LATITUDE),
            longitude=_float_env("FORECAST_LONGITUDE", DEFAULT_LONGITUDE),
        ),
    )
