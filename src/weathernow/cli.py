# connects input (key + coordinate) to the forecast client and prints the current conditions

from __future__ import annotations
import argparse
import logging
import sys
import threading
from typing import List, Optional

from .client import ForecastError
from .config import ConfigError, load_settings
from .forecast import ForecastAPIClient
from .models import Coordinate, CurrentWeather
from .result import Failure, Result

ALERT_TITLE = "Unable to retrieve forecast"


def render(weather: CurrentWeather) -> str:
    # same four labels and icon the single-screen view shows
    return "\n".join(
        [
            f"{weather.icon.glyph}  {weather.summary}",
            f"Temperature:   {weather.temperature_string}",
            f"Humidity:      {weather.humidity_string}",
            f"Precipitation: {weather.precipitation_probability_string}",
        ]
    )


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="weathernow", description="Show current weather conditions.")
    parser.add_argument("latitude", nargs="?", type=float, help="defaults to FORECAST_LATITUDE")
    parser.add_argument("longitude", nargs="?", type=float, help="defaults to FORECAST_LONGITUDE")
    parser.add_argument("--api-key", help="defaults to FORECAST_API_KEY")
    parser.add_argument("--timeout", type=float, default=ForecastAPIClient.DEFAULT_TIMEOUT)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    if (args.latitude is None) != (args.longitude is None):
        parser.error("latitude and longitude must be given together")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    coordinate = settings.coordinate
    if args.latitude is not None:
        coordinate = Coordinate(latitude=args.latitude, longitude=args.longitude)

    try:
        client = ForecastAPIClient(api_key=args.api_key or settings.api_key or "", timeout=args.timeout)
    except ForecastError as exc:
        print(f"Error: {exc}. Set FORECAST_API_KEY or pass --api-key.", file=sys.stderr)
        return 2

    done = threading.Event()
    outcome: List[Result[CurrentWeather]] = []

    def on_result(result: Result[CurrentWeather]) -> None:
        outcome.append(result)
        done.set()

    with client:
        client.fetch_current_weather(coordinate, on_result)
        done.wait()

    result = outcome[0]
    if isinstance(result, Failure):
        print(f"{ALERT_TITLE}: {result.error}", file=sys.stderr)
        return 1
    print(render(result.value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
