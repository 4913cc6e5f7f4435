# shared fixtures; the http layer is always stubbed by requests-mock, tests never hit the network

import json
import threading
from pathlib import Path

import pytest

from weathernow.dispatch import InlineExecutor
from weathernow.forecast import ForecastAPIClient
from weathernow.models import Coordinate

API_KEY = "test-key"
COORDINATE = Coordinate(latitude=41.066366, longitude=29.017375)
FORECAST_URL = "https://api.forecast.io/forecast/test-key/41.066366,29.017375"


@pytest.fixture
def payload():
    data_path = Path(__file__).parent / "data" / "forecast_current.json"
    return json.loads(data_path.read_text())


@pytest.fixture
def client():
    # inline ui executor: completions run on the network worker that finished the request
    with ForecastAPIClient(api_key=API_KEY, ui_executor=InlineExecutor()) as c:
        yield c


class Collector:
    # records what a completion receives and lets the test block until it arrives
    def __init__(self):
        self.calls = []
        self.threads = []
        self._done = threading.Event()

    def __call__(self, *args):
        self.calls.append(args if len(args) > 1 else args[0])
        self.threads.append(threading.current_thread().name)
        self._done.set()

    def wait(self, timeout=5.0):
        assert self._done.wait(timeout), "completion was never called"
        return self.calls[0]


@pytest.fixture
def collector():
    return Collector()


@pytest.fixture
def fetch_current(client):
    # fetch_current() -> Result, waiting for the single completion
    def run(coordinate=COORDINATE):
        c = Collector()
        client.fetch_current_weather(coordinate, c)
        return c.wait()

    return run
