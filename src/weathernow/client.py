# OOP boundary for external i/o
# http, sessions and response validation live here; parsing into domain values is handed in by the caller
# each network worker thread uses its own thread-local session

from __future__ import annotations
import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .dispatch import main_queue, report_failure, run_on_ui
from .result import Failure, Result, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON = Dict[str, Any]
JSONTaskCompletion = Callable[
    [Optional[JSON], Optional[requests.Response], Optional[BaseException]], None
]


class ForecastError(RuntimeError):
    # base for errors raised by this layer; code identifies the kind
    code = 0


class MissingResponse(ForecastError):
    code = 10

    def __init__(self, message: str = "Missing HTTP Response"):
        super().__init__(message)


class UnexpectedResponse(ForecastError):
    code = 20

    def __init__(self, message: str = "Unexpected response from the forecast API"):
        super().__init__(message)


class UnexpectedStatus(ForecastError):
    code = 30

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Received HTTP response {status_code}")


class JSONTask:
    """One HTTP exchange waiting to be started.

    Nothing goes over the wire until :meth:`resume` is called, so the caller can
    attach its receivers first. Resuming twice does not send a second request.
    """

    def __init__(self, executor: Executor, work: Callable[[], None]):
        self._executor = executor
        self._work = work
        self._lock = threading.Lock()
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def resume(self) -> None:
        with self._lock:
            if self._started:
                return
            self._started = True
        self._executor.submit(self._work).add_done_callback(report_failure)


class APIClient:
    # generic fetch client: request -> validated response -> JSON envelope -> typed Result
    DEFAULT_TIMEOUT = 60.0

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "weathernow/0.1",
        session_factory: Callable[[], requests.Session] | None = None,
        ui_executor: Executor | None = None,
        max_workers: int = 4,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._session_factory = session_factory or self._build_session

        # each worker thread lazily obtains its own session through _session()
        self._local = threading.local()
        self._network = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="weathernow-network"
        )

        # completions for fetch() are serialized on this executor
        self._owns_ui_executor = ui_executor is None
        self.ui_executor = ui_executor or main_queue()

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent, "Accept": "application/json"})
        # every request is sent exactly once
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def _session(self) -> requests.Session:
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._session_factory()
            self._local.session = sess
        return sess

    def json_task(self, request: requests.Request, completion: JSONTaskCompletion) -> JSONTask:
        # completion runs on a network worker thread
        return JSONTask(self._network, lambda: self._perform(request, completion))

    def _perform(self, request: requests.Request, completion: JSONTaskCompletion) -> None:
        try:
            session = self._session()
            prepared = session.prepare_request(request)
            # the path carries the API key, so only the host is logged
            logger.debug("%s request to %s", prepared.method, urlsplit(prepared.url).netloc)
            response = session.send(prepared, stream=True, timeout=self.timeout)
        except Exception as exc:
            # no response was obtained, whatever stopped the request
            logger.warning("No HTTP response: %s", exc)
            error = MissingResponse()
            error.__cause__ = exc
            completion(None, None, error)
            return

        try:
            response.content
        except requests.RequestException as exc:
            logger.warning("HTTP %s response without a readable body: %s", response.status_code, exc)
            completion(None, response, exc)
            return
        finally:
            response.close()

        if response.status_code != 200:
            logger.warning("Received HTTP response %s, not handled", response.status_code)
            completion(None, response, UnexpectedStatus(response.status_code))
            return

        try:
            data = response.json()
        except ValueError as exc:
            completion(None, response, exc)
            return

        if not isinstance(data, dict):
            # valid JSON but not an object, there is no envelope to hand over
            completion(None, response, None)
            return
        completion(data, response, None)

    def fetch(
        self,
        request: requests.Request,
        parse: Callable[[JSON], Optional[T]],
        completion: Callable[[Result[T]], None],
    ) -> None:
        """Run ``request`` and deliver ``parse``'s value as a Result.

        ``completion`` is always called on :attr:`ui_executor`, exactly once per
        request. A ``parse`` that returns None or raises yields
        ``Failure(UnexpectedResponse)``.
        """

        def deliver(data: Optional[JSON], response: Optional[requests.Response], error: Optional[BaseException]) -> None:
            if data is None:
                completion(Failure(error if error is not None else UnexpectedResponse()))
                return
            try:
                value = parse(data)
            except Exception as exc:
                logger.warning("Parser failed on response envelope: %s", exc)
                error = UnexpectedResponse()
                error.__cause__ = exc
                completion(Failure(error))
                return
            if value is None:
                completion(Failure(UnexpectedResponse()))
            else:
                completion(Success(value))

        task = self.json_task(
            request,
            lambda data, response, error: run_on_ui(self.ui_executor, deliver, data, response, error),
        )
        task.resume()

    def close(self) -> None:
        # network first, so pending completions still reach the UI executor
        self._network.shutdown(wait=True)
        if self._owns_ui_executor:
            self.ui_executor.shutdown(wait=True)

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
