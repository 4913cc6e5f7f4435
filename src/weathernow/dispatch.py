# explicit "run on the UI executor" primitive
# callers hand in the executor they treat as their UI thread, so nothing depends on a global queue

from __future__ import annotations
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)


def main_queue() -> ThreadPoolExecutor:
    # a single worker runs submitted callbacks one at a time, in submission order
    return ThreadPoolExecutor(max_workers=1, thread_name_prefix="weathernow-ui")


class InlineExecutor(Executor):
    # runs work on the submitting thread; for synchronous callers and tests
    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)
        return future


def report_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Callback raised: %s", exc, exc_info=exc)


def run_on_ui(executor: Executor, fn: Callable[..., Any], *args: Any) -> Future:
    future = executor.submit(fn, *args)
    # an executor keeps a callback's exception inside the future; surface it in the log
    future.add_done_callback(report_failure)
    return future
