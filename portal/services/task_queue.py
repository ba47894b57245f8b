"""
Task Queue - runs work after the triggering request has returned.

enqueue(fn, *args, delay_seconds=0) hands fn to a worker pool and returns
a Future. Anything fn raises is logged; the caller never sees it.
"""

import time
import logging
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

logger = logging.getLogger(__name__)


def _run_logged(fn: Callable, args: tuple, kwargs: dict, delay_seconds: float):
    if delay_seconds > 0:
        time.sleep(delay_seconds)
    try:
        return fn(*args, **kwargs)
    except Exception:
        logger.exception("Background task %s failed", getattr(fn, "__name__", fn))
        return None


class TaskQueue(ABC):

    @abstractmethod
    def enqueue(self, fn: Callable, *args, delay_seconds: float = 0, **kwargs) -> Future:
        ...

    def shutdown(self, wait: bool = True) -> None:
        pass


class ThreadPoolTaskQueue(TaskQueue):

    def __init__(self, max_workers: int = 4):
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="portal-task")

    def enqueue(self, fn: Callable, *args, delay_seconds: float = 0, **kwargs) -> Future:
        return self.executor.submit(_run_logged, fn, args, kwargs, delay_seconds)

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)


class InlineTaskQueue(TaskQueue):
    """Runs tasks synchronously in the caller's thread (scripts and tests)."""

    def enqueue(self, fn: Callable, *args, delay_seconds: float = 0, **kwargs) -> Future:
        future = Future()
        future.set_result(_run_logged(fn, args, kwargs, delay_seconds))
        return future
