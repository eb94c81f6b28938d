"""In-process runner for fire-and-forget order side effects.

Tasks run on a small thread pool. A failing task is retried after each delay
in ``retry_delays`` and, once attempts are exhausted, logged as a
``SideEffectError``. Failures never reach the code that enqueued the task.
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock

from django.conf import settings
from django.db import close_old_connections

from .errors import SideEffectError

logger = logging.getLogger(__name__)

DEFAULT_RETRY_DELAYS = [1, 5, 25]


class TaskRunner:
    """Run callables in the background with retry and backoff."""

    def __init__(
        self,
        *,
        workers: int = 4,
        retry_delays: list[float] | None = None,
        eager: bool = False,
    ) -> None:
        self.workers = workers
        self.retry_delays = list(DEFAULT_RETRY_DELAYS if retry_delays is None else retry_delays)
        self.eager = eager
        self._executor: ThreadPoolExecutor | None = None
        self._lock = Lock()

    @classmethod
    def from_settings(cls) -> "TaskRunner":
        return cls(
            workers=getattr(settings, "ORDER_TASK_WORKERS", 4),
            retry_delays=getattr(settings, "ORDER_TASK_RETRY_DELAYS", DEFAULT_RETRY_DELAYS),
            eager=getattr(settings, "ORDER_TASKS_ALWAYS_EAGER", False),
        )

    @property
    def max_attempts(self) -> int:
        return len(self.retry_delays) + 1

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.workers,
                    thread_name_prefix="order-tasks",
                )
            return self._executor

    def enqueue(self, name: str, func: Callable, *args, delay: float = 0, **kwargs) -> Future | None:
        """Schedule ``func(*args, **kwargs)``, optionally after *delay* seconds.

        Returns the future in background mode, or None when running eagerly.
        """
        if self.eager:
            self._run(name, func, args, kwargs, delay=0)
            return None
        logger.debug("Queueing task %s", name)
        return self._get_executor().submit(self._run, name, func, args, kwargs, delay)

    def _run(self, name: str, func: Callable, args: tuple, kwargs: dict, delay: float) -> bool:
        """Execute a task until it succeeds or attempts run out. Never raises."""
        if delay:
            time.sleep(delay)

        for attempt in range(1, self.max_attempts + 1):
            if not self.eager:
                close_old_connections()
            try:
                func(*args, **kwargs)
            except Exception as exc:
                if attempt < self.max_attempts:
                    wait = self.retry_delays[attempt - 1]
                    logger.warning(
                        "Task %s failed (attempt %d/%d), retrying in %ss: %s",
                        name,
                        attempt,
                        self.max_attempts,
                        wait,
                        exc,
                    )
                    if wait:
                        time.sleep(wait)
                    continue
                error = SideEffectError(name, str(exc) or exc.__class__.__name__)
                logger.error("Giving up after %d attempts: %s", self.max_attempts, error, exc_info=exc)
                return False
            else:
                logger.info("Task %s completed (attempt %d)", name, attempt)
                return True
            finally:
                if not self.eager:
                    close_old_connections()
        return False

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            if self._executor is not None:
                self._executor.shutdown(wait=wait)
                self._executor = None
