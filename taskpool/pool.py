"""A thread pool with a bounded task queue and an optional growing mode."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from concurrent.futures import Future
from enum import Enum
from typing import Any, Callable, Deque, Dict, Optional

from taskpool.worker import PoolThread

logger = logging.getLogger(__name__)

TASK_MAX_SIZE = 1024
THREAD_INIT_SIZE = 4
THREAD_MAX_SIZE = 10
THREAD_MAX_IDLE_TIME = 10.0


class PoolMode(Enum):
    """How the pool sizes itself."""

    FIXED = 0  # a fixed number of threads
    CACHE = 1  # threads are added under load and reclaimed when idle


class ThreadPool:
    """A pool of worker threads consuming a bounded queue of callables."""

    submit_timeout: float = 1.0
    idle_timeout: float = THREAD_MAX_IDLE_TIME
    poll_interval: float = 1.0

    def __init__(self) -> None:
        self._init_thread_size = THREAD_INIT_SIZE
        self._max_thread_size = THREAD_MAX_SIZE
        self._idle_thread_size = 0
        self._count_thread_size = THREAD_INIT_SIZE
        self._threads: Dict[int, PoolThread] = {}
        self._tasks: Deque[Callable[[], None]] = deque()
        self._task_max_size = TASK_MAX_SIZE
        self._mode = PoolMode.FIXED
        self._running = False
        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)
        self._not_run = threading.Condition(self._lock)

    @property
    def mode(self) -> PoolMode:
        return self._mode

    @property
    def thread_count(self) -> int:
        """Number of worker threads currently alive in the pool."""
        with self._lock:
            return len(self._threads)

    def _log_stats(self) -> None:
        logger.info(
            "thread pool: max size[%d] count size[%d] init size[%d]",
            self._max_thread_size,
            self._count_thread_size,
            self._init_thread_size,
        )

    def start(self, size: int = THREAD_INIT_SIZE) -> None:
        """Start ``size`` worker threads."""
        with self._lock:
            self._init_thread_size = size
            self._idle_thread_size = size
            self._count_thread_size = size
            self._running = True
            self._log_stats()
            for _ in range(size):
                self._spawn()

    def set_mode(self, mode: PoolMode) -> None:
        self._mode = PoolMode(mode)

    def set_task_max_size(self, size: int) -> None:
        self._task_max_size = size

    def _spawn(self) -> None:
        thread = PoolThread(self._worker)
        self._threads[thread.thread_id] = thread
        thread.start()

    def submit_task(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue ``func(*args, **kwargs)`` and return a future for its value.

        If the queue stays full for ``submit_timeout`` seconds the returned
        future holds a ``TimeoutError`` instead.
        """
        future: Future = Future()

        def job() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                value = func(*args, **kwargs)
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(value)

        with self._lock:
            has_room = self._not_full.wait_for(
                lambda: len(self._tasks) < self._task_max_size,
                timeout=self.submit_timeout,
            )
            if not has_room:
                logger.warning("submit task timeout!")
                future.set_exception(TimeoutError("submit task timeout"))
                return future

            self._tasks.append(job)
            self._not_empty.notify_all()

            if (
                self._mode is PoolMode.CACHE
                and len(self._tasks) > self._idle_thread_size
                and self._count_thread_size < self._max_thread_size
            ):
                logger.debug("create new thread")
                self._spawn()
                self._count_thread_size += 1
                self._idle_thread_size += 1

        return future

    def _worker(self, thread_id: int) -> None:
        last_active = time.monotonic()
        while True:
            with self._lock:
                while not self._tasks:
                    if not self._running:
                        self._threads.pop(thread_id, None)
                        self._not_run.notify_all()
                        return
                    if self._mode is PoolMode.CACHE:
                        if not self._not_empty.wait(self.poll_interval):
                            idle_for = time.monotonic() - last_active
                            if (
                                idle_for >= self.idle_timeout
                                and self._count_thread_size > self._init_thread_size
                            ):
                                self._count_thread_size -= 1
                                self._idle_thread_size -= 1
                                self._threads.pop(thread_id, None)
                                self._not_run.notify_all()
                                logger.debug("thread %d exit!", thread_id)
                                return
                    else:
                        self._not_empty.wait()

                job = self._tasks.popleft()
                self._idle_thread_size -= 1
                if self._tasks:
                    self._not_empty.notify_all()
                self._not_full.notify_all()

            job()

            last_active = time.monotonic()
            with self._lock:
                self._idle_thread_size += 1

    def shutdown(self) -> None:
        """Let the workers drain the queue, then wait for all of them to exit."""
        with self._lock:
            self._log_stats()
            self._running = False
            self._not_empty.notify_all()
            self._not_run.wait_for(lambda: not self._threads)

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Any) -> None:
        self.shutdown()