"""Detached worker threads that carry a small integer id."""

from __future__ import annotations

import itertools
import threading
from typing import Callable, ClassVar


class PoolThread:
    """A thread handle with a process-wide increasing id, passed to its function."""

    _ids: ClassVar[itertools.count] = itertools.count()
    _ids_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, func: Callable[[int], None]) -> None:
        self._func = func
        with PoolThread._ids_lock:
            self._thread_id = next(PoolThread._ids)

    @property
    def thread_id(self) -> int:
        return self._thread_id

    def start(self) -> None:
        """Run the function on a new daemon thread with this handle's id."""
        thread = threading.Thread(
            target=self._func,
            args=(self._thread_id,),
            name=f"pool-thread-{self._thread_id}",
            daemon=True,
        )
        thread.start()