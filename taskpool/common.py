"""Building blocks shared by the pool: tasks, boxed values, a semaphore and results."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_EMPTY = object()


class Value:
    """A box holding one value of any type, unpacked with an exact type check."""

    __slots__ = ("_data",)

    def __init__(self, data: Any = _EMPTY) -> None:
        self._data = data

    @property
    def is_empty(self) -> bool:
        return self._data is _EMPTY

    def cast(self, kind: type[T]) -> T:
        """Return the held value if it is exactly of type ``kind``."""
        if self._data is _EMPTY or type(self._data) is not kind:
            raise TypeError("type is unmatch!")
        return self._data

    def __repr__(self) -> str:
        if self._data is _EMPTY:
            return "Value()"
        return f"Value({self._data!r})"


class Semaphore:
    """A counting semaphore built on a condition variable."""

    def __init__(self, count: int = 0) -> None:
        self._count = count
        self._cond = threading.Condition()

    def wait(self) -> None:
        """Block until the count is positive, then decrement it."""
        with self._cond:
            self._cond.wait_for(lambda: self._count > 0)
            self._count -= 1

    def post(self) -> None:
        """Increment the count and wake any waiters."""
        with self._cond:
            self._count += 1
            self._cond.notify_all()


class Task(ABC):
    """A unit of work whose return value is delivered to an attached Result."""

    def __init__(self) -> None:
        self._result: Optional[Result] = None

    def set_result(self, result: Optional[Result]) -> None:
        self._result = result

    def exec(self) -> None:
        """Run the task and hand its return value to the attached result, if any."""
        if self._result is not None:
            self._result.set_value(self.run())

    @abstractmethod
    def run(self) -> Any:
        """Do the work and return its value."""


class Result:
    """The eventual return value of a submitted Task."""

    def __init__(self, task: Task, valid: bool = True) -> None:
        self._task = task
        self._valid = valid
        self._value = Value()
        self._ready = Semaphore()
        task.set_result(self)

    @property
    def valid(self) -> bool:
        return self._valid

    def get(self) -> Value:
        """Block until the task has finished and return its value.

        An invalid result returns a Value holding an empty string at once.
        """
        if not self._valid:
            logger.warning("result get invalid!")
            return Value("")
        self._ready.wait()
        value, self._value = self._value, Value()
        return value

    def set_value(self, value: Any) -> None:
        """Store the task's value and release a waiting ``get``."""
        self._value = value if isinstance(value, Value) else Value(value)
        self._ready.post()