import threading

import pytest

from taskpool.common import Result, Semaphore, Task, Value


class EchoTask(Task):
    def __init__(self, data, gate=None):
        super().__init__()
        self.data = data
        self.gate = gate
        self.calls = 0

    def run(self):
        self.calls += 1
        if self.gate is not None:
            self.gate.wait()
        return self.data


def test_value_cast_exact_type():
    assert Value(42).cast(int) == 42
    assert Value("abc").cast(str) == "abc"


def test_value_cast_mismatch_raises():
    with pytest.raises(TypeError, match="type is unmatch!"):
        Value(42).cast(str)


def test_value_cast_subclass_is_not_exact():
    with pytest.raises(TypeError):
        Value(True).cast(int)


def test_empty_value_cast_raises():
    empty = Value()
    assert empty.is_empty
    with pytest.raises(TypeError):
        empty.cast(int)


def test_task_is_abstract():
    with pytest.raises(TypeError):
        Task()


def test_exec_without_result_does_not_run():
    task = EchoTask(7)
    Task.exec(task)
    assert task.calls == 0

    result = Result(task)
    Task.exec(task)
    assert task.calls == 1
    assert result.get().cast(int) == 7


def test_result_gets_value_from_exec():
    task = EchoTask((1, 2))
    result = Result(task)
    task.exec()
    assert task.calls == 1
    assert result.get().cast(tuple) == (1, 2)


def test_result_get_blocks_until_task_runs():
    gate = threading.Event()
    task = EchoTask("done", gate)
    result = Result(task)
    worker = threading.Thread(target=task.exec)
    worker.start()

    collected = []
    getter = threading.Thread(target=lambda: collected.append(result.get()))
    getter.start()
    getter.join(timeout=0.2)
    assert getter.is_alive()
    assert collected == []

    gate.set()
    getter.join(timeout=2)
    worker.join(timeout=2)
    assert not getter.is_alive()
    assert collected[0].cast(str) == "done"


def test_invalid_result_returns_empty_string():
    task = EchoTask(5)
    result = Result(task, False)
    assert result.valid is False
    assert result.get().cast(str) == ""


def test_set_value_accepts_boxed_value():
    task = EchoTask(None)
    result = Result(task)
    result.set_value(Value(3.5))
    assert result.get().cast(float) == 3.5


def test_semaphore_wait_blocks_until_post():
    sem = Semaphore(0)
    passed = []
    waiter = threading.Thread(target=lambda: (sem.wait(), passed.append(True)))
    waiter.start()
    waiter.join(timeout=0.2)
    assert waiter.is_alive()
    sem.post()
    waiter.join(timeout=2)
    assert passed == [True]


def test_semaphore_initial_count_allows_that_many_waits():
    sem = Semaphore(2)
    returned = [sem.wait() for _ in range(2)]
    assert returned == [None, None]

    third = []
    waiter = threading.Thread(target=lambda: third.append(sem.wait()))
    waiter.start()
    waiter.join(timeout=0.2)
    assert waiter.is_alive()
    assert third == []

    sem.post()
    waiter.join(timeout=2)
    assert not waiter.is_alive()
    assert third == [None]