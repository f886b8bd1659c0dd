import queue
import threading

from taskpool.worker import PoolThread


def _noop(_thread_id):
    pass


def test_ids_increase_by_one():
    first = PoolThread(_noop)
    second = PoolThread(_noop)
    assert second.thread_id == first.thread_id + 1


def test_ids_are_unique_across_threads():
    handles = []
    lock = threading.Lock()

    def build():
        for _ in range(50):
            handle = PoolThread(_noop)
            with lock:
                handles.append(handle)

    builders = [threading.Thread(target=build) for _ in range(4)]
    for b in builders:
        b.start()
    for b in builders:
        b.join()

    ids = [handle.thread_id for handle in handles]
    assert len(ids) == 200
    assert len(set(ids)) == 200

    later = PoolThread(_noop)
    assert later.thread_id > max(ids)


def test_start_passes_own_id_to_function():
    seen = queue.Queue()
    handle = PoolThread(seen.put)
    handle.start()
    assert seen.get(timeout=2) == handle.thread_id


def test_start_runs_on_another_thread():
    seen = queue.Queue()
    handle = PoolThread(lambda _tid: seen.put(threading.get_ident()))
    handle.start()
    assert seen.get(timeout=2) != threading.get_ident()