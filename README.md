# taskpool

A small thread pool for Python with two modes of operation:

- **fixed** (`PoolMode.FIXED`, the default): a set number of worker threads
  serve a shared task queue;
- **cache** (`PoolMode.CACHE`): the pool starts with an initial number of
  workers and creates one more whenever a submission leaves more queued tasks
  than idle workers, up to ten threads in all. Extra workers that have been
  idle for `idle_timeout` seconds (10 by default) retire, but the pool never
  shrinks below the size it was started with.

The task queue is bounded (1024 tasks by default). A submission that cannot
find room in the queue within `submit_timeout` seconds (1 by default) is
refused: the future it returns holds a `TimeoutError`, and a warning is logged.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Using the pool

```python
from taskpool.pool import PoolMode, ThreadPool

def add(a, b):
    return a + b

with ThreadPool() as pool:
    pool.set_mode(PoolMode.CACHE)
    pool.start(4)
    future = pool.submit_task(add, 2, 3)
    print(future.result())  # 5
```

`submit_task(func, *args, **kwargs)` returns a `concurrent.futures.Future`.
If the task raises, the exception is raised again from `future.result()`.

Settings, made before `start(size)` (`size` defaults to 4):

- `set_mode(mode)`: `PoolMode.FIXED` or `PoolMode.CACHE`;
- `set_task_max_size(size)`: the largest number of queued tasks.

The class attributes `submit_timeout`, `idle_timeout` and `poll_interval`
(how often an idle worker in cache mode checks whether it should retire, in
seconds) may be overridden on an instance.

The `mode` property gives the current mode and `thread_count` the number of
worker threads alive.

Leaving the `with` block, or calling `shutdown()`, lets the workers finish the
tasks still queued and then waits for every worker to exit. Pool statistics
and warnings go to the standard `logging` module under the `taskpool.pool`
logger.

## Lower-level pieces

`taskpool.common` holds simpler building blocks for passing results:

- `Semaphore(count=0)`: a counting semaphore with `wait()` and `post()`;
- `Value(data)`: a holder for a value of any type, read back with
  `cast(kind)`, which raises `TypeError` unless the value's type is exactly
  `kind`;
- `Task`: an abstract base class whose `run()` subclasses override; `exec()`
  runs it and hands the returned value to the attached `Result`, and does
  nothing if no result is attached;
- `Result(task, valid=True)`: attaches itself to the task; `get()` blocks
  until the task has delivered its value and returns it as a `Value`. An
  invalid result returns `Value("")` at once.

`taskpool.worker.PoolThread(func)` gives each handle a process-wide increasing
`thread_id`; `start()` runs `func(thread_id)` on a daemon thread.

## Demo

```
taskpool-demo
```

Starts a pool in cache mode, sums the integers 1–10, 11–20, 21–30, 31–40 and
41–50 concurrently and prints the five sums. Options:

- `--threads N`: initial worker threads (default 4);
- `--settle SECONDS`: wait after starting the pool (default 1);
- `--linger SECONDS`: wait before shutting down (default 10).