"""Demo command: sum five ranges of integers on a growing thread pool."""

from __future__ import annotations

import argparse
import threading
import time
from typing import List, Optional, Sequence

from taskpool.pool import PoolMode, ThreadPool


def range_sum(a: int, b: int) -> int:
    """Return the sum of the integers from ``a`` to ``b`` inclusive."""
    tid = threading.get_ident()
    print(f"tid[{tid}] begin!")
    total = sum(range(a, b + 1))
    print(f"tid[{tid}] end!")
    return total


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="taskpool", description=__doc__)
    parser.add_argument("--threads", type=int, default=4, help="initial worker threads")
    parser.add_argument(
        "--settle", type=float, default=1.0, help="seconds to wait after starting the pool"
    )
    parser.add_argument(
        "--linger", type=float, default=10.0, help="seconds to wait before shutting down"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    with ThreadPool() as pool:
        pool.set_mode(PoolMode.CACHE)
        pool.start(args.threads)
        time.sleep(args.settle)

        futures = [pool.submit_task(range_sum, lo, lo + 9) for lo in range(1, 50, 10)]
        sums: List[int] = [future.result() for future in futures]
        print(", ".join(f"sum{i}: {value}" for i, value in enumerate(sums, 1)))

        time.sleep(args.linger)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())