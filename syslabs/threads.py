"""Thread demonstrations: plain workers, a shared counter and turn taking."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from typing import List, Optional, TextIO

NUM_WORKERS = 5
WORKER_ITERATIONS = 3
WORKER_DELAY = 0.1
NUM_COUNTERS = 4
NUM_LOOP = 1_000_000
NUM_PRINTS = 5
GREETING_DELAY = 1.0


def run_workers(
    num_threads: int = NUM_WORKERS,
    iterations: int = WORKER_ITERATIONS,
    delay: float = WORKER_DELAY,
    out: Optional[TextIO] = None,
) -> List[int]:
    """Start workers that each report a few iterations; return ids in finishing order."""
    out = sys.stdout if out is None else out
    lock = threading.Lock()
    finished: List[int] = []

    def worker(thread_id: int) -> None:
        for i in range(iterations):
            with lock:
                print(f"[Thread {thread_id}] iteration {i}", file=out)
            time.sleep(delay)
        with lock:
            print(f"[Thread {thread_id}] finished", file=out)
            finished.append(thread_id)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return finished


def count_with_threads(
    num_threads: int = NUM_COUNTERS, loops: int = NUM_LOOP, use_lock: bool = True
) -> int:
    """Have each thread increment a shared counter loops times; return the total.

    Without the lock, updates may be lost and the total can fall short.
    """
    counter = 0
    lock = threading.Lock()

    def unsafe_worker() -> None:
        nonlocal counter
        for _ in range(loops):
            counter += 1

    def safe_worker() -> None:
        nonlocal counter
        for _ in range(loops):
            with lock:
                counter += 1

    target = safe_worker if use_lock else unsafe_worker
    threads = [threading.Thread(target=target) for _ in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return counter


def alternate_greetings(
    rounds: int = NUM_PRINTS, delay: float = GREETING_DELAY, out: Optional[TextIO] = None
) -> List[str]:
    """Let the calling thread and a child thread greet in strict alternation.

    The parent always goes first. Returns the greetings in the order printed.
    """
    out = sys.stdout if out is None else out
    turn = "parent"
    cond = threading.Condition()
    greetings: List[str] = []

    def take_turns(me: str, other: str) -> None:
        nonlocal turn
        for _ in range(rounds):
            with cond:
                cond.wait_for(lambda: turn == me)
                line = f"hello {me}"
                greetings.append(line)
                print(line, file=out)
                turn = other
                cond.notify()
            time.sleep(delay)

    child = threading.Thread(target=take_turns, args=("child", "parent"))
    child.start()
    take_turns("parent", "child")
    child.join()
    return greetings


def _counter_demo(num_threads: int, loops: int) -> None:
    expected = num_threads * loops
    print("=== stage 1: incrementing counter without a mutex ===")
    actual = count_with_threads(num_threads, loops, use_lock=False)
    print(f"expected: {expected}, actual counter: {actual}")
    print("\n=== stage 2: incrementing counter with a mutex ===")
    actual = count_with_threads(num_threads, loops, use_lock=True)
    print(f"expected: {expected}, actual counter: {actual}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="thread demonstrations")
    parser.add_argument("demo", choices=["workers", "counter", "alternate"])
    parser.add_argument("--threads", type=int, default=None)
    parser.add_argument("--loops", type=int, default=NUM_LOOP)
    parser.add_argument("--rounds", type=int, default=NUM_PRINTS)
    parser.add_argument("--delay", type=float, default=None)
    args = parser.parse_args(argv)

    if args.demo == "workers":
        count = NUM_WORKERS if args.threads is None else args.threads
        print(f"main thread: starting {count} threads")
        run_workers(count, WORKER_ITERATIONS, WORKER_DELAY if args.delay is None else args.delay)
        print("main thread: all threads finished, program done")
    elif args.demo == "counter":
        _counter_demo(NUM_COUNTERS if args.threads is None else args.threads, args.loops)
    else:
        print("=== parent/child threads alternating greetings started ===")
        alternate_greetings(args.rounds, GREETING_DELAY if args.delay is None else args.delay)
        print("=== program finished ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())