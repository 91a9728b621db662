"""A bounded ring buffer shared by producer and consumer threads."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from typing import Any, Callable, List, Optional, TextIO, Tuple

BUFFER_SIZE = 5
NUM_PRODUCERS = 2
NUM_CONSUMERS = 2
ITEMS_PER_PRODUCER = 10
PRODUCER_DELAY = 0.1
CONSUMER_DELAY_FACTOR = 1.5

WaitCallback = Optional[Callable[[], None]]


class BoundedBuffer:
    """A fixed-size ring buffer whose put blocks when full and get when empty."""

    def __init__(self, capacity: int = BUFFER_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._slots: List[Any] = [None] * capacity
        self._write = 0
        self._read = 0
        self._count = 0
        lock = threading.Lock()
        self._not_full = threading.Condition(lock)
        self._not_empty = threading.Condition(lock)

    def put(self, item: Any, on_wait: WaitCallback = None) -> int:
        """Store item, waiting while the buffer is full; return its slot.

        on_wait is called each time the caller has to wait.
        """
        with self._not_full:
            while self._count == self.capacity:
                if on_wait is not None:
                    on_wait()
                self._not_full.wait()
            slot = self._write
            self._slots[slot] = item
            self._write = (slot + 1) % self.capacity
            self._count += 1
            self._not_empty.notify()
            return slot

    def get(self, on_wait: WaitCallback = None) -> Tuple[Any, int]:
        """Remove the oldest item, waiting while empty; return (item, slot).

        on_wait is called each time the caller has to wait.
        """
        with self._not_empty:
            while self._count == 0:
                if on_wait is not None:
                    on_wait()
                self._not_empty.wait()
            slot = self._read
            item = self._slots[slot]
            self._slots[slot] = None
            self._read = (slot + 1) % self.capacity
            self._count -= 1
            self._not_full.notify()
            return item, slot

    def __len__(self) -> int:
        with self._not_full:
            return self._count


def run(
    num_producers: int = NUM_PRODUCERS,
    num_consumers: int = NUM_CONSUMERS,
    items_per_producer: int = ITEMS_PER_PRODUCER,
    capacity: int = BUFFER_SIZE,
    delay: float = PRODUCER_DELAY,
    out: Optional[TextIO] = None,
) -> List[int]:
    """Run producers and consumers over a shared buffer.

    Producer p makes items p * 100 + i. Producers pause delay seconds after
    each item, consumers one and a half times as long. Returns the items in
    the order they were consumed.
    """
    out = sys.stdout if out is None else out
    total = num_producers * items_per_producer
    if num_consumers < 1 or total % num_consumers:
        raise ValueError(
            f"{total} items cannot be shared evenly among {num_consumers} consumers"
        )
    per_consumer = total // num_consumers
    buffer = BoundedBuffer(capacity)
    consumed: List[int] = []
    print_lock = threading.Lock()

    def say(message: str) -> None:
        with print_lock:
            print(message, file=out)

    def producer(pid: int) -> None:
        for i in range(items_per_producer):
            item = pid * 100 + i
            slot = buffer.put(
                item, on_wait=lambda: say(f"[producer {pid}] buffer full, waiting...")
            )
            say(f"[producer {pid}] produced: {item} (buffer[{slot}])")
            time.sleep(delay)
        say(f"[producer {pid}] done producing")

    def consumer(cid: int) -> None:
        for _ in range(per_consumer):
            item, slot = buffer.get(
                on_wait=lambda: say(f"    [consumer {cid}] buffer empty, waiting...")
            )
            with print_lock:
                consumed.append(item)
                print(f"    [consumer {cid}] consumed: {item} (buffer[{slot}])", file=out)
            time.sleep(delay * CONSUMER_DELAY_FACTOR)
        say(f"    [consumer {cid}] done consuming")

    say("=== bounded buffer producer-consumer program started ===")
    say(
        f"buffer size: {capacity}, producers: {num_producers}, "
        f"consumers: {num_consumers}, total items: {total}\n"
    )
    producers = [threading.Thread(target=producer, args=(p,)) for p in range(num_producers)]
    consumers = [threading.Thread(target=consumer, args=(c,)) for c in range(num_consumers)]
    for thread in (*producers, *consumers):
        thread.start()
    for thread in (*producers, *consumers):
        thread.join()
    say("\n=== all producers/consumers finished, program done ===")
    return consumed


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="bounded buffer producer-consumer demo")
    parser.add_argument("--producers", type=int, default=NUM_PRODUCERS)
    parser.add_argument("--consumers", type=int, default=NUM_CONSUMERS)
    parser.add_argument("--items", type=int, default=ITEMS_PER_PRODUCER)
    parser.add_argument("--capacity", type=int, default=BUFFER_SIZE)
    parser.add_argument("--delay", type=float, default=PRODUCER_DELAY)
    args = parser.parse_args(argv)
    try:
        run(args.producers, args.consumers, args.items, args.capacity, args.delay)
    except ValueError as exc:
        print(f"bounded_buffer: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())