import io
import threading

import pytest

from syslabs.bounded_buffer import BoundedBuffer, main, run


def test_put_returns_consecutive_slots_and_get_is_fifo():
    buffer = BoundedBuffer(3)
    assert [buffer.put(x) for x in ("a", "b", "c")] == [0, 1, 2]
    assert len(buffer) == 3
    assert buffer.get() == ("a", 0)
    assert buffer.get() == ("b", 1)
    assert len(buffer) == 1


def test_slots_wrap_around():
    buffer = BoundedBuffer(2)
    buffer.put("a")
    buffer.get()
    assert buffer.put("b") == 1
    assert buffer.put("c") == 0
    assert buffer.get() == ("b", 1)
    assert buffer.get() == ("c", 0)
    assert len(buffer) == 0


@pytest.mark.parametrize("capacity", [0, -1])
def test_invalid_capacity_rejected(capacity):
    with pytest.raises(ValueError):
        BoundedBuffer(capacity)


def test_put_waits_when_full():
    buffer = BoundedBuffer(1)
    buffer.put("first")
    waited = threading.Event()
    slots = []
    worker = threading.Thread(target=lambda: slots.append(buffer.put("second", on_wait=waited.set)))
    worker.start()
    assert waited.wait(5)
    assert buffer.get() == ("first", 0)
    worker.join(5)
    assert slots == [0]
    assert buffer.get() == ("second", 0)


def test_get_waits_when_empty():
    buffer = BoundedBuffer(2)
    waited = threading.Event()
    results = []
    worker = threading.Thread(target=lambda: results.append(buffer.get(on_wait=waited.set)))
    worker.start()
    assert waited.wait(5)
    buffer.put(42)
    worker.join(5)
    assert results == [(42, 0)]


def test_run_consumes_every_item_once():
    out = io.StringIO()
    consumed = run(2, 2, 5, capacity=2, delay=0, out=out)
    expected = [pid * 100 + i for pid in range(2) for i in range(5)]
    assert sorted(consumed) == sorted(expected)
    text = out.getvalue()
    assert text.count("produced:") == len(expected)
    assert text.count("consumed:") == len(expected)
    assert "done producing" in text


def test_run_keeps_each_producers_order_with_one_consumer():
    consumed = run(3, 1, 4, capacity=2, delay=0, out=io.StringIO())
    for pid in range(3):
        mine = [item for item in consumed if item // 100 == pid]
        assert mine == sorted(mine)
        assert len(mine) == 4


def test_run_rejects_uneven_split():
    with pytest.raises(ValueError):
        run(1, 2, 3, delay=0, out=io.StringIO())


def test_main_reports_uneven_split():
    assert main(["--producers", "1", "--consumers", "2", "--items", "3"]) == 2