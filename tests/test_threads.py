import io

import pytest

from syslabs.threads import alternate_greetings, count_with_threads, main, run_workers


def test_run_workers_finishes_every_worker():
    out = io.StringIO()
    finished = run_workers(3, 2, 0, out)
    assert sorted(finished) == [0, 1, 2]
    lines = out.getvalue().splitlines()
    assert len(lines) == 3 * (2 + 1)
    assert "[Thread 1] iteration 1" in lines
    assert "[Thread 2] finished" in lines


def test_each_worker_reports_iterations_before_finishing():
    out = io.StringIO()
    run_workers(2, 3, 0, out)
    lines = out.getvalue().splitlines()
    for tid in range(2):
        mine = [line for line in lines if line.startswith(f"[Thread {tid}]")]
        assert mine[-1] == f"[Thread {tid}] finished"
        assert mine[:-1] == [f"[Thread {tid}] iteration {i}" for i in range(3)]


@pytest.mark.parametrize("num_threads,loops", [(1, 10), (4, 1000), (3, 2500)])
def test_locked_counter_is_exact(num_threads, loops):
    assert count_with_threads(num_threads, loops, use_lock=True) == num_threads * loops


def test_unlocked_counter_never_overshoots():
    total = count_with_threads(4, 2000, use_lock=False)
    assert 0 < total <= 4 * 2000


def test_alternate_greetings_strictly_alternate():
    out = io.StringIO()
    greetings = alternate_greetings(3, 0, out)
    assert greetings == ["hello parent", "hello child"] * 3
    assert out.getvalue().splitlines() == greetings


def test_alternate_greetings_zero_rounds():
    assert alternate_greetings(0, 0, io.StringIO()) == []


def test_main_counter_reports_expected_total(capsys):
    assert main(["counter", "--threads", "2", "--loops", "100"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[-1] == "expected: 200, actual counter: 200"


def test_main_rejects_unknown_demo():
    with pytest.raises(SystemExit):
        main(["nonsense"])