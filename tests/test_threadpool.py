import threading
import time

import pytest

from hvbase.threadpool import PoolStatus, ThreadPool


def test_two_batches_of_tasks():
    done = []
    lock = threading.Lock()

    def print_task(i):
        time.sleep(0.01)
        with lock:
            done.append(i)

    tp = ThreadPool(4)
    tp.start()
    i = 0
    while i < 10:
        tp.commit(print_task, i)
        i += 1
    tp.wait()
    assert sorted(done) == list(range(10))
    while i < 20:
        tp.commit(print_task, i)
        i += 1
    tp.wait()
    assert sorted(done) == list(range(20))
    assert tp.idle_num == 4
    tp.stop()


def test_future_result_and_kwargs():
    with ThreadPool(2) as tp:
        future = tp.commit(lambda a, b=0: a * b, 6, b=7)
        assert future.result(timeout=5) == 42


def test_exception_reaches_future():
    def boom():
        raise KeyError("missing")

    with ThreadPool(1) as tp:
        future = tp.commit(boom)
        with pytest.raises(KeyError):
            future.result(timeout=5)
        assert tp.commit(lambda: "still alive").result(timeout=5) == "still alive"


def test_status_transitions():
    tp = ThreadPool(2)
    assert tp.status is PoolStatus.STOP
    tp.start()
    assert tp.status is PoolStatus.RUNNING
    tp.pause()
    assert tp.status is PoolStatus.PAUSE
    tp.resume()
    assert tp.status is PoolStatus.RUNNING
    tp.stop()
    assert tp.status is PoolStatus.STOP
    assert tp.workers == []


def test_pause_holds_tasks_until_resume():
    tp = ThreadPool(2)
    tp.start()
    tp.pause()
    future = tp.commit(lambda: "ran")
    time.sleep(0.1)
    assert not future.done()
    tp.resume()
    assert future.result(timeout=5) == "ran"
    tp.stop()


def test_tasks_committed_before_start_run_after_start():
    tp = ThreadPool(2)
    future = tp.commit(lambda: 1)
    time.sleep(0.05)
    assert not future.done()
    tp.start()
    assert future.result(timeout=5) == 1
    tp.stop()


def test_concurrency_bounded_by_pool_size():
    size = 3
    active = 0
    peak = 0
    lock = threading.Lock()

    def task():
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
        time.sleep(0.02)
        with lock:
            active -= 1

    with ThreadPool(size) as tp:
        futures = [tp.commit(task) for _ in range(12)]
        tp.wait()
        assert all(f.done() for f in futures)
    assert 1 <= peak <= size


def test_wait_returns_when_stopped():
    tp = ThreadPool(1)
    tp.wait()
    assert tp.status is PoolStatus.STOP


def test_invalid_size():
    with pytest.raises(ValueError):
        ThreadPool(0)