"""A fixed-size pool of worker threads with pause, resume and wait."""

import os
import threading
from collections import deque
from concurrent.futures import Future
from enum import Enum


class PoolStatus(Enum):
    """Run state of a ThreadPool."""

    STOP = 0
    RUNNING = 1
    PAUSE = 2


class ThreadPool:
    """Runs committed callables on ``size`` worker threads.

    Tasks may be committed before ``start``; they run once the pool runs.
    A paused pool keeps its queue but hands out no new tasks.
    """

    def __init__(self, size=None):
        if size is None:
            size = os.cpu_count() or 1
        if size < 1:
            raise ValueError("pool size must be at least 1")
        self.pool_size = size
        self.idle_num = size
        self.status = PoolStatus.STOP
        self.workers = []
        self.tasks = deque()
        self._cond = threading.Condition()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()

    def start(self):
        """Start the workers if the pool is stopped."""
        with self._cond:
            if self.status is not PoolStatus.STOP:
                return
            self.status = PoolStatus.RUNNING
            self.idle_num = self.pool_size
            self.workers = [
                threading.Thread(target=self._work, daemon=True)
                for _ in range(self.pool_size)
            ]
        for worker in self.workers:
            worker.start()

    def stop(self):
        """Stop the workers and wait for them; queued tasks stay queued."""
        with self._cond:
            if self.status is PoolStatus.STOP:
                return
            self.status = PoolStatus.STOP
            self._cond.notify_all()
        for worker in self.workers:
            worker.join()
        self.workers = []

    def pause(self):
        """Stop handing out tasks until ``resume``."""
        with self._cond:
            if self.status is PoolStatus.RUNNING:
                self.status = PoolStatus.PAUSE

    def resume(self):
        """Continue handing out tasks after ``pause``."""
        with self._cond:
            if self.status is PoolStatus.PAUSE:
                self.status = PoolStatus.RUNNING
                self._cond.notify_all()

    def wait(self):
        """Block until the queue is empty and every worker is idle, or the pool stops."""
        with self._cond:
            self._cond.wait_for(
                lambda: self.status is PoolStatus.STOP
                or (not self.tasks and self.idle_num == self.pool_size)
            )

    def commit(self, fn, *args, **kwargs):
        """Queue ``fn(*args, **kwargs)``; the returned Future holds its result."""
        future = Future()
        with self._cond:
            self.tasks.append((future, fn, args, kwargs))
            self._cond.notify()
        return future

    def _work(self):
        while True:
            with self._cond:
                self._cond.wait_for(
                    lambda: self.status is PoolStatus.STOP
                    or (self.status is PoolStatus.RUNNING and self.tasks)
                )
                if self.status is PoolStatus.STOP:
                    return
                future, fn, args, kwargs = self.tasks.popleft()
                self.idle_num -= 1

            try:
                if future.set_running_or_notify_cancel():
                    try:
                        result = fn(*args, **kwargs)
                    except BaseException as exc:
                        future.set_exception(exc)
                    else:
                        future.set_result(result)
            finally:
                with self._cond:
                    self.idle_num += 1
                    self._cond.notify_all()