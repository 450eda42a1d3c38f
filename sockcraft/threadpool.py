"""Named worker threads and a singleton pool that runs queued tasks."""

from __future__ import annotations

import itertools
import threading
from collections import deque
from typing import Callable

from sockcraft.log import LogLevel, logger

DEFAULT_POOL_SIZE = 5

_thread_numbers = itertools.count(1)


class Thread:
    """A named thread running one callable; ``detach`` makes ``join`` a no-op."""

    def __init__(self, func: Callable[[], object]) -> None:
        self.name = f"thread-{next(_thread_numbers)}"
        self._func = func
        self._thread: threading.Thread | None = None
        self._detached = False
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def detached(self) -> bool:
        return self._detached

    def _routine(self) -> None:
        self._running = True
        try:
            self._func()
        finally:
            self._running = False

    def start(self) -> bool:
        """Start the thread; return False if it was already started."""
        if self._thread is not None:
            return False
        self._thread = threading.Thread(target=self._routine, name=self.name, daemon=True)
        try:
            self._thread.start()
        except RuntimeError:
            self._thread = None
            return False
        return True

    def join(self) -> None:
        if self._detached or self._thread is None:
            return
        self._thread.join()

    def detach(self) -> None:
        self._detached = True


class ThreadPool:
    """A fixed set of workers draining a FIFO queue of callables."""

    _instance: ThreadPool | None = None
    _instance_lock = threading.Lock()

    def __init__(self, size: int = DEFAULT_POOL_SIZE) -> None:
        if size < 1:
            raise ValueError("pool size must be positive")
        self._tasks: deque[Callable[[], object]] = deque()
        self._cond = threading.Condition()
        self._running = False
        self._sleeping = 0
        self._pool = [Thread(self._worker) for _ in range(size)]

    @classmethod
    def instance(cls) -> ThreadPool:
        """Return the shared pool, creating and starting it on first use."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    pool = cls()
                    pool.start()
                    cls._instance = pool
        return cls._instance

    @property
    def size(self) -> int:
        return len(self._pool)

    @property
    def running(self) -> bool:
        return self._running

    def _worker(self) -> None:
        while True:
            with self._cond:
                while not self._tasks and self._running:
                    self._sleeping += 1
                    self._cond.wait()
                    self._sleeping -= 1
                if not self._running and not self._tasks:
                    return
                task = self._tasks.popleft()
            try:
                task()
            except Exception as exc:  # a failing task must not kill the worker
                logger.log(LogLevel.ERROR, "task failed: ", exc)

    def start(self) -> None:
        with self._cond:
            if self._running:
                return
            self._running = True
        for thread in self._pool:
            thread.start()

    def stop(self) -> None:
        """Stop accepting tasks; workers finish what is queued, then exit."""
        with self._cond:
            if not self._running:
                return
            self._running = False
            self._cond.notify_all()

    def join(self) -> None:
        for thread in self._pool:
            thread.join()

    def enqueue(self, task: Callable[[], object]) -> bool:
        """Queue a task; return False if the pool is not running."""
        with self._cond:
            if not self._running:
                return False
            self._tasks.append(task)
            self._cond.notify()
            return True

    def __enter__(self) -> ThreadPool:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
        self.join()