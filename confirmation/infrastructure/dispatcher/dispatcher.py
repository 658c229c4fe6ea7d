from typing import Any, Callable, List, Optional
import threading
import time


class SequentialRunner:
    """In-process runner that allows at most one outstanding task.

    `submit` runs the task to completion before returning. A second submit while
    one is in flight (another thread, or a task that submits re-entrantly) is
    rejected instead of queued, so callers cannot accidentally fan out.
    `history` keeps (name, started, settled) tuples in settle order.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._sem = threading.Semaphore(1)
        self._clock = clock or time.monotonic
        self.history: List[tuple] = []

    def submit(self, task_name: str, func: Callable[..., Any], *args, **kwargs) -> Any:
        acquired = self._sem.acquire(blocking=False)
        if not acquired:
            raise RuntimeError(f"task {task_name} submitted while another task is in flight")
        started = self._clock()
        try:
            return func(*args, **kwargs)
        finally:
            self.history.append((task_name, started, self._clock()))
            self._sem.release()
