"""
Wall-clock timing for solver runs.

The decomposition solvers time each phase of a run (the iteration itself,
then the convergence diagnostics) and surface the figures in the result
envelope as a flat dict.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator

Clock = Callable[[], float]


class Timer:
    """
    Overall timer plus named, accumulating sections.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('qr_iteration'):
            schur = get_schur_decomposition(A, 50)

        with timer.section('diagnostics'):
            residual = off_diagonal_norm(schur)

        timer.stop()
        timer.result()
        # {'total_seconds': 0.05, 'qr_iteration': 0.04, 'diagnostics': 0.01}

    clock defaults to time.perf_counter; tests pass a fake clock.
    """

    def __init__(self, clock: Clock = time.perf_counter) -> None:
        self._clock = clock
        self._sections: dict[str, float] = {}
        self._started_at: float | None = None
        self._total: float | None = None

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._total is None

    def start(self) -> None:
        self._started_at = self._clock()
        self._total = None

    def stop(self) -> None:
        if self._started_at is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = self._clock() - self._started_at

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block; re-entering a name adds to its total."""
        entered = self._clock()
        try:
            yield
        finally:
            self._sections[name] = self._sections.get(name, 0.0) + (self._clock() - entered)

    def result(self) -> dict[str, float]:
        """
        'total_seconds' followed by every section in first-use order.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}


@contextmanager
def timed(clock: Clock = time.perf_counter) -> Iterator[Timer]:
    """
    Time a block without managing start/stop by hand.

        with timed() as timer:
            Q, R = householder_qr(A)
        timer.result()['total_seconds']
    """
    timer = Timer(clock)
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
