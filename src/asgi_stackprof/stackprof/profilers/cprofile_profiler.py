import cProfile
import time
from pathlib import Path

from asgi_stackprof.stackprof.types import Profiler, ProfilerError, ProfilerOptions

_TIMERS = {
    "wall": time.perf_counter,
    "cpu": time.process_time,
}


class CProfileProfiler(Profiler):
    """Deterministic profiler backed by `cProfile`.

    The sampling interval does not apply; `mode` picks the timer. Dumps are
    `pstats` files.
    """

    __slots__ = ("_profiler", "_active")

    def __init__(self) -> None:
        self._profiler: cProfile.Profile | None = None
        self._active = False

    def start(self, options: ProfilerOptions) -> None:
        if self._active:
            raise ProfilerError("A cProfile session is already active")
        try:
            timer = _TIMERS[options.mode]
        except KeyError:
            raise ProfilerError(f"Unsupported cProfile mode: {options.mode!r}") from None

        self._profiler = cProfile.Profile(timer)
        self._profiler.enable()
        self._active = True

    def stop(self) -> None:
        if not self._active or self._profiler is None:
            raise ProfilerError("No active cProfile session")
        try:
            self._profiler.disable()
        finally:
            # A failed stop must not block the next start.
            self._active = False

    def save(self, path: Path) -> None:
        if self._profiler is None:
            raise ProfilerError("No cProfile session to save")
        self._profiler.dump_stats(path)
