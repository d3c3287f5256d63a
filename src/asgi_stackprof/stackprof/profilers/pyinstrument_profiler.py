from pathlib import Path

from pyinstrument import Profiler as _PyInstrument

from asgi_stackprof.stackprof.types import Profiler, ProfilerError, ProfilerOptions

MICROSECONDS = 1_000_000


class PyInstrumentProfiler(Profiler):
    """Statistical sampling profiler backed by pyinstrument.

    Only wall-clock sampling is supported. `async_mode` and
    `use_timing_thread` are read from the extra options.
    Dumps are pyinstrument session files (`pyinstrument --load <file>`).
    """

    __slots__ = ("_profiler",)

    def __init__(self) -> None:
        self._profiler: _PyInstrument | None = None

    def start(self, options: ProfilerOptions) -> None:
        if self._profiler is not None and self._profiler.is_running:
            raise ProfilerError("A pyinstrument session is already active")
        if options.mode != "wall":
            raise ProfilerError(f"pyinstrument only supports wall mode, got {options.mode!r}")

        self._profiler = _PyInstrument(
            interval=options.interval / MICROSECONDS,
            async_mode=options.extra.get("async_mode", "enabled"),
            use_timing_thread=options.extra.get("use_timing_thread"),
        )
        self._profiler.start()

    def stop(self) -> None:
        if self._profiler is None or not self._profiler.is_running:
            raise ProfilerError("No active pyinstrument session")
        try:
            self._profiler.stop()
        except Exception:
            # Drop the broken session so the next start is not rejected as already active.
            self._profiler = None
            raise

    def save(self, path: Path) -> None:
        session = self._profiler.last_session if self._profiler is not None else None
        if session is None:
            raise ProfilerError("No pyinstrument session to save")
        session.save(path)
