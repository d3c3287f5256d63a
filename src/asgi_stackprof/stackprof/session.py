"""Brackets a downstream call with a profiling session."""

import os
import time
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from logging import Logger
from pathlib import Path
from typing import TypeVar

from asgi_stackprof.stackprof.gate import SamplingGate
from asgi_stackprof.stackprof.naming import artifact_filename
from asgi_stackprof.stackprof.types import Profiler, ProfilerOptions, RequestContext

T = TypeVar("T")


class SessionController:
    """Runs a downstream call, profiling it when the sampling gate admits the request.

    Profiler failures are logged and never replace the downstream result or
    exception.

    Args:
        gate: Sampling gate deciding which requests are profiled.
        profiler: The profiler engine driven by start/stop/save.
        options: Options handed to `Profiler.start`.
        result_directory: Directory the dumps are written to.
        logger: Logger for profiler failures and saved dumps.
    """

    __slots__ = ("gate", "profiler", "options", "result_directory", "logger")

    def __init__(
        self,
        gate: SamplingGate,
        profiler: Profiler,
        options: ProfilerOptions,
        result_directory: Path,
        logger: Logger,
    ) -> None:
        self.gate = gate
        self.profiler = profiler
        self.options = options
        self.result_directory = result_directory
        self.logger = logger

    @contextmanager
    def bracket(self, request: RequestContext) -> Iterator[bool]:
        """Profile the enclosed block if the request is admitted.

        Yields True while a profiling session is active around the block.
        """
        captured_at = self.gate.try_claim(request.path)
        if captured_at is None:
            yield False
            return

        self.logger.debug("Profiling %s %s", request.method, request.path)
        started_at = time.perf_counter()
        started = False
        try:
            self.profiler.start(self.options)
            started = True
        except Exception:
            self.logger.exception("Failed to start profiler for %s %s", request.method, request.path)

        if not started:
            yield False
            return

        try:
            yield True
        finally:
            duration_ms = (time.perf_counter() - started_at) * 1000
            self._finish(request, captured_at, duration_ms)

    def run(self, request: RequestContext, downstream: Callable[[], T]) -> T:
        with self.bracket(request):
            return downstream()

    async def arun(self, request: RequestContext, downstream: Callable[[], Awaitable[T]]) -> T:
        with self.bracket(request):
            return await downstream()

    def _finish(self, request: RequestContext, captured_at: float, duration_ms: float) -> None:
        try:
            self.profiler.stop()
        except Exception:
            self.logger.exception("Failed to stop profiler for %s %s", request.method, request.path)
            return

        filename = artifact_filename(
            captured_at=datetime.fromtimestamp(captured_at),
            pid=os.getpid(),
            method=request.method,
            path=request.path,
            duration_ms=duration_ms,
        )
        path = self.result_directory / filename

        try:
            self.result_directory.mkdir(parents=True, exist_ok=True)
            self.profiler.save(path)
        except Exception:
            self.logger.exception("Failed to save profile for %s %s to %s", request.method, request.path, path)
            return

        self.logger.info("Saved profile for %s %s to %s (%.1fms)", request.method, request.path, path, duration_ms)
