"""Interval-sampled request profiling middleware for ASGI and WSGI applications."""

from asgi_stackprof.stackprof import (
    CProfileProfiler,
    Profiler,
    ProfilerError,
    ProfilerOptions,
    PyInstrumentProfiler,
    SamplingGate,
    StackprofConfig,
    StackprofMiddleware,
    StackprofWSGIMiddleware,
    stackprof_middleware,
)

__all__: tuple[str, ...] = (
    "StackprofMiddleware",
    "StackprofWSGIMiddleware",
    "stackprof_middleware",
    "StackprofConfig",
    "SamplingGate",
    "Profiler",
    "ProfilerError",
    "ProfilerOptions",
    "CProfileProfiler",
    "PyInstrumentProfiler",
)
