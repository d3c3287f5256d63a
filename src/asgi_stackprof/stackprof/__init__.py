from asgi_stackprof.stackprof.middleware import StackprofMiddleware, stackprof_middleware
from asgi_stackprof.stackprof.wsgi import StackprofWSGIMiddleware
from asgi_stackprof.stackprof.config import StackprofConfig
from asgi_stackprof.stackprof.gate import SamplingGate
from asgi_stackprof.stackprof.matchers import MatchAll, PathMatcher, PatternMatcher, build_path_matcher
from asgi_stackprof.stackprof.naming import artifact_filename, flatten_path
from asgi_stackprof.stackprof.profilers import CProfileProfiler, PyInstrumentProfiler
from asgi_stackprof.stackprof.session import SessionController
from asgi_stackprof.stackprof.types import (
    Profiler,
    ProfilerError,
    ProfilerMode,
    ProfilerOptions,
    RequestContext,
)

__all__: tuple[str, ...] = (
    "StackprofMiddleware",
    "StackprofWSGIMiddleware",
    "stackprof_middleware",
    "StackprofConfig",
    "SamplingGate",
    "SessionController",
    "PathMatcher",
    "MatchAll",
    "PatternMatcher",
    "build_path_matcher",
    "artifact_filename",
    "flatten_path",
    "Profiler",
    "ProfilerError",
    "ProfilerMode",
    "ProfilerOptions",
    "RequestContext",
    "CProfileProfiler",
    "PyInstrumentProfiler",
)
