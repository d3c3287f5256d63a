from asgi_stackprof.stackprof.profilers.cprofile_profiler import CProfileProfiler
from asgi_stackprof.stackprof.profilers.pyinstrument_profiler import PyInstrumentProfiler

__all__: tuple[str, ...] = ("CProfileProfiler", "PyInstrumentProfiler")
