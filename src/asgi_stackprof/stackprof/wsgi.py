from collections.abc import Iterable
from logging import Logger

from asgi_stackprof.protocol import StartResponse, WSGIApp, WSGIEnvironment
from asgi_stackprof.stackprof.config import StackprofConfig
from asgi_stackprof.stackprof.gate import SamplingGate
from asgi_stackprof.stackprof.middleware import logger
from asgi_stackprof.stackprof.profilers import PyInstrumentProfiler
from asgi_stackprof.stackprof.session import SessionController
from asgi_stackprof.stackprof.types import Profiler, RequestContext


class StackprofWSGIMiddleware:
    """WSGI counterpart of `StackprofMiddleware`.

    The profiled span covers the application call only, not the iteration of
    the returned body.
    """

    __slots__ = ("app", "config", "gate", "session")

    def __init__(
        self,
        app: WSGIApp,
        *,
        config: StackprofConfig,
        profiler: Profiler | None = None,
        gate: SamplingGate | None = None,
        logger: Logger = logger,
    ) -> None:
        self.app = app
        self.config = config
        self.gate = gate or SamplingGate.from_config(config)
        self.session = SessionController(
            gate=self.gate,
            profiler=profiler or PyInstrumentProfiler(),
            options=config.options,
            result_directory=config.result_directory,
            logger=logger,
        )

    def __call__(self, environ: WSGIEnvironment, start_response: StartResponse) -> Iterable[bytes]:
        request = RequestContext.from_environ(environ)
        return self.session.run(request, lambda: self.app(environ, start_response))
