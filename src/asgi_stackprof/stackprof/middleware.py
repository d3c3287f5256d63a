import logging
from collections.abc import Callable
from logging import Logger
from typing import cast

from asgi_stackprof.protocol import ASGIApp, HTTPRequestScope, Receive, Scope, Send
from asgi_stackprof.stackprof.config import StackprofConfig
from asgi_stackprof.stackprof.gate import SamplingGate
from asgi_stackprof.stackprof.profilers import PyInstrumentProfiler
from asgi_stackprof.stackprof.session import SessionController
from asgi_stackprof.stackprof.types import Profiler, RequestContext

logger = logging.getLogger("asgi_stackprof")


class StackprofMiddleware:
    """
    ASGI middleware that profiles at most one request per interval.

    Profiling every request would be too expensive in CPU and disk, so a
    request is only profiled when `profile_interval_seconds` have passed since
    the previous capture. The dump is written to `result_directory`.

    Args:
        app: The ASGI application.
        config: Sampling and output configuration.
        profiler: The profiler engine, `PyInstrumentProfiler` by default.
        gate: Sampling gate, built from `config` when omitted.
        logger: Logger for saved dumps and profiler failures.
    """

    __slots__ = ("app", "config", "profiler", "gate", "logger", "session")

    def __init__(
        self,
        app: ASGIApp,
        *,
        config: StackprofConfig,
        profiler: Profiler | None = None,
        gate: SamplingGate | None = None,
        logger: Logger = logger,
    ) -> None:
        self.app: ASGIApp = app
        self.config: StackprofConfig = config
        self.profiler: Profiler = profiler or PyInstrumentProfiler()
        self.gate: SamplingGate = gate or SamplingGate.from_config(config)
        self.logger: Logger = logger
        self.session = SessionController(
            gate=self.gate,
            profiler=self.profiler,
            options=config.options,
            result_directory=config.result_directory,
            logger=logger,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        match scope["type"]:
            case "http":
                request = RequestContext.from_scope(cast(HTTPRequestScope, scope))
                await self.session.arun(request, lambda: self.app(scope, receive, send))
            case _:
                await self.app(scope, receive, send)


def stackprof_middleware(
    config: StackprofConfig,
    profiler: Profiler | None = None,
    logger: Logger = logger,
) -> Callable[[ASGIApp], StackprofMiddleware]:
    """Create a StackprofMiddleware factory function.

    The profiler and sampling gate are shared by every app the factory wraps.

    Args:
        config: Sampling and output configuration
        profiler: Optional profiler engine

    Returns:
        A function that takes an ASGI app and returns StackprofMiddleware
    """
    shared_profiler = profiler or PyInstrumentProfiler()
    shared_gate = SamplingGate.from_config(config)

    def middleware_factory(app: ASGIApp) -> StackprofMiddleware:
        return StackprofMiddleware(app, config=config, profiler=shared_profiler, gate=shared_gate, logger=logger)

    return middleware_factory
