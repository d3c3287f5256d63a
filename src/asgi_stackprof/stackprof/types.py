from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal, Protocol, TypeAlias

from asgi_stackprof.protocol import HTTPRequestScope, WSGIEnvironment

ProfilerMode: TypeAlias = Literal["wall", "cpu"]

DEFAULT_MODE: ProfilerMode = "wall"


class ProfilerError(Exception):
    """Raised by a profiler engine when a session cannot be started, stopped or saved."""


@dataclass(slots=True, frozen=True)
class ProfilerOptions:
    """
    Parameters handed to `Profiler.start`.

    Attributes:
        mode: Which clock the engine samples against.
        interval: Sampling interval in microseconds.
        extra: Engine specific options, passed through untouched.
    """

    interval: int
    mode: ProfilerMode = DEFAULT_MODE
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, sampling_interval_microseconds: int, overrides: Mapping[str, Any]) -> "ProfilerOptions":
        """Merge user overrides over the `wall`/`sampling_interval_microseconds` defaults."""
        extra = dict(overrides)
        mode = extra.pop("mode", DEFAULT_MODE)
        interval = extra.pop("interval", sampling_interval_microseconds)
        return cls(interval=interval, mode=mode, extra=MappingProxyType(extra))

    def as_dict(self) -> dict[str, Any]:
        return {"mode": self.mode, "interval": self.interval, **self.extra}


class Profiler(Protocol):
    def start(self, options: ProfilerOptions) -> None:
        """Starts a profiling session."""

    def stop(self) -> None:
        """Stops the active profiling session."""

    def save(self, path: Path) -> None:
        """Writes the last captured profile to `path`."""


@dataclass(slots=True, frozen=True)
class RequestContext:
    method: str
    path: str

    @classmethod
    def from_scope(cls, scope: HTTPRequestScope) -> "RequestContext":
        return cls(method=scope["method"], path=scope["path"])

    @classmethod
    def from_environ(cls, environ: WSGIEnvironment) -> "RequestContext":
        path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
        return cls(method=environ["REQUEST_METHOD"], path=path)
