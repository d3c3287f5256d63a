"""Configuration classes for the sampling profiler middleware."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from asgi_stackprof.stackprof.matchers import PathMatcher, build_path_matcher
from asgi_stackprof.stackprof.types import ProfilerOptions

REQUIRED_OPTIONS: tuple[str, ...] = (
    "profile_interval_seconds",
    "sampling_interval_microseconds",
    "result_directory",
)


@dataclass(slots=True, frozen=True)
class StackprofConfig:
    """Configuration for the sampling profiler middleware.

    Args:
        profile_interval_seconds: Minimum time between two captures.
        sampling_interval_microseconds: Sampling interval handed to the profiler engine.
        result_directory: Directory the profile dumps are written to.
        profile_include_path: Optional regular expression; only matching request paths are profiled.
        profiler_options: Extra profiler options. `mode` and `interval` override the defaults.
    """

    profile_interval_seconds: float
    sampling_interval_microseconds: int
    result_directory: Path
    profile_include_path: str | re.Pattern[str] | None = None
    profiler_options: Mapping[str, Any] = field(default_factory=dict)

    path_matcher: PathMatcher = field(init=False, repr=False, compare=False)
    options: ProfilerOptions = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.profile_interval_seconds <= 0:
            raise ValueError("profile_interval_seconds must be positive")
        if self.sampling_interval_microseconds <= 0:
            raise ValueError("sampling_interval_microseconds must be positive")
        if not self.result_directory:
            raise ValueError("result_directory must be set")

        object.__setattr__(self, "result_directory", Path(self.result_directory))
        object.__setattr__(self, "path_matcher", build_path_matcher(self.profile_include_path))
        object.__setattr__(
            self, "options", ProfilerOptions.build(self.sampling_interval_microseconds, self.profiler_options)
        )

        if self.options.interval <= 0:
            raise ValueError("profiler interval must be positive")

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], profiler_options: Mapping[str, Any] | None = None
    ) -> "StackprofConfig":
        """Build a config from a plain options mapping, e.g. loaded from a settings file."""
        missing = [name for name in REQUIRED_OPTIONS if name not in options]
        if missing:
            raise ValueError(f"Missing required option: {', '.join(missing)}")

        return cls(
            profile_interval_seconds=options["profile_interval_seconds"],
            sampling_interval_microseconds=options["sampling_interval_microseconds"],
            result_directory=Path(options["result_directory"]),
            profile_include_path=options.get("profile_include_path"),
            profiler_options=profiler_options or {},
        )
