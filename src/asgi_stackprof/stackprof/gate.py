import threading
import time
from collections.abc import Callable

from asgi_stackprof.stackprof.config import StackprofConfig
from asgi_stackprof.stackprof.matchers import MatchAll, PathMatcher

Clock = Callable[[], float]


class SamplingGate:
    """
    Decides which requests get profiled.

    A request is admitted when its path matches and at least
    `profile_interval_seconds` have elapsed since the previous capture.
    Admission claims the slot immediately, so slow profiled requests do not
    let the next request through.

    Args:
        profile_interval_seconds: Minimum time between two captures.
        path_matcher: Predicate over the request path.
        clock: Wall clock returning epoch seconds.
    """

    __slots__ = ("profile_interval_seconds", "path_matcher", "clock", "_last_captured_at", "_lock")

    def __init__(
        self,
        profile_interval_seconds: float,
        path_matcher: PathMatcher | None = None,
        clock: Clock = time.time,
    ) -> None:
        if profile_interval_seconds <= 0:
            raise ValueError("profile_interval_seconds must be positive")

        self.profile_interval_seconds = profile_interval_seconds
        self.path_matcher: PathMatcher = path_matcher or MatchAll()
        self.clock = clock
        self._last_captured_at: float | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: StackprofConfig, clock: Clock = time.time) -> "SamplingGate":
        return cls(config.profile_interval_seconds, config.path_matcher, clock)

    @property
    def last_captured_at(self) -> float | None:
        return self._last_captured_at

    def should_capture(self, now: float, path: str) -> bool:
        if not self.path_matcher(path):
            return False
        if self._last_captured_at is not None and now - self._last_captured_at < self.profile_interval_seconds:
            return False
        return True

    def try_claim(self, path: str, now: float | None = None) -> float | None:
        """Atomically check the gate and claim the capture slot.

        Returns:
            The claim timestamp if the request was admitted, None otherwise.
        """
        with self._lock:
            if now is None:
                now = self.clock()
            if not self.should_capture(now, path):
                return None
            self._last_captured_at = now
            return now
