import pytest

from asgi_stackprof.stackprof import (
    CProfileProfiler,
    ProfilerOptions,
    Profiler,
    SamplingGate,
    StackprofConfig,
    StackprofWSGIMiddleware,
)


class CountingProfiler(Profiler):
    def __init__(self) -> None:
        self.starts = 0
        self.stops = 0

    def start(self, options: ProfilerOptions) -> None:
        self.starts += 1

    def stop(self) -> None:
        self.stops += 1

    def save(self, path) -> None:
        path.write_text("dump")


def hello_app(environ, start_response):
    start_response("200 OK", [("Content-Type", "text/plain")])
    return [b"hello ", environ["PATH_INFO"].encode()]


def call(app, path: str, method: str = "GET", script_name: str = ""):
    captured = {}

    def start_response(status, headers, exc_info=None):
        captured["status"] = status
        captured["headers"] = headers
        return lambda data: None

    environ = {"REQUEST_METHOD": method, "SCRIPT_NAME": script_name, "PATH_INFO": path, "QUERY_STRING": ""}
    body = b"".join(app(environ, start_response))
    return captured["status"], body


@pytest.fixture
def config(tmp_path):
    return StackprofConfig(
        profile_interval_seconds=60,
        sampling_interval_microseconds=1000,
        result_directory=tmp_path / "profiles",
        profile_include_path=r"^/v1/",
    )


class TestStackprofWSGIMiddleware:
    def test_profiles_matching_request_once_per_interval(self, config):
        now = [1_000_000.0]
        profiler = CountingProfiler()
        app = StackprofWSGIMiddleware(
            hello_app, config=config, profiler=profiler, gate=SamplingGate.from_config(config, clock=lambda: now[0])
        )

        assert call(app, "/v1/users") == ("200 OK", b"hello /v1/users")
        assert call(app, "/v1/users") == ("200 OK", b"hello /v1/users")
        now[0] += 61
        assert call(app, "/v1/users", "POST") == ("200 OK", b"hello /v1/users")

        assert profiler.starts == profiler.stops == 2
        names = sorted(p.name for p in config.result_directory.iterdir())
        assert len(names) == 2
        assert any("-GET_v1_users-" in name for name in names)
        assert any("-POST_v1_users-" in name for name in names)

    def test_non_matching_path_passes_through(self, config):
        profiler = CountingProfiler()
        app = StackprofWSGIMiddleware(hello_app, config=config, profiler=profiler)

        assert call(app, "/health") == ("200 OK", b"hello /health")
        assert profiler.starts == 0

    def test_application_error_propagates(self, config):
        profiler = CountingProfiler()

        def broken_app(environ, start_response):
            raise ZeroDivisionError

        app = StackprofWSGIMiddleware(broken_app, config=config, profiler=profiler)

        with pytest.raises(ZeroDivisionError):
            call(app, "/v1/users")

        assert profiler.stops == 1
        assert len(list(config.result_directory.iterdir())) == 1

    def test_with_cprofile_engine(self, config):
        app = StackprofWSGIMiddleware(hello_app, config=config, profiler=CProfileProfiler())

        assert call(app, "/v1/orders") == ("200 OK", b"hello /v1/orders")

        (dump,) = config.result_directory.iterdir()
        assert dump.name.endswith("ms.dump")

    def test_mounted_app_matches_and_names_full_path(self, tmp_path):
        config = StackprofConfig(
            profile_interval_seconds=60,
            sampling_interval_microseconds=1000,
            result_directory=tmp_path / "profiles",
            profile_include_path=r"^/api/v1/",
        )
        profiler = CountingProfiler()
        app = StackprofWSGIMiddleware(hello_app, config=config, profiler=profiler)

        assert call(app, "/v1/users", script_name="/api") == ("200 OK", b"hello /v1/users")

        assert profiler.starts == 1
        (dump,) = config.result_directory.iterdir()
        assert "-GET_api_v1_users-" in dump.name

    def test_request_method_is_required(self, config):
        app = StackprofWSGIMiddleware(hello_app, config=config, profiler=CountingProfiler())

        with pytest.raises(KeyError, match="REQUEST_METHOD"):
            app({"PATH_INFO": "/v1/users"}, lambda status, headers, exc_info=None: None)
