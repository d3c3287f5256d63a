import re
from pathlib import Path

import pytest

from asgi_stackprof.stackprof import MatchAll, PatternMatcher, StackprofConfig, build_path_matcher


def make_config(**overrides) -> StackprofConfig:
    options = {
        "profile_interval_seconds": 60,
        "sampling_interval_microseconds": 1000,
        "result_directory": "/tmp/stackprof",
    }
    options.update(overrides)
    return StackprofConfig(**options)


class TestStackprofConfig:
    def test_defaults(self):
        config = make_config()

        assert config.result_directory == Path("/tmp/stackprof")
        assert isinstance(config.path_matcher, MatchAll)
        assert config.options.as_dict() == {"mode": "wall", "interval": 1000}

    def test_profiler_options_override_defaults(self):
        config = make_config(profiler_options={"mode": "cpu", "interval": 250, "raw": True})

        assert config.options.mode == "cpu"
        assert config.options.interval == 250
        assert dict(config.options.extra) == {"raw": True}
        assert config.options.as_dict() == {"mode": "cpu", "interval": 250, "raw": True}

    def test_profiler_options_are_copied(self):
        overrides = {"async_mode": "enabled"}
        config = make_config(profiler_options=overrides)
        overrides["async_mode"] = "disabled"

        assert config.options.extra["async_mode"] == "enabled"

    @pytest.mark.parametrize(
        "field,value,message",
        [
            ("profile_interval_seconds", 0, "profile_interval_seconds must be positive"),
            ("profile_interval_seconds", -5, "profile_interval_seconds must be positive"),
            ("sampling_interval_microseconds", 0, "sampling_interval_microseconds must be positive"),
            ("result_directory", "", "result_directory must be set"),
            ("profiler_options", {"interval": 0}, "profiler interval must be positive"),
        ],
    )
    def test_invalid_values(self, field, value, message):
        with pytest.raises(ValueError, match=message):
            make_config(**{field: value})

    def test_invalid_pattern_fails_fast(self):
        with pytest.raises(ValueError, match="Invalid profile_include_path pattern"):
            make_config(profile_include_path="/v1/(users")

    def test_config_is_immutable(self):
        config = make_config()
        with pytest.raises(AttributeError):
            config.profile_interval_seconds = 1  # type: ignore[misc]


class TestFromOptions:
    def test_from_options(self):
        config = StackprofConfig.from_options(
            {
                "profile_interval_seconds": 30,
                "sampling_interval_microseconds": 500,
                "result_directory": "/var/tmp/profiles",
                "profile_include_path": "^/v1/",
            },
            {"mode": "cpu"},
        )

        assert config.profile_interval_seconds == 30
        assert config.result_directory == Path("/var/tmp/profiles")
        assert isinstance(config.path_matcher, PatternMatcher)
        assert config.options.as_dict() == {"mode": "cpu", "interval": 500}

    @pytest.mark.parametrize(
        "missing", ["profile_interval_seconds", "sampling_interval_microseconds", "result_directory"]
    )
    def test_missing_required_option(self, missing):
        options = {
            "profile_interval_seconds": 30,
            "sampling_interval_microseconds": 500,
            "result_directory": "/var/tmp/profiles",
        }
        del options[missing]

        with pytest.raises(ValueError, match=f"Missing required option: {missing}"):
            StackprofConfig.from_options(options)


class TestBuildPathMatcher:
    @pytest.mark.parametrize("include_path", [None, ""])
    def test_empty_matches_everything(self, include_path):
        matcher = build_path_matcher(include_path)
        assert isinstance(matcher, MatchAll)
        assert matcher("/anything")

    def test_string_is_compiled(self):
        matcher = build_path_matcher(r"^/v1/users")
        assert matcher("/v1/users/5")
        assert not matcher("/v2/v1/users")

    def test_compiled_pattern_is_used_as_is(self):
        pattern = re.compile(r"ORDERS", re.IGNORECASE)
        matcher = build_path_matcher(pattern)
        assert isinstance(matcher, PatternMatcher)
        assert matcher.pattern is pattern
        assert matcher("/api/orders")

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="profile_include_path must be a str or re.Pattern"):
            build_path_matcher(42)  # type: ignore[arg-type]
