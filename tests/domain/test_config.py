from __future__ import annotations

import pytest

from lib_log_pipeline.domain.config import (
    DEFAULT_BUFFER_SIZE,
    AppenderConfig,
    FilterConfig,
    FormatterConfig,
    LoggingConfig,
    PluginKind,
)
from lib_log_pipeline.domain.levels import LogLevel


def test_mapping_extras_become_options() -> None:
    config = AppenderConfig.coerce(
        {
            "name": "file",
            "priority": 5,
            "filename": "out.log",
            "formatter": {"name": "json", "pretty": True},
            "filters": ["match", {"name": "match", "deny": {"logger": "noisy"}}],
        }
    )
    assert config.priority == 5
    assert config.option("filename") == "out.log"
    assert config.formatter == FormatterConfig(name="json", options={"pretty": True})
    assert [item.name for item in config.filters] == ["match", "match"]
    assert config.filters[1].option("deny") == {"logger": "noisy"}


def test_options_are_read_only() -> None:
    config = FilterConfig(name="match", options={"allow": {}})
    with pytest.raises(TypeError):
        config.options["allow"] = {"x": 1}  # type: ignore[index]


def test_plugin_name_must_not_be_blank() -> None:
    with pytest.raises(ValueError):
        FilterConfig(name=" ")


def test_priority_must_be_numeric() -> None:
    with pytest.raises(ValueError):
        AppenderConfig(name="console", priority="high")  # type: ignore[arg-type]


def test_coerce_rejects_unsupported_types() -> None:
    with pytest.raises(TypeError):
        FormatterConfig.coerce(42)  # type: ignore[arg-type]


def test_logging_config_defaults() -> None:
    config = LoggingConfig.coerce(None)
    assert config.default_level is LogLevel.INFO
    assert config.buffer_size == DEFAULT_BUFFER_SIZE
    (console,) = config.effective_appenders
    assert console.name == "console"
    assert console.formatter is not None and console.formatter.name == "default"


def test_unresolvable_level_falls_back_to_info() -> None:
    assert LoggingConfig(level="verbose").default_level is LogLevel.INFO
    assert LoggingConfig(level=None).default_level is LogLevel.INFO


def test_logging_config_from_mapping() -> None:
    config = LoggingConfig.coerce({"level": "debug", "appenders": ["console"], "loggers": {"db": "trace"}, "buffer_size": 5})
    assert config.default_level is LogLevel.DEBUG
    assert config.effective_appenders == (AppenderConfig(name="console"),)
    assert dict(config.loggers) == {"db": "trace"}
    assert config.buffer_size == 5


def test_empty_appender_list_is_kept() -> None:
    assert LoggingConfig(appenders=()).effective_appenders == ()


def test_buffer_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        LoggingConfig(buffer_size=0)


def test_plugin_kind_string_form() -> None:
    assert str(PluginKind.FILTER) == "filter"


@pytest.mark.parametrize(
    "appenders",
    ["console", {"name": "console", "priority": 3}, AppenderConfig(name="console", priority=3)],
)
def test_single_appender_is_treated_as_one_item_list(appenders) -> None:
    config = LoggingConfig.coerce({"appenders": appenders})
    assert [item.name for item in config.effective_appenders] == ["console"]
