from __future__ import annotations

import pytest

from lib_log_pipeline.domain.levels import EMITTING_LEVELS, LogLevel
from lib_log_pipeline.runtime import Logger, NullLogger

_ALL = sorted(LogLevel, key=lambda level: level.rank)
_EMITTING = sorted(EMITTING_LEVELS, key=lambda level: level.rank)


@pytest.mark.parametrize("threshold", _ALL)
@pytest.mark.parametrize("event_level", _EMITTING)
def test_emission_follows_rank_gate(pipeline, spy_factory, threshold: LogLevel, event_level: LogLevel) -> None:
    pipeline.register_factory(spy_factory("spy"))
    pipeline.init({"appenders": ["spy"], "level": "trace"})
    (spy,) = spy_factory.created["spy"]
    logger = pipeline.get_logger("gate")
    logger.set_level(threshold)

    getattr(logger, event_level.value)("probe")

    expected = threshold is not LogLevel.OFF and event_level.rank <= threshold.rank
    assert bool(spy.events) is expected
    assert getattr(logger, f"is_{event_level.value}") is expected


def test_flags_follow_set_level() -> None:
    logger = Logger(None, "app", LogLevel.ERROR)
    assert (logger.is_fatal, logger.is_error, logger.is_warn, logger.is_trace) == (True, True, False, False)
    logger.set_level("trace")
    assert logger.is_trace and logger.is_track and logger.is_enabled
    logger.set_level(LogLevel.OFF)
    assert not any((logger.is_fatal, logger.is_enabled))


def test_set_level_rejects_unknown_names() -> None:
    logger = Logger(None, "app")
    with pytest.raises(ValueError):
        logger.set_level("loud")
    assert logger.level is LogLevel.INFO


def test_events_carry_context_snapshot_and_data(pipeline, spy_factory) -> None:
    pipeline.register_factory(spy_factory("spy"))
    pipeline.init({"appenders": ["spy"]})
    (spy,) = spy_factory.created["spy"]
    logger = pipeline.get_logger("ctx")

    logger.set_context({"request": "r1"})
    logger.info("first", 1, {"k": "v"})
    logger.set_context({"request": "r2"})
    logger.info("second")
    logger.set_context(None)
    logger.info("third")

    assert [(event.message, dict(event.context)) for event in spy.events] == [
        ("first", {"request": "r1"}),
        ("second", {"request": "r2"}),
        ("third", {}),
    ]
    assert spy.events[0].data == (1, {"k": "v"})
    assert spy.events[0].logger == "ctx"


def test_warning_alias_and_repr() -> None:
    logger = Logger(None, "app")
    assert Logger.warning is Logger.warn
    assert repr(logger) == "Logger(name='app', level='info')"


def test_detached_logger_children_inherit_level() -> None:
    child = Logger(None, "app", LogLevel.DEBUG).get_logger("db")
    assert child.name == "app.db"
    assert child.level is LogLevel.DEBUG
    child.info("goes nowhere")


def test_null_logger_is_inert() -> None:
    null = NullLogger()
    for level in _EMITTING:
        assert getattr(null, level.value)("ignored", 1) is None
        assert getattr(null, f"is_{level.value}") is False
    null.set_level("trace")
    null.set_context({"a": 1})
    assert null.is_enabled is False
    assert null.get_logger("child") is null
