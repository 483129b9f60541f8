from __future__ import annotations

import lib_log_pipeline as log
from lib_log_pipeline.runtime import default_pipeline


def test_facade_delegates_to_default_pipeline(isolated_default_pipeline, spy_factory) -> None:
    assert default_pipeline() is isolated_default_pipeline

    log.register_factory(spy_factory("spy"))
    log.get_logger("early").info("buffered")
    log.init({"appenders": ["spy"]})
    (spy,) = spy_factory.created["spy"]

    log.disable_appender("spy")
    log.get_logger("app").info("skipped")
    log.enable_appender("spy")
    log.get_logger(["app", "db"]).warn("delivered")

    assert [event.message for event in spy.events] == ["buffered", "delivered"]
    assert log.flush_appenders() == []

    log.dispose()
    log.dispose()
    assert not isolated_default_pipeline.initialised


def test_public_surface_exports_core_types() -> None:
    assert log.LoggingPipeline is type(default_pipeline())
    assert log.LogLevel.TRACK.rank == 6
    assert issubclass(log.DuplicateNameError, log.PluginError)
    assert isinstance(log.NullLogger().get_logger("x"), log.NullLogger)
