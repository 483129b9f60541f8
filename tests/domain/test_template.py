from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lib_log_pipeline.domain.levels import LogLevel
from lib_log_pipeline.domain.template import Literal, Template, Token, format_timestamp, parse_template

MOMENT = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


def test_parse_template_splits_literals_and_tokens() -> None:
    assert parse_template("{timestamp} [{LEVEL}]") == (
        Token("timestamp"),
        Literal(" ["),
        Token("LEVEL"),
        Literal("]"),
    )


def test_parse_template_without_tokens_is_one_literal() -> None:
    assert parse_template("plain text") == (Literal("plain text"),)


def test_multi_segment_line_renders_single_string_in_order(make_event) -> None:
    event = make_event("hello", logger="app.core")
    output = Template("{timestamp} [{LEVEL}] ({logger}) {message}").render(event)
    assert len(output) == 1
    line = output[0]
    assert line.index("INFO") < line.index("app.core") < line.index("hello")


def test_data_line_splices_items(make_event) -> None:
    event = make_event("hello", data=(1, {"a": 2}))
    assert Template(["{message}", "{data}"]).render(event) == ["hello", 1, {"a": 2}]


def test_data_line_with_empty_data_contributes_nothing(make_event) -> None:
    assert Template(["{message}", "{data}", "{logger}"]).render(make_event("hi")) == ["hi", "tests"]


def test_single_token_keeps_native_value(make_event) -> None:
    event = make_event({"structured": True}, context={"count": 3})
    assert Template(["{message}", "{context.count}"]).render(event) == [{"structured": True}, 3]


def test_missing_token_renders_empty_inside_text_and_none_alone(make_event) -> None:
    event = make_event()
    assert Template(["<{context.absent}>", "{context.absent}"]).render(event) == ["<>", None]


def test_containers_inside_text_are_json(make_event) -> None:
    event = make_event(context={"ids": [1, 2]})
    assert Template("ids={context.ids}").render(event) == ["ids=[1, 2]"]


def test_template_rejects_non_string_lines() -> None:
    with pytest.raises(TypeError):
        Template(["{message}", 3])  # type: ignore[list-item]


def test_iso_timestamp_preset() -> None:
    assert format_timestamp(MOMENT, "iso") == "2024-01-02T03:04:05.678Z"
    assert format_timestamp(MOMENT) == "2024-01-02T03:04:05.678Z"


def test_locale_timestamp_preset_uses_local_time() -> None:
    assert format_timestamp(MOMENT, "locale") == MOMENT.astimezone().strftime("%c")


def test_custom_timestamp_pattern_renders_local_time() -> None:
    local = MOMENT.astimezone()
    expected = local.strftime("%Y/%m/%d %H:%M:%S") + ".678 " + local.strftime("%y")
    assert format_timestamp(MOMENT, "yyyy/MM/dd hh:mm:ss.SSS yy") == expected


def test_fractional_tokens_prefer_longest_match() -> None:
    assert format_timestamp(MOMENT, "SSS|SS|S") == "678|67|6"


def test_timestamp_token_uses_configured_format(make_event) -> None:
    event = make_event(timestamp=MOMENT)
    assert Template("{timestamp}|{LEVEL}").render(event, "ss.SSS") == ["05.678|INFO "]
