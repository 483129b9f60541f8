from __future__ import annotations

import json
import re

import pytest
from click.testing import CliRunner

from lib_log_pipeline import __init__conf__
from lib_log_pipeline import cli as cli_mod

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI colour codes.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)


@pytest.fixture(autouse=True)
def _no_log_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOG_LEVEL", "LOG_LOGGERS", "LOG_APPENDERS", "LOG_BUFFER_SIZE", "LOG_USE_DOTENV"):
        monkeypatch.delenv(name, raising=False)


def test_cli_without_subcommand_prints_summary() -> None:
    result = CliRunner().invoke(cli_mod.cli, [], prog_name=__init__conf__.shell_command)

    assert result.exit_code == 0
    assert result.output == __init__conf__.summary_info()


def test_cli_info_command_matches_summary() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["info"])

    assert result.exit_code == 0
    assert result.output == __init__conf__.summary_info()
    assert "version" in result.output


def test_cli_version_flag() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __init__conf__.version


def test_cli_logdemo_emits_every_level() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["logdemo"])

    assert result.exit_code == 0
    output = strip_ansi(result.output)
    for label in ("FATAL", "ERROR", "WARN ", "INFO ", "DEBUG", "TRACK", "TRACE"):
        assert label in output
    assert "emitted 7 event(s) at threshold trace" in output


def test_cli_logdemo_respects_level_option() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["logdemo", "--level", "warn"])

    output = strip_ansi(result.output)
    assert result.exit_code == 0
    assert "emitted 3 event(s) at threshold warn" in output
    assert "DEBUG" not in output


def test_cli_logdemo_custom_format() -> None:
    result = CliRunner().invoke(
        cli_mod.cli,
        ["logdemo", "--level", "error", "--format", "<{LEVEL}|{logger}>", "--format", "{message}"],
    )

    lines = [line for line in strip_ansi(result.output).splitlines() if line.startswith("<")]
    assert lines == ["<FATAL|demo.cli> fatal demo event", "<ERROR|demo.cli> error demo event"]


def test_cli_logdemo_json_output() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["logdemo", "--level", "fatal", "--json", "--format", "LEVEL", "--format", "context"])

    lines = [line for line in strip_ansi(result.output).splitlines() if line.startswith("{")]
    assert [json.loads(line) for line in lines] == [{"LEVEL": "fatal", "context": {"command": "logdemo"}}]


def test_cli_logdemo_honours_environment_level() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["logdemo"], env={"LOG_LEVEL": "error"})

    assert "emitted 2 event(s) at threshold error" in strip_ansi(result.output)


def test_cli_logdemo_rejects_unknown_level() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["logdemo", "--level", "loud"])

    assert result.exit_code != 0


def test_cli_delegates_to_logdemo_helper(monkeypatch: pytest.MonkeyPatch) -> None:
    recorded: dict[str, object] = {}

    def fake_logdemo(**kwargs: object) -> dict[str, object]:
        recorded.update(kwargs)
        return {"level": "info", "events": ["info"]}

    monkeypatch.setattr(cli_mod, "_logdemo", fake_logdemo)

    result = CliRunner().invoke(cli_mod.cli, ["logdemo", "--timestamp-format", "hh:mm"])

    assert result.exit_code == 0
    assert recorded == {"level": "trace", "formats": (), "timestamp_format": "hh:mm", "as_json": False}
    assert "emitted 1 event(s) at threshold info" in result.output


def test_main_returns_exit_codes(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_mod.main(["info"]) == 0
    assert "Info for lib_log_pipeline" in capsys.readouterr().out
    assert cli_mod.main(["no-such-command"]) == 2
