"""Click command line for inspecting and demonstrating the pipeline.

Contents
--------
* :func:`cli` - root group (``--use-dotenv``, ``--version``).
* ``info`` - print the metadata banner.
* ``logdemo`` - build a pipeline from options and environment, emit one
  event per level.
* :func:`main` - exit-code returning runner used by ``python -m``.
"""

from __future__ import annotations

from typing import Any, Sequence

import click

from . import __init__conf__
from . import config as config_module
from .domain.config import AppenderConfig, FormatterConfig, LoggingConfig
from .domain.levels import EMITTING_LEVELS, LogLevel
from .runtime import LoggingPipeline

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_DEMO_LEVELS = tuple(sorted(EMITTING_LEVELS, key=lambda level: level.rank))


def _demo_config(
    *,
    level: str,
    formats: Sequence[str],
    timestamp_format: str | None,
    as_json: bool,
) -> LoggingConfig:
    options: dict[str, Any] = {}
    if formats:
        options["format"] = list(formats)
    if timestamp_format:
        options["timestamp_format"] = timestamp_format
    formatter = FormatterConfig(name="json" if as_json else "default", options=options)
    base = LoggingConfig(level=level, appenders=(AppenderConfig(name="console", formatter=formatter),))
    return config_module.config_from_env(base)


def _logdemo(
    *,
    level: str,
    formats: Sequence[str],
    timestamp_format: str | None,
    as_json: bool,
) -> dict[str, Any]:
    """Initialise a private pipeline, emit one event per level, dispose it."""

    pipeline = LoggingPipeline()
    pipeline.init(_demo_config(level=level, formats=formats, timestamp_format=timestamp_format, as_json=as_json))
    try:
        logger = pipeline.get_logger(["demo", "cli"])
        logger.set_context({"command": "logdemo"})
        threshold = logger.level.value
        emitted: list[str] = []
        for demo_level in _DEMO_LEVELS:
            if not logger.level.allows(demo_level):
                continue
            getattr(logger, demo_level.value)(f"{demo_level.value} demo event", {"rank": demo_level.rank})
            emitted.append(demo_level.value)
    finally:
        pipeline.dispose()
    return {"level": threshold, "events": emitted}


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before running commands (overrides {config_module.DOTENV_ENV_VAR}).",
)
@click.option("--version", "-V", is_flag=True, help="Print the installed version and exit.")
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None, version: bool) -> None:
    """Root command; prints the banner when no subcommand is given."""

    if config_module.should_use_dotenv(use_dotenv):
        config_module.enable_dotenv()
    if version:
        click.echo(__init__conf__.version)
        ctx.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--level",
    type=click.Choice([level.value for level in LogLevel], case_sensitive=False),
    default=LogLevel.TRACE.value,
    show_default=True,
    help="Default threshold of the demo pipeline (LOG_LEVEL overrides).",
)
@click.option("--format", "formats", multiple=True, help="Template line; repeat for several output tokens.")
@click.option("--timestamp-format", default=None, help="Timestamp preset (iso, locale) or pattern such as hh:mm:ss.SSS.")
@click.option("--json", "as_json", is_flag=True, help="Render events with the json formatter.")
def cli_logdemo(level: str, formats: tuple[str, ...], timestamp_format: str | None, as_json: bool) -> None:
    """Emit one sample event per level through a console appender."""

    result = _logdemo(level=level, formats=formats, timestamp_format=timestamp_format, as_json=as_json)
    click.echo(f"emitted {len(result['events'])} event(s) at threshold {result['level']}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group and translate failures into an exit code.

    Examples
    --------
    >>> main(["--version"])
    1.0.0
    0
    """

    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0


__all__ = ["cli", "main"]
