"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from typing import Callable

name = "lib_log_pipeline"
title = "Plugin-based structured logging pipeline with rule filters and token templates"
version = "1.0.0"
shell_command = "lib_log_pipeline"

_FIELDS = (
    ("name", name),
    ("title", title),
    ("version", version),
    ("shell_command", shell_command),
)


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner through ``writer`` (default: ``print``).

    Examples
    --------
    >>> print_info()  # doctest: +ELLIPSIS
    Info for lib_log_pipeline:
    ...
    """

    width = max(len(label) for label, _ in _FIELDS)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(width)} = {value}\n" for label, value in _FIELDS)
    text = "".join(lines)
    if writer is None:
        print(text, end="")
    else:
        writer(text)


def summary_info() -> str:
    """Return the banner printed by :func:`print_info` as one string."""

    chunks: list[str] = []
    print_info(writer=chunks.append)
    return "".join(chunks)


__all__ = ["name", "print_info", "shell_command", "summary_info", "title", "version"]
