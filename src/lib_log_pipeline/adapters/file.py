"""File appender registered as ``file``.

Writes one line per event: formatter tokens joined by single spaces. The
file is opened on ``init`` and closed on ``dispose``.

Options
-------
filename:
    Destination path, ``app.log`` when omitted. Parent directories are
    created on demand.
append:
    Append to an existing file instead of truncating it (default ``False``).
encoding:
    Text encoding, ``utf-8`` by default.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from lib_log_pipeline.application.ports.plugins import FilterPort, FormatterPort
from lib_log_pipeline.domain.config import AppenderConfig
from lib_log_pipeline.domain.events import LogEvent

from ._base import BaseAppender
from ._formatting import join_tokens

DEFAULT_FILENAME = "app.log"


class FileAppender(BaseAppender):
    """Append formatted events to a text file.

    Examples
    --------
    >>> import tempfile
    >>> from lib_log_pipeline.domain.levels import LogLevel
    >>> target = Path(tempfile.mkdtemp()) / "out.log"
    >>> appender = FileAppender()
    >>> appender.init(AppenderConfig(name="file", options={"filename": str(target)}))
    >>> appender.write(LogEvent("app", LogLevel.ERROR, "boom"))
    >>> appender.dispose()
    >>> "ERROR [app] boom" in target.read_text(encoding="utf-8")
    True
    """

    name = "file"

    def __init__(self) -> None:
        super().__init__()
        self._stream: TextIO | None = None
        self.path: Path | None = None

    def init(
        self,
        config: AppenderConfig,
        formatter: FormatterPort | None = None,
        filters: Sequence[FilterPort] = (),
    ) -> None:
        super().init(config, formatter, filters)
        self.path = Path(self.option("filename") or DEFAULT_FILENAME)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        mode = "a" if self.option("append", False) else "w"
        self._stream = self.path.open(mode, encoding=self.option("encoding", "utf-8"))

    def write(self, event: LogEvent) -> None:
        if self._stream is None:
            return
        self._stream.write(join_tokens(self.render(event)) + "\n")

    def flush(self) -> None:
        if self._stream is not None:
            self._stream.flush()

    def dispose(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()


__all__ = ["DEFAULT_FILENAME", "FileAppender"]
