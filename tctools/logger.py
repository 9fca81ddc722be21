"""
Logging for tctools.

All diagnostics go to stderr.  stdout is reserved for the live progress
channel read by the supervising process, and result.txt for the verdicts,
so neither may carry log output.

Loggers live below the "tctools" logger (e.g. "tctools.pipeline").  The
handler installed by initialize_logging carries a Counter filter, so the
command line driver can tell how many errors (typically checker failures)
were reported during a run.

Extra context, such as the traceback of a failing checker, is passed to the
log call in the extra dict and appended, truncated, by the formatter:
    log.error(f"Check error: {exc}", extra={"additional_info": tb})
"""

import logging
import sys
from typing import TextIO

import colorlog

FORMAT = '%(log_color)s%(levelname)s%(reset)s %(message)s'

_handler: logging.Handler | None = None


class Counter(logging.Filter):
    """
    A stateful filter that counts the number of warnings and errors it has seen.
    """

    def __init__(self):
        super().__init__()
        self.errors: int = 0
        self.warnings: int = 0

    def __str__(self) -> str:
        def p(x):
            return "" if x == 1 else "s"

        return f"{self.errors} error{p(self.errors)}, {self.warnings} warning{p(self.warnings)}"

    def filter(self, record) -> bool:
        if record.levelno == logging.WARNING:
            self.warnings += 1
        if record.levelno >= logging.ERROR:
            self.errors += 1
        return True


class DiagnosticFormatter(colorlog.ColoredFormatter):
    """
    Colored formatter that appends the record's additional_info, if any,
    indented below the message and cut off after max_additional_info lines.
    """

    def __init__(self, fmt: str = FORMAT, max_additional_info: int = 15, **kwargs):
        super().__init__(fmt, **kwargs)
        self._max_additional_info = max_additional_info

    def __append_additional_info(self, msg: str, additional_info: str | None) -> str:
        if additional_info is None or self._max_additional_info <= 0:
            return msg
        additional_info = additional_info.rstrip()
        if not additional_info:
            return msg
        lines = additional_info.split("\n")
        if len(lines) == 1:
            return "%s (%s)" % (msg, lines[0])
        if len(lines) > self._max_additional_info:
            lines = lines[: self._max_additional_info] + [
                "[.....truncated to %d lines.....]" % self._max_additional_info
            ]
        return "%s:\n%s" % (msg, "\n".join(" " * 8 + line for line in lines))

    def format(self, record: logging.LogRecord) -> str:
        result = super().format(record)
        return self.__append_additional_info(result, getattr(record, "additional_info", None))


def initialize_logging(log_level: str = "warning", max_additional_info: int = 15, stream: TextIO | None = None) -> Counter:
    """
    Configure the "tctools" logger to write to stderr (or stream).

    Calling this again replaces the previous configuration.  Returns the
    Counter attached to the new handler.
    """
    global _handler
    root = logging.getLogger("tctools")
    if _handler is not None:
        root.removeHandler(_handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(DiagnosticFormatter(max_additional_info=max_additional_info))
    count = Counter()
    handler.addFilter(count)
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper()))
    _handler = handler
    return count
