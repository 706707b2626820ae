"""Logging to the terminal and to per-level log files."""

from __future__ import annotations

import enum
import os
import sys

from confprobe.dates import TimeFormat, local_time
from confprobe.settings import OPENLOG

WARNING_LOG = "warningInfo.log"
ERROR_LOG = "errorInfo.log"
RESULT_LOG = "resultInfo.log"


class Rank(enum.IntEnum):
    """Severity of a log record; decides its terminal colour."""

    ERROR = 0
    WARNING = 1
    RESULT = 2


_COLOURS = {Rank.ERROR: "\033[31m", Rank.WARNING: "\033[32m"}
_RESET = "\033[0m"


def create_log_info(info: str, file: str, function: str, line: int) -> str:
    """Build a log record stamped with the time and the calling site."""
    date = local_time(TimeFormat.DATETIME)
    function_part = f" [函数:{function:>20}] "
    file_part = f"[文件:{file:>15}] "
    line_part = f"[行数:{line:4d}] "
    return f"[{date}]  {file_part}{function_part}{line_part}  操作：{info}"


def write_log(
    rank: int,
    log_name: str | os.PathLike[str],
    info: str,
    file: str,
    function: str,
    line: int,
) -> str:
    """Show ``info`` on the terminal and append a full record to ``log_name``.

    Returns the record written. Raises ``OSError`` if the log file cannot
    be opened or written.
    """
    colour = _COLOURS.get(rank)
    if colour is None:
        sys.stdout.write(info)
    else:
        sys.stdout.write(f"{colour}{info}{_RESET}")
    sys.stdout.flush()

    record = create_log_info(info, file, function, line)
    if OPENLOG:
        with open(log_name, "a", encoding="utf-8") as handle:
            handle.write(record)
    return record


def _caller_site() -> tuple[str, str, int]:
    frame = sys._getframe(2)
    code = frame.f_code
    return os.path.basename(code.co_filename), code.co_name, frame.f_lineno


def warning(info: str) -> str:
    """Log a warning to the terminal and ``warningInfo.log``."""
    return write_log(Rank.WARNING, WARNING_LOG, info, *_caller_site())


def error(info: str) -> str:
    """Log an error to the terminal and ``errorInfo.log``."""
    return write_log(Rank.ERROR, ERROR_LOG, info, *_caller_site())


def result(info: str) -> str:
    """Log a result to the terminal and ``resultInfo.log``."""
    return write_log(Rank.RESULT, RESULT_LOG, info, *_caller_site())