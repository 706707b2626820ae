"""Reading values out of a sectioned ``[label] key = value`` file."""

from __future__ import annotations

import os
from collections.abc import Iterator

from confprobe.logs import error
from confprobe.settings import (
    CONFIG_NOTESYMBOL,
    CONFIG_VALUE_MAX_NUM,
    INPUT_PATH,
    LINE_CHAR_MAX_NUM,
)
from confprobe.strops import cut_by_label, remove_char, strip_leading_blanks


class ConfigValueError(LookupError):
    """A requested configuration value is missing or unusable."""


def _split_lines(text: str) -> Iterator[str]:
    buffer: list[str] = []
    for ch in text:
        if len(buffer) >= LINE_CHAR_MAX_NUM:
            # An over-long line is cut; the character that overflowed is lost.
            yield "".join(buffer)
            buffer = []
            continue
        if ch == "\n":
            yield "".join(buffer)
            buffer = []
            continue
        buffer.append(ch)
    if buffer:
        yield "".join(buffer)


def read_lines(path: str | os.PathLike[str]) -> Iterator[str]:
    """Yield the lines of ``path`` without newlines.

    Lines longer than ``LINE_CHAR_MAX_NUM`` characters are cut into pieces
    of that length, dropping the character at each cut.
    """
    with open(path, encoding="utf-8", errors="replace", newline="") as handle:
        text = handle.read()
    yield from _split_lines(text)


def get_conf_value(
    label: str, key: str, path: str | os.PathLike[str] = INPUT_PATH
) -> str:
    """Return the value of ``key`` in section ``[label]`` of ``path``.

    Labels and keys match case-insensitively; spaces are removed from keys
    and values. Raises ``ConfigValueError`` if the key is not found in the
    section, ``OSError`` (after logging it) if the file cannot be read.
    """
    try:
        lines = list(read_lines(path))
    except OSError as exc:
        error(f"open file({os.fspath(path)}) failed: {exc.strerror}.\n")
        raise

    in_section = False
    wanted_label = label.lower()
    wanted_key = key.lower()
    for raw in lines:
        line = strip_leading_blanks(raw)
        if line.startswith(CONFIG_NOTESYMBOL):
            continue
        if line.startswith("[") and line.endswith("]"):
            if in_section:
                break
            if line[1:-1].lower() == wanted_label:
                in_section = True
                continue
        if in_section:
            parts = cut_by_label(line, "=", 2)
            if remove_char(parts[0], " ").lower() == wanted_key:
                value = remove_char(parts[1], " ") if len(parts) > 1 else ""
                if len(value) >= CONFIG_VALUE_MAX_NUM:
                    raise ConfigValueError(
                        f"value of [{label}] {key} is too long ({len(value)} characters)"
                    )
                return value

    raise ConfigValueError(f"no value for [{label}] {key} in {os.fspath(path)}")