"""Small string helpers used when reading configuration and paths."""

from __future__ import annotations

from confprobe.settings import MAX_SUBSTR

_DIGITS = "0123456789"


def remove_char(text: str, ch: str) -> str:
    """Return ``text`` with every occurrence of ``ch`` removed."""
    return text.replace(ch, "")


def remove_digits(text: str) -> str:
    """Return ``text`` with every ASCII digit removed."""
    return "".join(c for c in text if c not in _DIGITS)


def strip_leading_blanks(text: str) -> str:
    """Return ``text`` without its leading spaces and tabs."""
    return text.lstrip(" \t")


def count_char(text: str, ch: str) -> int:
    """Return how many times ``ch`` occurs in ``text``."""
    return text.count(ch)


def _clip(piece: str) -> str:
    if len(piece) > MAX_SUBSTR:
        return piece[: MAX_SUBSTR - 1]
    return piece


def cut_by_label(text: str, sep: str, limit: int) -> list[str]:
    """Split ``text`` on ``sep`` into at most ``limit`` pieces.

    Empty pieces between consecutive separators are skipped, except the
    final piece, which holds the rest of the text.  Pieces longer than
    ``MAX_SUBSTR`` are cut to ``MAX_SUBSTR - 1`` characters.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    pieces: list[str] = []
    start = 0
    if limit > 1:
        for i, ch in enumerate(text):
            if ch != sep:
                continue
            if i != start:
                pieces.append(_clip(text[start:i]))
                if len(pieces) + 1 == limit:
                    start = i + 1
                    break
            start = i + 1
    pieces.append(_clip(text[start:]))
    return pieces


def int_to_str(num: int) -> str:
    """Return the decimal digits of a non-negative integer."""
    if num < 0:
        raise ValueError(f"negative numbers are not supported: {num}")
    return str(num)


def str_to_int(text: str) -> int:
    """Read the ASCII digits of ``text`` as one number, ignoring anything else."""
    digits = "".join(c for c in text if c in _DIGITS)
    return int(digits) if digits else 0


def last_index(text: str, ch: str) -> int:
    """Return the index of the last ``ch`` in ``text``, or -1 if absent."""
    return text.rfind(ch)


def unquote_literal(text: str) -> str:
    """Drop the first and last characters of a quoted string literal."""
    if len(text) < 2:
        raise ValueError(f"not a string literal: {text!r}")
    return text[1:-1]


def replace_char(text: str, old: str, new: str) -> tuple[str, int]:
    """Replace every ``old`` with ``new``; return the new text and the count."""
    return text.replace(old, new), text.count(old)