"""Instrumenting srcML trees of C++ sources."""

from __future__ import annotations

from lxml import etree

from confprobe.cxml import (
    HEADER_TEXT,
    _add_header,
    _add_marker,
    _ends_with_function,
    _find_block,
    _local_name,
)


def add_cpp_header(root: etree._Element) -> bool:
    """Insert the marker include before the first include of ``root``.

    Returns True if it was inserted, False if it was already there or the
    unit has no include to place it before.
    """
    return _add_header(root, "include", HEADER_TEXT)


def find_cpp_func_block(root: etree._Element, func_name: str) -> etree._Element | None:
    """Return the body block of the top-level function ``func_name``, or None."""
    for cur in root:
        name = _local_name(cur)
        if name == "function":
            func = cur
        elif name == "extern" and _ends_with_function(cur):
            func = cur[-1]
        else:
            continue
        block = _find_block(func, func_name, skip_attribute=True)
        if block is not None:
            return block
    return None


def add_cpp_marker(block: etree._Element, conf_name: str) -> int:
    """Insert a counting call before every child node of ``block``.

    Returns the number of calls inserted.
    """
    return _add_marker(block, conf_name)