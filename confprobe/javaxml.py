"""Instrumenting srcML trees of Java sources."""

from __future__ import annotations

from lxml import etree

from confprobe.cxml import _add_header, _add_marker, _find_block, _local_name

IMPORT_TEXT = "\nimport java.io.IO;\n"


def add_java_package(root: etree._Element) -> bool:
    """Insert the marker import before the first import of ``root``.

    Returns True if it was inserted, False if it was already there or the
    unit has no import to place it before.
    """
    return _add_header(root, "import", IMPORT_TEXT)


def find_java_func_block(root: etree._Element, func_name: str) -> etree._Element | None:
    """Return the body block of the method or constructor ``func_name``, or None.

    The tree is searched depth first: nodes nested inside a child are
    examined before the child itself.
    """
    for cur in root:
        found = find_java_func_block(cur, func_name)
        if found is not None:
            return found
        if _local_name(cur) in ("function", "constructor"):
            block = _find_block(cur, func_name, skip_attribute=False)
            if block is not None:
                return block
    return None


def add_java_marker(block: etree._Element, conf_name: str) -> int:
    """Insert a counting call before every child node of ``block``.

    Returns the number of calls inserted.
    """
    return _add_marker(block, conf_name)