"""Instrumenting srcML trees of C sources."""

from __future__ import annotations

from lxml import etree

from confprobe.strops import remove_char

HEADER_TEXT = "\n#include <insertFile.h>\n"
MARKER_TEMPLATE = 'insert_count((char *)"{}");\n'


def _local_name(node: etree._Element) -> str:
    if node.tag is etree.Comment:
        return "comment"
    if node.tag is etree.ProcessingInstruction:
        return node.target
    if node.tag is etree.Entity:
        return node.name
    return etree.QName(node).localname


def _content(node: etree._Element) -> str:
    """Concatenated text of a node and all its descendants."""
    if not isinstance(node.tag, str):
        return node.text or ""
    parts = [node.text or ""]
    for child in node:
        if isinstance(child.tag, str):
            parts.append(_content(child))
        parts.append(child.tail or "")
    return "".join(parts)


def _new_node(tag: str, text: str) -> etree._Element:
    node = etree.Element(tag)
    node.text = text
    return node


def _insert_before(ref: etree._Element, node: etree._Element) -> None:
    parent = ref.getparent()
    parent.insert(parent.index(ref), node)


def _add_header(root: etree._Element, tag: str, text: str) -> bool:
    matches = [child for child in root if _local_name(child) == tag]
    if not matches or any(_content(child) == text for child in matches):
        return False
    _insert_before(matches[0], _new_node(tag, text))
    return True


def _ends_with_function(node: etree._Element) -> bool:
    children = list(node)
    if not children or children[-1].tail:
        return False
    return _local_name(children[-1]) == "function"


def _find_block(
    func: etree._Element, func_name: str, skip_attribute: bool
) -> etree._Element | None:
    current: str | None = None
    for child in func:
        name = _local_name(child)
        if name == "name":
            content = _content(child)
            if skip_attribute and content.lower() == "__attribute__":
                break
            current = remove_char(content, "\n")
            if current != func_name:
                break
        elif name == "block" and current == func_name:
            return child
    return None


def _add_marker(block: etree._Element, conf_name: str) -> int:
    text = MARKER_TEMPLATE.format(conf_name)
    targets = list(block)
    for child in targets:
        _insert_before(child, _new_node("keyword", text))
    return len(targets)


def add_c_header(root: etree._Element) -> bool:
    """Insert the marker include before the first include of ``root``.

    Returns True if it was inserted, False if it was already there or the
    unit has no include to place it before.
    """
    return _add_header(root, "include", HEADER_TEXT)


def find_c_func_block(root: etree._Element, func_name: str) -> etree._Element | None:
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


def add_c_marker(block: etree._Element, conf_name: str) -> int:
    """Insert a counting call before every child node of ``block``.

    Returns the number of calls inserted.
    """
    return _add_marker(block, conf_name)