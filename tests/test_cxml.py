from lxml import etree

from confprobe.cxml import (
    HEADER_TEXT,
    MARKER_TEMPLATE,
    add_c_header,
    add_c_marker,
    find_c_func_block,
)

SRC = "http://www.srcML.org/srcML/src"

C_UNIT = b"""<unit xmlns="http://www.srcML.org/srcML/src" xmlns:cpp="http://www.srcML.org/srcML/cpp" language="C">
<cpp:include>#<cpp:directive>include</cpp:directive> <cpp:file>&lt;stdio.h&gt;</cpp:file></cpp:include>
<cpp:include>#<cpp:directive>include</cpp:directive> <cpp:file>"local.h"</cpp:file></cpp:include>

<function><type><name>int</name></type> <name>main</name><parameter_list>()</parameter_list>
<block>{
    <expr_stmt><expr><call><name>init</name><argument_list>()</argument_list></call></expr>;</expr_stmt>
    <return>return <expr><literal type="number">0</literal></expr>;</return>
}</block></function>

<extern>extern "C" <function><type><name>void</name></type> <name>helper</name><parameter_list>()</parameter_list> <block>{ <return>return;</return> }</block></function></extern>

<function><name>__ATTRIBUTE__</name> <name>skipped</name> <block>{ }</block></function>

<function><type><name>void</name></type> <name>multi
line</name><parameter_list>()</parameter_list> <block>{ }</block></function>
</unit>"""


def local(node):
    return etree.QName(node).localname


def unit():
    return etree.fromstring(C_UNIT)


def test_add_header_before_first_include():
    root = unit()
    first = root[0]
    assert add_c_header(root) is True
    assert local(root[0]) == "include"
    assert root[0].text == HEADER_TEXT
    assert root[1] is first


def test_add_header_only_once():
    root = unit()
    add_c_header(root)
    assert add_c_header(root) is False
    headers = [c for c in root if local(c) == "include" and c.text == HEADER_TEXT]
    assert len(headers) == 1


def test_add_header_without_include():
    root = etree.fromstring(b'<unit xmlns="http://www.srcML.org/srcML/src"><function/></unit>')
    assert add_c_header(root) is False
    assert len(root) == 1


def test_find_top_level_function():
    root = unit()
    block = find_c_func_block(root, "main")
    main = root.findall(f"{{{SRC}}}function")[0]
    assert block is main.find(f"{{{SRC}}}block")


def test_find_function_in_extern():
    root = unit()
    block = find_c_func_block(root, "helper")
    assert local(block) == "block"
    assert local(block.getparent().getparent()) == "extern"


def test_attribute_function_is_skipped():
    assert find_c_func_block(unit(), "skipped") is None


def test_newlines_in_name_are_ignored():
    block = find_c_func_block(unit(), "multiline")
    assert local(block) == "block"


def test_missing_function():
    assert find_c_func_block(unit(), "absent") is None


def test_add_marker_before_each_child():
    root = unit()
    block = find_c_func_block(root, "main")
    original_children = list(block)
    original_text = "".join(block.itertext())
    marker = MARKER_TEMPLATE.format("maxmemory")
    assert add_c_marker(block, "maxmemory") == len(original_children)
    for child in original_children:
        prev = child.getprevious()
        assert local(prev) == "keyword"
        assert prev.text == marker
    assert "".join(block.itertext()).replace(marker, "") == original_text