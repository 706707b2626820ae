"""Inserting counting code for one configuration option into srcML files."""

from __future__ import annotations

from lxml import etree

from confprobe.cppxml import add_cpp_header, add_cpp_marker, find_cpp_func_block
from confprobe.cxml import add_c_header, add_c_marker, find_c_func_block
from confprobe.javaxml import add_java_marker, add_java_package, find_java_func_block
from confprobe.logs import error
from confprobe.settings import HandledConf
from confprobe.sources import Language, xml_file_type

_HANDLERS = {
    Language.C: (add_c_header, find_c_func_block, add_c_marker),
    Language.CPP: (add_cpp_header, find_cpp_func_block, add_cpp_marker),
    Language.JAVA: (add_java_package, find_java_func_block, add_java_marker),
}


def insert_marker_code(handled: HandledConf, program_name: str) -> int:
    """Instrument every site of ``handled`` in ``temp_<program_name>/``.

    Each site's XML file gets the marker header and, when its function is
    found, a counting call before every statement of the function body;
    the file is written back either way. Returns the number of functions
    instrumented. A file that cannot be parsed is logged and its error
    raised.
    """
    instrumented = 0
    for info in handled.insert_info:
        xml_path = f"temp_{program_name}/{info.src_path}.xml"
        try:
            tree = etree.parse(xml_path)
        except (OSError, etree.XMLSyntaxError):
            error(
                f"Document not parsed successfully! srcPath('{xml_path}') "
                f"funcName('{info.func_name}').\n"
            )
            raise
        root = tree.getroot()

        block = None
        handlers = _HANDLERS.get(xml_file_type(xml_path))
        if handlers is not None:
            add_header, find_block, add_marker = handlers
            add_header(root)
            block = find_block(root, info.func_name)
            if block is not None:
                add_marker(block, handled.conf_name)
                instrumented += 1

        if block is None:
            error(
                f"get function block failure! srcPath('{xml_path}') "
                f"funcName('{info.func_name}').\n"
            )

        tree.write(
            xml_path,
            encoding=tree.docinfo.encoding or "UTF-8",
            xml_declaration=True,
            standalone=tree.docinfo.standalone,
        )
    return instrumented