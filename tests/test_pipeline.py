import os
import stat
import sys

import pytest

from confprobe.pipeline import Instrumenter, main
from confprobe.settings import HandledConf, InstrumentInfo
from confprobe.sources import SoftwareConf

PROGRAM = "zqprogram"

FAKE_SRCML = """\
import sys
import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape

src, dst = sys.argv[1], sys.argv[3]
if src.rsplit("/", 1)[-1].startswith("bad"):
    sys.exit(1)
if src.endswith(".xml"):
    text = "".join(ET.parse(src).getroot().itertext())
    with open(dst, "w", encoding="utf-8") as out:
        out.write(text)
else:
    with open(src, encoding="utf-8") as handle:
        body = handle.read()
    with open(dst, "w", encoding="utf-8") as out:
        out.write("<unit>" + escape(body) + "</unit>")
"""

MAIN_C = "#include <stdio.h>\nint foo() { return 1; }\n"

SRCML_DOC = (
    '<unit xmlns="http://www.srcML.org/srcML/src">'
    "<include>#include &lt;stdio.h&gt;</include>\n"
    "<function><type><name>int</name></type> <name>foo</name>"
    "<parameter_list>()</parameter_list> "
    "<block>{<expr_stmt><expr>x</expr>;</expr_stmt>}</block></function>\n"
    "</unit>"
)


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "srcml"
    script.write_text(f"#!{sys.executable}\n{FAKE_SRCML}", encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    src_root = tmp_path / "src" / PROGRAM
    (src_root / "util").mkdir(parents=True)
    (src_root / ".hidden").mkdir()
    (src_root / "main.c").write_text(MAIN_C, encoding="utf-8")
    (src_root / "util" / "helper.cpp").write_text("int helper();\n", encoding="utf-8")
    (src_root / "README.txt").write_text("readme\n", encoding="utf-8")
    (src_root / ".hidden" / "skip.c").write_text("int skip;\n", encoding="utf-8")

    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return src_root, work


def _instrumenter(src_root, handled=()):
    return Instrumenter(SoftwareConf(src_path=str(src_root), handled=list(handled)), PROGRAM)


def test_build_src_to_xml_converts_and_copies(workspace, capsys):
    src_root, work = workspace
    inst = _instrumenter(src_root)
    assert inst.build_src_to_xml() is True
    assert inst.total_convert_file_num == 2
    assert inst.cur_convert_file_num == 2
    assert (work / f"temp_{PROGRAM}" / "main.c.xml").is_file()
    assert (work / f"temp_{PROGRAM}" / "util" / "helper.cpp.xml").is_file()
    assert (work / PROGRAM / "README.txt").read_text(encoding="utf-8") == "readme\n"
    assert not (work / f"temp_{PROGRAM}" / ".hidden").exists()
    assert "convert src file" in capsys.readouterr().out


def test_round_trip_restores_sources(workspace):
    src_root, work = workspace
    inst = _instrumenter(src_root)
    assert inst.build_src_to_xml() is True
    assert inst.build_xml_to_src() is True
    assert (work / PROGRAM / "main.c").read_text(encoding="utf-8") == MAIN_C
    assert (work / PROGRAM / "util" / "helper.cpp").read_text(encoding="utf-8") == "int helper();\n"


def test_failed_conversion_is_reported(workspace):
    src_root, _ = workspace
    (src_root / "bad.c").write_text("int bad;\n", encoding="utf-8")
    inst = _instrumenter(src_root)
    assert inst.build_src_to_xml() is False


def test_src_to_xml_missing_directory(workspace):
    _, work = workspace
    inst = _instrumenter(work / "absent" / PROGRAM)
    assert inst.src_to_xml(str(work / "absent" / PROGRAM)) is False


def test_src_to_xml_rejects_path_without_program(workspace):
    _, work = workspace
    inst = _instrumenter(work / "elsewhere")
    with pytest.raises(ValueError):
        inst.src_to_xml(str(work / "elsewhere"))


def test_insert_then_convert_back_contains_marker(workspace):
    src_root, work = workspace
    temp = work / f"temp_{PROGRAM}"
    temp.mkdir()
    (work / PROGRAM).mkdir()
    (temp / "main.c.xml").write_text(SRCML_DOC, encoding="utf-8")
    handled = HandledConf("opt", [InstrumentInfo(src_path="main.c", func_name="foo")])
    inst = _instrumenter(src_root, [handled])

    assert inst.build_insert_xml() is True
    xml_text = (temp / "main.c.xml").read_text(encoding="utf-8")
    assert 'insert_count((char *)"opt");' in xml_text
    assert "#include &lt;insertFile.h&gt;" in xml_text

    assert inst.build_xml_to_src() is True
    source = (work / PROGRAM / "main.c").read_text(encoding="utf-8")
    assert 'insert_count((char *)"opt");' in source
    assert "#include <insertFile.h>" in source


def test_insert_missing_xml_fails(workspace):
    src_root, _ = workspace
    handled = HandledConf("opt", [InstrumentInfo(src_path="nothere.c", func_name="foo")])
    inst = _instrumenter(src_root, [handled])
    assert inst.build_insert_xml() is False


def test_clear_tmp_removes_temp_dir(workspace):
    src_root, work = workspace
    inst = _instrumenter(src_root)
    inst.build_src_to_xml()
    assert (work / f"temp_{PROGRAM}").is_dir()
    inst.clear_tmp()
    assert not (work / f"temp_{PROGRAM}").exists()
    assert inst.temp_dir == f"temp_{PROGRAM}"


def test_main_runs_whole_pipeline(workspace):
    src_root, work = workspace
    conf = work / "input.conf"
    conf.write_text(
        "[environmentConf]\n"
        f"srcPath = {src_root}\n"
        "[configInfo]\n"
        "configNum = 1\n"
        "configName = opt\n"
        "[opt]\n"
        "InsertNum = 1\n"
        "srcPath_1 = main.c\n"
        "funcName_1 = foo\n",
        encoding="utf-8",
    )
    assert main(["--config", str(conf)]) == 0
    assert not (work / f"temp_{PROGRAM}").exists()
    assert (work / PROGRAM / "main.c").read_text(encoding="utf-8") == MAIN_C


def test_main_missing_config_fails(workspace):
    _, work = workspace
    assert main(["--config", str(work / "missing.conf")]) == 1