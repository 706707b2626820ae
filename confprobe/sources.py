"""Reading the instrumentation plan and classifying and converting source files."""

from __future__ import annotations

import enum
import os
import shutil
import subprocess
from dataclasses import dataclass, field

from confprobe.conffile import ConfigValueError, get_conf_value
from confprobe.logs import error
from confprobe.settings import (
    INPUT_PATH,
    MAX_PROGRAMNAME_NUM,
    HandledConf,
    InstrumentInfo,
)
from confprobe.strops import cut_by_label, last_index, str_to_int


class Language(enum.IntEnum):
    """Languages whose sources can be instrumented."""

    C = 1
    CPP = 2
    JAVA = 3


@dataclass
class SoftwareConf:
    """The program to instrument and the options to instrument in it."""

    src_path: str
    handled: list[HandledConf] = field(default_factory=list)


def _required(label: str, key: str, path: str | os.PathLike[str]) -> str:
    try:
        return get_conf_value(label, key, path)
    except ConfigValueError:
        error(f"get config info failure! label('{label}') key('{key}').\n")
        raise


def load_software_conf(path: str | os.PathLike[str] = INPUT_PATH) -> SoftwareConf:
    """Read the source directory and every option's instrumentation sites.

    Raises ``ConfigValueError`` (after logging it) when a needed value is
    missing, ``OSError`` when the file cannot be read.
    """
    src_path = _required("environmentConf", "srcPath", path)
    total = str_to_int(_required("configInfo", "configNum", path))
    names_value = _required("configInfo", "configName", path)

    names = cut_by_label(names_value, ":", total) if total > 0 else []
    if len(names) < total:
        error(
            f"get config info failure! label('configInfo') key('configName') "
            f"lists {len(names)} of {total} names.\n"
        )
        raise ConfigValueError(
            f"configName lists {len(names)} names but configNum is {total}"
        )

    handled: list[HandledConf] = []
    for label in names:
        insert_num = str_to_int(_required(label, "InsertNum", path))
        sites = [
            InstrumentInfo(
                src_path=_required(label, f"srcPath_{i}", path),
                func_name=_required(label, f"funcName_{i}", path),
            )
            for i in range(1, insert_num + 1)
        ]
        handled.append(HandledConf(conf_name=label, insert_info=sites))

    return SoftwareConf(src_path=src_path, handled=handled)


def get_program_name(source_path: str) -> str:
    """Return the last component of ``source_path``.

    Raises ``ValueError`` (after logging it) if the name is too long.
    """
    index = last_index(source_path, "/")
    length = len(source_path)
    too_long = (length - index) > MAX_PROGRAMNAME_NUM if index != -1 else length > MAX_PROGRAMNAME_NUM
    if too_long:
        error("program name greater than preset values\n")
        raise ValueError(f"program name too long: {source_path!r}")
    return source_path[index + 1 :] if index != -1 else source_path


_CPP_SUFFIXES = (".cpp", ".cxx", ".c++")


def src_file_type(path: str) -> Language | None:
    """Return the language of a source file by its suffix, or None."""
    if "." not in path:
        return None
    if len(path) <= 2:
        return None
    if path.endswith(".c"):
        return Language.C
    if len(path) <= 3:
        return None
    lowered = path.lower()
    if lowered.endswith(".cc"):
        return Language.CPP
    if len(path) <= 4:
        return None
    if lowered.endswith(_CPP_SUFFIXES):
        return Language.CPP
    if len(path) <= 5:
        return None
    if path.endswith(".java"):
        return Language.JAVA
    return None


def xml_file_type(path: str) -> Language | None:
    """Return the language of a srcML file by its suffix, or None."""
    if "." not in path:
        return None
    if len(path) <= 6:
        return None
    if path.endswith(".c.xml"):
        return Language.C
    if len(path) <= 7:
        return None
    lowered = path.lower()
    if lowered.endswith(".cc.xml"):
        return Language.CPP
    if len(path) <= 8:
        return None
    if lowered.endswith(tuple(suffix + ".xml" for suffix in _CPP_SUFFIXES)):
        return Language.CPP
    if len(path) <= 9:
        return None
    if path.endswith(".java.xml"):
        return Language.JAVA
    return None


def exec_srcml(src_path: str, des_path: str) -> bool:
    """Run ``srcml`` to convert ``src_path`` into ``des_path``.

    Works in both directions (source to XML and back). Returns True when
    srcml exits with status 0; failures to start it are logged.
    """
    try:
        completed = subprocess.run(["srcml", src_path, "-o", des_path], check=False)
    except OSError as exc:
        error(f"convert {src_path} to XML failed: {exc.strerror}.\n")
        return False
    return completed.returncode == 0


def copy_file(src_path: str, des_path: str) -> bool:
    """Copy ``src_path`` to ``des_path``; log and return False on failure."""
    try:
        shutil.copy(src_path, des_path)
    except OSError as exc:
        error(f"copy {src_path} to {des_path} failed: {exc.strerror}.\n")
        return False
    return True


def count_convert_files(dir_path: str) -> int:
    """Count the source files below ``dir_path``, skipping hidden entries.

    Returns 0 for a directory that cannot be opened or whose entries
    cannot be examined; the problem is logged.
    """
    try:
        entries = list(os.scandir(dir_path))
    except OSError as exc:
        error(f"open directory {dir_path} to failed: {exc.strerror}.\n")
        return 0

    total = 0
    for entry in entries:
        if entry.name.startswith("."):
            continue
        child = f"{dir_path}/{entry.name}"
        try:
            entry.stat(follow_symlinks=False)
        except OSError as exc:
            error(f"lstat {child} to failed: {exc.strerror}.\n")
            return 0
        if entry.is_dir(follow_symlinks=False):
            total += count_convert_files(child)
        elif entry.is_file(follow_symlinks=False) and src_file_type(child) is not None:
            total += 1
    return total