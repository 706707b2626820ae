"""The whole instrumentation run: sources to srcML, insert markers, back to sources."""

from __future__ import annotations

import argparse
import contextlib
import os
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from lxml import etree

from confprobe.conffile import ConfigValueError
from confprobe.dirs import create_dir, delete_dir
from confprobe.instrument import insert_marker_code
from confprobe.logs import error
from confprobe.settings import (
    INPUT_PATH,
    MAX_CONVERT_SRC_PTHREAD_NUM,
    MAX_CONVERT_XML_PTHREAD_NUM,
    MAX_INSERT_XML_PTHREAD_NUM,
    HandledConf,
)
from confprobe.sources import (
    SoftwareConf,
    copy_file,
    count_convert_files,
    exec_srcml,
    get_program_name,
    load_software_conf,
    src_file_type,
    xml_file_type,
)

_TEMP_PREFIX = "temp_"


class _Workers:
    """A ring of worker slots; a slot's previous job is awaited before reuse."""

    def __init__(self, size: int, failure_message: str) -> None:
        self._size = size
        self._failure = failure_message
        self._executor: ThreadPoolExecutor | None = None
        self._slots: list[Future[bool] | None] = [None] * size
        self._next = 0

    def _collect(self, pending: Future[bool]) -> bool:
        ok = bool(pending.result())
        if not ok:
            error(self._failure)
        return ok

    def submit(self, fn: Callable[..., bool], *args: object) -> bool:
        """Start ``fn`` in the next slot; False if that slot's last job failed."""
        pending = self._slots[self._next]
        if pending is not None:
            self._slots[self._next] = None
            if not self._collect(pending):
                return False
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self._size)
        self._slots[self._next] = self._executor.submit(fn, *args)
        self._next = (self._next + 1) % self._size
        return True

    def drain(self) -> bool:
        """Wait for every running job; True if all of them succeeded."""
        ok = True
        for index, pending in enumerate(self._slots):
            if pending is not None:
                self._slots[index] = None
                ok = self._collect(pending) and ok
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self._next = 0
        return ok


class Instrumenter:
    """Runs the conversion and instrumentation steps for one program.

    Working directories ``temp_<program>`` (srcML files) and ``<program>``
    (the instrumented copy) are created in the current directory.
    """

    def __init__(self, conf: SoftwareConf, program_name: str) -> None:
        self.conf = conf
        self.program_name = program_name
        self.total_convert_file_num = 0
        self.cur_convert_file_num = 0
        self._src_workers = self._new_src_workers()
        self._xml_workers = self._new_xml_workers()
        self._insert_workers = self._new_insert_workers()

    @staticmethod
    def _new_src_workers() -> _Workers:
        return _Workers(MAX_CONVERT_SRC_PTHREAD_NUM, "pthread_join convert src failure!\n")

    @staticmethod
    def _new_xml_workers() -> _Workers:
        return _Workers(MAX_CONVERT_XML_PTHREAD_NUM, "pthread_join convert xml failure!\n")

    @staticmethod
    def _new_insert_workers() -> _Workers:
        return _Workers(MAX_INSERT_XML_PTHREAD_NUM, "pthread_join insert xml failure!\n")

    @property
    def temp_dir(self) -> str:
        """Directory holding the srcML files."""
        return f"{_TEMP_PREFIX}{self.program_name}"

    def _relocate(self, dir_path: str, prefix: str) -> str:
        index = dir_path.find(self.program_name)
        if index == -1:
            raise ValueError(
                f"{dir_path!r} does not contain program name {self.program_name!r}"
            )
        rest = dir_path[index + len(self.program_name):]
        return f"{prefix}{self.program_name}{rest}"

    @staticmethod
    def _visible_entries(dir_path: str) -> list[os.DirEntry[str]] | None:
        try:
            entries = sorted(os.scandir(dir_path), key=lambda e: e.name)
        except OSError as exc:
            error(f"open directory {dir_path} to failed: {exc.strerror}.\n")
            return None
        return [entry for entry in entries if not entry.name.startswith(".")]

    @staticmethod
    def _examine(entry: os.DirEntry[str], child: str) -> bool:
        try:
            entry.stat(follow_symlinks=False)
        except OSError as exc:
            error(f"lstat {child} to failed: {exc.strerror}.\n")
            return False
        return True

    def src_to_xml(self, dir_path: str) -> bool:
        """Convert every source file below ``dir_path`` to srcML.

        Non-source files are copied into the ``<program>`` tree instead.
        Returns False on the first failure met while walking.
        """
        temp_dir = self._relocate(dir_path, _TEMP_PREFIX)
        copy_dir = temp_dir[len(_TEMP_PREFIX):]
        for directory in (temp_dir, copy_dir):
            with contextlib.suppress(OSError):
                create_dir(directory)

        entries = self._visible_entries(dir_path)
        if entries is None:
            return False

        for entry in entries:
            child = f"{dir_path}/{entry.name}"
            if not self._examine(entry, child):
                return False
            if entry.is_dir(follow_symlinks=False):
                if not self.src_to_xml(child):
                    return False
            elif entry.is_file(follow_symlinks=False):
                if src_file_type(child) is not None:
                    xml_path = f"{temp_dir}/{entry.name}.xml"
                    if not self._src_workers.submit(exec_srcml, child, xml_path):
                        return False
                    self.cur_convert_file_num += 1
                    print(
                        f"convert src file {child}"
                        f"({self.cur_convert_file_num}/{self.total_convert_file_num})"
                    )
                else:
                    copy_file(child, f"{copy_dir}/{entry.name}")
        return True

    def xml_to_src(self, dir_path: str) -> bool:
        """Convert every srcML file below ``dir_path`` back into the program tree."""
        target_dir = self._relocate(dir_path, "")

        entries = self._visible_entries(dir_path)
        if entries is None:
            return False

        for entry in entries:
            child = f"{dir_path}/{entry.name}"
            if not self._examine(entry, child):
                return False
            if entry.is_dir(follow_symlinks=False):
                if not self.xml_to_src(child):
                    return False
            elif entry.is_file(follow_symlinks=False) and xml_file_type(child) is not None:
                des_path = f"{target_dir}/{entry.name}"[: -len(".xml")]
                if not self._xml_workers.submit(exec_srcml, child, des_path):
                    return False
                self.cur_convert_file_num += 1
                print(
                    f"convert xml file {child}"
                    f"({self.cur_convert_file_num}/{self.total_convert_file_num})"
                )
        return True

    def _insert_one(self, handled: HandledConf) -> bool:
        try:
            insert_marker_code(handled, self.program_name)
        except (OSError, etree.XMLSyntaxError):
            return False
        return True

    def insert_xml(self) -> bool:
        """Start instrumenting every configured option's srcML files."""
        total = len(self.conf.handled)
        for index, handled in enumerate(self.conf.handled, start=1):
            if not self._insert_workers.submit(self._insert_one, handled):
                return False
            print(f"insert configuration: {handled.conf_name}({index}/{total})")
        return True

    def build_src_to_xml(self) -> bool:
        """Convert the whole source tree to srcML and wait for it to finish."""
        self.total_convert_file_num = count_convert_files(self.conf.src_path)
        self.cur_convert_file_num = 0
        self._src_workers = self._new_src_workers()
        walked = self.src_to_xml(self.conf.src_path)
        drained = self._src_workers.drain()
        return walked and drained

    def build_xml_to_src(self) -> bool:
        """Convert every srcML file back to source and wait for it to finish."""
        self.cur_convert_file_num = 0
        self._xml_workers = self._new_xml_workers()
        walked = self.xml_to_src(self.temp_dir)
        drained = self._xml_workers.drain()
        return walked and drained

    def build_insert_xml(self) -> bool:
        """Instrument every configured option and wait for it to finish."""
        self._insert_workers = self._new_insert_workers()
        started = self.insert_xml()
        drained = self._insert_workers.drain()
        return started and drained

    def clear_tmp(self) -> None:
        """Remove the srcML working directory."""
        with contextlib.suppress(OSError):
            delete_dir(self.temp_dir)


def main(argv: list[str] | None = None) -> int:
    """Instrument the program described by the configuration file."""
    parser = argparse.ArgumentParser(
        prog="confprobe",
        description="Insert counting code for configuration options into a program.",
    )
    parser.add_argument(
        "-c", "--config", default=INPUT_PATH, help="instrumentation plan file"
    )
    args = parser.parse_args(argv)

    try:
        conf = load_software_conf(args.config)
        program_name = get_program_name(conf.src_path)
    except (OSError, ConfigValueError, ValueError):
        return 1

    instrumenter = Instrumenter(conf, program_name)
    instrumenter.build_src_to_xml()
    instrumenter.build_insert_xml()
    instrumenter.build_xml_to_src()
    instrumenter.clear_tmp()
    return 0