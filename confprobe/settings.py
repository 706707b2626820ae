"""Shared limits, paths and the records describing what gets instrumented."""

from __future__ import annotations

from dataclasses import dataclass, field

OPENLOG = True
"""Whether log records are also appended to log files."""

DEBUG = False

LINE_CHAR_MAX_NUM = 1024
"""Maximum number of characters read from one line."""

MAX_SUBSTR = 512
"""Maximum length of a piece produced when a string is split."""

LOGINFO_LENGTH = 1024
MAX_PATH_LENGTH = 1024
MAX_PROGRAMNAME_NUM = 128

MAX_CONVERT_SRC_PTHREAD_NUM = 10
"""Workers converting source files to XML."""

MAX_CONVERT_XML_PTHREAD_NUM = 10
"""Workers converting XML files back to source."""

MAX_INSERT_XML_PTHREAD_NUM = 1
"""Workers inserting marker code into XML files."""

MAX_FUNCTION_NAME_NUM = 64
MAX_CONFIG_NAME_NUM = 64

INPUT_PATH = "../input.conf"
CONFIG_NOTESYMBOL = "#"
CONFIG_LABEL_MAX_NUM = 32
CONFIG_KEY_MAX_NUM = 32
CONFIG_VALUE_MAX_NUM = MAX_PATH_LENGTH


@dataclass(frozen=True)
class InstrumentInfo:
    """Where one configuration option is used: a source file and a function."""

    src_path: str
    func_name: str


@dataclass
class HandledConf:
    """A configuration option together with every place to instrument for it."""

    conf_name: str
    insert_info: list[InstrumentInfo] = field(default_factory=list)

    def insert_count(self) -> int:
        """Return how many places this option is instrumented at."""
        return len(self.insert_info)