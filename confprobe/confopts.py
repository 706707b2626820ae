"""Software configuration options read from an option description file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

SRC_CONF_OPT_PATH = "../SrcConfOpt.conf"
"""Default file describing the options under test."""

OW_SAMPLE_PATH = "OWSample.csv"
NOW_SAMPLE_PATH = "nOWSample.csv"
PW_SAMPLE_PATH = "PWSample.csv"
RD_SAMPLE_PATH = "RDSAMPLE.csv"
PB_SAMPLE_PATH = "PBSAMPLE.csv"
SAMPLE_PATH = "SAMPLE.csv"
INPUT_PATH = "../input.conf"

SWITCH_TYPE = 0
"""Option type of an on/off option."""

NUMERIC_TYPE = 1
"""Option type of an option taking an integer range."""


@dataclass
class SWConfInfo:
    """One option under test: its name, type and (for numeric ones) range."""

    conf_name: str = ""
    conf_type: int = -1
    min_value: int = 0
    max_value: int = 0


def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"{what} must be an integer, got {token!r}") from None


@dataclass
class ConfOpt:
    """The switch and numeric options listed in an option description file.

    Each record is ``name type`` for a switch option (type 0) or
    ``name type min max`` for a numeric option (type 1), separated by any
    whitespace. Records of another type are skipped; a trailing record
    without a type is ignored.
    """

    bin_conf_opts: list[SWConfInfo] = field(default_factory=list)
    num_conf_opts: list[SWConfInfo] = field(default_factory=list)

    def __init__(self, path: str | os.PathLike[str] = SRC_CONF_OPT_PATH) -> None:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
        self._load(text)

    @classmethod
    def parse(cls, text: str) -> ConfOpt:
        """Build the option lists from the text of a description file."""
        opts = cls.__new__(cls)
        opts._load(text)
        return opts

    def _load(self, text: str) -> None:
        self.bin_conf_opts = []
        self.num_conf_opts = []
        tokens = iter(text.split())
        for name in tokens:
            type_token = next(tokens, None)
            if type_token is None:
                break
            info = SWConfInfo(conf_name=name, conf_type=_to_int(type_token, "option type"))
            if info.conf_type == SWITCH_TYPE:
                self.bin_conf_opts.append(info)
            elif info.conf_type == NUMERIC_TYPE:
                low = next(tokens, None)
                high = next(tokens, None)
                if low is None or high is None:
                    raise ValueError(f"numeric option {name!r} lacks its range")
                info.min_value = _to_int(low, "minimum value")
                info.max_value = _to_int(high, "maximum value")
                self.num_conf_opts.append(info)