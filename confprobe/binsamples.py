"""Test case designs for switch options: option-wise, negative option-wise, pair-wise."""

from __future__ import annotations

import os
from itertools import combinations

from confprobe.confopts import (
    NOW_SAMPLE_PATH,
    OW_SAMPLE_PATH,
    PW_SAMPLE_PATH,
    ConfOpt,
    SWConfInfo,
)

ON = "Y"
OFF = "N"


class _BinarySample:
    """Common part of the switch-option designs."""

    default_path = OW_SAMPLE_PATH

    def __init__(self, options: ConfOpt | None = None) -> None:
        opts = options if options is not None else ConfOpt()
        self.options: list[SWConfInfo] = list(opts.bin_conf_opts)

    @property
    def header(self) -> list[str]:
        """Names of the switch options, in column order."""
        return [o.conf_name for o in self.options]

    def rows(self) -> list[list[str]]:
        raise NotImplementedError

    def build(self, path: str | os.PathLike[str] | None = None) -> int:
        """Write the design as CSV to ``path``; return the number of test cases.

        Raises ``ValueError`` if there are no switch options.
        """
        if not self.options:
            raise ValueError("there are no switch options to sample")
        rows = self.rows()
        target = path if path is not None else self.default_path
        with open(target, "w", encoding="utf-8", newline="") as out:
            out.write(",".join(self.header) + "\n")
            for row in rows:
                out.write(",".join(row) + "\n")
        return len(rows)


class OWSample(_BinarySample):
    """Option-wise design: each test case turns exactly one option on."""

    default_path = OW_SAMPLE_PATH

    def __init__(self, options: ConfOpt | None = None) -> None:
        super().__init__(options)

    def rows(self) -> list[list[str]]:
        """One row per option, that option on and every other off."""
        count = len(self.options)
        return [[ON if j == i else OFF for j in range(count)] for i in range(count)]

    def build(self, path: str | os.PathLike[str] | None = OW_SAMPLE_PATH) -> int:
        """Write the design as CSV to ``path``; return the number of test cases."""
        return super().build(path)


class NOWSample(_BinarySample):
    """Negative option-wise design: each test case turns exactly one option off."""

    default_path = NOW_SAMPLE_PATH

    def __init__(self, options: ConfOpt | None = None) -> None:
        super().__init__(options)

    def rows(self) -> list[list[str]]:
        """One row per option, that option off and every other on."""
        count = len(self.options)
        return [[OFF if j == i else ON for j in range(count)] for i in range(count)]

    def build(self, path: str | os.PathLike[str] | None = NOW_SAMPLE_PATH) -> int:
        """Write the design as CSV to ``path``; return the number of test cases."""
        return super().build(path)


class PWSample(_BinarySample):
    """Pair-wise design: each test case turns exactly two options on."""

    default_path = PW_SAMPLE_PATH

    def __init__(self, options: ConfOpt | None = None) -> None:
        super().__init__(options)

    def rows(self) -> list[list[str]]:
        """One row per pair of options, in order, with both of them on."""
        count = len(self.options)
        return [
            [ON if n in (i, j) else OFF for n in range(count)]
            for i, j in combinations(range(count), 2)
        ]

    def build(self, path: str | os.PathLike[str] | None = PW_SAMPLE_PATH) -> int:
        """Write the design as CSV to ``path``; return the number of test cases."""
        return super().build(path)