"""Test case designs for numeric options: Plackett-Burman and random."""

from __future__ import annotations

import os
import random

from confprobe.confopts import PB_SAMPLE_PATH, RD_SAMPLE_PATH, ConfOpt, SWConfInfo


class SampleError(ValueError):
    """The requested design cannot be generated."""


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _unique(rows: list[list[int]]) -> list[list[int]]:
    seen: set[tuple[int, ...]] = set()
    kept: list[list[int]] = []
    for row in rows:
        key = tuple(row)
        if key not in seen:
            seen.add(key)
            kept.append(row)
    return kept


def _write(path: str | os.PathLike[str], header: list[str], rows: list[list[int]]) -> None:
    with open(path, "w", encoding="utf-8", newline="") as out:
        out.write(",".join(header) + "\n")
        for row in rows:
            out.write(",".join(str(v) for v in row) + "\n")


class _NumericSample:
    def __init__(self, options: ConfOpt | None, rng: random.Random | None) -> None:
        opts = options if options is not None else ConfOpt()
        self.options: list[SWConfInfo] = list(opts.num_conf_opts)
        self.rng = rng if rng is not None else random.Random()

    @property
    def header(self) -> list[str]:
        """Names of the numeric options, in column order."""
        return [o.conf_name for o in self.options]

    def _require_options(self) -> None:
        if not self.options:
            raise SampleError("there are no numeric options to sample")


class PBSample(_NumericSample):
    """Plackett-Burman style design over the numeric options."""

    def __init__(
        self, options: ConfOpt | None = None, rng: random.Random | None = None
    ) -> None:
        super().__init__(options, rng)

    def rows(self, measurement_num: int = 49, level_num: int = 7) -> list[list[int]]:
        """Return the distinct test cases followed by a row of minimum values.

        ``measurement_num`` must be a positive multiple of ``level_num``.
        Each row is the previous one shifted by one place through a random
        seed sequence of levels; level ``k`` maps an option to
        ``k * (max - min) / level_num + min``.
        """
        if level_num < 1 or measurement_num < 1 or measurement_num % level_num != 0:
            raise SampleError(
                f"measurement count {measurement_num} is not a multiple of "
                f"level count {level_num}"
            )
        self._require_options()

        seed_num = measurement_num - 1
        min_level = seed_num // level_num
        seed_range = [0] * min_level
        for _ in range(min_level + 1):
            seed_range.extend(range(1, level_num))
        seed = [seed_range.pop(self.rng.randrange(len(seed_range))) for _ in range(seed_num)]

        width = len(self.options)
        levels = [[seed[(i + j) % seed_num] for j in range(width)] for i in range(seed_num)]

        rows = [
            [
                _trunc_div(level * (opt.max_value - opt.min_value), level_num) + opt.min_value
                for level, opt in zip(row, self.options)
            ]
            for row in _unique(levels)
        ]
        rows.append([opt.min_value for opt in self.options])
        return rows

    def build(
        self,
        path: str | os.PathLike[str] = PB_SAMPLE_PATH,
        measurement_num: int = 49,
        level_num: int = 7,
    ) -> int:
        """Write the design as CSV to ``path``; return the number of test cases."""
        rows = self.rows(measurement_num, level_num)
        _write(path, self.header, rows)
        return len(rows)


class RDSample(_NumericSample):
    """Random design: option values drawn on a grid of ``step_size``."""

    def __init__(
        self,
        options: ConfOpt | None = None,
        step_size: int = 16,
        rng: random.Random | None = None,
    ) -> None:
        if step_size < 1:
            raise SampleError(f"step size must be positive, got {step_size}")
        super().__init__(options, rng)
        self.step_size = step_size

    def rows(self, measurement_num: int = 50) -> list[list[int]]:
        """Draw ``measurement_num`` test cases and return the distinct ones.

        Each value is ``min + k * step_size`` with ``k`` drawn below
        ``(max - min) / step_size``.
        """
        self._require_options()
        ranges: list[int] = []
        for opt in self.options:
            span = _trunc_div(opt.max_value - opt.min_value, self.step_size)
            if span < 1:
                raise SampleError(
                    f"range of {opt.conf_name!r} is narrower than step {self.step_size}"
                )
            ranges.append(span)

        drawn = [
            [
                self.rng.randrange(span) * self.step_size + opt.min_value
                for span, opt in zip(ranges, self.options)
            ]
            for _ in range(measurement_num)
        ]
        return _unique(drawn)

    def build(
        self, path: str | os.PathLike[str] = RD_SAMPLE_PATH, measurement_num: int = 50
    ) -> int:
        """Write the design as CSV to ``path``; return the number of test cases."""
        rows = self.rows(measurement_num)
        _write(path, self.header, rows)
        return len(rows)