from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, Optional, Tuple

import numpy as np
import pandas as pd


OnAnomaly = Literal["fail", "warn_and_skip"]

REPORT_COLUMNS = [
    "name",
    "n_values",
    "max_abs_diff",
    "worst_index",
    "present_value",
    "baseline_value",
    "n_nonfinite",
]


@dataclass(frozen=True)
class BandDiff:
    """Difference summary for one band file.

    Attributes
    ----------
    name:
        Band file name.
    n_values:
        Number of float32 values compared.
    max_abs_diff:
        Largest ``|present[i] - baseline[i]|``; NaN differences are ignored.
    worst_index:
        Index where ``max_abs_diff`` was found.
    present_value, baseline_value:
        The two values at ``worst_index``.
    n_nonfinite:
        Number of indices whose difference is NaN (excluded from the maximum).
    """

    name: str
    n_values: int
    max_abs_diff: float
    worst_index: int
    present_value: float
    baseline_value: float
    n_nonfinite: int = 0


@dataclass(frozen=True)
class SkippedBand:
    """A band file that was not compared (warn-and-skip policy only)."""

    name: str
    reason: str


@dataclass(frozen=True)
class DiffAccumulator:
    """Running maximum over all compared band files.

    Immutable; :meth:`update` returns a new accumulator so the per-file step
    stays a pure function of its inputs.
    """

    max_abs_diff: Optional[float] = None
    n_compared: int = 0

    def update(self, diff: BandDiff) -> "DiffAccumulator":
        m = diff.max_abs_diff
        if self.max_abs_diff is not None and not (m > self.max_abs_diff):
            m = self.max_abs_diff
        return replace(self, max_abs_diff=float(m), n_compared=self.n_compared + 1)


@dataclass(frozen=True)
class DiffReport:
    """Outcome of one comparison run."""

    tolerance: float
    on_anomaly: OnAnomaly
    diffs: Tuple[BandDiff, ...] = ()
    skipped: Tuple[SkippedBand, ...] = ()
    warnings: Tuple[str, ...] = ()
    accumulator: DiffAccumulator = field(default_factory=DiffAccumulator)

    @property
    def max_abs_diff(self) -> float:
        """Overall maximum; 0.0 when no file was compared."""
        m = self.accumulator.max_abs_diff
        return 0.0 if m is None else float(m)

    @property
    def passed(self) -> bool:
        # Compared in float32, the precision the band files are stored in.
        # Equality passes: only a strictly larger difference fails.
        return not bool(np.float32(self.max_abs_diff) > np.float32(self.tolerance))

    def to_frame(self) -> pd.DataFrame:
        """One row per compared band file, in processing order."""
        rows = [
            {
                "name": d.name,
                "n_values": d.n_values,
                "max_abs_diff": d.max_abs_diff,
                "worst_index": d.worst_index,
                "present_value": d.present_value,
                "baseline_value": d.baseline_value,
                "n_nonfinite": d.n_nonfinite,
            }
            for d in self.diffs
        ]
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)
