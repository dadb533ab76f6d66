"""Baseline comparator for hyperdrive band files.

Workflow:

1) Check that the baseline directory exists.
2) Discover present band files and pair them with baseline files by name.
3) Decode each pair, compute the per-file maximum absolute difference.
4) Fold every per-file result into a running maximum and judge it against
   the tolerance.

Structural anomalies (no files, missing counterpart, bad byte count, empty
file, length mismatch) either raise or are skipped with a warning, depending
on ``ComparatorConfig.on_anomaly``. A missing baseline directory always raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import numpy as np

from hyperdrive_vis_diff.analysis.diff import diff_band
from hyperdrive_vis_diff.errors import (
    BandFormatError,
    ContentError,
    DiscoveryError,
    MissingBaselineError,
)
from hyperdrive_vis_diff.ingest.discovery import BAND_PATTERN, pair_band_files
from hyperdrive_vis_diff.ingest.readers_band import read_band_f32
from hyperdrive_vis_diff.models.bands import BandPair
from hyperdrive_vis_diff.models.results import (
    BandDiff,
    DiffAccumulator,
    DiffReport,
    OnAnomaly,
    SkippedBand,
)


DEFAULT_BASELINE_DIR = Path("./baseline")
DEFAULT_TOLERANCE = 0.001

Echo = Callable[[str], None]


@dataclass(frozen=True)
class ComparatorConfig:
    """Configuration for one comparison run."""

    baseline_dir: Path = DEFAULT_BASELINE_DIR
    present_dir: Path = Path(".")
    pattern: str = BAND_PATTERN
    tolerance: float = DEFAULT_TOLERANCE

    # "fail": any anomaly raises. "warn_and_skip": the offending file is skipped.
    on_anomaly: OnAnomaly = "fail"


def _check_policy(on_anomaly: str) -> None:
    if on_anomaly not in ("fail", "warn_and_skip"):
        raise ValueError(f"on_anomaly must be 'fail' or 'warn_and_skip', got {on_anomaly!r}")


def _read_non_empty(path: Path):
    data = read_band_f32(path)
    if data.size == 0:
        raise ContentError(f"'{path}' didn't contain any data")
    return data


def compare_pair(
    pair: BandPair,
    acc: DiffAccumulator,
    on_anomaly: OnAnomaly = "fail",
) -> Tuple[DiffAccumulator, Optional[BandDiff], Optional[SkippedBand]]:
    """Compare one present/baseline pair and fold the result into ``acc``.

    Returns the new accumulator and either the per-file diff or, when the
    pair was skipped under the warn-and-skip policy, the skip record. The
    input accumulator is never modified.
    """
    _check_policy(on_anomaly)
    try:
        p_data = _read_non_empty(pair.present_path)
        b_data = _read_non_empty(pair.baseline_path)
        if p_data.size != b_data.size:
            raise ContentError(
                f"'{pair.present_path}' and '{pair.baseline_path}' have different amounts of data "
                f"({p_data.size} vs {b_data.size} values)"
            )
    except (BandFormatError, ContentError) as e:
        if on_anomaly == "fail":
            raise
        return acc, None, SkippedBand(name=pair.name, reason=str(e))

    diff = diff_band(pair.name, p_data, b_data)
    return acc.update(diff), diff, None


def run_comparison(cfg: ComparatorConfig, echo: Optional[Echo] = None) -> DiffReport:
    """Run the full baseline comparison described by ``cfg``.

    Parameters
    ----------
    cfg : ComparatorConfig
        Directories, pattern, tolerance and anomaly policy.
    echo : callable, optional
        Receives human-readable progress lines. ``None`` means silent.

    Returns
    -------
    DiffReport
        Per-file results, skipped files, warnings and the overall maximum.

    Raises
    ------
    MissingBaselineError
        The baseline directory does not exist (any policy).
    DiscoveryError, BandFormatError, ContentError
        Structural anomalies, only when ``cfg.on_anomaly == "fail"``.
    """
    _check_policy(cfg.on_anomaly)
    say: Echo = echo if echo is not None else (lambda _msg: None)

    baseline_dir = Path(cfg.baseline_dir)
    present_dir = Path(cfg.present_dir)
    if not baseline_dir.is_dir():
        raise MissingBaselineError(
            f"Directory '{baseline_dir}' does not exist! This should contain baseline hyperdrive binary files."
        )

    warnings: List[str] = []
    skipped: List[SkippedBand] = []

    def warn(msg: str) -> None:
        warnings.append(msg)
        say(f"[warn] {msg}")

    pairing = pair_band_files(present_dir, baseline_dir, cfg.pattern)

    if not pairing.present_names:
        msg = f"'{present_dir}' does not have any {cfg.pattern} files!"
        if cfg.on_anomaly == "fail":
            raise DiscoveryError(msg)
        warn(msg)

    # All present files must be in the baseline before any content is read.
    for name in pairing.missing:
        msg = f"'{name}' is missing from '{baseline_dir}'!"
        if cfg.on_anomaly == "fail":
            raise DiscoveryError(msg)
        warn(msg)
        skipped.append(SkippedBand(name=name, reason=msg))

    acc = DiffAccumulator()
    diffs: List[BandDiff] = []
    for pair in pairing.pairs:
        say(f"Checking '{pair.name}' ...")
        acc, diff, skip = compare_pair(pair, acc, cfg.on_anomaly)
        if skip is not None:
            warn(f"skipping '{pair.name}': {skip.reason}")
            skipped.append(skip)
            continue
        diffs.append(diff)
        say(f"Biggest difference for '{pair.name}': {np.float32(diff.max_abs_diff)}")
        if diff.n_nonfinite:
            warn(f"'{pair.name}': {diff.n_nonfinite} NaN differences ignored")

    return DiffReport(
        tolerance=float(cfg.tolerance),
        on_anomaly=cfg.on_anomaly,
        diffs=tuple(diffs),
        skipped=tuple(skipped),
        warnings=tuple(warnings),
        accumulator=acc,
    )
