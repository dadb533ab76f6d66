"""Tests for the baseline comparator under both anomaly policies."""

from __future__ import annotations

import numpy as np
import pytest

from hyperdrive_vis_diff.errors import (
    BandFormatError,
    ContentError,
    DiscoveryError,
    MissingBaselineError,
)
from hyperdrive_vis_diff.ingest.readers_band import write_band_f32
from hyperdrive_vis_diff.models.bands import BandPair
from hyperdrive_vis_diff.models.results import BandDiff, DiffAccumulator
from hyperdrive_vis_diff.validation.comparator import ComparatorConfig, compare_pair, run_comparison


def _cfg(run_dirs, **kw) -> ComparatorConfig:
    present, baseline = run_dirs
    return ComparatorConfig(baseline_dir=baseline, present_dir=present, **kw)


# -----------------------------------------------------------------------
# Scenarios
# -----------------------------------------------------------------------


def test_small_difference_passes(run_dirs, write_pair) -> None:
    write_pair("hyperdrive_band01.bin", [1.0, 2.0, 3.0, 4.0], [1.0, 2.0, 3.0005, 4.0])
    rep = run_comparison(_cfg(run_dirs))
    assert rep.passed
    assert rep.max_abs_diff == pytest.approx(0.0005, rel=1e-3)
    assert [d.name for d in rep.diffs] == ["hyperdrive_band01.bin"]


def test_large_difference_fails(run_dirs, write_pair) -> None:
    write_pair("hyperdrive_band01.bin", [1.0, 2.0, 3.0, 4.0], [1.0, 2.0, 3.01, 4.0])
    rep = run_comparison(_cfg(run_dirs))
    assert not rep.passed
    assert rep.max_abs_diff == pytest.approx(0.01, rel=1e-4)


def test_equal_to_tolerance_passes(run_dirs, write_pair) -> None:
    write_pair("hyperdrive_band01.bin", [1.0, 2.0], [1.5, 2.0])
    assert run_comparison(_cfg(run_dirs, tolerance=0.5)).passed
    assert not run_comparison(_cfg(run_dirs, tolerance=0.25)).passed


def test_overall_max_over_files(run_dirs, write_pair) -> None:
    write_pair("hyperdrive_band01.bin", [0.0, 0.0], [0.0, 0.125])
    write_pair("hyperdrive_band02.bin", [0.0, 0.0], [0.5, 0.0])
    write_pair("hyperdrive_band03.bin", [1.0], [1.0])
    rep = run_comparison(_cfg(run_dirs, tolerance=1.0))
    assert rep.max_abs_diff == pytest.approx(0.5)
    assert rep.accumulator.n_compared == 3
    assert [d.max_abs_diff for d in rep.diffs] == pytest.approx([0.125, 0.5, 0.0])


def test_progress_lines(run_dirs, write_pair) -> None:
    write_pair("hyperdrive_band01.bin", [1.0], [1.25])
    lines = []
    run_comparison(_cfg(run_dirs), echo=lines.append)
    assert lines[0] == "Checking 'hyperdrive_band01.bin' ..."
    assert lines[1].startswith("Biggest difference for 'hyperdrive_band01.bin': 0.25")


# -----------------------------------------------------------------------
# Fail policy
# -----------------------------------------------------------------------


def test_missing_baseline_dir_always_fatal(tmp_path) -> None:
    for policy in ("fail", "warn_and_skip"):
        cfg = ComparatorConfig(baseline_dir=tmp_path / "nope", present_dir=tmp_path, on_anomaly=policy)
        with pytest.raises(MissingBaselineError, match="nope"):
            run_comparison(cfg)


def test_no_present_files_fails(run_dirs) -> None:
    with pytest.raises(DiscoveryError, match="hyperdrive_band"):
        run_comparison(_cfg(run_dirs))


def test_missing_counterpart_fails_before_reading(run_dirs, write_pair) -> None:
    present, _ = run_dirs
    # A malformed file that sorts first would raise BandFormatError if read.
    write_pair("hyperdrive_band01.bin", [1.0], [1.0])
    (present / "hyperdrive_band01.bin").write_bytes(b"\x00" * 5)
    write_band_f32(present / "hyperdrive_band02.bin", [1.0])
    with pytest.raises(DiscoveryError, match="hyperdrive_band02.bin"):
        run_comparison(_cfg(run_dirs))


def test_bad_byte_count_fails(run_dirs, write_pair) -> None:
    present, _ = run_dirs
    write_pair("hyperdrive_band01.bin", [1.0], [1.0])
    (present / "hyperdrive_band01.bin").write_bytes(b"\x00" * 5)
    with pytest.raises(BandFormatError, match="invalid number of bytes"):
        run_comparison(_cfg(run_dirs))


def test_empty_file_fails(run_dirs, write_pair) -> None:
    write_pair("hyperdrive_band01.bin", [], [1.0])
    with pytest.raises(ContentError, match="didn't contain any data"):
        run_comparison(_cfg(run_dirs))


def test_length_mismatch_fails(run_dirs, write_pair) -> None:
    write_pair("hyperdrive_band01.bin", [1.0, 2.0], [1.0])
    with pytest.raises(ContentError, match="different amounts of data"):
        run_comparison(_cfg(run_dirs))


def test_invalid_policy_rejected(run_dirs) -> None:
    with pytest.raises(ValueError):
        run_comparison(_cfg(run_dirs, on_anomaly="ignore"))


# -----------------------------------------------------------------------
# Warn-and-skip policy
# -----------------------------------------------------------------------


def test_lenient_no_files_passes_with_zero(run_dirs) -> None:
    rep = run_comparison(_cfg(run_dirs, on_anomaly="warn_and_skip"))
    assert rep.passed
    assert rep.max_abs_diff == 0.0
    assert len(rep.warnings) == 1


def test_lenient_skips_anomalies_and_continues(run_dirs, write_pair) -> None:
    present, _ = run_dirs
    write_pair("hyperdrive_band01.bin", [1.0, 2.0], [1.0])         # length mismatch
    write_pair("hyperdrive_band02.bin", [], [])                     # empty
    write_pair("hyperdrive_band03.bin", [1.0], [1.0])
    (present / "hyperdrive_band03.bin").write_bytes(b"\x00" * 5)    # bad byte count
    write_band_f32(present / "hyperdrive_band04.bin", [1.0])        # no counterpart
    write_pair("hyperdrive_band05.bin", [1.0, 2.0], [1.0, 2.0625])

    lines = []
    rep = run_comparison(_cfg(run_dirs, on_anomaly="warn_and_skip"), echo=lines.append)
    assert [d.name for d in rep.diffs] == ["hyperdrive_band05.bin"]
    assert sorted(s.name for s in rep.skipped) == [
        "hyperdrive_band01.bin",
        "hyperdrive_band02.bin",
        "hyperdrive_band03.bin",
        "hyperdrive_band04.bin",
    ]
    assert rep.max_abs_diff == pytest.approx(0.0625)
    assert len(rep.warnings) == 4
    assert sum(1 for line in lines if line.startswith("[warn]")) == 4


def test_compare_pair_is_pure(run_dirs, write_pair) -> None:
    present, baseline = run_dirs
    write_pair("hyperdrive_band01.bin", [1.0, 2.0], [1.0, 2.5])
    pair = BandPair("hyperdrive_band01.bin", present / "hyperdrive_band01.bin", baseline / "hyperdrive_band01.bin")
    acc0 = DiffAccumulator()
    acc1, diff, skip = compare_pair(pair, acc0)
    assert acc0.max_abs_diff is None
    assert skip is None
    assert diff.worst_index == 1
    assert acc1.max_abs_diff == pytest.approx(0.5)
    # same input, same output
    acc2, diff2, _ = compare_pair(pair, acc0)
    assert acc2 == acc1 and diff2 == diff


def test_compare_pair_skip_keeps_accumulator(run_dirs, write_pair) -> None:
    present, baseline = run_dirs
    write_pair("hyperdrive_band01.bin", [1.0, 2.0], [1.0])
    pair = BandPair("hyperdrive_band01.bin", present / "hyperdrive_band01.bin", baseline / "hyperdrive_band01.bin")
    acc = DiffAccumulator().update(
        BandDiff(name="x", n_values=1, max_abs_diff=0.3, worst_index=0, present_value=0.0, baseline_value=0.3)
    )
    acc2, diff, skip = compare_pair(pair, acc, "warn_and_skip")
    assert acc2 is acc
    assert diff is None
    assert "different amounts of data" in skip.reason


def test_nan_difference_warns(run_dirs, write_pair) -> None:
    write_pair("hyperdrive_band01.bin", [np.nan, 1.0], [0.0, 1.0])
    rep = run_comparison(_cfg(run_dirs))
    assert rep.passed
    assert rep.diffs[0].n_nonfinite == 1
    assert any("NaN" in w for w in rep.warnings)
