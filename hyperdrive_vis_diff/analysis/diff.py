"""Elementwise difference kernels for band sample buffers."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from hyperdrive_vis_diff.models.results import BandDiff


def abs_diff(present: np.ndarray, baseline: np.ndarray) -> np.ndarray:
    """Return ``|present - baseline|`` computed in float32.

    Parameters
    ----------
    present, baseline : array_like
        1-D sample buffers of equal length.

    Returns
    -------
    np.ndarray
        float32 array of absolute differences (NaN where either side is NaN
        or where both sides hold the same infinity).
    """
    p = np.asarray(present, dtype=np.float32).ravel()
    b = np.asarray(baseline, dtype=np.float32).ravel()
    if p.shape != b.shape:
        raise ValueError(f"length mismatch: {p.size} present values vs {b.size} baseline values")
    # inf - inf gives NaN; those entries are counted by the callers.
    with np.errstate(invalid="ignore"):
        return np.abs(p - b)


def _worst(d: np.ndarray) -> Tuple[int, float]:
    """Index and value of the largest non-NaN difference in a non-empty array.

    An all-NaN array gives ``(0, 0.0)``.
    """
    nan_mask = np.isnan(d)
    ranked = np.where(nan_mask, np.float32(-1.0), d)
    worst = int(np.argmax(ranked))
    if nan_mask[worst]:
        return worst, 0.0
    return worst, float(ranked[worst])


def max_abs_diff(present: np.ndarray, baseline: np.ndarray) -> float:
    """Largest absolute elementwise difference; 0.0 for identical or empty input.

    NaN differences never win the maximum.
    """
    d = abs_diff(present, baseline)
    if d.size == 0:
        return 0.0
    return _worst(d)[1]


def diff_band(name: str, present: np.ndarray, baseline: np.ndarray) -> BandDiff:
    """Build the per-file :class:`BandDiff` for one pair of sample buffers.

    Both buffers must be non-empty and of equal length.
    """
    d = abs_diff(present, baseline)
    if d.size == 0:
        raise ValueError(f"{name}: nothing to compare (empty buffers)")

    worst, max_d = _worst(d)
    p = np.asarray(present, dtype=np.float32).ravel()
    b = np.asarray(baseline, dtype=np.float32).ravel()
    return BandDiff(
        name=name,
        n_values=int(d.size),
        max_abs_diff=max_d,
        worst_index=worst,
        present_value=float(p[worst]),
        baseline_value=float(b[worst]),
        n_nonfinite=int(np.count_nonzero(np.isnan(d))),
    )
