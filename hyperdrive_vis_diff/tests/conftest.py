from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from hyperdrive_vis_diff.ingest.readers_band import write_band_f32


@pytest.fixture()
def run_dirs(tmp_path: Path):
    """A present directory with an empty ``baseline`` subdirectory."""
    baseline = tmp_path / "baseline"
    baseline.mkdir()
    return tmp_path, baseline


@pytest.fixture()
def write_pair(run_dirs):
    """Write a same-named band file into the present and baseline directories."""
    present, baseline = run_dirs

    def _write(name: str, p: Sequence[float], b: Sequence[float]) -> None:
        write_band_f32(present / name, p)
        write_band_f32(baseline / name, b)

    return _write
