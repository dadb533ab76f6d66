from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class BandPair:
    """
    One band file and its baseline counterpart, matched by file name.

    Notes
    - name is the bare file name (e.g. 'hyperdrive_band01.bin'), identical on both sides.
    - paths are not resolved; they are whatever the discovery step was given.
    """
    name: str
    present_path: Path
    baseline_path: Path
