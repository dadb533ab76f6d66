from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from hyperdrive_vis_diff.models.bands import BandPair


# 'hyperdrive_band' + exactly two characters (conventionally digits) + '.bin'
BAND_PATTERN = "hyperdrive_band??.bin"


def glob_band_files(directory: Union[str, Path], pattern: str = BAND_PATTERN) -> List[str]:
    """
    Return the names of regular files in ``directory`` matching ``pattern``.

    The directory component is stripped so that names from two directories can
    be compared directly. Names are sorted to make runs reproducible.
    """
    d = Path(directory)
    return sorted(p.name for p in d.glob(pattern) if p.is_file())


@dataclass(frozen=True)
class PairingResult:
    """
    Output of matching present band files against a baseline directory.

    present_names: every band file found in the present directory (sorted)
    pairs: present files that have a same-named baseline file
    missing: present files with no baseline counterpart
    """
    present_dir: Path
    baseline_dir: Path
    present_names: Tuple[str, ...]
    pairs: Tuple[BandPair, ...]
    missing: Tuple[str, ...]


def pair_band_files(
    present_dir: Union[str, Path],
    baseline_dir: Union[str, Path],
    pattern: str = BAND_PATTERN,
) -> PairingResult:
    """Match present band files with baseline band files by exact file name.

    Baseline files without a present counterpart are ignored; only the
    present side decides what has to be checked.
    """
    present = Path(present_dir)
    baseline = Path(baseline_dir)

    present_names = glob_band_files(present, pattern)
    baseline_names = set(glob_band_files(baseline, pattern))

    pairs: List[BandPair] = []
    missing: List[str] = []
    for name in present_names:
        if name in baseline_names:
            pairs.append(BandPair(name=name, present_path=present / name, baseline_path=baseline / name))
        else:
            missing.append(name)

    return PairingResult(
        present_dir=present,
        baseline_dir=baseline,
        present_names=tuple(present_names),
        pairs=tuple(pairs),
        missing=tuple(missing),
    )
