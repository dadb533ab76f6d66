from .bands import BandPair
from .results import BandDiff, DiffAccumulator, DiffReport, SkippedBand

__all__ = [
    "BandPair",
    "BandDiff",
    "DiffAccumulator",
    "DiffReport",
    "SkippedBand",
]
