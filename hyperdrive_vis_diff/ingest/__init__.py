"""Ingest package - band file discovery and reading.

This package handles:
- Discovery of hyperdrive_band??.bin files in a directory
- Pairing present band files with their baseline counterparts by name
- Reading raw little-endian float32 band files (*.bin)

Design principle:
- Discovery never reads file contents and never decides policy
- The reader refuses files whose size is not a whole number of float32 values
"""

from .discovery import BAND_PATTERN, PairingResult, glob_band_files, pair_band_files
from .readers_band import read_band_f32, write_band_f32

__all__ = [
    "BAND_PATTERN",
    "PairingResult",
    "glob_band_files",
    "pair_band_files",
    "read_band_f32",
    "write_band_f32",
]
