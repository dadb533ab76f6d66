from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

import numpy as np

from hyperdrive_vis_diff.errors import BandFormatError


# Band files are always little-endian float32, whatever the host byte order.
BAND_DTYPE = np.dtype("<f4")


def read_band_f32(path: Union[str, Path]) -> np.ndarray:
    """
    STRICT reader for hyperdrive band files (*.bin).

    Contract:
      - No header, no length prefix: the value count is size / 4.
      - The byte count MUST be a multiple of 4, otherwise BandFormatError.
      - Values are returned as native-order float32, unmodified.
    """
    fp = Path(path)
    raw = fp.read_bytes()
    if len(raw) % BAND_DTYPE.itemsize != 0:
        raise BandFormatError(
            f"An invalid number of bytes were read from '{fp}' ({len(raw)} bytes). "
            "Does this file really contain floats?"
        )
    return np.frombuffer(raw, dtype=BAND_DTYPE).astype(np.float32)


def write_band_f32(path: Union[str, Path], values: Union[Sequence[float], np.ndarray]) -> Path:
    """Write values as a raw little-endian float32 band file."""
    fp = Path(path)
    arr = np.asarray(values, dtype=np.float32)
    fp.write_bytes(arr.astype(BAND_DTYPE, copy=False).tobytes())
    return fp
