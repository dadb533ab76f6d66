"""Analysis package - difference kernels.

Design principle:
  - Kernels are pure functions of two sample buffers.
  - Arithmetic stays in float32, the precision of the band files.
"""

from .diff import abs_diff, diff_band, max_abs_diff

__all__ = [
    "abs_diff",
    "diff_band",
    "max_abs_diff",
]
