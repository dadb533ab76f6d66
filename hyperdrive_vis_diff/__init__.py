"""hyperdrive-vis-diff -- regression check for simulated visibility band files.

A simulate-vis run writes one ``hyperdrive_bandXX.bin`` file per frequency
band. Each file is a flat, headerless array of little-endian float32 values.
This package compares such files against a directory of previously accepted
("baseline") outputs and decides whether the run regressed.

This package provides tools for:
- Discovering band files and pairing them with their baseline counterparts
- Decoding raw float32 band files with strict byte-count validation
- Computing per-file and overall maximum absolute differences
- Reporting results on the console, as a TSV table and as a JSON sidecar

Key principles:
- One policy switch: anomalies either fail the run or are skipped with a warning
- Pure comparison kernels: no shared mutable state, the running maximum is threaded
- Deterministic runs: files are processed in sorted name order

Main subpackages:
- analysis: Difference kernels
- ingest: Band file discovery and reading
- models: Result data models (BandPair, BandDiff, DiffAccumulator, DiffReport)
- validation: Comparator, report export and the command line entry point
"""

__all__ = []
