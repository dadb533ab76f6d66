"""Command line entry point: compare hyperdrive band files against a baseline.

Compares each hyperdrive_band??.bin file in the working directory against the
same-named file in the baseline directory, and reports whether the largest
difference between any two floats is larger than a tolerance.
"""

from __future__ import annotations

import argparse
import sys
import textwrap
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from hyperdrive_vis_diff.errors import ComparisonError
from hyperdrive_vis_diff.ingest.discovery import BAND_PATTERN
from hyperdrive_vis_diff.validation.comparator import (
    DEFAULT_BASELINE_DIR,
    DEFAULT_TOLERANCE,
    ComparatorConfig,
    run_comparison,
)
from hyperdrive_vis_diff.validation.report import export_report


EXIT_OK = 0
EXIT_TOLERANCE_EXCEEDED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hyperdrive-vis-gen-diff",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Compare hyperdrive simulate-vis band files against a baseline directory.

            Every hyperdrive_band??.bin file in the present directory must have a
            same-named file in BASELINE_DIR. The run fails if the largest absolute
            difference between any two floats exceeds the tolerance.

            Exit codes: 0 within tolerance, 1 tolerance exceeded, 2 error.
            """
        ),
    )
    p.add_argument(
        "baseline_dir",
        metavar="BASELINE_DIR",
        nargs="?",
        default=str(DEFAULT_BASELINE_DIR),
        help="Directory containing hyperdrive simulate-vis outputs to compare against (default: ./baseline)",
    )
    p.add_argument(
        "-t",
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help="Fail if the maximum difference is bigger than this number (default: 0.001)",
    )
    p.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print anything; success or failure is given only by the exit code",
    )
    p.add_argument(
        "--lenient",
        action="store_true",
        help="Warn about and skip malformed or unmatched files instead of failing",
    )
    p.add_argument("--present-dir", default=".", help="Directory holding the band files under test (default: .)")
    p.add_argument("--pattern", default=BAND_PATTERN, help=f"Band file glob (default: {BAND_PATTERN})")
    p.add_argument("--report", default=None, help="Write the per-file table (TSV) and a JSON sidecar to this path")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    ns = build_parser().parse_args(list(argv) if argv is not None else None)

    def echo(msg: str) -> None:
        if not ns.quiet:
            print(msg)

    cfg = ComparatorConfig(
        baseline_dir=Path(ns.baseline_dir),
        present_dir=Path(ns.present_dir),
        pattern=ns.pattern,
        tolerance=float(ns.tolerance),
        on_anomaly="warn_and_skip" if ns.lenient else "fail",
    )

    try:
        report = run_comparison(cfg, echo=echo)
        if ns.report:
            out = export_report(report, Path(ns.report))
            echo(f"[info] wrote report: {out}")
    except (ComparisonError, OSError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return EXIT_ERROR

    # float32 is the precision of the band data
    echo(f"Maximum difference: {np.float32(report.max_abs_diff)}")
    if not report.passed:
        echo(f"Difference is too large; exiting with code {EXIT_TOLERANCE_EXCEEDED}.")
        return EXIT_TOLERANCE_EXCEEDED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
