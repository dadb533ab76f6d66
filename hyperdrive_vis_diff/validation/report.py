"""Export of comparison results.

The per-file table is written as tab-separated text; run-level information
(tolerance, policy, verdict, skipped files, warnings) goes to a JSON sidecar
next to it.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from hyperdrive_vis_diff.models.results import DiffReport


def report_metadata(report: DiffReport) -> Dict[str, Any]:
    """Run-level summary of a :class:`DiffReport` as plain JSON types."""
    return {
        "generated": datetime.now(timezone.utc).isoformat(),
        "tolerance": report.tolerance,
        "on_anomaly": report.on_anomaly,
        "max_abs_diff": report.max_abs_diff,
        "passed": report.passed,
        "n_compared": report.accumulator.n_compared,
        "skipped": [{"name": s.name, "reason": s.reason} for s in report.skipped],
        "warnings": list(report.warnings),
    }


def sidecar_path(output_path: Path) -> Path:
    """JSON sidecar path for a report table: 'diff.tsv' -> 'diff.meta.json'.

    Never equal to ``output_path``, even when the table itself ends in ``.json``.
    """
    output_path = Path(output_path)
    return output_path.with_name(output_path.stem + ".meta.json")


def export_report(
    report: DiffReport,
    output_path: Path,
    *,
    write_sidecar_json: bool = True,
) -> Path:
    """Export the per-file results table with an optional metadata sidecar.

    Parameters
    ----------
    report : DiffReport
        Result of a comparison run
    output_path : Path
        Output file path for the tab-separated table
    write_sidecar_json : bool
        If True, also write the metadata to :func:`sidecar_path`

    Returns
    -------
    Path
        Path to the written table
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    report.to_frame().to_csv(output_path, sep="\t", index=False)

    if write_sidecar_json:
        json_path = sidecar_path(output_path)
        with open(json_path, "w") as f:
            json.dump(report_metadata(report), f, indent=2, default=str)

    return output_path
