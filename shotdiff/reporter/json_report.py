"""JSON report output."""

from __future__ import annotations

import json
from pathlib import Path

from shotdiff.models.results import BatchResult


def generate_json_report(batch_result: BatchResult, output_path: Path) -> None:
    """Write a machine-readable JSON report."""
    report = batch_result.model_dump(exclude={
        "passed": {"__all__": {"diff_dir", "diff_image_name"}},
    })
    report["summary"] = {
        "total": batch_result.total,
        "passed": len(batch_result.passed),
        "failed": len(batch_result.failed),
        "missing": len(batch_result.missing),
        "outdated": len(batch_result.outdated),
    }

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
