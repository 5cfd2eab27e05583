"""Pipeline orchestrator — runs capture and comparison from a project config."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Optional

from shotdiff.capture.generator import generate_images
from shotdiff.differ.batch import compare_images
from shotdiff.models.config import ShotdiffConfig
from shotdiff.models.results import BatchResult, CaptureResult
from shotdiff.reporter.json_report import generate_json_report

logger = logging.getLogger(__name__)


class Orchestrator:
    """Synchronous entry points around the async pipelines."""

    def __init__(self, config: ShotdiffConfig):
        self.config = config

    def run_generate(self) -> list[CaptureResult]:
        """Capture every screenshot listed in the config."""
        start = time.time()
        results = asyncio.run(generate_images(self.config.generate_config()))
        logger.info("Generated %d screenshots in %.1fs", len(results), time.time() - start)
        return results

    def run_compare(self, report_output: Optional[str] = None) -> BatchResult:
        """Compare baseline and new directories, writing a JSON report if configured."""
        start = time.time()
        result = asyncio.run(compare_images(self.config.compare_config()))
        logger.info("Compared %d screenshots in %.1fs", result.total, time.time() - start)

        output = report_output or self.config.report_output
        if output:
            generate_json_report(result, Path(output))
            logger.info("JSON report written to %s", output)
        return result
