"""Batch comparator — compares every image shared by two directories."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from shotdiff.models.config import CompareConfig, DiffImagesConfig, validate_config
from shotdiff.models.results import BatchResult, DiffOutcome
from shotdiff.utils.files import diff_artifact_names

from .matcher import compare_image_directories
from .pixel import PixelDiffer, PixelmatchDiffer
from .single import diff_images

logger = logging.getLogger(__name__)


def _partition(outcomes: list[DiffOutcome]) -> tuple[list[DiffOutcome], list[DiffOutcome]]:
    passed: list[DiffOutcome] = []
    failed: list[DiffOutcome] = []
    for outcome in outcomes:
        outcome = outcome.model_copy(
            update={"diff_percentage": outcome.compute_diff_percentage()}
        )
        if outcome.images_are_same:
            passed.append(outcome.model_copy(
                update={"diff_dir": None, "diff_image_name": None}
            ))
        else:
            failed.append(outcome)
    return passed, failed


async def compare_images(
    config: CompareConfig | dict[str, Any],
    differ: Optional[PixelDiffer] = None,
) -> BatchResult:
    """Compare images from a baseline and a new directory.

    Images present in both directories are diffed concurrently. A single
    failing comparison fails the whole batch; the others are cancelled and
    awaited before the error is raised. Diff artifacts go to
    ``dir_diff``, or a ``diff`` folder inside ``dir_new`` when unset.
    """
    config = validate_config(CompareConfig, config)
    differ = differ or PixelmatchDiffer()

    files = await compare_image_directories(config.dir_baseline, config.dir_new)
    if not files.compare:
        logger.info("No screenshots to compare (%d missing, %d outdated)",
                    len(files.missing), len(files.outdated))
        return BatchResult(missing=files.missing, outdated=files.outdated)

    diff_dir = str(config.resolved_diff_dir())
    logger.info("Started to compare %d screenshots", len(files.compare))

    artifact_names = diff_artifact_names(files.compare)
    tasks = [
        asyncio.ensure_future(diff_images(
            DiffImagesConfig(
                dir_baseline=config.dir_baseline,
                dir_new=config.dir_new,
                dir_diff=diff_dir,
                image_name=name,
                diff_image_name=artifact_names[name],
            ),
            differ=differ,
        ))
        for name in files.compare
    ]
    try:
        outcomes = await asyncio.gather(*tasks)
    except BaseException:
        # Stop the remaining comparisons and let them clean up before raising
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    passed, failed = _partition(list(outcomes))
    logger.info("Comparison complete: %d passed, %d failed, %d missing, %d outdated",
                len(passed), len(failed), len(files.missing), len(files.outdated))
    return BatchResult(
        passed=passed,
        failed=failed,
        missing=files.missing,
        outdated=files.outdated,
    )
