"""Single-image comparator — diffs one baseline/new pair and keeps the artifact on failure."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Optional

from shotdiff.errors import ExternalToolFailure, ShotdiffError
from shotdiff.models.config import ComposeConfig, DiffImagesConfig, validate_config
from shotdiff.models.results import DiffOutcome, PixelDiffResult
from shotdiff.utils.files import temp_file_name, wait_for_file

from .composer import create_diff_image
from .pixel import DEFAULT_THRESHOLD, PixelDiffer, PixelmatchDiffer

logger = logging.getLogger(__name__)


async def _run_differ(
    differ: PixelDiffer, path_baseline: str, path_new: str, path_temp: str
) -> PixelDiffResult:
    try:
        return await asyncio.to_thread(
            differ.diff,
            path_baseline,
            path_new,
            path_temp,
            threshold=DEFAULT_THRESHOLD,
            include_aa=False,
        )
    except ShotdiffError:
        raise
    except Exception as e:
        raise ExternalToolFailure("pixel differ", e) from e


async def diff_images(
    config: DiffImagesConfig | dict[str, Any],
    differ: Optional[PixelDiffer] = None,
) -> DiffOutcome:
    """Compare ``image_name`` from the baseline and new directories.

    The differ writes its raw bitmap to a temporary file next to the
    artifact. The temp file never outlives the call: it is removed on
    success, on failure and on cancellation, after the differ has finished.
    Only the composed ``diff_image_name`` is kept, and only when the images
    differ.
    """
    config = validate_config(DiffImagesConfig, config)
    differ = differ or PixelmatchDiffer()

    dir_diff = Path(config.dir_diff)
    path_baseline = os.path.normpath(os.path.join(config.dir_baseline, config.image_name))
    path_new = os.path.normpath(os.path.join(config.dir_new, config.image_name))
    path_temp = os.path.normpath(dir_diff / temp_file_name(config.image_name))
    path_dist = os.path.normpath(dir_diff / config.diff_image_name)

    await asyncio.to_thread(dir_diff.mkdir, parents=True, exist_ok=True)

    logger.debug("Comparing %s", config.image_name)
    # The worker thread cannot be interrupted, so a cancelled comparison
    # still waits for it before removing what it wrote.
    worker = asyncio.ensure_future(_run_differ(differ, path_baseline, path_new, path_temp))
    try:
        result = await asyncio.shield(worker)

        # The differ writes its bitmap even for identical images
        await wait_for_file(path_temp, timeout=config.timeout, interval=config.interval)

        outcome = DiffOutcome(
            tested_image=config.image_name,
            baseline_path=path_baseline,
            new_path=path_new,
            width=result.width,
            height=result.height,
            images_are_same=result.images_are_same,
            diff_count=result.diff_count,
            diff_dir=os.path.normpath(config.dir_diff),
            diff_image_name=config.diff_image_name,
        )
        if result.images_are_same:
            return outcome

        await create_diff_image(
            ComposeConfig(
                path_baseline=path_baseline,
                path_new=path_new,
                path_diff=path_temp,
                path_dist=path_dist,
            ),
            timeout=config.timeout,
            interval=config.interval,
        )
        logger.debug("%s differs in %d pixels, saved %s",
                     config.image_name, result.diff_count, path_dist)
        return outcome.model_copy(update={"diff_image_path": path_dist})
    finally:
        if not worker.done():
            await asyncio.wait([worker])
        await asyncio.to_thread(Path(path_temp).unlink, missing_ok=True)
