"""Directory set matcher — pairs baseline and new images by file name."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from shotdiff.errors import MissingParameter
from shotdiff.models.results import MatchResult

from .listing import get_image_names

logger = logging.getLogger(__name__)


def match_image_sets(files_baseline: list[str], files_new: list[str]) -> MatchResult:
    """Split two listings into compare / missing / outdated names.

    Names match on exact string equality, so ``a.jpg`` and ``a.png`` are
    different files.
    """
    baseline = set(files_baseline)
    new = set(files_new)
    return MatchResult(
        compare=[name for name in files_new if name in baseline],
        missing=[name for name in files_new if name not in baseline],
        outdated=[name for name in files_baseline if name not in new],
    )


async def compare_image_directories(
    dir_baseline: Optional[str], dir_new: Optional[str]
) -> MatchResult:
    """List both directories and classify their images."""
    if not dir_baseline:
        raise MissingParameter("dir_baseline")
    if not dir_new:
        raise MissingParameter("dir_new")

    files_baseline, files_new = await asyncio.gather(
        get_image_names(dir_baseline),
        get_image_names(dir_new),
    )
    result = match_image_sets(files_baseline, files_new)
    logger.debug(
        "Matched %s vs %s: %d to compare, %d missing, %d outdated",
        dir_baseline, dir_new,
        len(result.compare), len(result.missing), len(result.outdated),
    )
    return result
