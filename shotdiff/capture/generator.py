"""Screenshot generator — runs capture jobs serially or in parallel."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from shotdiff.errors import CaptureFailed
from shotdiff.models.config import CaptureConfig, GenerateConfig, validate_config
from shotdiff.models.results import CaptureResult

from .capability import CapabilityStrategy, Mode, ModeStrategy
from .screenshot import capture as capture_screenshot

logger = logging.getLogger(__name__)

CaptureFn = Callable[[CaptureConfig], Awaitable[CaptureResult]]


async def _generate_in_series(jobs: list[CaptureConfig], capture: CaptureFn) -> list[CaptureResult]:
    results: list[CaptureResult] = []
    errors: list[Exception] = []
    for job in jobs:
        try:
            results.append(await capture(job))
        except Exception as e:
            logger.warning("Screenshot %s failed: %s", job.name, e)
            errors.append(e)
    if errors:
        raise CaptureFailed(errors, results)
    return results


async def _generate_in_parallel(jobs: list[CaptureConfig], capture: CaptureFn) -> list[CaptureResult]:
    try:
        return list(await asyncio.gather(*(capture(job) for job in jobs)))
    except Exception as e:
        raise CaptureFailed([e]) from e


def select_mode(serial: Optional[bool], strategy: ModeStrategy) -> Mode:
    if serial is not None:
        return "serial" if serial else "parallel"
    return strategy.choose()


async def generate_images(
    config: GenerateConfig | dict[str, Any],
    capture: Optional[CaptureFn] = None,
    strategy: Optional[ModeStrategy] = None,
) -> list[CaptureResult]:
    """Generate every configured screenshot.

    Serial mode suits low-end machines and keeps going after a failed job;
    parallel mode launches all jobs at once and stops at the first failure.
    Without an explicit ``serial`` flag the mode comes from ``strategy``.

    Raises:
        InvalidConfiguration: no jobs were configured.
        CaptureFailed: at least one job failed.
    """
    config = validate_config(GenerateConfig, config)
    capture = capture or capture_screenshot

    jobs = config.images_config
    if config.path is not None:
        jobs = [job.model_copy(update={"path": config.path}) for job in jobs]

    mode = select_mode(config.serial, strategy or CapabilityStrategy())
    logger.info("Started to generate %d screenshots in %s mode", len(jobs), mode)

    if mode == "serial":
        return await _generate_in_series(jobs, capture)
    return await _generate_in_parallel(jobs, capture)
