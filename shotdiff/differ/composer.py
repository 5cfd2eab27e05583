"""Diff composer — joins baseline, diff and new images into one artifact."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from PIL import Image

from shotdiff.errors import CannotCreateDiffImage, DiffArtifactTimeout, MissingSourceFile
from shotdiff.models.config import ComposeConfig, validate_config
from shotdiff.utils.files import wait_for_file

logger = logging.getLogger(__name__)

OFFSET = 10  # space between images
MARGIN = 10  # space around the composition


def join_images(paths: list[str], offset: int = OFFSET, margin: int = MARGIN) -> Image.Image:
    """Join images horizontally, left to right in the given order.

    Images are never resized: shorter ones are top-aligned and the rest of
    their column stays transparent.
    """
    images = []
    for path in paths:
        with Image.open(path) as src:
            images.append(src.convert("RGBA"))

    width = sum(img.width for img in images) + offset * (len(images) - 1) + margin * 2
    height = max(img.height for img in images) + margin * 2
    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    x = margin
    for img in images:
        canvas.paste(img, (x, margin))
        x += img.width + offset
    return canvas


def _compose(config: ComposeConfig) -> None:
    canvas = join_images([config.path_baseline, config.path_diff, config.path_new])
    canvas.save(config.path_dist)


async def _require(path: str, timeout: float, interval: float) -> None:
    try:
        await wait_for_file(path, timeout=timeout, interval=interval)
    except DiffArtifactTimeout as e:
        raise MissingSourceFile(path) from e


async def create_diff_image(
    config: ComposeConfig | dict[str, Any],
    timeout: float = 10.0,
    interval: float = 0.05,
) -> str:
    """Create the baseline | diff | new image and return where it was saved.

    Raises:
        InvalidConfiguration: a path is missing from ``config``.
        CannotCreateDiffImage: a source file never appeared, or Pillow could
            not compose or write the result.
    """
    config = validate_config(ComposeConfig, config)

    try:
        await asyncio.gather(
            _require(config.path_baseline, timeout, interval),
            _require(config.path_new, timeout, interval),
            _require(config.path_diff, timeout, interval),
        )
    except MissingSourceFile as e:
        raise CannotCreateDiffImage(e) from e

    try:
        await asyncio.to_thread(_compose, config)
    except (OSError, ValueError) as e:
        raise CannotCreateDiffImage(e) from e

    logger.debug("Diff image %s has been created", config.path_dist)
    return config.path_dist
