"""Pixel differ — wraps the pixelmatch perceptual comparison."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from PIL import Image
from pixelmatch.contrib.PIL import pixelmatch

from shotdiff.models.results import PixelDiffResult

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.1

_JPEG_SUFFIXES = {".jpg", ".jpeg"}


class PixelDiffer(Protocol):
    """Compares two images and writes a raw diff bitmap to ``diff_path``."""

    def diff(
        self,
        actual_path: str,
        expected_path: str,
        diff_path: str,
        threshold: float = DEFAULT_THRESHOLD,
        include_aa: bool = False,
    ) -> PixelDiffResult: ...


def _expand(image: Image.Image, width: int, height: int) -> Image.Image:
    """Place ``image`` on a transparent canvas of the given size."""
    if image.size == (width, height):
        return image
    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    canvas.paste(image, (0, 0))
    return canvas


class PixelmatchDiffer:
    """PixelDiffer backed by the ``pixelmatch`` package.

    Images of different sizes are both expanded to the larger width and
    height before comparing; the added area is transparent.
    """

    def diff(
        self,
        actual_path: str,
        expected_path: str,
        diff_path: str,
        threshold: float = DEFAULT_THRESHOLD,
        include_aa: bool = False,
    ) -> PixelDiffResult:
        with Image.open(actual_path) as actual_src, Image.open(expected_path) as expected_src:
            actual = actual_src.convert("RGBA")
            expected = expected_src.convert("RGBA")

        width = max(actual.width, expected.width)
        height = max(actual.height, expected.height)
        actual = _expand(actual, width, height)
        expected = _expand(expected, width, height)

        output = Image.new("RGBA", (width, height))
        diff_count = pixelmatch(
            actual, expected, output,
            threshold=threshold, includeAA=include_aa,
        )

        if Path(diff_path).suffix.lower() in _JPEG_SUFFIXES:
            output = output.convert("RGB")
        output.save(diff_path)
        logger.debug("pixelmatch %s: %d differing pixels", Path(actual_path).name, diff_count)

        return PixelDiffResult(
            images_are_same=diff_count == 0,
            width=width,
            height=height,
            diff_count=diff_count,
        )
