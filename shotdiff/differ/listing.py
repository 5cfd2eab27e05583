"""Directory lister — finds image files in a directory."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from typing import Optional

from shotdiff.errors import DirectoryNotFound, DirectoryReadError

logger = logging.getLogger(__name__)

_DEFAULT_IMAGE_RE = re.compile(r"\.(jpg|jpeg|png)$", re.IGNORECASE)


def _extension_pattern(extension: Optional[str]) -> re.Pattern:
    if extension is None:
        return _DEFAULT_IMAGE_RE
    ext = extension if extension.startswith(".") else f".{extension}"
    return re.compile(re.escape(ext) + "$", re.IGNORECASE)


def _read_dir(directory: str) -> list[str]:
    if not os.access(directory, os.R_OK):
        raise DirectoryNotFound(directory)
    try:
        with os.scandir(directory) as entries:
            return sorted(entry.name for entry in entries if entry.is_file())
    except OSError as e:
        raise DirectoryReadError(directory, e) from e


async def get_image_names(directory: str, extension: Optional[str] = None) -> list[str]:
    """Return the image file names found in ``directory``.

    By default only ``.jpg``, ``.jpeg`` and ``.png`` files are returned
    (case-insensitive). Pass ``extension`` (e.g. ``".png"``) to list a single
    extension instead.

    Raises:
        DirectoryNotFound: the directory does not exist or is not readable.
        DirectoryReadError: any other failure while reading it.
    """
    files = await asyncio.to_thread(_read_dir, directory)
    pattern = _extension_pattern(extension)
    images = [name for name in files if pattern.search(name)]
    logger.debug("Found %d image(s) in %s", len(images), directory)
    return images
