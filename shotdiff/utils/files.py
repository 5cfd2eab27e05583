"""File name helpers and the bounded wait for externally written files."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from collections import Counter
from pathlib import Path

from shotdiff.errors import DiffArtifactTimeout, InvalidConfiguration

logger = logging.getLogger(__name__)

_PNG_RE = re.compile(r"\.png$", re.IGNORECASE)


def temp_file_name(name: str) -> str:
    """Insert a ``temp`` part before the final extension.

    ``screenshot2.jpg`` becomes ``screenshot2.temp.jpg``.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot:
        return f"{name}.temp"
    return f"{stem}.temp.{ext}"


def png_file_name(name: str) -> str:
    """Rewrite the extension of a non-PNG file name to ``.png``."""
    if _PNG_RE.search(name):
        return name
    stem, dot, _ = name.rpartition(".")
    return f"{stem if dot else name}.png"


def diff_artifact_names(names: list[str]) -> dict[str, str]:
    """Map every image name to a distinct diff artifact name.

    Names are rewritten with ``png_file_name``. When several sources end up
    with the same artifact name (``a.jpg`` and ``a.png``), the non-PNG ones
    keep their extension: ``a.jpg`` becomes ``a.jpg.png``. Raises
    InvalidConfiguration if names still collide after that.
    """
    artifacts = {name: png_file_name(name) for name in names}
    counts = Counter(artifacts.values())
    for name, artifact in artifacts.items():
        if counts[artifact] > 1 and artifact != name:
            artifacts[name] = f"{name}.png"

    seen: dict[str, str] = {}
    for name, artifact in artifacts.items():
        if artifact in seen:
            raise InvalidConfiguration(
                f"Images {seen[artifact]} and {name} would share the diff image {artifact}"
            )
        seen[artifact] = name
    return artifacts


async def wait_for_file(
    path: str | Path,
    timeout: float = 10.0,
    interval: float = 0.05,
) -> bool:
    """Poll until ``path`` exists.

    Returns True once the file is found, raises DiffArtifactTimeout when it
    does not show up within ``timeout`` seconds.
    """
    path = os.path.normpath(path)
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while True:
        if await asyncio.to_thread(os.path.exists, path):
            return True
        if loop.time() >= deadline:
            logger.debug("Gave up waiting for %s after %.1fs", path, timeout)
            raise DiffArtifactTimeout(path, timeout)
        await asyncio.sleep(interval)
