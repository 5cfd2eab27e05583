"""Error types raised by the capture and comparison pipelines."""

from __future__ import annotations

from typing import Any


class ShotdiffError(Exception):
    """Base class for every error raised by shotdiff."""


class InvalidConfiguration(ShotdiffError):
    """A required option is missing or malformed."""


class MissingParameter(InvalidConfiguration):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'"{name}" is not set')


class DirectoryNotFound(ShotdiffError):
    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(f"Requested directory doesn't exist: {directory}")


class DirectoryReadError(ShotdiffError):
    def __init__(self, directory: str, reason: Exception):
        self.directory = directory
        super().__init__(f"Unable to read directory {directory}: {reason}")


class DiffArtifactTimeout(ShotdiffError):
    def __init__(self, path: str, timeout: float):
        self.path = path
        self.timeout = timeout
        super().__init__(f"File {path} was not found for {timeout:g}s")


class MissingSourceFile(ShotdiffError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Source file {path} does not exist")


class CannotCreateDiffImage(ShotdiffError):
    def __init__(self, reason: str | Exception):
        super().__init__(f"Cannot create diff image, reason: {reason}")


class ExternalToolFailure(ShotdiffError):
    """Wraps a failure raised by Playwright, the pixel differ or Pillow."""

    def __init__(self, tool: str, reason: Exception):
        self.tool = tool
        super().__init__(f"{tool} failed: {reason}")


class CaptureFailed(ShotdiffError):
    """One or more screenshot jobs failed.

    ``errors`` holds every collected failure, ``results`` the captures that
    succeeded before the run stopped (serial mode keeps going, parallel mode
    stops at the first failure).
    """

    def __init__(self, errors: list[Exception], results: list[Any] | None = None):
        self.errors = errors
        self.results = results or []
        super().__init__(
            f"{len(errors)} screenshot(s) failed: "
            + "; ".join(str(e) for e in errors)
        )
