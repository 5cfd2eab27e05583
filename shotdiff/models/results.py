"""Result data structures produced by the capture and comparison pipelines."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class MatchResult(BaseModel):
    compare: list[str] = Field(default_factory=list)  # in both directories
    missing: list[str] = Field(default_factory=list)  # in new, not in baseline
    outdated: list[str] = Field(default_factory=list)  # in baseline, not in new


class PixelDiffResult(BaseModel):
    """Verdict returned by a pixel differ for one image pair."""
    images_are_same: bool
    width: int
    height: int
    diff_count: int = Field(ge=0)


class DiffOutcome(BaseModel):
    """Result of comparing one baseline/new image pair."""
    tested_image: str
    baseline_path: str
    new_path: str
    diff_image_path: Optional[str] = None  # None when images are the same
    width: int
    height: int
    images_are_same: bool
    diff_count: int = Field(default=0, ge=0)
    diff_percentage: float = 0.0
    # Only meaningful while a batch is running, cleared on passed entries
    diff_dir: Optional[str] = None
    diff_image_name: Optional[str] = None

    def compute_diff_percentage(self) -> float:
        area = self.width * self.height
        if area == 0:
            return 0.0
        return 100 * self.diff_count / area


class BatchResult(BaseModel):
    passed: list[DiffOutcome] = Field(default_factory=list)
    failed: list[DiffOutcome] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    outdated: list[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.passed) + len(self.failed)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)


class CaptureResult(BaseModel):
    msg: str
    name: Optional[str] = None
    path: Optional[str] = None
    el: Optional[str] = None
    binary: bytes = b""


class HostCapability(BaseModel):
    cpu_cores: int = 0
    cpu_speed_mhz: float = 0.0
    free_ram_mb: int = 0
