"""Pytest configuration and shared fixtures."""

import shutil
import time
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from shotdiff.models.config import CaptureConfig, ClickStep, CompareConfig, ShotdiffConfig
from shotdiff.models.results import PixelDiffResult

WHITE = (255, 255, 255)
RED = (255, 0, 0)
BLUE = (0, 0, 255)


def make_image(
    path: Path,
    size: tuple[int, int] = (20, 10),
    color: tuple[int, int, int] = WHITE,
    block: tuple[int, int, int, int] | None = None,
    block_color: tuple[int, int, int] = RED,
) -> Path:
    """Write a solid image, optionally with a rectangular block painted in."""
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new("RGB", size, color)
    if block is not None:
        x0, y0, x1, y1 = block
        for x in range(x0, x1):
            for y in range(y0, y1):
                image.putpixel((x, y), block_color)
    image.save(path)
    return path


class FakeDiffer:
    """PixelDiffer stand-in returning canned results per image name."""

    def __init__(
        self,
        results: dict[str, PixelDiffResult] | None = None,
        write_output: bool = True,
        raise_for: dict[str, Exception] | None = None,
        output_bytes: bytes | None = None,
        delay_for: dict[str, float] | None = None,
    ):
        self.results = results or {}
        self.write_output = write_output
        self.raise_for = raise_for or {}
        self.output_bytes = output_bytes
        self.delay_for = delay_for or {}
        self.calls: list[dict] = []

    def diff(self, actual_path, expected_path, diff_path, threshold=0.1, include_aa=False):
        name = Path(actual_path).name
        self.calls.append({
            "actual_path": actual_path,
            "expected_path": expected_path,
            "diff_path": diff_path,
            "threshold": threshold,
            "include_aa": include_aa,
        })
        if name in self.raise_for:
            raise self.raise_for[name]
        if name in self.delay_for:
            time.sleep(self.delay_for[name])
        if self.write_output:
            if self.output_bytes is not None:
                Path(diff_path).write_bytes(self.output_bytes)
            else:
                Image.new("RGB", (20, 10), RED).save(diff_path, format="PNG")
        return self.results.get(
            name,
            PixelDiffResult(images_are_same=True, width=20, height=10, diff_count=0),
        )


# ============================================================================
# Image Directory Fixtures
# ============================================================================


@pytest.fixture
def image_factory() -> Callable[..., Path]:
    return make_image


@pytest.fixture
def screenshot_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Baseline has a.png and b.png, new has a.png and c.png; a.png is identical."""
    baseline = tmp_path / "baseline"
    new = tmp_path / "new"
    make_image(baseline / "a.png")
    make_image(baseline / "b.png")
    new.mkdir(parents=True)
    shutil.copy(baseline / "a.png", new / "a.png")
    make_image(new / "c.png")
    return baseline, new


@pytest.fixture
def changed_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """same.png is identical in both dirs, changed.png has a 5x5 red block in new."""
    baseline = tmp_path / "baseline"
    new = tmp_path / "new"
    make_image(baseline / "same.png")
    make_image(baseline / "changed.png")
    new.mkdir(parents=True)
    shutil.copy(baseline / "same.png", new / "same.png")
    make_image(new / "changed.png", block=(5, 2, 10, 7))
    return baseline, new


@pytest.fixture
def fake_differ() -> FakeDiffer:
    return FakeDiffer()


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def capture_config() -> CaptureConfig:
    return CaptureConfig(
        goto="https://example.com",
        engine="chromium",
        width=1280,
        height=720,
        path="./screenshots",
        name="home.png",
        clicks=[
            ClickStep(selector=".js-menu-open", wait_after=300),
            ClickStep(selector=".js-submenu", button="right"),
        ],
    )


@pytest.fixture
def compare_config(screenshot_dirs: tuple[Path, Path]) -> CompareConfig:
    baseline, new = screenshot_dirs
    return CompareConfig(dir_baseline=str(baseline), dir_new=str(new))


@pytest.fixture
def shotdiff_config(capture_config: CaptureConfig, tmp_path: Path) -> ShotdiffConfig:
    return ShotdiffConfig(
        images=[capture_config],
        serial=True,
        dir_baseline=str(tmp_path / "baseline"),
        dir_new=str(tmp_path / "new"),
    )


@pytest.fixture
def temp_config_file(shotdiff_config: ShotdiffConfig, tmp_path: Path) -> Path:
    config_file = tmp_path / "shotdiff.json"
    shotdiff_config.save(config_file)
    return config_file
