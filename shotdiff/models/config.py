"""Configuration models for capture and comparison runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal, Optional, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from shotdiff.errors import InvalidConfiguration

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class ClickStep(BaseModel):
    selector: str
    button: Literal["left", "middle", "right"] = "left"
    wait_after: int = 0  # milliseconds


class CaptureConfig(BaseModel):
    goto: str = "http://localhost"
    engine: Literal["chromium", "firefox", "webkit"] = "firefox"
    width: int = 800
    height: int = 600
    path: Optional[str] = None  # output directory, screenshot is only returned when unset
    name: Optional[str] = None  # file name with .png or .jpg extension
    full_page: bool = True
    clicks: list[ClickStep] = Field(default_factory=list)
    el: Optional[str] = None  # element selector, whole page when unset

    def output_path(self) -> Optional[Path]:
        if self.path is None or not self.name:
            return None
        return Path(self.path) / self.name


class GenerateConfig(BaseModel):
    images_config: list[CaptureConfig] = Field(min_length=1)
    serial: Optional[bool] = None  # None lets the host capability decide
    path: Optional[str] = None  # overrides every job's output directory


class CompareConfig(BaseModel):
    dir_baseline: str
    dir_new: str
    dir_diff: Optional[str] = None  # defaults to <dir_new>/diff

    @field_validator("dir_baseline", "dir_new")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("directory must not be empty")
        return v

    def resolved_diff_dir(self) -> Path:
        if self.dir_diff:
            return Path(self.dir_diff)
        return Path(self.dir_new) / "diff"


class DiffImagesConfig(BaseModel):
    dir_baseline: str
    dir_new: str
    dir_diff: str
    image_name: str
    diff_image_name: str  # diff artifacts are always PNG
    timeout: float = 10.0  # seconds to wait for the differ output
    interval: float = 0.05


class ComposeConfig(BaseModel):
    path_baseline: str
    path_new: str
    path_diff: str
    path_dist: str

    @field_validator("path_baseline", "path_new", "path_diff", "path_dist")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("path must not be empty")
        return v


class ShotdiffConfig(BaseModel):
    # Capture
    images: list[CaptureConfig] = Field(default_factory=list)
    serial: Optional[bool] = None
    path: Optional[str] = None

    # Compare
    dir_baseline: str = "./screenshots/baseline"
    dir_new: str = "./screenshots/new"
    dir_diff: Optional[str] = None

    # Reporting
    report_output: Optional[str] = None

    @classmethod
    def load(cls, path: str | Path) -> "ShotdiffConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return validate_config(cls, data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)

    def generate_config(self) -> GenerateConfig:
        return validate_config(
            GenerateConfig,
            {"images_config": self.images, "serial": self.serial, "path": self.path},
        )

    def compare_config(self) -> CompareConfig:
        return validate_config(
            CompareConfig,
            {"dir_baseline": self.dir_baseline, "dir_new": self.dir_new, "dir_diff": self.dir_diff},
        )


def validate_config(model: type[ConfigT], data: ConfigT | dict[str, Any] | None) -> ConfigT:
    """Return ``data`` as a ``model`` instance, raising InvalidConfiguration on bad input."""
    if isinstance(data, model):
        return data
    if data is None:
        raise InvalidConfiguration(f"Missing {model.__name__} options")
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidConfiguration(f"Invalid {model.__name__}: {e}") from e
