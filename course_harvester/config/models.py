"""Pydantic models for harvester configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class HarvestConfig(BaseModel):
    """Settings for one harvest run."""

    base_url: str = "https://study.iitm.ac.in/ds"
    index_page: str = "academics.html"
    video_url_prefix: str = "https://www.youtube.com/watch?v="
    yt_dlp_path: str = "yt-dlp"
    subtitle_lang: str = "en"
    cache_dir: Path = Field(default=Path("scrape-cache"))
    output_path: Path = Field(default=Path("scrape-output/result.json"))
    max_workers: int | None = Field(
        default=None, description="Worker pool size; null uses host parallelism."
    )
    # Per-stage caps, keyed by stage label, e.g. {"Download Subtitles": 4}
    stage_workers: dict[str, int] = Field(default_factory=dict)
    request_timeout: float = 15.0
    user_agent: str | None = None
    subtitle_delay_range: tuple[float, float] = (0.0, 10.0)
    enable_progress_bar: bool = True
    progress_bar_width: int = 50

    @field_validator("cache_dir", "output_path", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("subtitle_delay_range", mode="before")
    @classmethod
    def _coerce_delay(cls, value: Any) -> tuple[float, float]:
        if value in (None, ""):
            return (0.0, 0.0)
        if isinstance(value, (list, tuple)) and len(value) == 2:
            low, high = float(value[0]), float(value[1])
            if low < 0 or high < 0:
                raise ValueError("Delay range values must be non-negative")
            if high < low:
                raise ValueError("Delay range upper bound must be >= lower bound")
            return (low, high)
        raise ValueError("Delay range expects a two-item list or tuple")

    @model_validator(mode="after")
    def _validate_limits(self) -> "HarvestConfig":
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        if any(limit < 1 for limit in self.stage_workers.values()):
            raise ValueError("stage_workers limits must be >= 1")
        if self.progress_bar_width < 1:
            raise ValueError("progress_bar_width must be >= 1")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")
        return self

    @property
    def index_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.index_page}"

    def course_page_url(self, course_code: str) -> str:
        return f"{self.base_url.rstrip('/')}/course_pages/{course_code}.html"

    def resolved_cache_dir(self, base_dir: Path) -> Path:
        return self.cache_dir if self.cache_dir.is_absolute() else (base_dir / self.cache_dir).resolve()

    def resolved_output_path(self, base_dir: Path) -> Path:
        if self.output_path.is_absolute():
            return self.output_path
        return (base_dir / self.output_path).resolve()


__all__ = ["HarvestConfig"]
