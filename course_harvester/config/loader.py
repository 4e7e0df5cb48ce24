"""Configuration loading helpers for Course-Harvester."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .models import HarvestConfig

CONFIG_FILENAME = "harvest_config.yaml"
HOME_ENV = "COURSE_HARVESTER_HOME"
YT_DLP_ENV = "YT_DLP_PATH"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}")
    return data


def _write_file(path: Path, payload: dict) -> None:
    with path.open("w", encoding="utf-8") as stream:
        if path.suffix in (".yaml", ".yml"):
            yaml.safe_dump(payload, stream, allow_unicode=True, sort_keys=False)
        else:
            json.dump(payload, stream, indent=2, ensure_ascii=False)


@dataclass(slots=True)
class ConfigLocator:
    """Resolve important paths from project root."""

    project_root: Path | None = None
    logs_dir: Path | None = None

    def __post_init__(self) -> None:
        env_root = os.environ.get(HOME_ENV)
        if env_root:
            root = Path(env_root).expanduser().resolve()
        else:
            root = (self.project_root or Path.cwd()).resolve()
        self.project_root = root
        self.logs_dir = (root / "logs").resolve()
        self.ensure_directories()

    def ensure_directories(self) -> None:
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def config_path(self) -> Path:
        return self.project_root / CONFIG_FILENAME


class ConfigRepository:
    """Repository encapsulating config IO and schema validation."""

    def __init__(self, locator: ConfigLocator | None = None) -> None:
        self.locator = locator or ConfigLocator()
        self._cache: HarvestConfig | None = None

    def load(self) -> HarvestConfig:
        if self._cache is not None:
            return self._cache
        path = self.locator.config_path()
        if path.exists():
            try:
                config = HarvestConfig.model_validate(_read_file(path))
            except (ValidationError, ValueError, yaml.YAMLError) as exc:
                raise ConfigurationError(f"Invalid configuration {path}: {exc}") from exc
        else:
            config = HarvestConfig()
            self.save(config)
        yt_dlp = os.environ.get(YT_DLP_ENV)
        if yt_dlp:
            config = config.model_copy(update={"yt_dlp_path": yt_dlp})
        self._cache = config
        return config

    def save(self, config: HarvestConfig) -> Path:
        path = self.locator.config_path()
        _write_file(path, config.model_dump(mode="json"))
        self._cache = config
        return path

    def cache_dir(self) -> Path:
        return self.load().resolved_cache_dir(self.locator.project_root)

    def output_path(self) -> Path:
        return self.load().resolved_output_path(self.locator.project_root)


__all__ = ["ConfigLocator", "ConfigRepository"]
