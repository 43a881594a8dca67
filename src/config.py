"""Unified configuration loaded from .pagebound.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".pagebound.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "pagebound" / "config.toml"


class StorageConfig(BaseModel):
    """[storage] section."""

    directory: str = "./journal"


class UserConfig(BaseModel):
    """[user] section — whose guided-program progress is tracked."""

    id: str = "local"


class EditorConfig(BaseModel):
    """[editor] section."""

    autosave_delay: float = Field(default=1.2, ge=0)
    snippet_length: int = Field(default=150, gt=0)


class InsightsConfig(BaseModel):
    """[insights] section — sample gates for mood findings."""

    window_days: int = Field(default=30, gt=0)
    min_bucket_samples: int = 2
    min_mood_samples: int = 7
    consistency_samples: int = 14


class LoggingConfig(BaseModel):
    """[logging] section."""

    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()


class PageboundConfig(BaseModel):
    """Top-level configuration model."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    user: UserConfig = Field(default_factory=UserConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    insights: InsightsConfig = Field(default_factory=InsightsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def data_dir(self) -> Path:
        return Path(self.storage.directory).expanduser()


def load_config(path: str | Path | None = None) -> PageboundConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .pagebound.toml in CWD
    3. ~/.config/pagebound/config.toml

    Then overlay environment variables.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = PageboundConfig.model_validate(data) if data else PageboundConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: PageboundConfig, **cli_kwargs: object) -> PageboundConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).  Unknown keys are ignored.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "data_dir": ("storage", "directory"),
        "user": ("user", "id"),
        "log_level": ("logging", "level"),
        "autosave_delay": ("editor", "autosave_delay"),
        "snippet_length": ("editor", "snippet_length"),
        "window_days": ("insights", "window_days"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = str(value) if isinstance(value, Path) else value

    return PageboundConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: PageboundConfig) -> PageboundConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "PAGEBOUND_DATA_DIR": ("storage", "directory"),
        "PAGEBOUND_USER": ("user", "id"),
        "PAGEBOUND_LOG_LEVEL": ("logging", "level"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    delay_raw = os.environ.get("PAGEBOUND_AUTOSAVE_DELAY")
    if delay_raw is not None:
        try:
            data["editor"]["autosave_delay"] = float(delay_raw)
        except ValueError:
            logger.warning("Ignoring non-numeric PAGEBOUND_AUTOSAVE_DELAY=%r", delay_raw)

    return PageboundConfig.model_validate(data)
