"""Unified configuration loaded from .wordpace.toml, env vars, and CLI flags.

Each layer overrides the one before it: built-in defaults, one TOML file,
``WORDPACE_*`` environment variables, then flags passed on the command line.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from wordpace.clock import PACIFIC_TZ
from wordpace.models import WEEKDAY_COUNT, GoalMode

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".wordpace.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
DEFAULT_CACHE_PATH = Path.home() / ".cache" / "wordpace" / "progress.json"


class PacingConfig(BaseModel):
    """[pacing] section."""

    timezone: str = PACIFIC_TZ
    default_word_goal: int = Field(default=3000, ge=0)


class CacheConfig(BaseModel):
    """[cache] section."""

    enabled: bool = True
    ttl_seconds: int = Field(default=300, ge=0)
    path: str = ""

    @property
    def resolved_path(self) -> Path:
        return Path(self.path).expanduser() if self.path else DEFAULT_CACHE_PATH


class GoalDefaultsConfig(BaseModel):
    """[goal_defaults] section."""

    mode: GoalMode = GoalMode.ELASTIC
    writing_days: list[bool] = Field(
        default_factory=lambda: [True] * WEEKDAY_COUNT,
        min_length=WEEKDAY_COUNT,
        max_length=WEEKDAY_COUNT,
    )


class WordpaceConfig(BaseModel):
    """Top-level configuration model."""

    pacing: PacingConfig = Field(default_factory=PacingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    goal_defaults: GoalDefaultsConfig = Field(default_factory=GoalDefaultsConfig)

    @field_validator("pacing")
    @classmethod
    def _known_timezone(cls, value: PacingConfig) -> PacingConfig:
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

        try:
            ZoneInfo(value.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value.timezone}") from exc
        return value


def _candidate_paths(path: str | Path | None) -> list[Path]:
    if path is not None:
        return [Path(path)]
    local = [directory / CONFIG_FILENAME for directory in CONFIG_SEARCH_PATHS]
    return [*local, Path.home() / ".config" / "wordpace" / "config.toml"]


def _usable_sections(data: dict[str, object], source: Path) -> dict[str, object]:
    """Drop sections that fail validation, keeping the rest of the file."""
    usable: dict[str, object] = {}
    for name, section in data.items():
        if name not in WordpaceConfig.model_fields:
            logger.debug("Unknown config section [%s] in %s", name, source)
            continue
        try:
            WordpaceConfig.model_validate({name: section})
        except ValueError as exc:
            logger.warning("Invalid [%s] in %s, using defaults: %s", name, source, exc)
            continue
        usable[name] = section
    return usable


def load_config(path: str | Path | None = None) -> WordpaceConfig:
    """Build the effective configuration.

    The first existing file wins: ``path`` when given, otherwise
    ``.wordpace.toml`` in each search directory and then
    ``~/.config/wordpace/config.toml``. A section that fails validation
    falls back to its defaults without discarding the other sections.
    ``WORDPACE_*`` environment variables are applied last.
    """
    candidates = _candidate_paths(path)
    source = next((candidate for candidate in candidates if candidate.is_file()), None)
    if source is None:
        if path is not None:
            logger.warning("Config file not found: %s", path)
        return _apply_env_vars(WordpaceConfig())

    logger.info("Loaded config from %s", source)
    data = _usable_sections(_load_toml(source), source)
    return _apply_env_vars(WordpaceConfig.model_validate(data))


def merge_cli_overrides(config: WordpaceConfig, **cli_kwargs: object) -> WordpaceConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "timezone": ("pacing", "timezone"),
        "word_goal": ("pacing", "default_word_goal"),
        "cache_ttl": ("cache", "ttl_seconds"),
        "cache_path": ("cache", "path"),
        "cache_enabled": ("cache", "enabled"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return WordpaceConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _as_flag(raw: str) -> bool:
    return raw.strip().lower() in ("true", "1", "yes", "on")


ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], object]]] = {
    "WORDPACE_TIMEZONE": ("pacing", "timezone", str),
    "WORDPACE_DEFAULT_WORD_GOAL": ("pacing", "default_word_goal", int),
    "WORDPACE_CACHE_TTL": ("cache", "ttl_seconds", int),
    "WORDPACE_CACHE_ENABLED": ("cache", "enabled", _as_flag),
    "WORDPACE_CACHE_PATH": ("cache", "path", str),
}


def _apply_env_vars(config: WordpaceConfig) -> WordpaceConfig:
    """Overlay ``WORDPACE_*`` variables; unusable values are skipped."""
    data = config.model_dump()
    for env_var, (section, field, convert) in ENV_OVERRIDES.items():
        raw = os.environ.get(env_var)
        if raw is None:
            continue
        try:
            data[section][field] = convert(raw)
        except ValueError:
            logger.warning("Ignoring unparseable %s=%r", env_var, raw)

    try:
        return WordpaceConfig.model_validate(data)
    except ValueError as exc:
        logger.warning("Ignoring invalid environment overrides: %s", exc)
        return config
