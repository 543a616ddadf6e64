"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``ROTATION_ADVISOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The rotation engine itself only ever sees ``RotationSettings``. Every
heuristic constant (neutral nutrient need, fallback interval, score weights,
soil thresholds) lives there so tests can override a single value without
touching the engine modules.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class RotationSettings(BaseModel):
    """Heuristic constants for the rotation advisory engine.

    Soil estimate:
        ``soil_lookback_years`` plantings before the target year are averaged.
        Missing nutrient needs count as ``neutral_nutrient_need``.
        ``avg > depleted_above`` → depleted, ``avg < enriched_below`` → enriched.

    Blocking:
        Families absent from the catalogue use ``default_interval_years``.

    Recommendation:
        ``score = min(100, years_since_use * years_since_use_weight)``;
        never-used families get ``never_used_score``; the nitrogen fixer is
        forced in at ``nitrogen_fixer_score`` when soil N is depleted.
    """

    model_config = ConfigDict(frozen=True)

    neutral_nutrient_need: int = 3
    default_interval_years: int = 4
    soil_lookback_years: int = 3
    recent_history_years: int = 5
    depleted_above: float = 4.0
    enriched_below: float = 2.0
    heavy_feeder_min_need: int = 4

    nitrogen_fixer_family: str = "Fabacées"
    nitrogen_fixer_color: str = "#22c55e"
    nitrogen_fixer_score: int = 95
    never_used_score: int = 80
    years_since_use_weight: int = 15
    long_rest_years: int = 5
    rich_soil_bonus: int = 10
    # French ids first: the enriched-soil suggestion names the first two.
    heavy_feeder_families: list[str] = [
        "Solanacées", "Cucurbitacées", "Brassicacées",
        "Solanaceae", "Cucurbitaceae", "Brassicaceae",
    ]

    @field_validator("neutral_nutrient_need", "heavy_feeder_min_need")
    @classmethod
    def validate_need_scale(cls, v: int) -> int:
        if not 0 <= v <= 5:
            raise ValueError(f"Nutrient need values must be in [0, 5], got {v}.")
        return v

    @field_validator("nitrogen_fixer_score", "never_used_score", "rich_soil_bonus")
    @classmethod
    def validate_score_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"Score values must be in [0, 100], got {v}.")
        return v

    @field_validator("default_interval_years", "soil_lookback_years", "recent_history_years")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Year counts must be non-negative, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_thresholds(self) -> "RotationSettings":
        if self.enriched_below > self.depleted_above:
            raise ValueError(
                f"enriched_below ({self.enriched_below}) must be <= "
                f"depleted_above ({self.depleted_above})."
            )
        return self


class DataConfig(BaseModel):
    """Filesystem paths for reference data and report output."""

    model_config = ConfigDict(frozen=True)

    catalogue_file: str = "config/families.json"
    species_file: str = "config/species.json"
    output_dir: str = "data/outputs/advice"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    ``debug = true`` forces DEBUG logging regardless of ``logging.level``.
    """

    model_config = ConfigDict(frozen=True)

    rotation: RotationSettings = RotationSettings()
    data: DataConfig = DataConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def resolve_data_path(path: str | Path) -> Path:
    """Resolve a config-relative path against the project root.

    Paths in ``config/default.toml`` are written relative to the project
    root, so the CLI works from any current directory. Absolute paths are
    returned unchanged.
    """
    path = Path(path)
    if path.is_absolute():
        return path
    return _find_project_root() / path


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply ROTATION_ADVISOR_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply ROTATION_ADVISOR_* env vars to the raw config dict.

    Supported overrides:
      ROTATION_ADVISOR_CATALOGUE_FILE → raw["data"]["catalogue_file"]
      ROTATION_ADVISOR_LOG_LEVEL      → raw["logging"]["level"]
      ROTATION_ADVISOR_DEBUG          → raw["debug"]
    """
    if catalogue := os.environ.get("ROTATION_ADVISOR_CATALOGUE_FILE"):
        raw.setdefault("data", {})["catalogue_file"] = catalogue

    if log_level := os.environ.get("ROTATION_ADVISOR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("ROTATION_ADVISOR_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        rotation=RotationSettings(**raw.get("rotation", {})),
        data=DataConfig(**raw.get("data", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
