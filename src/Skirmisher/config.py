"""Settings loader for Skirmisher."""

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _toml_settings_source() -> dict[str, Any]:
    """Load settings from config.toml with keys mapped to Settings fields.

    This source has LOWER priority than env/.env so those can override TOML.
    """
    cfg_path = Path("config.toml")
    if not cfg_path.exists():
        return {}
    with cfg_path.open("rb") as f:
        t = tomllib.load(f)
    out: dict[str, Any] = {
        "env": t.get("app", {}).get("env", "dev"),
        "dice_seed": t.get("dice", {}).get("seed"),
        # Logging config
        "logging_level": t.get("logging", {}).get("level", "INFO"),
        # Per-handler levels: strings INFO|DEBUG|WARNING|ERROR|CRITICAL|NONE
        # Backward-compatible: if console/to_file are bools, map True->level, False->NONE
        "logging_console": None,
        "logging_file": None,
        "logging_file_path": t.get("logging", {}).get("file_path", "logs/skirmisher.jsonl"),
        "logging_max_bytes": t.get("logging", {}).get("max_bytes", 5_000_000),
        "logging_backup_count": t.get("logging", {}).get("backup_count", 5),
    }

    log_cfg = t.get("logging", {}) or {}
    console_val = log_cfg.get("console", None)
    file_val = log_cfg.get("to_file", None)
    overall = str(out["logging_level"]).upper()
    out["logging_level"] = overall

    def _norm_level(v, default):
        if isinstance(v, str):
            return v.upper()
        if isinstance(v, bool):
            return default if v else "NONE"
        return default

    out["logging_console"] = _norm_level(console_val, overall)
    out["logging_file"] = _norm_level(file_val, overall) if file_val is not None else "NONE"

    # Example TOML:
    # [limits]
    # max_dice_count = 100
    # min_modifier = -100
    # max_modifier = 100
    # max_targets = 50
    limits_cfg = t.get("limits", {}) or {}
    if limits_cfg:
        out["limits"] = {k: int(v) for k, v in limits_cfg.items()}

    ops_cfg = t.get("ops", {}) or {}
    out["metrics_enabled"] = ops_cfg.get("metrics_enabled", True)

    # Drop unset keys so field defaults apply
    return {k: v for k, v in out.items() if v is not None}


class LimitsConfig(BaseModel):
    max_dice_count: int = Field(default=100, ge=0)
    min_modifier: int = -100
    max_modifier: int = 100
    max_targets: int = Field(default=50, ge=1)


class Settings(BaseSettings):
    env: str = Field(default="dev")

    # --- Dice ---
    # Fixed seed for reproducible sessions; None draws from system entropy.
    dice_seed: int | None = None

    # --- Service limits ---
    limits: LimitsConfig = LimitsConfig()

    # --- Logging ---
    logging_level: str = "INFO"
    logging_console: str = "INFO"
    logging_file: str = "NONE"
    logging_file_path: str = "logs/skirmisher.jsonl"
    logging_max_bytes: int = 5_000_000
    logging_backup_count: int = 5

    # --- Ops ---
    metrics_enabled: bool = True

    model_config = SettingsConfigDict(
        env_prefix="SKIRMISHER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",  # Safely ignore any extra env vars
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Precedence (highest to lowest):
        # 1) init_settings (explicit overrides in code/tests)
        # 2) dotenv (.env in cwd): developer-local overrides
        # 3) env_settings (OS env)
        # 4) TOML (repo config.toml): project defaults
        # 5) file_secret_settings
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            _toml_settings_source,
            file_secret_settings,
        )


def load_settings(**overrides: Any) -> Settings:
    return Settings(**overrides)
