"""
Configuration management for the casino engine.
Supports config.json with environment variable overrides.
All paths are resolved relative to the project root.
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

# Project root directory (parent of 'casino' folder)
PROJECT_ROOT = Path(__file__).parent.parent


def get_env(key: str, default: str = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes", "on")


def get_env_int(key: str, default: int = 0) -> int:
    """Get integer environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def get_env_float(key: str, default: float = 0.0) -> float:
    """Get float environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


# ==================== Configuration Models ====================

class GameConfig(BaseModel):
    enabled: bool = True
    min_bet: float = 0.01
    max_bet: float = 10000.0

    model_config = ConfigDict(extra="allow")  # game-specific knobs


class DiceConfig(GameConfig):
    house_edge: float = 0.02


class CrashConfig(GameConfig):
    house_edge: float = 0.03
    max_multiplier: float = 100.0
    skew_exponent: float = 2.6
    min_cash_out: float = 1.01


class GamesConfig(BaseModel):
    dice: DiceConfig = Field(default_factory=DiceConfig)
    crash: CrashConfig = Field(default_factory=CrashConfig)
    roulette: GameConfig = Field(default_factory=GameConfig)
    slots: GameConfig = Field(default_factory=GameConfig)
    blackjack: GameConfig = Field(default_factory=GameConfig)
    poker: GameConfig = Field(default_factory=GameConfig)


class SessionsConfig(BaseModel):
    round_ttl_seconds: int = 300  # 5 minutes


class EconomyConfig(BaseModel):
    starting_balance: float = 1000.0


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_to_file: bool = False
    formatter: str = "color"


class PathsConfig(BaseModel):
    """All paths are relative to PROJECT_ROOT."""
    config_file: str = "config.json"
    log_file: str = "data/casino.log"

    def get_config_path(self) -> Path:
        return PROJECT_ROOT / self.config_file

    def get_log_path(self) -> Path:
        return PROJECT_ROOT / self.log_file


class AppConfig(BaseModel):
    """Main application configuration."""
    games: GamesConfig = Field(default_factory=GamesConfig)
    sessions: SessionsConfig = Field(default_factory=SessionsConfig)
    economy: EconomyConfig = Field(default_factory=EconomyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)


# ==================== Configuration Loading ====================

def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from config.json with environment variable overrides.
    Environment variables take precedence over config.json values.
    """
    if config_path is None:
        config_path = PROJECT_ROOT / get_env("CONFIG_FILE", "config.json")

    data = {}

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

    if get_env("LOG_LEVEL"):
        data.setdefault("logging", {})["level"] = get_env("LOG_LEVEL")
    if get_env("LOG_TO_FILE"):
        data.setdefault("logging", {})["log_to_file"] = get_env_bool("LOG_TO_FILE")
    if get_env("LOG_FORMATTER"):
        data.setdefault("logging", {})["formatter"] = get_env("LOG_FORMATTER")

    if get_env("ROUND_TTL_SECONDS"):
        data.setdefault("sessions", {})["round_ttl_seconds"] = get_env_int("ROUND_TTL_SECONDS", 300)

    if get_env("STARTING_BALANCE"):
        data.setdefault("economy", {})["starting_balance"] = get_env_float("STARTING_BALANCE", 1000.0)

    return AppConfig(**data)


def save_config(config: AppConfig, config_path: Optional[Path] = None):
    """Save configuration to config.json."""
    if config_path is None:
        config_path = config.paths.get_config_path()

    # Paths are computed, not persisted
    data = config.model_dump(exclude={"paths"})

    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)


# Global config instance
settings = load_config()
