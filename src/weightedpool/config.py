import tomllib
from pathlib import Path
from typing import Literal

import tomlkit
from pydantic_settings import BaseSettings, SettingsConfigDict

from weightedpool.logging import logger

CONFIG_DIR = Path.home() / ".config" / "weightedpool"
CONFIG_FILE = CONFIG_DIR / "config.toml"

type LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WEIGHTEDPOOL_")

    log_level: LogLevel = "INFO"


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(),
        ),
    )
    logger.info(f"Saved configuration to {config_path}.")


def apply_settings(config: Settings) -> None:
    """
    Apply the configured values to the package logger.
    """

    logger.setLevel(config.log_level)


settings = load_config_from_file(CONFIG_FILE) if CONFIG_FILE.exists() else Settings()
apply_settings(settings)
