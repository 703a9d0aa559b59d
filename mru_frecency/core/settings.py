"""mru-frecency - Configuration system with Pydantic Settings"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Tuple

import pydantic_settings
from pydantic import Field, field_validator
from pydantic_settings import (
    DotEnvSettingsSource,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
)
from pydantic_settings.main import SettingsConfigDict

from mru_frecency.core.config_toml import load_config

__all__ = [
    "LockPolicy",
    "ClassifierKind",
    "Settings",
    "settings",
    "get_settings",
    "reload_settings",
]

logger = logging.getLogger(__name__)

ENV_PREFIX = "MRU_FRECENCY_"
APP_DIR_NAME = "mru-frecency"


class LockPolicy(str, Enum):
    """What ``visit`` does when the lock cannot be acquired in time."""

    STRICT = "strict"
    """Give up: ``visit`` returns False and nothing is mutated."""

    BEST_EFFORT = "best_effort"
    """Log the timeout and mutate without the lock."""


class ClassifierKind(str, Enum):
    """Which classification strategy the store uses for raw items."""

    AUTO = "auto"
    """Paths and free text (search queries and the like)."""

    PATH = "path"
    """Every item is a filesystem path."""


class TomlConfigSource(PydanticBaseSettingsSource):
    """Reads the ``[frecency]`` table of ``config.toml`` in the config dir."""

    def __init__(self, settings_cls: type[pydantic_settings.BaseSettings]):
        super().__init__(settings_cls)
        config_path = _app_base_dirs("config") / "config.toml"
        try:
            self._data: Dict[str, Any] = load_config(config_path).get("frecency", {})
        except RuntimeError as e:
            logger.warning(f"Ignoring unreadable config file: {e}")
            self._data = {}

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        return {
            name: value
            for name, value in self._data.items()
            if name in self.settings_cls.model_fields
        }


class Settings(pydantic_settings.BaseSettings):
    """Frecency store settings with type-safe validation"""

    # Filesystem paths
    data_dir: Path = Field(default_factory=lambda: _app_base_dirs("data"))
    document_name: str = Field(default="frecency.json", min_length=1)

    # Store bounds
    max_entries: int = Field(default=3000, gt=0)

    # Lock file behaviour
    lock_timeout_ms: int = Field(default=1000, ge=0)
    lock_poll_interval_ms: int = Field(default=50, gt=0)
    lock_stale_after_s: float = Field(default=5.0, ge=0)
    lock_policy: LockPolicy = Field(default=LockPolicy.STRICT)

    # Item classification
    classifier: ClassifierKind = Field(default=ClassifierKind.AUTO)

    # Logging
    debug: bool = Field(default=False)
    log_level: str = Field(default="WARNING")

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("document_name")
    @classmethod
    def validate_document_name(cls, v: str) -> str:
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"document_name must be a plain file name: {v!r}")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[pydantic_settings.BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        del env_settings, dotenv_settings

        model_case_sensitive = settings_cls.model_config.get("case_sensitive")
        case_sensitive = model_case_sensitive if isinstance(model_case_sensitive, bool) else None

        return (
            init_settings,
            EnvSettingsSource(
                settings_cls,
                env_prefix=ENV_PREFIX,
                case_sensitive=case_sensitive,
            ),
            DotEnvSettingsSource(
                settings_cls,
                env_prefix=ENV_PREFIX,
                env_file=_dotenv_paths(settings_cls),
                case_sensitive=case_sensitive,
            ),
            TomlConfigSource(settings_cls),
            file_secret_settings,
        )

    def data_dir_path(self) -> Path:
        """
        Get the data directory path as a Path object.

        Returns:
            The data directory path with ~ expanded.
        """
        return Path(self.data_dir).expanduser()

    def document_path(self) -> Path:
        """Path of the persisted MRU document."""
        return self.data_dir_path() / self.document_name

    def lock_path(self) -> Path:
        """Path of the sidecar lock file guarding the document."""
        document = self.document_path()
        return document.with_name(document.name + ".lock")

    @property
    def lock_timeout(self) -> float:
        """Lock acquisition budget in seconds."""
        return self.lock_timeout_ms / 1000.0

    @property
    def lock_poll_interval(self) -> float:
        """Delay between lock attempts in seconds."""
        return self.lock_poll_interval_ms / 1000.0


def _xdg_base_dir(env_var_name: str, fallback: Path) -> Path:
    env_value = os.getenv(env_var_name)
    if env_value:
        return Path(env_value).expanduser()
    return fallback


def _app_base_dirs(kind: str) -> Path:
    home = Path.home()
    if kind == "config":
        base = _xdg_base_dir("XDG_CONFIG_HOME", home / ".config")
    elif kind == "data":
        base = _xdg_base_dir("XDG_DATA_HOME", home / ".local" / "share")
    else:
        raise ValueError(f"Unsupported app dir kind: {kind}")

    return base / APP_DIR_NAME


def _dotenv_paths(settings_cls: type[pydantic_settings.BaseSettings]) -> tuple[Path | str, ...]:
    explicit_env_files = settings_cls.model_config.get("env_file")
    if explicit_env_files is not None:
        if isinstance(explicit_env_files, (str, Path)):
            return (explicit_env_files,)
        return tuple(explicit_env_files)

    return (".env", _app_base_dirs("config") / ".env")


settings: Settings = Settings()


def get_settings() -> Settings:
    """
    Get the global settings instance.

    Returns:
        The global Settings instance.
    """
    return settings


def reload_settings() -> Settings:
    """
    Reload settings by creating a new Settings instance.

    Returns:
        A new Settings instance with current environment values.
    """
    global settings
    settings = Settings()
    return settings
