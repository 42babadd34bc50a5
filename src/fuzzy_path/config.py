"""Configuration schema and multi-source loader for the fuzzy-path CLI."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Type, TypeVar

import platformdirs
import toml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)


class LoggingConfig(BaseModel):
    """Logging section."""

    model_config = ConfigDict(extra='forbid')

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Log level"
    )
    format: Literal["simple", "detailed", "json"] = Field(
        default="simple",
        description="Log format type"
    )
    file: str | None = Field(default=None, description="Optional log file path")

    @field_validator('level', 'format', mode='before')
    @classmethod
    def fold_case(cls, v: Any, info: ValidationInfo) -> Any:
        """Accept level and format names in any case."""
        if not isinstance(v, str):
            return v
        # Levels are upper case, format names lower case
        return v.upper() if info.field_name == 'level' else v.lower()


class OutputConfig(BaseModel):
    """Output section."""

    model_config = ConfigDict(extra='forbid')

    format: Literal["text", "json"] = Field(
        default="text",
        description="How normalize/compare results are printed"
    )


class FuzzyPathConfig(BaseModel):
    """Root configuration for the fuzzy-path command line."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


class ConfigLoader:
    """Loads configuration from defaults, system, user and environment sources.

    Later sources override earlier ones:

    1. defaults file (explicit path, or ``./config/defaults.toml``)
    2. system file (``/etc/<app>/config.toml`` or ``%PROGRAMDATA%\\<app>\\config.toml``)
    3. user file in the platformdirs user config directory
    4. ``<APP>_<SECTION>_<KEY>`` environment variables
    """

    def __init__(self, app_name: str = "fuzzy-path", config_class: Type[T] = FuzzyPathConfig) -> None:
        self.app_name = app_name
        self.config_class = config_class
        self._config: Optional[T] = None

    def load(self, defaults_path: Optional[Path] = None) -> T:
        """Load and validate configuration from all sources.

        Raises:
            ConfigError: If a file cannot be parsed or the merged result is invalid
        """
        config_dict = self._load_defaults(defaults_path)

        for source in (self._system_config_path(), self._user_config_path()):
            overlay = self._read_toml(source) if source.exists() else None
            if overlay:
                config_dict = self._deep_merge(config_dict, overlay)

        config_dict = self._apply_env_overrides(config_dict)

        try:
            self._config = self.config_class(**config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}", app_name=self.app_name) from e

        return self._config

    def _read_toml(self, path: Path) -> Dict[str, Any]:
        logger.debug(f"Loading config from {path}")
        try:
            return toml.load(path)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}", path=str(path)) from e

    def _load_defaults(self, defaults_path: Optional[Path] = None) -> Dict[str, Any]:
        if defaults_path is not None:
            if not defaults_path.exists():
                raise ConfigError(f"Config file does not exist: {defaults_path}", path=str(defaults_path))
            return self._read_toml(defaults_path)

        local_defaults = Path.cwd() / "config" / "defaults.toml"
        if local_defaults.exists():
            return self._read_toml(local_defaults)

        return {}

    def _system_config_path(self) -> Path:
        if os.name == "nt":  # Windows
            return (
                Path(os.environ.get("PROGRAMDATA", "C:\\ProgramData"))
                / self.app_name
                / "config.toml"
            )
        return Path(f"/etc/{self.app_name}/config.toml")

    def _user_config_path(self) -> Path:
        user_config_dir = platformdirs.user_config_dir(appname=self.app_name, appauthor=False)
        path = Path(user_config_dir) / "config.toml"
        logger.debug(f"Looking for user config: path={path}, exists={path.exists()}")
        return path

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        # FUZZY_PATH_LOGGING_LEVEL=debug -> logging.level = "debug"
        prefix = f"{self.app_name.upper().replace('-', '_')}_"

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            key_path = env_key[len(prefix):].lower().split("_", 1)
            if len(key_path) != 2:
                logger.debug(f"Ignoring environment variable without section: {env_key}")
                continue

            section, key = key_path
            current = config.setdefault(section, {})
            if not isinstance(current, dict):
                continue
            # Every setting is text; pydantic validates the raw string
            current[key] = env_value
            logger.debug(f"Environment override {section}.{key} from {env_key}")

        return config

    @property
    def config(self) -> T:
        """Get loaded configuration, loading it on first access."""
        if self._config is None:
            self._config = self.load()
        return self._config
