"""Configuration loader for devbridge."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
import yaml
from pydantic import ValidationError

from ..domain.models import DevBridgeError
from .models import DevBridgeConfig

logger = logging.getLogger(__name__)


class ConfigurationError(DevBridgeError):
    """Raised when configuration loading or validation fails."""

    pass


class ConfigLoader:
    """Configuration loader that merges TOML/YAML files, environment variables, and CLI arguments."""

    DEFAULT_CONFIG_FILES = [
        ".devbridge.toml",  # TOML files (preferred)
        ".devbridge.yml",
        ".devbridge.yaml",
        "devbridge.toml",
        "devbridge.yml",
        "devbridge.yaml",
    ]

    ENV_PREFIX = "DEVBRIDGE_"

    def __init__(
        self,
        config_file: str | Path | None = None,
        search_dir: str | Path | None = None,
    ):
        """Initialize the configuration loader.

        Args:
            config_file: Path to configuration file. If None, will search for default files.
            search_dir: Directory searched for default files (defaults to the working directory)
        """
        self.config_file = Path(config_file) if config_file else None
        self.search_dir = Path(search_dir) if search_dir else None
        self._config_cache: DevBridgeConfig | None = None

    def load_config(
        self,
        env_overrides: dict[str, Any] | None = None,
        cli_overrides: dict[str, Any] | None = None,
        reload: bool = False,
    ) -> DevBridgeConfig:
        """Load configuration from all sources.

        Args:
            env_overrides: Environment variable overrides
            cli_overrides: CLI argument overrides
            reload: Force reload even if cached

        Returns:
            Validated devbridge configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self._config_cache is not None and not reload:
            return self._config_cache

        config_dict: dict[str, Any] = {}

        # 1. Load from configuration file (TOML or YAML)
        file_config = self._load_config_file()
        if file_config:
            config_dict = self._deep_merge(config_dict, file_config)
            logger.debug(f"Loaded configuration from {self._get_config_file_path()}")

        # 2. Apply environment variable overrides
        env_config = env_overrides if env_overrides is not None else self._load_env_config()
        if env_config:
            config_dict = self._deep_merge(config_dict, env_config)
            logger.debug("Applied environment variable overrides")

        # 3. Apply CLI overrides (highest priority)
        if cli_overrides:
            config_dict = self._deep_merge(config_dict, cli_overrides)
            logger.debug("Applied CLI argument overrides")

        # 4. Validate and create Pydantic model
        try:
            self._config_cache = DevBridgeConfig(**config_dict)
        except ValidationError as e:
            error_msg = f"Configuration validation failed: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

        logger.debug("Configuration loaded and validated successfully")
        return self._config_cache

    def _load_config_file(self) -> dict[str, Any] | None:
        """Load configuration from TOML or YAML file."""
        config_file = self._get_config_file_path()

        if not config_file or not config_file.exists():
            if self.config_file:
                raise ConfigurationError(f"Configuration file not found: {config_file}")
            logger.debug("No configuration file found, using defaults")
            return None

        try:
            if config_file.suffix.lower() == ".toml":
                return self._load_toml_file(config_file)
            elif config_file.suffix.lower() in (".yml", ".yaml"):
                return self._load_yaml_file(config_file)
            else:
                logger.warning(f"Unknown configuration file type: {config_file}")
                return None

        except OSError as e:
            error_msg = f"Failed to read {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_toml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from TOML file."""
        try:
            with open(config_file, "rb") as f:
                content = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

        if not content:
            logger.warning(f"Configuration file {config_file} is empty")
            return None
        return content

    def _load_yaml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from YAML file."""
        try:
            with open(config_file, encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

        if not content:
            logger.warning(f"Configuration file {config_file} is empty")
            return None
        if not isinstance(content, dict):
            raise ConfigurationError(
                f"Configuration file {config_file} must contain a mapping"
            )
        return content

    def _load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if key.startswith(self.ENV_PREFIX):
                # e.g., DEVBRIDGE_SERIALIZATION__FORMAT -> serialization.format
                config_key = key[len(self.ENV_PREFIX) :].lower()
                nested_keys = config_key.split("__")
                self._set_nested_value(
                    env_config, nested_keys, self._parse_env_value(value)
                )

        return env_config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate Python type."""
        lowered = value.lower()
        if lowered in ("true", "yes", "on"):
            return True
        elif lowered in ("false", "no", "off"):
            return False
        elif lowered in ("none", "null"):
            return None

        try:
            return int(value)
        except ValueError:
            pass

        return value

    def _set_nested_value(self, config: dict[str, Any], keys: list, value: Any) -> None:
        """Set a nested value in the configuration dictionary."""
        variable = self.ENV_PREFIX + "__".join(keys).upper()
        current = config

        for depth, key in enumerate(keys[:-1], start=1):
            if key not in current:
                current[key] = {}
            elif not isinstance(current[key], dict):
                conflicting = self.ENV_PREFIX + "__".join(keys[:depth]).upper()
                raise ConfigurationError(
                    f"Environment variable {variable} conflicts with {conflicting}"
                )
            current = current[key]

        if isinstance(current.get(keys[-1]), dict):
            raise ConfigurationError(
                f"Environment variable {variable} conflicts with nested "
                f"{variable}__* variables"
            )
        current[keys[-1]] = value

    def _get_config_file_path(self) -> Path | None:
        """Get the path to the configuration file."""
        if self.config_file:
            return self.config_file

        base = self.search_dir or Path.cwd()
        for filename in self.DEFAULT_CONFIG_FILES:
            path = base / filename
            if path.exists():
                return path

        return None

    def _deep_merge(
        self, base: dict[str, Any], updates: dict[str, Any]
    ) -> dict[str, Any]:
        """Deeply merge updates into base dictionary."""
        result = base.copy()

        for key, value in updates.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def create_sample_config(self, filepath: str | Path | None = None) -> Path:
        """Create a sample TOML configuration file with the default settings.

        Args:
            filepath: Path for the config file. Defaults to .devbridge.toml

        Returns:
            Path to the created configuration file
        """
        filepath = Path(filepath) if filepath else Path(".devbridge.toml")

        # TOML has no null, so unset values are left out
        config_content = DevBridgeConfig().model_dump(exclude_none=True)

        try:
            with open(filepath, "wb") as f:
                tomli_w.dump(config_content, f)
        except OSError as e:
            raise ConfigurationError(f"Failed to write {filepath}: {e}") from e

        logger.info(f"Sample TOML configuration created at {filepath}")
        return filepath


def load_config(
    config_file: str | Path | None = None,
    env_overrides: dict[str, Any] | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> DevBridgeConfig:
    """Load devbridge configuration from all sources.

    Args:
        config_file: Path to configuration file
        env_overrides: Environment variable overrides
        cli_overrides: CLI argument overrides

    Returns:
        Validated devbridge configuration
    """
    loader = ConfigLoader(config_file)
    return loader.load_config(env_overrides, cli_overrides)
