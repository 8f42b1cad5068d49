# munchausen/core/config.py
import yaml
import logging
import os
from typing import Any, Dict, List, Mapping, Optional
import copy

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "BOOTSTRAP_CONFIG"

# Environment variables and the dotted properties they override
ENV_PROPERTIES = {
    "BOOTSTRAP_MAINCLASS": "bootstrap.mainclass",
    "BOOTSTRAP_LIBDIR": "bootstrap.libdir",
    "BOOTSTRAP_RESOURCEDIR": "bootstrap.resourcedir",
    "BOOTSTRAP_SUFFIXES": "bootstrap.suffixes",
    "BOOTSTRAP_LOG_LEVEL": "logging.level",
    "BOOTSTRAP_LOG_FILE": "logging.file",
}

# Properties that take several values; separated by os.pathsep in the environment
LIST_PROPERTIES = ("bootstrap.libdir", "bootstrap.resourcedir", "bootstrap.suffixes")


class SimpleConfigLoader:
    """
    Dotted-key access to the launcher's properties.

    Values come from an optional YAML file, overlaid with explicit overrides
    (the environment, when built with ``from_environment``).
    """

    def __init__(self, config_file_path: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None):
        self.config_file_path: Optional[str] = config_file_path
        self._overrides: Dict[str, Any] = dict(overrides or {})
        self._config_data: Dict[str, Any] = {}

        logger.debug(f"SimpleConfigLoader {id(self)} creating for {config_file_path or '<no file>'}.")
        self._load_and_shield_config()

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "SimpleConfigLoader":
        """Build a loader from ``BOOTSTRAP_*`` environment variables."""
        if environ is None:
            environ = os.environ

        overrides = {}
        for variable, config_key in ENV_PROPERTIES.items():
            value = environ.get(variable)
            if value is None:
                continue
            if config_key in LIST_PROPERTIES:
                value = [part for part in value.split(os.pathsep) if part]
            overrides[config_key] = value

        return cls(environ.get(CONFIG_ENV_VAR) or None, overrides=overrides)

    def _load_and_shield_config(self):
        """Loads the configuration file, applies overrides and keeps a private deep copy."""
        raw_data: Any = {}
        if self.config_file_path:
            try:
                with open(self.config_file_path, 'r') as f:
                    raw_data = yaml.safe_load(f)
            except FileNotFoundError:
                logger.debug(f"Configuration file not found: {self.config_file_path}")
                raise ConfigurationError(f"Configuration file not found: {self.config_file_path}")
            except yaml.YAMLError as e:
                logger.debug(f"Error parsing YAML configuration file '{self.config_file_path}': {e}")
                raise ConfigurationError(f"Error parsing YAML configuration file: {e}")
            except OSError as e:
                logger.debug(f"Could not read configuration file '{self.config_file_path}': {e}")
                raise ConfigurationError(f"Could not read configuration file: {e}")

            if raw_data is None:
                logger.debug(f"Configuration file '{self.config_file_path}' is empty.")
                raw_data = {}
            if not isinstance(raw_data, dict):
                raise ConfigurationError(
                    f"Configuration file '{self.config_file_path}' must contain a mapping, "
                    f"got {type(raw_data).__name__}"
                )

        self._config_data = copy.deepcopy(raw_data)
        for config_key, value in self._overrides.items():
            self._set(config_key, value)
        logger.debug(f"ConfigLoader {id(self)}: top-level keys {list(self._config_data.keys())}")

    def _set(self, config_key: str, value: Any) -> None:
        keys = config_key.split('.')
        current_level = self._config_data
        for key_part in keys[:-1]:
            if not isinstance(current_level.get(key_part), dict):
                current_level[key_part] = {}
            current_level = current_level[key_part]
        current_level[keys[-1]] = copy.deepcopy(value)

    def get(self, config_key: str, default_value: Any = None) -> Any:
        current_level_data: Any = self._config_data
        for key_part in config_key.split('.'):
            if isinstance(current_level_data, dict) and key_part in current_level_data:
                current_level_data = current_level_data[key_part]
            else:
                return default_value
        if isinstance(current_level_data, (dict, list)):
            return copy.deepcopy(current_level_data)  # Return a copy to the caller
        return current_level_data

    def get_list(self, config_key: str, default_value: Optional[List[str]] = None) -> List[str]:
        """
        Get a property that may hold one value or a list of values.

        Returns:
            List of strings; ``default_value`` (or an empty list) when unset
        """
        value = self.get(config_key)
        if value is None:
            return list(default_value or [])
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return [str(value)]
