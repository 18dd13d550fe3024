"""
gosurgeon User Configuration

Hierarchical config system with global defaults + local overrides:
- Global: ~/.gosurgeon/config.json (cross-project settings)
- Local: .gosurgeon/config.json (project-specific overrides)

Config structure:
{
  "formatting": {
    "enabled": true,                       // Run external formatters after edits
    "timeout": 30,                         // Seconds per formatter process
    "source_chain": ["gofmt", "goimports"],
    "imports_chain": ["goimports", "gofmt"]
  }
}
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from gosurgeon.exceptions import ConfigError
from gosurgeon.logging_config import logger
from gosurgeon.paths import get_paths


# Default configuration
DEFAULT_CONFIG = {
    "formatting": {
        "enabled": True,
        "timeout": 30,
        "source_chain": ["gofmt", "goimports"],
        "imports_chain": ["goimports", "gofmt"],
    }
}


class UserConfig:
    """
    Manages hierarchical user configuration.

    Load order (with override):
    1. Default config (hardcoded)
    2. Global config (~/.gosurgeon/config.json)
    3. Local config (.gosurgeon/config.json)
    """

    def __init__(self, project_root: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            project_root: Project root directory (defaults to CWD)
            global_config_path: Override for the global config file location
        """
        paths = get_paths(project_root)
        self.project_root = paths.project_root
        self.global_config_path = global_config_path or paths.global_config_file
        self.local_config_path = paths.config_file

        self._config = self._load_config()
        self._validate(self._config)

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration with hierarchical override.

        Returns:
            Merged configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        for label, path in (("global", self.global_config_path), ("local", self.local_config_path)):
            if not path.exists():
                continue
            try:
                with open(path, 'r') as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to load {label} config: {e}")
                continue
            if not isinstance(loaded, dict):
                logger.warning(f"Ignoring {label} config at {path}: top level must be an object")
                continue
            config = self._deep_merge(config, loaded)
            logger.debug(f"Loaded {label} config from {path}")

        return config

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """
        Deep merge two dictionaries, with override taking precedence.
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _validate(self, config: Dict[str, Any]) -> None:
        formatting = config.get("formatting", {})
        if not isinstance(formatting, dict):
            raise ConfigError("'formatting' must be an object")

        for chain_key in ("source_chain", "imports_chain"):
            chain = formatting.get(chain_key, [])
            if not isinstance(chain, list) or not all(isinstance(c, str) and c.strip() for c in chain):
                raise ConfigError(f"formatting.{chain_key} must be a list of command names")

        timeout = formatting.get("timeout")
        if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
            raise ConfigError(f"formatting.timeout must be a positive number, got {timeout!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value by dot-separated key.

        Examples:
            config.get("formatting.enabled")  # True
            config.get("formatting.timeout")  # 30
        """
        value = self._config

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def config(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)
